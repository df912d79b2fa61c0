from sqlalchemy import Column, Date, Integer, String

from problems_backend.db import Base


class Problem(Base):
    """SQLAlchemy model representing a tracked practice problem."""
    __tablename__ = "problems"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(2000))
    difficulty = Column(String(255), nullable=False)  # Easy/Medium/Hard, not enforced
    platform = Column(String(255), nullable=False)  # LeetCode, HackerRank, Codeforces, ...
    url = Column(String(255))
    last_reviewed = Column(Date)
    next_review = Column(Date)
    review_count = Column(Integer)
    notes = Column(String(2000))
