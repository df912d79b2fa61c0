from typing import List, Optional, Protocol

from sqlalchemy import select, text
from sqlalchemy.engine import Engine

from problems_backend.db import build_session_factory
from problems_backend.models import Problem
from problems_backend.schemas import MUTABLE_FIELDS, ProblemIn, ProblemOut


class ProblemStore(Protocol):
    """Data-access contract for Problem records keyed by integer id."""

    def insert(self, fields: ProblemIn) -> ProblemOut:
        ...

    def fetch_by_id(self, problem_id: int) -> Optional[ProblemOut]:
        ...

    def fetch_all(self) -> List[ProblemOut]:
        ...

    def update(self, problem_id: int, fields: ProblemIn) -> Optional[ProblemOut]:
        ...

    def delete_by_id(self, problem_id: int) -> bool:
        ...

    def ping(self) -> int:
        ...


class SqlAlchemyProblemStore:
    """
    ProblemStore backed by a SQLAlchemy engine.

    Every operation opens its own session and transaction; isolation and
    atomicity come from the database. Storage errors are not caught here.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    # PUBLIC_INTERFACE
    def insert(self, fields: ProblemIn) -> ProblemOut:
        """Persist the supplied fields under a new id and return the stored record."""
        # Only an unset review_count defaults to 0; an explicit null is kept.
        values = fields.model_dump(exclude_unset=True)
        values.setdefault("review_count", 0)
        problem = Problem(**values)
        with self._session_factory.begin() as session:
            session.add(problem)
            session.flush()
            session.refresh(problem)
            return ProblemOut.model_validate(problem)

    # PUBLIC_INTERFACE
    def fetch_by_id(self, problem_id: int) -> Optional[ProblemOut]:
        """Return the record, or None when no record has this id."""
        with self._session_factory() as session:
            problem = session.get(Problem, problem_id)
            if problem is None:
                return None
            return ProblemOut.model_validate(problem)

    # PUBLIC_INTERFACE
    def fetch_all(self) -> List[ProblemOut]:
        """Return every stored record."""
        with self._session_factory() as session:
            problems = session.scalars(select(Problem).order_by(Problem.id)).all()
            return [ProblemOut.model_validate(p) for p in problems]

    # PUBLIC_INTERFACE
    def update(self, problem_id: int, fields: ProblemIn) -> Optional[ProblemOut]:
        """Overwrite every mutable field of an existing record; None when absent."""
        values = fields.model_dump()
        with self._session_factory.begin() as session:
            problem = session.get(Problem, problem_id)
            if problem is None:
                return None
            for name in MUTABLE_FIELDS:
                setattr(problem, name, values[name])
            session.flush()
            return ProblemOut.model_validate(problem)

    # PUBLIC_INTERFACE
    def delete_by_id(self, problem_id: int) -> bool:
        """Remove the record; False when it did not exist."""
        with self._session_factory.begin() as session:
            problem = session.get(Problem, problem_id)
            if problem is None:
                return False
            session.delete(problem)
            return True

    # PUBLIC_INTERFACE
    def ping(self) -> int:
        """Run a trivial query to check connectivity."""
        with self.engine.connect() as conn:
            return int(conn.execute(text("SELECT 1")).scalar_one())
