import logging
from typing import Any, Callable, Dict, List, Tuple

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse

from problems_backend.schemas import ProblemIn, ProblemOut
from problems_backend.store import ProblemStore

logger = logging.getLogger(__name__)

GREETING = "Hello from AlgoTracker!"


# PUBLIC_INTERFACE
def get_store(request: Request) -> ProblemStore:
    """FastAPI dependency returning the store built at application startup."""
    return request.app.state.store


def _not_found() -> Response:
    return Response(status_code=status.HTTP_404_NOT_FOUND)


# PUBLIC_INTERFACE
def create_problem(payload: ProblemIn, store: ProblemStore = Depends(get_store)) -> ProblemOut:
    """Create a problem."""
    problem = store.insert(payload)
    logger.info("Created problem id=%s platform=%s", problem.id, problem.platform)
    return problem


# PUBLIC_INTERFACE
def list_problems(store: ProblemStore = Depends(get_store)) -> List[ProblemOut]:
    """List all problems."""
    return store.fetch_all()


# PUBLIC_INTERFACE
def get_problem(problem_id: int, store: ProblemStore = Depends(get_store)) -> Any:
    """Get a problem by id."""
    problem = store.fetch_by_id(problem_id)
    if problem is None:
        return _not_found()
    return problem


# PUBLIC_INTERFACE
def update_problem(problem_id: int, payload: ProblemIn, store: ProblemStore = Depends(get_store)) -> Any:
    """Replace every field of a problem by id."""
    problem = store.update(problem_id, payload)
    if problem is None:
        return _not_found()
    logger.info("Updated problem id=%s", problem_id)
    return problem


# PUBLIC_INTERFACE
def delete_problem(problem_id: int, store: ProblemStore = Depends(get_store)) -> Response:
    """Delete a problem by id."""
    if not store.delete_by_id(problem_id):
        return _not_found()
    logger.info("Deleted problem id=%s", problem_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
def hello() -> str:
    """Fixed greeting used by the frontend to test connectivity."""
    return GREETING


# (method, path, handler, route options)
ROUTES: Tuple[Tuple[str, str, Callable[..., Any], Dict[str, Any]], ...] = (
    (
        "GET",
        "/hello",
        hello,
        {
            "response_class": PlainTextResponse,
            "tags": ["Health"],
            "summary": "Greeting",
            "description": "Returns a fixed plain-text greeting.",
        },
    ),
    (
        "POST",
        "/problems",
        create_problem,
        {
            "response_model": ProblemOut,
            "status_code": status.HTTP_201_CREATED,
            "summary": "Create problem",
            "description": "Create a problem; reviewCount defaults to 0 when omitted.",
        },
    ),
    (
        "GET",
        "/problems",
        list_problems,
        {
            "response_model": List[ProblemOut],
            "summary": "List problems",
            "description": "Return every stored problem.",
        },
    ),
    (
        "GET",
        "/problems/{problem_id}",
        get_problem,
        {
            "response_model": ProblemOut,
            "summary": "Get problem",
            "description": "Fetch a single problem by ID; 404 with an empty body if absent.",
        },
    ),
    (
        "PUT",
        "/problems/{problem_id}",
        update_problem,
        {
            "response_model": ProblemOut,
            "summary": "Update problem",
            "description": "Full update by ID; omitted fields are overwritten with null.",
        },
    ),
    (
        "DELETE",
        "/problems/{problem_id}",
        delete_problem,
        {
            "status_code": status.HTTP_204_NO_CONTENT,
            "response_class": Response,
            "summary": "Delete problem",
            "description": "Delete a problem by ID; 404 with an empty body if absent.",
        },
    ),
)


# PUBLIC_INTERFACE
def build_router(prefix: str = "") -> APIRouter:
    """Register the route table on a fresh router."""
    router = APIRouter(prefix=prefix)
    for method, path, endpoint, options in ROUTES:
        options = dict(options)
        options.setdefault("tags", ["Problems"])
        router.add_api_route(path, endpoint, methods=[method], **options)
    return router
