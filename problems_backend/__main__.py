import uvicorn

from problems_backend.api.main import create_app
from problems_backend.config import Settings, configure_logging


def main() -> None:
    """Serve the API with uvicorn using settings from the environment."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
