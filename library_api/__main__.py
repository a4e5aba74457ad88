"""Process entry point: `python -m library_api` serves the API with uvicorn."""

import uvicorn

from library_api.config import get_settings


def main() -> None:
    settings = get_settings()
    # log_config=None: logging is configured by the app lifespan
    uvicorn.run(
        "library_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
