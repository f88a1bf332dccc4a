"""Run the API server: ``python -m dynamix``."""

import uvicorn

from dynamix.core.config import settings


def main() -> None:
    uvicorn.run(
        "dynamix.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
