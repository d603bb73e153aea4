"""Run the API under uvicorn: `python -m weightlog` or the `weightlog` script."""

import uvicorn

from weightlog.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "weightlog.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
