"""Run the API with uvicorn on HOST:PORT (default 0.0.0.0:5000)."""

import uvicorn

from portfolio_api.config import settings


def main() -> None:
    uvicorn.run(
        "portfolio_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
