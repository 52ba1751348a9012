"""Run the API with uvicorn using the configured host and port."""
from __future__ import annotations

import uvicorn

from txinsights.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("txinsights.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
