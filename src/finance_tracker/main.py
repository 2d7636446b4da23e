import os

import uvicorn

from finance_tracker.app import app
from finance_tracker.core import settings
from finance_tracker.logger import get_logging_config

__all__ = ["app", "main"]


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = settings.get_env_int("PORT", 8000, min_value=1)
    uvicorn.run(app, host=host, port=port, log_config=get_logging_config())


if __name__ == "__main__":
    main()
