"""Run the API server: ``python -m taskchat``."""

import uvicorn

from taskchat.core.config import settings


def main() -> None:
    uvicorn.run("taskchat.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    main()
