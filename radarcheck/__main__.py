"""Run the API with ``python -m radarcheck``."""

import uvicorn

from radarcheck.core.config import settings


def main() -> None:
    uvicorn.run("radarcheck:app", host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    main()
