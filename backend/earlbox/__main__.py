"""Run the API server: ``python -m earlbox``."""
import logging

import uvicorn

from earlbox.config import settings


def main():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        "Earl Box server listening at %s:%d", settings.API_HOST, settings.API_PORT
    )
    uvicorn.run("earlbox.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
