"""Run the API with uvicorn on the configured host and port."""

import uvicorn

from .config import settings


def main():
    # uvicorn stops accepting connections on SIGINT/SIGTERM, then runs the
    # lifespan shutdown that closes the database
    uvicorn.run("workexperience.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
