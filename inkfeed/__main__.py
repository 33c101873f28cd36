"""Run the API server: ``python -m inkfeed``."""

import logging

import uvicorn

from .config import config


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("inkfeed.server:app", host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
