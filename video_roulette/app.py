"""
Process entry point.

Builds the store and the tikwm client from settings, wires them into the
FastAPI app and serves it with uvicorn. A database that cannot be opened,
pinged or schema-initialized stops the process with exit status 1.
"""

import sys

import uvicorn
from fastapi import FastAPI

from .errors import StoreInitError
from .main import create_app
from .settings import logger, DATABASE_URL, HOST, PORT, IMPORT_LIST_URL
from .store import init_store
from .tikwm import TikwmClient


def build_app(database_url: str = DATABASE_URL) -> FastAPI:
    store = init_store(database_url)
    return create_app(store, TikwmClient(), import_list_url=IMPORT_LIST_URL or None)


def main():
    try:
        app = build_app()
    except StoreInitError as e:
        logger.error(f"Startup failed: {str(e)}")
        sys.exit(1)

    logger.info(f"Server starting on port {PORT}...")
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
