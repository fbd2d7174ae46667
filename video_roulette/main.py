from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError as ModelValidationError
from starlette.concurrency import run_in_threadpool
from typing import List, Optional
import time

from .data_models import ImportResponse, NewURLRequest, StoredURL, VideoDataResponse
from .errors import ConfigurationError, ServiceError, ValidationError
from .normalize import normalize_video
from .store import URLStore
from .tikwm import TikwmClient
from .settings import logger, DEBUG_LOGGING


def get_store(request: Request) -> URLStore:
    return request.app.state.store


def get_client(request: Request) -> TikwmClient:
    return request.app.state.client


def create_app(store: URLStore, client: TikwmClient, import_list_url: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="Video Roulette API", version="0.1.0")
    app.state.store = store
    app.state.client = client
    app.state.import_list_url = import_list_url

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        # Log the request
        logger.info(f"Request: {request.method} {request.url.path}")
        if DEBUG_LOGGING:
            logger.debug(f"Request headers: {request.headers}")
            body = await request.body()
            if body:
                try:
                    logger.debug(f"Request body: {body.decode()}")
                except UnicodeDecodeError:
                    logger.debug(f"Request body: {body} (binary)")

        # Process the request
        response = await call_next(request)

        # Log the response
        process_time = time.time() - start_time
        logger.info(f"Response: {request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.3f}s")

        return response

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return PlainTextResponse(str(exc), status_code=exc.status_code)

    @app.get("/healthz")
    def health():
        logger.debug("Health check endpoint called")
        return {"ok": True}

    @app.post("/new", status_code=201, response_model=StoredURL)
    async def add_url(request: Request, store: URLStore = Depends(get_store)):
        content_type = request.headers.get("content-type", "")
        if content_type.split(";")[0].strip().lower() != "application/json":
            raise ValidationError("Content-Type must be application/json")

        body = await request.body()
        if not body.strip():
            raise ValidationError("Empty request body")

        try:
            req = NewURLRequest.model_validate_json(body)
        except ModelValidationError as e:
            logger.debug(f"Rejected payload: {str(e)}")
            raise ValidationError("Invalid request payload") from e

        return await run_in_threadpool(store.add, req.url)

    @app.get("/list", response_model=List[StoredURL])
    def list_urls(store: URLStore = Depends(get_store)):
        return store.list_all()

    @app.get("/clr", response_class=PlainTextResponse)
    def clear_urls(store: URLStore = Depends(get_store)):
        deleted = store.clear_all()
        logger.info(f"Cleared URL list ({deleted} rows)")
        return "All URLs cleared"

    @app.get("/get", response_model=VideoDataResponse)
    def get_video(store: URLStore = Depends(get_store), client: TikwmClient = Depends(get_client)):
        try:
            random_url = store.pick_random()
        except ServiceError as e:
            raise ServiceError(f"Error fetching random URL: {e}") from e

        logger.info(f"Fetching video for URL: {random_url}")

        try:
            info = client.fetch(random_url)
        except ServiceError as e:
            raise ServiceError(f"Error fetching video: {e}") from e

        return normalize_video(info)

    @app.get("/fetch", response_model=ImportResponse)
    def import_urls(store: URLStore = Depends(get_store), client: TikwmClient = Depends(get_client)):
        list_url = app.state.import_list_url
        if not list_url:
            raise ConfigurationError("URL import source is not configured")

        try:
            urls = client.fetch_url_list(list_url)
        except ServiceError as e:
            raise ServiceError(f"Error fetching URL list: {e}") from e

        stored = store.add_many(urls)
        logger.info(f"Imported {len(stored)} URLs from {list_url}")
        return ImportResponse(imported=len(stored), urls=stored)

    return app
