"""HTTP API exposing the resolver as a single chat endpoint.

Run with:
    uvicorn travel_guide.api.app:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import AppConfig, get_config
from ..container import Container, get_container
from ..domain.errors import InvalidQueryError
from ..logging_setup import setup_logging
from ..services import QueryResolverService
from . import schemas

logger = logging.getLogger(__name__)

INVALID_BODY_ERROR = "Request body must be a JSON object with a string 'message'"


def get_resolver(request: Request) -> QueryResolverService:
    resolver = getattr(request.app.state, "resolver", None)
    if resolver is None:
        # Built lazily when the lifespan did not run (e.g. bare ASGI transport)
        resolver = get_container().resolve(QueryResolverService)
        request.app.state.resolver = resolver
    return resolver


resolver_dep = Annotated[QueryResolverService, Depends(get_resolver)]


def create_app(
    resolver: Optional[QueryResolverService] = None,
    config: Optional[AppConfig] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        resolver: Resolver to serve; built on startup from a container for
            ``config`` if omitted. That container is closed on shutdown.
        config: Configuration override.
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(config.observability)
        container: Optional[Container] = None
        if app.state.resolver is None:
            container = Container.create_default(config)
            app.state.resolver = container.resolve(QueryResolverService)
        # Fail at startup rather than on the first request if the catalog is broken
        catalog = app.state.resolver.catalog
        logger.info("API ready", extra={"places": len(catalog)})
        try:
            yield
        finally:
            if container is not None:
                await container.aclose()

    app = FastAPI(title="India Travel Guide API", lifespan=lifespan)
    app.state.resolver = resolver

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.exception_handler(InvalidQueryError)
    async def invalid_query_handler(request: Request, exc: InvalidQueryError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies share the 400 error shape of a blank message
        logger.info("Rejected malformed request body", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_BODY_ERROR},
        )

    @app.get("/health", response_model=schemas.HealthResponse)
    async def health(resolver: resolver_dep):
        return schemas.HealthResponse(status="ok", places=len(resolver.catalog))

    @app.post(
        "/chat",
        response_model=schemas.ChatResponse,
        responses={400: {"model": schemas.ErrorResponse}},
        status_code=status.HTTP_200_OK,
    )
    async def chat(payload: schemas.ChatRequest, resolver: resolver_dep):
        result = await resolver.resolve(payload.message)
        return schemas.ChatResponse.from_result(result)

    return app
