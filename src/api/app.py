# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus metrics and optional request logging.
# Directory routes live under the configured prefix; health and metrics stay at the root.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import RequestResponseEndpoint
from starlette.routing import Match

from src.api.api_config import get_api_config
from src.api.dependencies import get_database_client
from src.api.error_handlers import register_error_handlers
from src.api.routers.actions import router as actions_router
from src.api.routers.companies import router as companies_router
from src.api.routers.content import router as content_router
from src.api.routers.disposals import router as disposals_router
from src.api.routers.health import router as health_router
from src.api.routers.listings import router as listings_router
from src.api.routers.payments import router as payments_router
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)
UNMATCHED_PATH_LABEL = "unmatched"


def route_template(app: FastAPI, request: Request) -> str:
    """Metric path label: the matched route pattern, so path parameters do not create new series."""

    label = UNMATCHED_PATH_LABEL
    for route in app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_PATH_LABEL)
        if match == Match.PARTIAL and label == UNMATCHED_PATH_LABEL:
            # Known path, unsupported method.
            label = getattr(route, "path", UNMATCHED_PATH_LABEL)
    return label


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Directory API for hydro-excavation companies and disposal facilities: "
            "radius search, tiered placement, site content and paid onboarding."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "listings", "description": "Map and list search over companies and facilities."},
            {"name": "companies", "description": "Company listing administration."},
            {"name": "disposals", "description": "Disposal facility administration."},
            {"name": "content", "description": "State pages, pricing tiers and homepage content."},
            {"name": "payments", "description": "Stripe checkout, webhook and onboarding."},
            {"name": "actions", "description": "Referrals, admin login and seed import."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = route_template(app, request)
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                logger.info(
                    "%s %s -> %d in %.2fms (request_id=%s)",
                    method_label,
                    request.url.path,
                    status_code,
                    duration_ms,
                    request_id,
                )

            return response
        finally:
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        app.state.db_connected_at_startup = False
        db = get_database_client()
        if db is None:
            logger.info("Datastore not configured; reads will use bundled directory data")
            return
        try:
            if db.can_connect():
                db.create_schema()
                app.state.db_connected_at_startup = True
            else:
                logger.warning("Datastore unreachable at startup")
        except SQLAlchemyError as exc:
            logger.warning("Datastore schema check failed at startup: %s", exc)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(listings_router, prefix=config.api_prefix)
    app.include_router(companies_router, prefix=config.api_prefix)
    app.include_router(disposals_router, prefix=config.api_prefix)
    app.include_router(content_router, prefix=config.api_prefix)
    app.include_router(payments_router, prefix=config.api_prefix)
    app.include_router(actions_router, prefix=config.api_prefix)

    return app


app = create_app()
