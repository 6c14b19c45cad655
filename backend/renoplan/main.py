from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from renoplan.config import settings
from renoplan.dependencies import create_openai_client
from renoplan.exception_handlers import register_exception_handlers
from renoplan.routers import plan, projects
from renoplan.services.rate_limiter import SlidingWindowRateLimiter, build_policies
from renoplan.utils.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    if getattr(app.state, "ai_client", None) is None:
        app.state.ai_client = create_openai_client()
    logger.info("renoplan_started", env=settings.app_env, model=settings.openai_model)
    yield
    await app.state.ai_client.close()


def create_app() -> FastAPI:
    configure_logging(settings.log_level, json=settings.log_json)

    app = FastAPI(title="RenoPlan", version="0.1.0", lifespan=lifespan)
    app.state.rate_limiter = SlidingWindowRateLimiter()
    app.state.rate_limit_policies = build_policies(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "Retry-After"],
    )
    register_exception_handlers(app)

    app.include_router(projects.router)
    app.include_router(plan.router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()
