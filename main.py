import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware

from core.config_loader import Settings, get_settings
from core.database import Database
from core.handlers import register_exception_handlers
from core.logging_config import configure_logging
from employee.router import employee_router
from department.router import department_router
from job.router import job_router
import models_bootstrap  # noqa: F401

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Employees", "description": "Employee records"},
    {"name": "Departments", "description": "Departments and their staff"},
    {"name": "Jobs", "description": "Job titles and salary ranges"},
    {"name": "Health Checks", "description": "Application health checks"},
]

ENTITY_ROUTERS = (
    ("employees", employee_router),
    ("departments", department_router),
    ("jobs", job_router),
)


def _capabilities(app: FastAPI, prefix: str) -> dict:
    paths = {getattr(route, "path", "") for route in app.routes}
    return {
        "search": {name: f"{prefix}/{name}/search" in paths for name, _ in ENTITY_ROUTERS},
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    if database.ping():
        logger.info("Connected to %s database", database.dialect)
    else:
        logger.warning("Starting without a reachable database")
    yield
    database.dispose()


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    register_exception_handlers(app)

    for _, router in ENTITY_ROUTERS:
        app.include_router(router, prefix=settings.API_PREFIX)

    def health():
        return {
            "status": "OK",
            "message": f"{settings.APP_NAME} is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    app.add_api_route("/health", health, methods=["GET"], tags=["Health Checks"])
    app.add_api_route(f"{settings.API_PREFIX}/health", health, methods=["GET"], tags=["Health Checks"])

    @app.get(f"{settings.API_PREFIX}/capabilities", tags=["Health Checks"])
    def capabilities(request: Request):
        return request.app.state.capabilities

    app.state.capabilities = _capabilities(app, settings.API_PREFIX)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=get_settings().PORT)
