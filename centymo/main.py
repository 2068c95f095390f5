import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from centymo.api.router import app_router
from centymo.config.database import SessionLocal
from centymo.config.settings import settings
from centymo.core.exceptions import ActionError, PageError, RecordNotFoundError
from centymo.core.htmx import htmx_error
from centymo.core.logging_config import setup_logging
from centymo.core.middleware import setup_middleware
from centymo.core.templates import render_page
from centymo.shared import routes
from centymo.shared.assets import STATIC_DIR, copy_static_assets, copy_styles
from centymo.shared.datasource import DataSource, InMemoryDataSource, SQLDataSource
from centymo.shared.labels import LabelCatalog, load_labels

logger = logging.getLogger(__name__)


def build_datasource() -> DataSource:
    """DataSource según settings.datasource_backend"""
    if settings.datasource_backend == "memory":
        return InMemoryDataSource()
    return SQLDataSource(SessionLocal)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(log_level=settings.log_level, use_json=settings.log_json)
    logger.info("🚀 Centymo Back Office starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🗄️ DataSource: {type(app.state.datasource).__name__}")

    app.state.datasource.initialize()

    if settings.static_target_dir:
        copy_styles(settings.static_target_dir)
        copy_static_assets(settings.static_target_dir)

    yield

    # Shutdown
    logger.info("🛑 Centymo Back Office shutting down...")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ActionError)
    async def action_error_handler(request: Request, exc: ActionError):
        logger.warning(f"Action failed on {request.url.path}: {exc.message}")
        return htmx_error(exc.message, exc.status_code)

    @app.exception_handler(PageError)
    async def page_error_handler(request: Request, exc: PageError):
        logger.error(f"Page failed on {request.url.path}: {exc.message}")
        return render_page(
            request,
            "errors/page.html",
            {"message": exc.message, "status_code": exc.status_code},
            status_code=exc.status_code,
        )

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError):
        if request.url.path.startswith("/action/"):
            return htmx_error(exc.message, 404)
        return render_page(
            request,
            "errors/page.html",
            {"message": exc.message, "status_code": 404},
            status_code=404,
        )


def create_app(datasource: Optional[DataSource] = None, labels: Optional[LabelCatalog] = None) -> FastAPI:
    """
    Crear la aplicación.

    Los tests (o una app consumidora) pueden inyectar su propio
    DataSource y catálogo de labels.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Back-office de inventario, ventas, catálogo y facturación",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )

    app.state.datasource = datasource or build_datasource()
    app.state.labels = labels or load_labels(settings.labels_file)
    app.state.app_name = settings.app_name

    setup_middleware(app)
    register_exception_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(app_router)

    @app.get("/")
    async def root():
        return RedirectResponse(url=routes.route_url(routes.SALES_LIST_URL, status="active"))

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.version,
            "app": settings.app_name
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "centymo.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
