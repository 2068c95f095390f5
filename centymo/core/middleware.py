from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from centymo.config.settings import settings
from centymo.core.logging_config import set_request_id, clear_request_id
import time
import logging

logger = logging.getLogger(__name__)

def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
            "X-CSRF-Token",
            # Headers que envía HTMX
            "HX-Request",
            "HX-Target",
            "HX-Trigger",
            "HX-Current-URL",
        ],
        expose_headers=["HX-Trigger", "HX-Redirect", "HX-Error-Message", "X-Request-ID"],
        max_age=3600  # Cache preflight requests for 1 hour
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = set_request_id(request.headers.get("X-Request-ID"))
        start_time = time.time()

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            logger.info(
                f"{request.method} {request.url.path} - "
                f"Status: {response.status_code} - "
                f"Time: {process_time:.4f}s"
            )
        finally:
            clear_request_id()

        response.headers["X-Request-ID"] = request_id
        return response
