# backend/geezshoe/main.py
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from geezshoe.config import settings
from geezshoe.database import init_db
from geezshoe.errors import AdminOperationError

# Routers
from geezshoe.routes.auth import router as auth_router
from geezshoe.routes.admin import router as admin_router
from geezshoe.routes.logs import router as logs_router
from geezshoe.routes.cart import router as cart_router
from geezshoe.routes.orders import router as orders_router
from geezshoe.routes.products import router as products_router
from geezshoe.routes.company import router as company_router
from geezshoe.routes.reports import router as reports_router
from geezshoe.routes.stats import router as stats_router

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/admin"

def create_app() -> FastAPI:
    init_db()

    app = FastAPI(title="GeezShoe API", version="1.0.0")

    # Uploaded images, served as <PUBLIC_BASE_URL>/storage/<bucket>/<path>
    Path(settings.STORAGE_DIR).mkdir(parents=True, exist_ok=True)
    app.mount("/storage", StaticFiles(directory=settings.STORAGE_DIR), name="storage")

    # CORS Configuration
    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # The admin-management API answers with {"error": ...} bodies
    @app.exception_handler(AdminOperationError)
    async def admin_operation_error_handler(request: Request, exc: AdminOperationError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        if request.url.path.startswith(ADMIN_API_PREFIX):
            return JSONResponse(status_code=400, content={"error": "Invalid request body"})
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if request.url.path.startswith(ADMIN_API_PREFIX):
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Router registration
    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(logs_router)
    app.include_router(cart_router)
    app.include_router(orders_router)
    app.include_router(products_router)
    app.include_router(company_router)
    app.include_router(reports_router)
    app.include_router(stats_router)

    @app.get("/")
    def read_root():
        return {"message": "GeezShoe API is running"}

    return app

app = create_app()
