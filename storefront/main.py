"""
Main FastAPI application
"""
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from storefront.config import get_settings
from storefront.dependencies import close_session
from storefront.exceptions import StorefrontError
from storefront.routers import all_routers
from storefront.utils.database import create_tables
from storefront.utils.logger import setup_logging

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Furniture storefront API: catalog, cart, checkout, payments, appointments and support",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=settings.allowed_methods,
    allow_headers=settings.allowed_headers,
)

# Signed-cookie sessions
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie="storefront_session",
    max_age=settings.session_max_age,
    same_site="lax",
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} in {elapsed_ms:.1f}ms")
    return response


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    logger.warning(f"Invalid request data for {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"message": "Invalid request data", "errors": errors})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=409, content={"message": "Conflicting data"})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Database error"})


for router in all_routers:
    app.include_router(router)


@app.on_event("startup")
async def startup_event():
    """Configure logging and create database tables on startup"""
    setup_logging(settings.log_dir, settings.log_level)
    create_tables()
    logger.info(f"{settings.app_name} {settings.app_version} started")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.get("/logout")
async def logout_redirect(request: Request):
    close_session(request)
    return RedirectResponse(url="/")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
