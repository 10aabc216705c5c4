"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException as FastAPIHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resultdemo.api.routes import health, pages, result_demo
from resultdemo.core.config import get_settings
from resultdemo.core.exceptions import InvalidStatusCode
from resultdemo.core.logging_config import LoggingConfig
from resultdemo.core.middleware import LoggingContextMiddleware

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


_settings = get_settings()
app = FastAPI(
    title=_settings.app_name,
    description="Catalogue of response kinds a request handler can return",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(LoggingContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FileNotFoundError)
async def file_not_found_handler(request: Request, exc: FileNotFoundError):
    """Missing download file"""
    logger.warning(
        "File not found",
        extra={"error": str(exc), "path": request.url.path}
    )
    return JSONResponse(
        status_code=404,
        content={"detail": "File not found", "type": type(exc).__name__}
    )


@app.exception_handler(InvalidStatusCode)
async def invalid_status_code_handler(request: Request, exc: InvalidStatusCode):
    """Handler asked for a status code outside 100-599"""
    logger.error(
        "Invalid status code",
        extra={"status": exc.status_code, "path": request.url.path}
    )
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all unhandled errors"""
    # Don't handle HTTPException - let FastAPI handle it
    if isinstance(exc, FastAPIHTTPException):
        raise exc

    logger.error(
        "Unhandled exception",
        exc_info=True,
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc),
            "type": type(exc).__name__
        }
    )


app.include_router(result_demo.router)
app.include_router(pages.router)
app.include_router(health.router)


@app.get("/api")
async def root():
    """Root API endpoint"""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
        "environment": settings.app_env,
    }


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.app_env == "development",
    )
