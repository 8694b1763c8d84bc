from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from .core.config import settings
from .core.database import engine
from .core.exceptions import FTPlayerError
from .models import Base
from .api.middleware.request_logging import RequestLoggingMiddleware
from .api.routes import auth, ftp_servers, watch_history, comments, working_ftp_servers

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="FTPlayer",
    description="Watch tracking backend for ISP hosted FTP media servers",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(RequestLoggingMiddleware())


@app.exception_handler(FTPlayerError)
async def ftplayer_error_handler(request: Request, exc: FTPlayerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"

    return JSONResponse(
        status_code=400,
        content={"message": message}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error"}
    )


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(ftp_servers.router, prefix="/api/ftp-servers", tags=["FTP Servers"])
app.include_router(watch_history.router, prefix="/api/watch-history", tags=["Watch History"])
app.include_router(comments.router, prefix="/api/comments", tags=["Comments"])
app.include_router(working_ftp_servers.router, prefix="/api/working-ftp-servers", tags=["Working FTP Servers"])


@app.get("/")
async def root():
    return {"message": "FTPlayer API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    return {"message": "Server is running", "status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
