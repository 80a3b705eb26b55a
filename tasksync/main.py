import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CORS_ORIGINS
from .database import create_tables
from .errors import AuthError, ServiceError
from .logging_setup import configure_logging
from .routers import auth, tasks

configure_logging()
log = structlog.get_logger()

# Create FastAPI app
app = FastAPI(
    title="TaskSync API",
    description="Lists the tasks owned by the authenticated user",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(tasks.router, prefix="/api", tags=["tasks"])


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    log.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"message": exc.message},
    )


# Create tables on startup
@app.on_event("startup")
def on_startup():
    create_tables()
    log.info("tasksync_api_started")


@app.get("/")
def read_root():
    return {"message": "TaskSync API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
