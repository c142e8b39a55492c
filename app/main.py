import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import Base, engine
from app.models import chat_user, user  # noqa: F401  (register tables)
from app.routers import auth, chat_users, profile
from app.utils.response import create_response, error_response, handle_exception

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# Auto create tables
Base.metadata.create_all(bind=engine)

# CORS for SPA / API access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    settings.ensure_configured()
    logger.info("%s started with storage backend %s", settings.PROJECT_NAME, settings.STORAGE_BACKEND)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request to %s", request.url.path)
    return error_response("Invalid request body", status.HTTP_400_BAD_REQUEST)


# Add routes
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(chat_users.router)

# Serve uploaded assets
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


@app.get("/")
def home():
    try:
        return create_response(
            message="Account API running",
            data={"service": "account-backend"},
            status_code=status.HTTP_200_OK
        )
    except Exception as exc:
        return handle_exception(exc)
