from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.routers import route
from app.core.config import get_settings
from app.core.logger import logger

settings = get_settings()

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(route.router, prefix="/api", tags=["Routes"])

if not settings.GOOGLE_MAPS_API_KEY:
    logger.warning("GOOGLE_MAPS_API_KEY is not set; provider calls will be rejected upstream")


@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.APP_NAME}"}


@app.get("/health")
def health_check():
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }
