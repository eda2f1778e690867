from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from healthnav.config.settings import settings
from healthnav.api.triage import router as triage_router
from healthnav.services.session_service import get_session_service
from healthnav.tools.provider_directory import get_provider_directory
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting HealthNav Triage Service...")
    logger.info(f"Environment: {settings.environment}")
    if settings.classifier_use_mock:
        logger.info("Classifier: development mock scorer")
    elif settings.classifier_endpoint_url:
        logger.info(f"Classifier endpoint: {settings.classifier_endpoint_url}")
    else:
        logger.warning("No classifier endpoint configured; every triage will use the fallback rules")

    get_session_service()

    yield

    # Shutdown
    logger.info("Shutting down HealthNav Triage Service...")


# Initialize FastAPI app
app = FastAPI(
    title="HealthNav - Symptom Triage",
    description="Turn-based symptom triage: collects symptoms, scores urgency with an ML classifier (with rule-based fallback), recommends providers and books appointments.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8081", "http://localhost:19006"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(triage_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    if settings.classifier_use_mock:
        classifier_status = "mock"
    elif settings.classifier_endpoint_url:
        classifier_status = "configured"
    else:
        classifier_status = "fallback only"

    return {
        "status": "ok",
        "service": settings.service_name,
        "version": "1.0.0",
        "dependencies": {
            "classifier": classifier_status,
            "provider_directory": f"{len(get_provider_directory())} providers",
        },
    }


@app.get("/")
async def root():
    return {
        "message": "HealthNav Symptom Triage Service",
        "description": "Symptom triage, provider recommendation and appointment booking",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
    )
