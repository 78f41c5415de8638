from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.config.database import Database
from app.config.settings import settings
from app.api.auth import router as auth_router
from app.api.diagnostics import router as diagnostics_router
from app.api.doctor_questions import router as doctor_questions_router
from app.api.emergencies import router as emergencies_router
from app.api.health_chat import router as health_chat_router
from app.api.hospitals import router as hospitals_router
from app.api.text_to_speech import router as tts_router
from app.middleware.jwt_auth import JWTAuthMiddleware
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
    logger.info("Starting SehatSaathi backend...")
    logger.info(f"Environment: {settings.environment}")
    if not settings.ai_gateway_configured:
        logger.warning("AI gateway key missing: health chat runs in mock mode")

    try:
        await Database.connect_db()
        logger.info("MongoDB connected successfully")
    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise

    yield

    logger.info("Shutting down SehatSaathi backend...")
    await Database.close_db()
    logger.info("MongoDB connection closed")


app = FastAPI(
    title="SehatSaathi - Rural Health Backend",
    description="Myth checker, doctor Q&A, emergency response sheet, hospital finder, text-to-speech and login for the SehatSaathi app.",
    version="1.0.0",
    lifespan=lifespan,
)

# add_middleware stacks LIFO: the last one added runs first.
# Order on the way in: CORSMiddleware -> JWTAuthMiddleware -> route handler
app.add_middleware(JWTAuthMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

app.include_router(diagnostics_router)
app.include_router(auth_router)
app.include_router(health_chat_router)
app.include_router(tts_router)
app.include_router(doctor_questions_router)
app.include_router(emergencies_router)
app.include_router(hospitals_router)


@app.get("/")
async def root():
    return {
        "message": "SehatSaathi - Rural Health Backend",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.service_port,
        reload=settings.environment == "development",
    )
