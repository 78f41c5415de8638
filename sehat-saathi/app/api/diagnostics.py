"""Health check and connection diagnostics."""

from fastapi import APIRouter
from app.config.database import Database
from app.config.settings import settings
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

SERVICE_VERSION = "1.0.0"


def _diagnostic_collections() -> List[str]:
    return [
        settings.mongodb_collection_doctor_questions,
        settings.mongodb_collection_health_forum,
        settings.mongodb_collection_emergencies,
        settings.mongodb_collection_hospital_responses,
        settings.mongodb_collection_users,
    ]


def _configured(value: Any) -> str:
    return "configured" if value else "not configured"


@router.get("")
async def health_check():
    """Health check endpoint."""
    try:
        db = Database.get_database()
        await db.command("ping")
        mongodb_status = "connected"
    except Exception as e:
        logger.error(f"MongoDB health check failed: {e}")
        mongodb_status = f"error: {str(e)}"

    return {
        "status": "ok",
        "service": settings.service_name,
        "version": SERVICE_VERSION,
        "dependencies": {
            "mongodb": mongodb_status,
            "ai_gateway": (
                "mock" if settings.mock_ai_replies else _configured(settings.ai_gateway_api_key)
            ),
            "text_to_speech": _configured(settings.tts_api_key),
            "hospital_search": _configured(settings.serper_api_key),
        },
    }


@router.get("/diagnostics")
async def diagnostics() -> Dict[str, Any]:
    """
    Check every collection the frontend reads.

    Each collection is counted on its own so one failure does not hide the
    state of the others. Credentials are reported as present/missing only.
    """
    results = []
    for name in _diagnostic_collections():
        try:
            count = await Database.get_collection(name).count_documents({})
            results.append(
                {
                    "name": name,
                    "success": True,
                    "count": count,
                    "message": f"Success! Found collection with {count} documents.",
                }
            )
        except Exception as e:
            logger.error(f"Diagnostics failed for {name}: {e}")
            results.append(
                {"name": name, "success": False, "count": None, "message": str(e)}
            )

    return {
        "environment": {
            "mongodb_uri": "present" if settings.mongodb_uri else "missing",
            "mongodb_database": settings.mongodb_database,
            "ai_gateway_key": "present" if settings.ai_gateway_api_key else "missing",
        },
        "results": results,
        "all_ok": all(r["success"] for r in results),
    }
