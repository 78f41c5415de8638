"""Emergency response sheet endpoints.

A patient opens an emergency with their location; hospital staff reply with
bed availability and first advice; the patient's sheet either polls the
responses list or keeps the SSE stream open.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from app.api.dependencies import get_optional_user, require_roles
from app.config.settings import settings
from app.models.emergency import Emergency, HospitalResponse
from app.models.enums import UserRole
from app.models.messages import (
    CreateEmergencyRequest,
    CreateEmergencyResponse,
    EmergencyModel,
    FirstAidTip,
    HospitalReplyRequest,
    HospitalResponseListResponse,
    HospitalResponseModel,
)
from app.services.emergency_service import (
    EmergencyClosedError,
    get_emergency_service,
)
from app.tools.emergency_numbers import get_emergency_numbers
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import json
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/emergencies", tags=["Emergencies"])

FIRST_AID_TIPS: List[FirstAidTip] = [
    FirstAidTip(
        topic="Bleeding",
        steps=[
            "Apply firm pressure with a clean cloth.",
            "Keep pressing for at least 10 minutes without lifting to check.",
            "Raise the injured part above the heart if possible.",
        ],
    ),
    FirstAidTip(
        topic="Burns",
        steps=[
            "Cool with running water for 10-20 mins. Do not use ice.",
            "Remove rings or tight items before swelling starts.",
            "Cover loosely with clean cling film or cloth. Do not apply toothpaste or oil.",
        ],
    ),
    FirstAidTip(
        topic="Fracture",
        steps=[
            "Do not try to straighten the limb.",
            "Support it with a splint or folded cloth in the position found.",
        ],
    ),
    FirstAidTip(
        topic="Choking",
        steps=[
            "Give up to 5 firm back blows between the shoulder blades.",
            "Then give up to 5 abdominal thrusts. Repeat and call 108.",
        ],
    ),
    FirstAidTip(
        topic="Snake bite",
        steps=[
            "Keep the person still and calm; keep the bitten limb below heart level.",
            "Do not cut, suck or tie a tight tourniquet.",
            "Take them to a hospital with anti-venom immediately.",
        ],
    ),
    FirstAidTip(
        topic="Heat stroke",
        steps=[
            "Move the person to shade and loosen clothing.",
            "Cool with wet cloths and fanning; give sips of water if conscious.",
        ],
    ),
]


def _to_model(e: Emergency) -> EmergencyModel:
    return EmergencyModel(
        emergency_id=e.emergency_id,
        status=e.status,
        location=e.location,
        description=e.description,
        categories=e.categories,
        created_at=e.created_at,
        closed_at=e.closed_at,
    )


def _response_to_model(r: HospitalResponse) -> HospitalResponseModel:
    return HospitalResponseModel(
        id=r.id,
        emergency_id=r.emergency_id,
        hospital_name=r.hospital_name,
        status=r.status,
        medical_advice=r.medical_advice,
        created_at=r.created_at,
    )


async def _get_or_404(emergency_id: str) -> Emergency:
    emergency = await get_emergency_service().get_emergency(emergency_id)
    if not emergency:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Emergency not found"
        )
    return emergency


def _as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Stored timestamps are naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@router.get("/first-aid", response_model=List[FirstAidTip])
async def first_aid():
    """Basic first aid guidance to show while help is on the way."""
    return FIRST_AID_TIPS


@router.post(
    "", response_model=CreateEmergencyResponse, status_code=status.HTTP_201_CREATED
)
async def create_emergency(
    request: CreateEmergencyRequest,
    current_user: Optional[Dict[str, Any]] = Depends(get_optional_user),
):
    """Open an emergency. No login required."""
    emergency = await get_emergency_service().create_emergency(
        location=request.location,
        name=request.name,
        phone=request.phone,
        description=request.description,
        created_by=current_user["userId"] if current_user else None,
    )
    numbers = get_emergency_numbers(settings.default_country)
    return CreateEmergencyResponse(
        emergency=_to_model(emergency), ambulance=numbers["ambulance"]
    )


@router.get("/{emergency_id}", response_model=EmergencyModel)
async def get_emergency(emergency_id: str):
    return _to_model(await _get_or_404(emergency_id))


@router.post("/{emergency_id}/close", response_model=EmergencyModel)
async def close_emergency(
    emergency_id: str,
    current_user: Optional[Dict[str, Any]] = Depends(get_optional_user),
):
    """
    Stop waiting for hospitals (patient got help).

    Anonymous emergencies can be closed by whoever holds the id. Once the
    creator was logged in, only they, hospital staff or an admin may close it.
    """
    emergency = await _get_or_404(emergency_id)
    if emergency.created_by:
        if not current_user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated. Please log in.",
                headers={"WWW-Authenticate": "Bearer"},
            )
        is_creator = current_user["userId"] == emergency.created_by
        staff = current_user.get("role") in (UserRole.HOSPITAL.value, UserRole.ADMIN.value)
        if not (is_creator or staff):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the person who raised this emergency can close it.",
            )
    await get_emergency_service().close_emergency(emergency_id)
    return _to_model(await _get_or_404(emergency_id))


@router.post(
    "/{emergency_id}/responses",
    response_model=HospitalResponseModel,
    status_code=status.HTTP_201_CREATED,
)
async def add_hospital_response(
    emergency_id: str,
    request: HospitalReplyRequest,
    current_user: Dict[str, Any] = Depends(require_roles(UserRole.HOSPITAL)),
):
    """Reply to an emergency with bed availability and medical advice."""
    hospital_name = request.hospital_name.strip()
    advice = request.medical_advice.strip()
    if not hospital_name or not advice:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Hospital name and medical advice are required",
        )

    emergency = await _get_or_404(emergency_id)
    try:
        response = await get_emergency_service().add_response(
            emergency,
            hospital_name=hospital_name,
            status=request.status,
            medical_advice=advice,
            responder_id=current_user["userId"],
        )
    except EmergencyClosedError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Emergency is closed"
        )
    return _response_to_model(response)


@router.get("/{emergency_id}/responses", response_model=HospitalResponseListResponse)
async def list_hospital_responses(emergency_id: str, since: Optional[datetime] = None):
    """Hospital responses, newest first. Pass `since` to fetch only new ones."""
    await _get_or_404(emergency_id)
    responses = await get_emergency_service().get_responses(
        emergency_id, since=_as_naive_utc(since)
    )
    return HospitalResponseListResponse(
        emergency_id=emergency_id,
        total=len(responses),
        responses=[_response_to_model(r) for r in responses],
    )


@router.get("/{emergency_id}/responses/stream")
async def stream_hospital_responses(emergency_id: str, request: Request):
    """
    Stream hospital responses as Server-Sent Events.

    Emits `response` events for each new reply and a `waiting` heartbeat
    after every poll that found nothing.
    """
    await _get_or_404(emergency_id)
    service = get_emergency_service()

    async def event_generator():
        logger.info(f"Starting SSE stream for emergency: {emergency_id}")
        async for response in service.watch_responses(
            emergency_id,
            interval=settings.emergency_poll_interval_seconds,
            is_disconnected=request.is_disconnected,
        ):
            if response is None:
                event = {"type": "waiting", "content": "Waiting for nearby hospitals..."}
            else:
                event = {
                    "type": "response",
                    "content": _response_to_model(response).model_dump(mode="json"),
                }
            yield f"data: {json.dumps(event, ensure_ascii=False)}\n\n"

        yield f"data: {json.dumps({'type': 'done'})}\n\n"
        logger.info(f"SSE stream ended for emergency: {emergency_id}")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
