"""Doctor Q&A endpoints.

Anyone can ask; doctors answer from the pending queue; answered questions
feed the public community section.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from app.api.dependencies import require_roles
from app.models.doctor_question import DoctorQuestion
from app.models.enums import UserRole
from app.models.messages import (
    AskDoctorRequest,
    AskDoctorResponse,
    DoctorReplyRequest,
    QuestionListResponse,
    QuestionModel,
)
from app.services.doctor_question_service import (
    AlreadyAnsweredError,
    get_doctor_question_service,
)
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/doctor-questions", tags=["Doctor Q&A"])


def _to_model(q: DoctorQuestion) -> QuestionModel:
    return QuestionModel(
        id=q.id,
        name=q.name,
        category=q.category,
        question=q.question,
        created_at=q.created_at,
        response=q.response,
        responded_at=q.responded_at,
    )


@router.post("", response_model=AskDoctorResponse, status_code=status.HTTP_201_CREATED)
async def ask_doctor(request: AskDoctorRequest):
    """Submit a question to the doctors."""
    name = request.name.strip()
    question = request.question.strip()
    if not name or not question:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please fill in your name, a category and your question.",
        )

    service = get_doctor_question_service()
    stored = await service.submit_question(
        name=name,
        category=request.category,
        question=question,
        location=request.location,
    )
    return AskDoctorResponse(question=_to_model(stored))


@router.get("/community", response_model=QuestionListResponse)
async def community_questions(limit: int = Query(10, ge=1, le=50)):
    """Recently answered questions, newest answer first."""
    service = get_doctor_question_service()
    questions = await service.get_answered(limit=limit)
    return QuestionListResponse(
        total=len(questions), questions=[_to_model(q) for q in questions]
    )


@router.get("/pending", response_model=QuestionListResponse)
async def pending_questions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    current_user: Dict[str, Any] = Depends(require_roles(UserRole.DOCTOR)),
):
    """Unanswered questions, oldest first. Doctors only."""
    service = get_doctor_question_service()
    questions, total = await service.get_pending(limit=limit, offset=offset)
    return QuestionListResponse(total=total, questions=[_to_model(q) for q in questions])


@router.get("/{question_id}", response_model=QuestionModel)
async def get_question(question_id: str):
    """Fetch one question, e.g. to check whether it has been answered."""
    service = get_doctor_question_service()
    question = await service.get_question(question_id)
    if not question:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Question not found"
        )
    return _to_model(question)


@router.post("/{question_id}/response", response_model=QuestionModel)
async def answer_question(
    question_id: str,
    request: DoctorReplyRequest,
    current_user: Dict[str, Any] = Depends(require_roles(UserRole.DOCTOR)),
):
    """Answer a question. Each question can be answered once."""
    answer = request.response.strip()
    if not answer:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Response is required"
        )

    service = get_doctor_question_service()
    try:
        question = await service.answer_question(
            question_id, answer, doctor_id=current_user["userId"]
        )
    except AlreadyAnsweredError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This question has already been answered",
        )

    if not question:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Question not found"
        )
    return _to_model(question)
