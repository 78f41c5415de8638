"""Doctor Q&A storage and retrieval service."""

from app.models.doctor_question import DoctorQuestion
from app.models.emergency import GeoPoint
from app.models.enums import QuestionCategory
from app.config.database import get_doctor_questions_collection
from typing import Optional, List
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class AlreadyAnsweredError(Exception):
    """Raised when a doctor replies to a question that already has an answer."""


class DoctorQuestionService:
    """Service for managing questions submitted to doctors."""

    async def submit_question(
        self,
        name: str,
        category: QuestionCategory,
        question: str,
        location: Optional[GeoPoint] = None,
    ) -> DoctorQuestion:
        """
        Store a new question.

        When the asker shared a location it is stored separately and also
        appended to the question text as " [Location: lat,lng]".
        """
        text = question
        location_text = None
        if location is not None:
            location_text = location.as_text()
            text = f"{question} [Location: {location_text}]"

        doc = DoctorQuestion(
            name=name, category=category, question=text, location=location_text
        )

        collection = await get_doctor_questions_collection()
        await collection.insert_one(doc.model_dump())

        logger.info(f"Question {doc.id} submitted in category {category.value}")
        return doc

    async def get_question(self, question_id: str) -> Optional[DoctorQuestion]:
        collection = await get_doctor_questions_collection()
        doc = await collection.find_one({"id": question_id})

        if doc:
            return DoctorQuestion(**doc)
        return None

    async def get_answered(self, limit: int = 10) -> List[DoctorQuestion]:
        """
        Community Q&A feed.

        Returns:
            Answered questions, most recently answered first
        """
        collection = await get_doctor_questions_collection()
        cursor = (
            collection.find({"response": {"$ne": None}})
            .sort("responded_at", -1)
            .limit(limit)
        )

        questions = []
        async for doc in cursor:
            questions.append(DoctorQuestion(**doc))
        return questions

    async def get_pending(
        self, limit: int = 20, offset: int = 0
    ) -> tuple[List[DoctorQuestion], int]:
        """
        Unanswered questions for the doctors' queue, oldest first.

        Returns:
            Tuple of (questions list, total pending count)
        """
        collection = await get_doctor_questions_collection()
        query = {"response": None}

        total = await collection.count_documents(query)
        cursor = collection.find(query).sort("created_at", 1).skip(offset).limit(limit)

        questions = []
        async for doc in cursor:
            questions.append(DoctorQuestion(**doc))
        return questions, total

    async def answer_question(
        self, question_id: str, response: str, doctor_id: str
    ) -> Optional[DoctorQuestion]:
        """
        Record a doctor's answer.

        Returns:
            Updated question, or None if the question does not exist

        Raises:
            AlreadyAnsweredError: If the question already has a response
        """
        collection = await get_doctor_questions_collection()
        now = datetime.utcnow()

        # Only matches while unanswered, so concurrent replies cannot both win
        result = await collection.update_one(
            {"id": question_id, "response": None},
            {
                "$set": {
                    "response": response,
                    "responded_at": now,
                    "responded_by": doctor_id,
                }
            },
        )

        if result.modified_count == 0:
            existing = await self.get_question(question_id)
            if existing is None:
                return None
            raise AlreadyAnsweredError(question_id)

        logger.info(f"Question {question_id} answered by {doctor_id}")
        return await self.get_question(question_id)


# Global service instance
_doctor_question_service: Optional[DoctorQuestionService] = None


def get_doctor_question_service() -> DoctorQuestionService:
    """Get or create DoctorQuestionService instance."""
    global _doctor_question_service
    if _doctor_question_service is None:
        _doctor_question_service = DoctorQuestionService()
    return _doctor_question_service
