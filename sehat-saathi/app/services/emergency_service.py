"""Emergency requests and hospital responses."""

from app.models.emergency import Emergency, GeoPoint, HospitalResponse
from app.models.enums import BedStatus, EmergencyStatus
from app.config.database import (
    get_emergencies_collection,
    get_hospital_responses_collection,
)
from app.utils.red_flags import detect_red_flags
from typing import AsyncIterator, Awaitable, Callable, Optional, List
from datetime import datetime
import asyncio
import logging

logger = logging.getLogger(__name__)


class EmergencyClosedError(Exception):
    """Raised when a hospital replies to an emergency that is already closed."""


class EmergencyService:
    """Service for emergency requests and the hospital response sheet."""

    async def create_emergency(
        self,
        location: GeoPoint,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        description: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> Emergency:
        """Open a new emergency, tagging it with any red flags in the description."""
        _, categories = detect_red_flags(description or "")

        emergency = Emergency(
            name=name,
            phone=phone,
            description=description,
            location=location,
            categories=categories,
            created_by=created_by,
        )

        collection = await get_emergencies_collection()
        await collection.insert_one(emergency.model_dump())

        logger.warning(
            f"🚨 Emergency {emergency.emergency_id} opened at "
            f"{location.as_text()} categories={categories}"
        )
        return emergency

    async def get_emergency(self, emergency_id: str) -> Optional[Emergency]:
        collection = await get_emergencies_collection()
        doc = await collection.find_one({"emergency_id": emergency_id})

        if doc:
            return Emergency(**doc)
        return None

    async def close_emergency(self, emergency_id: str) -> bool:
        """
        Mark an emergency closed.

        Returns:
            True if it was open and is now closed
        """
        collection = await get_emergencies_collection()
        result = await collection.update_one(
            {"emergency_id": emergency_id, "status": EmergencyStatus.OPEN.value},
            {
                "$set": {
                    "status": EmergencyStatus.CLOSED.value,
                    "closed_at": datetime.utcnow(),
                }
            },
        )

        if result.modified_count > 0:
            logger.info(f"Closed emergency {emergency_id}")
            return True
        return False

    async def add_response(
        self,
        emergency: Emergency,
        hospital_name: str,
        status: BedStatus,
        medical_advice: str,
        responder_id: Optional[str] = None,
    ) -> HospitalResponse:
        """
        Record a hospital's reply.

        Raises:
            EmergencyClosedError: If the emergency is no longer open
        """
        if emergency.status != EmergencyStatus.OPEN:
            raise EmergencyClosedError(emergency.emergency_id)

        response = HospitalResponse(
            emergency_id=emergency.emergency_id,
            hospital_name=hospital_name,
            status=status,
            medical_advice=medical_advice,
            responder_id=responder_id,
        )

        collection = await get_hospital_responses_collection()
        await collection.insert_one(response.model_dump())

        logger.info(
            f"{hospital_name} replied to emergency {emergency.emergency_id}: "
            f"{status.value}"
        )
        return response

    async def get_responses(
        self, emergency_id: str, since: Optional[datetime] = None
    ) -> List[HospitalResponse]:
        """
        Responses for an emergency, newest first.

        Args:
            emergency_id: Emergency identifier
            since: Only return responses created strictly after this time
        """
        query: dict = {"emergency_id": emergency_id}
        if since is not None:
            query["created_at"] = {"$gt": since}

        collection = await get_hospital_responses_collection()
        cursor = collection.find(query).sort("created_at", -1)

        responses = []
        async for doc in cursor:
            responses.append(HospitalResponse(**doc))
        return responses

    async def watch_responses(
        self,
        emergency_id: str,
        interval: float,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
        max_polls: Optional[int] = None,
    ) -> AsyncIterator[Optional[HospitalResponse]]:
        """
        Poll for hospital responses.

        Yields each response once, oldest first within a poll, and yields
        None after a poll that found nothing new. Stops when the client
        disconnects, the emergency is closed or gone, or after max_polls.
        """
        seen: set[str] = set()
        polls = 0

        while max_polls is None or polls < max_polls:
            if is_disconnected is not None and await is_disconnected():
                logger.info(f"Client stopped watching emergency {emergency_id}")
                return

            polls += 1
            responses = await self.get_responses(emergency_id)
            fresh = [r for r in reversed(responses) if r.id not in seen]

            for response in fresh:
                seen.add(response.id)
                yield response
            if not fresh:
                yield None

            emergency = await self.get_emergency(emergency_id)
            if emergency is None or emergency.status != EmergencyStatus.OPEN:
                return

            if max_polls is None or polls < max_polls:
                await asyncio.sleep(interval)


# Global service instance
_emergency_service: Optional[EmergencyService] = None


def get_emergency_service() -> EmergencyService:
    """Get or create EmergencyService instance."""
    global _emergency_service
    if _emergency_service is None:
        _emergency_service = EmergencyService()
    return _emergency_service
