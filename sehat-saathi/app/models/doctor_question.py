"""MongoDB schema for doctor Q&A questions."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.enums import QuestionCategory
import uuid


class DoctorQuestion(BaseModel):
    """A question submitted to the doctors, answered at most once."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    category: QuestionCategory
    question: str
    location: Optional[str] = None  # "lat,lng" when the asker shared it
    created_at: datetime = Field(default_factory=datetime.utcnow)

    response: Optional[str] = None
    responded_at: Optional[datetime] = None
    responded_by: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "7c1f8c5e-8f7e-4a8e-9d43-2f4c9a1b0e11",
                "name": "Ramesh",
                "category": "nutrition",
                "question": "Is it safe to drink milk with fish?",
                "response": None,
            }
        }
