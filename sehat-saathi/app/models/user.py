"""MongoDB schema for user accounts."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.enums import UserRole
import uuid


class User(BaseModel):
    """User account document."""

    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str
    full_name: str
    password_hash: str
    role: UserRole = UserRole.PATIENT
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_login_at: Optional[datetime] = None

    def public_dict(self) -> dict:
        """Account fields safe to send to a client."""
        return self.model_dump(exclude={"password_hash"})
