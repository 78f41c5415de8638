"""MongoDB schema for emergencies and hospital responses."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from app.models.enums import BedStatus, EmergencyStatus
import uuid


class GeoPoint(BaseModel):
    """WGS84 coordinates shared by the browser."""

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    def as_text(self) -> str:
        return f"{self.lat},{self.lng}"


class Emergency(BaseModel):
    """Emergency request broadcast to nearby hospitals."""

    emergency_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    location: GeoPoint
    categories: List[str] = Field(default_factory=list)
    status: EmergencyStatus = EmergencyStatus.OPEN
    created_by: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    closed_at: Optional[datetime] = None


class HospitalResponse(BaseModel):
    """A hospital's reply to an emergency."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    emergency_id: str
    hospital_name: str
    status: BedStatus
    medical_advice: str
    responder_id: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
