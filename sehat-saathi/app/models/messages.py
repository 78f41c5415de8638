"""API request and response models."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime
from app.models.enums import (
    BedStatus,
    EmergencyStatus,
    FacilityType,
    MythStatus,
    QuestionCategory,
    UserRole,
)
from app.models.emergency import GeoPoint


# ---------------------------------------------------------------------------
# Health chat
# ---------------------------------------------------------------------------
class HealthChatRequest(BaseModel):
    """Myth to verify."""

    message: str = Field(..., max_length=2000, description="User message")


class EmergencyHint(BaseModel):
    """Attached to a chat reply when the message reads like an emergency."""

    categories: List[str]
    ambulance: str


class HealthChatResponse(BaseModel):
    """Normalized myth checker reply."""

    reply: str
    status: Optional[MythStatus] = None
    english: Optional[str] = None
    hindi: Optional[str] = None
    emergency: Optional[EmergencyHint] = None


# ---------------------------------------------------------------------------
# Text-to-speech
# ---------------------------------------------------------------------------
class TextToSpeechRequest(BaseModel):
    text: str = Field(..., max_length=5000)
    language: str = Field("en", description="'hi' for Hindi, anything else English")


class TextToSpeechResponse(BaseModel):
    audioContent: str = Field(..., description="Base64 encoded MP3")
    languageCode: str
    mimeType: str = "audio/mp3"


# ---------------------------------------------------------------------------
# Doctor Q&A
# ---------------------------------------------------------------------------
class AskDoctorRequest(BaseModel):
    name: str = Field(..., max_length=120)
    category: QuestionCategory
    question: str = Field(..., max_length=4000)
    location: Optional[GeoPoint] = None


class DoctorReplyRequest(BaseModel):
    response: str = Field(..., max_length=4000)


class QuestionModel(BaseModel):
    """Doctor question as shown to clients."""

    id: str
    name: str
    category: QuestionCategory
    question: str
    created_at: datetime
    response: Optional[str] = None
    responded_at: Optional[datetime] = None


class AskDoctorResponse(BaseModel):
    question: QuestionModel
    message: str = "A doctor will reply soon."


class QuestionListResponse(BaseModel):
    total: int
    questions: List[QuestionModel]


# ---------------------------------------------------------------------------
# Emergencies
# ---------------------------------------------------------------------------
class CreateEmergencyRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = Field(None, max_length=32)
    description: Optional[str] = Field(None, max_length=2000)
    location: GeoPoint


class EmergencyModel(BaseModel):
    emergency_id: str
    status: EmergencyStatus
    location: GeoPoint
    description: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    created_at: datetime
    closed_at: Optional[datetime] = None


class CreateEmergencyResponse(BaseModel):
    emergency: EmergencyModel
    ambulance: str
    message: str = "Waiting for nearby hospitals..."


class HospitalReplyRequest(BaseModel):
    hospital_name: str = Field(..., max_length=200)
    status: BedStatus
    medical_advice: str = Field(..., max_length=2000)


class HospitalResponseModel(BaseModel):
    id: str
    emergency_id: str
    hospital_name: str
    status: BedStatus
    medical_advice: str
    created_at: datetime


class HospitalResponseListResponse(BaseModel):
    emergency_id: str
    total: int
    responses: List[HospitalResponseModel]


class FirstAidTip(BaseModel):
    topic: str
    steps: List[str]


# ---------------------------------------------------------------------------
# Hospital finder
# ---------------------------------------------------------------------------
class NearbyFacility(BaseModel):
    place_id: str = ""
    name: str
    address: str = ""
    lat: float
    lng: float
    distance_km: float
    rating: float = 0.0
    reviews: int = 0
    type: str = "Hospital"
    phone: str = ""
    website: str = ""
    maps_url: str


class NearbyHospitalsResponse(BaseModel):
    facility: FacilityType
    radius_m: int
    total: int
    results: List[NearbyFacility]
    emergency_numbers: Dict[str, str]


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class SignupRequest(BaseModel):
    full_name: str = Field(..., max_length=120)
    username: str
    password: str = Field(..., max_length=128)


class LoginRequest(BaseModel):
    username: str
    password: str


class UserModel(BaseModel):
    user_id: str
    username: str
    full_name: str
    role: UserRole
    created_at: datetime


class LoginResponse(BaseModel):
    user: UserModel
    access_token: str
    token_type: str = "bearer"
