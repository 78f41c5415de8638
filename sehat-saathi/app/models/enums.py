"""Shared enums for documents and API models."""

from enum import Enum


class UserRole(str, Enum):
    """Account roles."""

    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"  # Answers community questions
    HOSPITAL = "HOSPITAL"  # Replies to emergencies
    ADMIN = "ADMIN"


class QuestionCategory(str, Enum):
    """Doctor Q&A categories."""

    GENERAL = "general"
    NUTRITION = "nutrition"
    FITNESS = "fitness"
    MENTAL = "mental"
    CHRONIC = "chronic"
    PREVENTIVE = "preventive"


class MythStatus(str, Enum):
    """Verdict of the myth checker."""

    TRUE = "TRUE"
    FALSE = "FALSE"


class BedStatus(str, Enum):
    """Hospital availability reported in an emergency response."""

    BED_AVAILABLE = "BED AVAILABLE"
    HOSPITAL_FULL = "HOSPITAL FULL"


class EmergencyStatus(str, Enum):
    """Emergency lifecycle."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class FacilityType(str, Enum):
    """Facilities the hospital finder can search for."""

    HOSPITAL = "hospital"
    CLINIC = "clinic"
    PHARMACY = "pharmacy"
    PHC = "primary health centre"
