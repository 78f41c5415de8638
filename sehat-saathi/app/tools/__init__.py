"""Outbound API wrappers used by the SehatSaathi routes."""

from app.tools.emergency_numbers import get_emergency_numbers
from app.tools.hospital_search import search_nearby_facilities
from app.tools.text_to_speech import synthesize_speech

__all__ = [
    "get_emergency_numbers",
    "search_nearby_facilities",
    "synthesize_speech",
]
