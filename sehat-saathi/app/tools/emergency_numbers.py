"""Regional emergency numbers.

India is the default region; the ambulance line there is 108.
"""

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_EMERGENCY_NUMBERS: Dict[str, Dict[str, str]] = {
    "IN": {"ambulance": "108", "police": "100", "fire": "101", "general": "112"},
    "NP": {"ambulance": "102", "police": "100", "fire": "101", "general": "102"},
    "BD": {"ambulance": "199", "police": "999", "fire": "199", "general": "999"},
    "PK": {"ambulance": "115", "police": "15", "fire": "16", "general": "115"},
    "LK": {"ambulance": "1990", "police": "119", "fire": "111", "general": "110"},
    "BT": {"ambulance": "112", "police": "113", "fire": "110", "general": "112"},
    "US": {"ambulance": "911", "police": "911", "fire": "911", "general": "911"},
    "GB": {"ambulance": "999", "police": "999", "fire": "999", "general": "999"},
}

_DEFAULT_EMERGENCY = {
    "ambulance": "112",
    "police": "112",
    "fire": "112",
    "general": "112",
}


def get_emergency_numbers(country: Optional[str]) -> Dict[str, str]:
    """
    Return emergency numbers for an ISO 3166 alpha-2 country code.

    Unknown or missing codes fall back to the international 112.
    """
    code = (country or "").strip().upper()
    numbers = _EMERGENCY_NUMBERS.get(code)
    if numbers is None:
        logger.info(f"No emergency numbers for country '{code}', using 112")
        return _DEFAULT_EMERGENCY.copy()
    return numbers.copy()
