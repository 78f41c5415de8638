"""Red flag detection for emergency messages.

Patterns cover English plus the common Hinglish / Devanagari phrasing that
rural users type into the chat box and the emergency form.
"""

import re
from typing import List, Tuple


RED_FLAG_PATTERNS = {
    "cardiac": [
        r"chest pain",
        r"pressure.*chest",
        r"heart attack",
        r"seene (me|mein) dard",
        r"सीने में दर्द",
    ],
    "breathing": [
        r"can'?t breathe",
        r"difficulty breathing",
        r"gasping",
        r"choking",
        r"saans (nahi|nahin|lene)",
        r"सांस",
    ],
    "stroke": [
        r"face.*droop",
        r"slurred speech",
        r"sudden.*weak(ness)?",
        r"lakwa",
        r"लकवा",
    ],
    "unconscious": [
        r"unconscious",
        r"passed out",
        r"not responding",
        r"behosh",
        r"बेहोश",
        r"seizure",
        r"mirgi",
    ],
    "bleeding": [
        r"heavy bleeding",
        r"bleeding.*won'?t stop",
        r"khoon.*(band|ruk) nahi",
        r"vomiting blood",
    ],
    "poisoning": [
        r"snake ?bite",
        r"saanp",
        r"सांप",
        r"poison",
        r"pesticide",
        r"zeher",
    ],
    "burn": [
        r"severe burn",
        r"jal gaya",
        r"जल गया",
    ],
    "pregnancy": [
        r"labou?r pain",
        r"pregnan.*bleeding",
        r"prasav",
    ],
    "self_harm": [
        r"suicid",
        r"kill myself",
        r"want to die",
    ],
}

_COMPILED = {
    category: [re.compile(p) for p in patterns]
    for category, patterns in RED_FLAG_PATTERNS.items()
}


def detect_red_flags(text: str) -> Tuple[bool, List[str]]:
    """
    Detect emergency red flags in user input.

    Args:
        text: Free text from the chat or the emergency form

    Returns:
        Tuple of (has_red_flags, list_of_detected_categories)
    """
    if not text:
        return False, []

    text_lower = text.lower()
    detected = [
        category
        for category, patterns in _COMPILED.items()
        if any(p.search(text_lower) for p in patterns)
    ]
    return len(detected) > 0, detected
