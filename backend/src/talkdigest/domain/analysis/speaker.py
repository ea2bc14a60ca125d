"""Speaker heuristic for OCR text.

Posters and slides announcing a talk usually print the speaker's name next
to a role word ("Guest speaker: Anna Svensson") or after a preposition
("An evening with Anna Svensson"). Keywords are matched case-insensitively in
English and Swedish; the two name tokens must be capitalized.
"""

import re
from typing import Optional

_NAME = r"[A-ZÅÄÖÆØÉÜ][a-zåäöæøéü]+"
_FULL_NAME = rf"({_NAME}\s+{_NAME})"
_ROLE = r"(?i:speaker|guest|presenter|lecturer|föredragshållare|talare|gäst)"

# Tried in order; the first pattern that matches decides the speaker
SPEAKER_PATTERNS = (
    re.compile(rf"\b{_ROLE}[\s:]*{_FULL_NAME}"),
    re.compile(rf"{_FULL_NAME}[\s,]*{_ROLE}"),
    re.compile(rf"\b(?i:with|from|med|från)\s+{_FULL_NAME}"),
)

SPEAKER_KEYWORDS = (
    "speaker",
    "guest",
    "presenter",
    "expert",
    "lecture",
    "keynote",
    "föredragshållare",
    "talare",
    "gäst",
    "föredrag",
)


def find_speaker(text: Optional[str]) -> Optional[str]:
    """Extract a speaker name from OCR text.

    Example:
        >>> find_speaker("Tonight: guest speaker Anna Svensson on water")
        'Anna Svensson'
        >>> find_speaker("no names here") is None
        True
    """
    if not text:
        return None

    for pattern in SPEAKER_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def is_speaker_image(text: Optional[str]) -> bool:
    """True if the text contains speaker/talk vocabulary, name or not."""
    if not text:
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in SPEAKER_KEYWORDS)
