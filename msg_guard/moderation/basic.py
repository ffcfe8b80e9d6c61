"""
Basic text moderation - keyword matching
"""
from typing import Iterable, Optional


def match_keyword(text: str, keywords: Iterable[str]) -> Optional[str]:
    """
    Find the first keyword contained in text

    Plain case-insensitive substring test, in list order. No regex and no
    word boundaries: "class" matches "classic".

    Returns:
        the matched keyword as configured, or None
    """
    if not text:
        return None

    lowered = text.lower()
    for kw in keywords:
        if kw.lower() in lowered:
            return kw
    return None
