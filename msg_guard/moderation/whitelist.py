"""
Session whitelist - glob patterns with `*` wildcards
"""
import re
from typing import Iterable, Pattern


def compile_pattern(pattern: str) -> Pattern:
    """Escape everything except `*`, which matches any run of characters."""
    parts = (re.escape(chunk) for chunk in pattern.split("*"))
    return re.compile(".*".join(parts), re.DOTALL)


def is_exempt(session_key: str, patterns: Iterable[str]) -> bool:
    """True if some pattern matches the whole session key."""
    for p in patterns:
        if compile_pattern(p).fullmatch(session_key or ""):
            return True
    return False
