"""
Moderation decision engine

Per event:
1. load the current config (read-through, no cache)
2. disabled / direction excluded by mode / whitelisted session -> allow
3. keyword hit -> block, bump counters and persist (best effort)
"""
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel

from msg_guard.moderation.basic import match_keyword
from msg_guard.moderation.store import ConfigStore, Mode
from msg_guard.moderation.whitelist import is_exempt


class Direction(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class Decision(BaseModel):
    """Outcome of one moderation check"""
    blocked: bool = False
    keyword: Optional[str] = None
    reason: Optional[str] = None


def _default_log(message: str) -> None:
    print(f"[MODERATION] {message}")


def _event_get(event: Any, key: str) -> Any:
    if isinstance(event, dict):
        return event.get(key)
    return getattr(event, key, None)


def _event_set(event: Any, key: str, value: Any) -> None:
    if isinstance(event, dict):
        event[key] = value
    else:
        setattr(event, key, value)


class ModerationEngine:
    """Allow / block decisions over a ConfigStore"""

    def __init__(self, store: ConfigStore, log: Optional[Callable[[str], None]] = None):
        self.store = store
        self.log = log or _default_log

    def evaluate(
        self,
        text: str,
        session_key: str = "",
        direction: Direction = Direction.INBOUND
    ) -> Decision:
        config = self.store.load()

        if not config.enabled:
            return Decision()

        if direction == Direction.INBOUND and config.mode == Mode.OUTPUT_ONLY:
            return Decision()
        if direction == Direction.OUTBOUND and config.mode == Mode.INPUT_ONLY:
            return Decision()

        if is_exempt(session_key, config.whitelist):
            return Decision()

        matched = match_keyword(text, config.keywords)
        if matched is None:
            return Decision()

        config.stats.total_checks += 1
        config.stats.blocked += 1
        # A failed save is logged by the store; the decision stands.
        self.store.save(config)

        label = "input" if direction == Direction.INBOUND else "output"
        self.log(f"Blocked {label}: {matched}")
        return Decision(blocked=True, keyword=matched, reason=f"Keyword: {matched}")

    def apply(self, event: Any, direction: Direction) -> Decision:
        """
        Run a host message event through `evaluate`

        Inbound events carry their text in `text` (falling back to `content`),
        outbound ones the other way round. On block the event gets
        `cancel=True` and `cancelReason`.
        """
        if direction == Direction.INBOUND:
            text = _event_get(event, "text") or _event_get(event, "content") or ""
        else:
            text = _event_get(event, "content") or _event_get(event, "text") or ""
        session_key = _event_get(event, "sessionKey") or ""

        decision = self.evaluate(text, session_key, direction)
        if decision.blocked:
            _event_set(event, "cancel", True)
            _event_set(event, "cancelReason", decision.reason)
        return decision
