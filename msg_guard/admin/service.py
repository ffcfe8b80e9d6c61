"""
Admin operations over the moderation config

Every mutation is load -> change one field -> save, and returns the save
result. Nothing is cached between calls.
"""
from typing import Callable, Dict, List, Union

from msg_guard.moderation.basic import match_keyword
from msg_guard.moderation.store import ConfigStore, Mode, ModerationConfig


class AdminService:
    """Read / edit keywords, whitelist, enabled flag and mode"""

    def __init__(self, store: ConfigStore):
        self.store = store

    def _update(self, mutate: Callable[[ModerationConfig], None]) -> bool:
        config = self.store.load()
        mutate(config)
        return self.store.save(config)

    # ---- read ----

    def get_snapshot(self) -> Dict:
        config = self.store.load()
        return {
            "keywords": config.keywords,
            "whitelist": config.whitelist,
            "stats": config.stats.model_dump(by_alias=True),
            "enabled": config.enabled,
            "mode": config.mode.value,
        }

    def get_keywords(self) -> List[str]:
        return self.store.load().keywords

    def get_whitelist(self) -> List[str]:
        return self.store.load().whitelist

    def test_text(self, text: str) -> Dict:
        """Dry run of the keyword matcher only (ignores enabled/mode/whitelist)."""
        matched = match_keyword(text, self.store.load().keywords)
        return {"passed": matched is None, "matched": matched}

    # ---- enabled / mode ----

    def set_enabled(self, enabled: bool) -> bool:
        def mutate(config: ModerationConfig) -> None:
            config.enabled = enabled
        return self._update(mutate)

    def set_mode(self, mode: Union[Mode, str]) -> bool:
        new_mode = Mode(mode)

        def mutate(config: ModerationConfig) -> None:
            config.mode = new_mode
        return self._update(mutate)

    # ---- keywords ----

    def add_keyword(self, word: str) -> bool:
        def mutate(config: ModerationConfig) -> None:
            if word not in config.keywords:
                config.keywords.append(word)
        return self._update(mutate)

    def remove_keyword(self, word: str) -> bool:
        def mutate(config: ModerationConfig) -> None:
            config.keywords = [k for k in config.keywords if k != word]
        return self._update(mutate)

    def replace_keywords(self, keywords: List[str]) -> bool:
        def mutate(config: ModerationConfig) -> None:
            config.keywords = list(keywords)
        return self._update(mutate)

    def clear_keywords(self) -> bool:
        return self.replace_keywords([])

    # ---- whitelist ----

    def add_whitelist(self, pattern: str) -> bool:
        def mutate(config: ModerationConfig) -> None:
            if pattern not in config.whitelist:
                config.whitelist.append(pattern)
        return self._update(mutate)

    def remove_whitelist(self, pattern: str) -> bool:
        def mutate(config: ModerationConfig) -> None:
            config.whitelist = [p for p in config.whitelist if p != pattern]
        return self._update(mutate)

    def replace_whitelist(self, patterns: List[str]) -> bool:
        def mutate(config: ModerationConfig) -> None:
            config.whitelist = list(patterns)
        return self._update(mutate)


USAGE = "moderation status|test|enable|disable"
SAVE_FAILED = "Failed to save config"


def run_command(admin: AdminService, args: List[str]) -> str:
    """
    Text command interface shared by the console script and the host CLI

    Returns the line to print. Unknown commands return the usage line and
    touch nothing.
    """
    command = args[0] if args else ""

    if command == "status":
        config = admin.store.load()
        return (
            f"Enabled: {str(config.enabled).lower()}, Mode: {config.mode.value}, "
            f"Keywords: {len(config.keywords)}, Checks: {config.stats.total_checks}, "
            f"Blocked: {config.stats.blocked}"
        )

    if command == "test":
        result = admin.test_text(" ".join(args[1:]))
        return "Passed" if result["passed"] else f"Blocked ({result['matched']})"

    if command == "enable":
        return "Enabled" if admin.set_enabled(True) else SAVE_FAILED

    if command == "disable":
        return "Disabled" if admin.set_enabled(False) else SAVE_FAILED

    return USAGE
