"""
Minimal in-process host

Implements the hook / service / CLI registration surface the plugin expects,
so the filter can run (and be tested) without the real messaging runtime.
"""
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List

HookHandler = Callable[[Any], Awaitable[None]]
CliHandler = Callable[[List[str]], str]


class PrintLogger:
    """Bracket-tagged stdout logger"""

    def info(self, message: str) -> None:
        print(f"[INFO] {message}")

    def warning(self, message: str) -> None:
        print(f"[WARN] {message}")

    def error(self, message: str) -> None:
        print(f"[ERROR] {message}")


def _cancelled(event: Any) -> bool:
    if isinstance(event, dict):
        return bool(event.get("cancel"))
    return bool(getattr(event, "cancel", False))


class LocalHost:
    """Observer-style registry: named hooks, services and CLI commands"""

    def __init__(self, logger: Any = None):
        self.logger = logger or PrintLogger()
        self.hooks: Dict[str, List[HookHandler]] = defaultdict(list)
        self.services: List[Any] = []
        self.commands: Dict[str, CliHandler] = {}

    # ---- registration API ----

    def register_hook(self, events: List[str], handler: HookHandler) -> None:
        for name in events:
            self.hooks[name].append(handler)

    def register_service(self, service: Any) -> None:
        self.services.append(service)

    def register_cli(self, handler: CliHandler, name: str, description: str = "") -> None:
        self.commands[name] = handler

    # ---- dispatch ----

    async def emit(self, event_name: str, event: Any) -> Any:
        """Run handlers in registration order; a cancelled event stops the chain."""
        for handler in self.hooks.get(event_name, []):
            await handler(event)
            if _cancelled(event):
                break
        return event

    def run_cli(self, name: str, args: List[str]) -> str:
        handler = self.commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        return handler(args)

    def start_services(self) -> None:
        for service in self.services:
            service.start()

    def stop_services(self) -> None:
        for service in reversed(self.services):
            service.stop()
