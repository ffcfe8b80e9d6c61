"""
Host adapter - wires the engine, admin API and CLI into a host runtime

The host passes an `api` object exposing `logger`, `register_hook`,
`register_service` and `register_cli` (see msg_guard.host.LocalHost).
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from msg_guard.admin.server import AdminServer
from msg_guard.admin.service import AdminService, run_command
from msg_guard.app import create_app
from msg_guard.config import settings
from msg_guard.moderation.engine import Direction, ModerationEngine
from msg_guard.moderation.store import ConfigStore

LOG_PREFIX = "[content-moderation]"


@dataclass
class Service:
    id: str
    start: Callable[[], None]
    stop: Callable[[], None]


class ModerationPlugin:
    """Keyword moderation for message:received / message:sending"""

    id = "content-moderation"
    name = "Content Moderation"
    description = "Message moderation with keyword filtering"

    def __init__(
        self,
        config_path: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        static_dir: Optional[str] = None
    ):
        self.store = ConfigStore(config_path or settings.MODERATION_CONFIG_PATH)
        self.engine = ModerationEngine(self.store)
        self.admin = AdminService(self.store)
        self.server = AdminServer(
            create_app(self.store, static_dir),
            host=host or settings.HOST,
            port=settings.PORT if port is None else port,
        )

    def register(self, api: Any) -> None:
        api.logger.info(f"{LOG_PREFIX} Registering...")

        self.engine.log = lambda message: api.logger.info(f"{LOG_PREFIX} {message}")

        api.register_hook(["message:received"], self.on_message_received)
        api.register_hook(["message:sending"], self.on_message_sending)
        api.register_service(Service(
            id="content-moderation-admin",
            start=self.server.start,
            stop=self.server.stop,
        ))
        api.register_cli(self.on_cli, name="moderation", description="Content moderation")

        api.logger.info(f"{LOG_PREFIX} Ready (port {self.server.port})")

    async def on_message_received(self, event: Any) -> None:
        self.engine.apply(event, Direction.INBOUND)

    async def on_message_sending(self, event: Any) -> None:
        self.engine.apply(event, Direction.OUTBOUND)

    def on_cli(self, args: List[str]) -> str:
        return run_command(self.admin, args)
