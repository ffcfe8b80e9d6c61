"""
Command line entry

    msg-guard status
    msg-guard test <text...>
    msg-guard enable | disable
    msg-guard serve            # admin API in the foreground
"""
import argparse
import sys
from typing import List, Optional

from msg_guard.admin.service import SAVE_FAILED, USAGE
from msg_guard.config import settings
from msg_guard.host import LocalHost
from msg_guard.plugin import ModerationPlugin


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="msg-guard", description="Keyword moderation filter")
    parser.add_argument("--config", default=settings.MODERATION_CONFIG_PATH,
                        help=f"moderation config file (default: {settings.MODERATION_CONFIG_PATH})")
    parser.add_argument("--host", default=settings.HOST, help="admin listen host")
    parser.add_argument("--port", type=int, default=settings.PORT, help="admin listen port")
    parser.add_argument("--static-dir", default=settings.ADMIN_STATIC_DIR,
                        help="admin page directory served at /")
    parser.add_argument("command", nargs=argparse.REMAINDER,
                        help="status | test <text> | enable | disable | serve")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    plugin = ModerationPlugin(
        config_path=args.config,
        host=args.host,
        port=args.port,
        static_dir=args.static_dir,
    )

    if args.command[:1] == ["serve"]:
        import uvicorn
        uvicorn.run(plugin.server.app, host=args.host, port=args.port)
        return 0

    host = LocalHost()
    plugin.register(host)
    output = host.run_cli("moderation", args.command)
    print(output)
    return 1 if output in (USAGE, SAVE_FAILED) else 0


if __name__ == "__main__":
    sys.exit(main())
