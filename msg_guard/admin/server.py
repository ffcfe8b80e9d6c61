"""
Admin listener lifecycle - uvicorn in a background thread

Used when the admin API runs as a host service next to the hooks.
"""
import threading
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI


class AdminServer:
    """start() / stop() wrapper around a uvicorn.Server"""

    def __init__(self, app: FastAPI, host: str = "127.0.0.1", port: int = 8080):
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, wait_timeout: float = 5.0) -> None:
        if self.running:
            return

        config = uvicorn.Config(self.app, host=self.host, port=self.port, log_level="warning")
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._server.run, name="msg-guard-admin", daemon=True
        )
        self._thread.start()

        deadline = time.monotonic() + wait_timeout
        while not self._server.started and self._thread.is_alive():
            if time.monotonic() > deadline:
                print(f"[ADMIN] Listener did not report started within {wait_timeout}s")
                break
            time.sleep(0.05)

        if self._server.started:
            print(f"[ADMIN] Admin: http://{self.host}:{self.port}")
        else:
            print(f"[ADMIN] Listener failed to start on {self.host}:{self.port}")

    def stop(self, timeout: float = 5.0) -> None:
        if self._server is None:
            return
        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout)
        self._server = None
        self._thread = None
        print("[ADMIN] Listener stopped")
