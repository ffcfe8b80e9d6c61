"""
msg_guard admin entry
FastAPI application for the moderation admin surface
"""
import traceback
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from msg_guard.admin.router import router
from msg_guard.admin.service import AdminService
from msg_guard.config import settings
from msg_guard.moderation.store import ConfigStore


def create_app(store: ConfigStore, static_dir: Optional[str] = None) -> FastAPI:
    """Build the admin app around one config store"""
    app = FastAPI(
        title="msg_guard",
        description="Keyword moderation filter - admin API",
        version="1.0.0"
    )
    app.state.admin = AdminService(store)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        print(f"[ADMIN] Invalid request {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Unhandled errors -> 500, the listener keeps running"""
        print(f"\n{'='*60}")
        print(f"[ERROR] Unhandled exception:")
        print(f"Path: {request.url.path}")
        print(f"Exception: {exc}")
        traceback.print_exc()
        print(f"{'='*60}\n")

        return JSONResponse(status_code=500, content={"error": "Internal Error"})

    app.include_router(router)

    # Bundled admin page, if present
    static_path = Path(static_dir if static_dir is not None else settings.ADMIN_STATIC_DIR)
    if static_path.is_dir():
        app.mount("/", StaticFiles(directory=str(static_path), html=True), name="admin-page")

    return app


app = create_app(ConfigStore(settings.MODERATION_CONFIG_PATH))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "msg_guard.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
