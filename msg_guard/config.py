"""
Global process settings
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Process settings (env / .env)"""
    HOST: str = "127.0.0.1"
    PORT: int = 8080
    DEBUG: bool = False

    # Moderation document and admin page
    MODERATION_CONFIG_PATH: str = "config.json"
    ADMIN_STATIC_DIR: str = "admin/public"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore"
    }


settings = Settings()
