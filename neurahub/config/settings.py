from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


DEFAULT_TEAM_ROLES = ["Captain", "Engineer", "Coder", "CADer", "Mentor", "Inspire", "Scout"]


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Used by the seed scripts

    # Generative AI (Gemini through its OpenAI-compatible endpoint)
    gemini_api_key: Optional[str] = None
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_model: str = "gemini-2.5-flash"
    ai_max_retries: int = 3

    # Offline bridge
    snapshot_dir: str = ".neurahub"
    sync_batch_size: int = 25
    activity_feed_limit: int = 50

    # Teams
    default_team_roles: List[str] = DEFAULT_TEAM_ROLES

    # App
    app_name: str = "neurahub"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def ai_enabled(self) -> bool:
        key = (self.gemini_api_key or "").strip()
        return bool(key) and key != "undefined"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
