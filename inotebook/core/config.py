"""Central application settings (Pydantic Settings).

- Loads variables from the .env at the repo root.
- Groups settings by area: App, CORS, Mongo, Auth/JWT, Notes client.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator
from pathlib import Path

# .env at the repo root, independent of the CWD
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Configuration values with sensible defaults.

    Any value can be overridden through environment variables (.env).
    """
    # App
    app_name: str = "iNotebook API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 4000

    # CORS (React dev server)
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    cors_allow_any: bool = False

    # Mongo
    mongo_uri: str = Field(
        "mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGOURI", "MONGO_URI"),
    )
    mongo_db: str = "inotebook"
    mongo_tls: bool = False
    mongo_server_selection_timeout_ms: int = 15000

    # Auth / JWT
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    auth_header: str = "auth-token"

    # Notes client
    notes_api_base_url: str = Field(
        "http://localhost:4000",
        validation_alias=AliasChoices("NOTES_API_BASE_URL", "REACT_APP_BASE_URL"),
    )
    notes_api_timeout_seconds: float | None = 30.0
    notes_storage_file: Path = Path.home() / ".inotebook" / "storage.json"

    @field_validator("notes_api_timeout_seconds", mode="before")
    @classmethod
    def _zero_means_no_timeout(cls, v):
        if v in ("", None, 0, "0"):
            return None
        return v

    # --- Derived helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Return `api_prefix` in a consistent shape.

        - Always starts with '/'
        - No trailing '/' (except when it is just '/')
        - Empty stays ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def notes_api_url(self) -> str:
        return self.notes_api_base_url.rstrip("/")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
