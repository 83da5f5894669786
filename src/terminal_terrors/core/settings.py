"""Runtime configuration for the Terminal Terrors backend.

Every option maps to an upper-case environment variable (or a line in
``.env``). Only ``SECRET_KEY`` must be set in production; the rest default to a
local SQLite setup.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "terminal_terrors_cosmic_horror_secret_key_change_in_production"

# Hosts serving the itch.io HTML5 build, plus local static servers.
ITCH_ORIGINS = [
    "https://v6p9d9t4.ssl.hwcdn.net",
    "https://itch.zone",
    "https://itch.io",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "null",
]


def normalize_database_url(url: str) -> str:
    """Route bare Postgres URLs through the psycopg 3 driver.

    ``postgres://`` and ``postgresql://`` would otherwise select psycopg2, and
    async drivers cannot back the synchronous engine.
    """
    url = url.strip()
    for prefix in ("postgres://", "postgresql://", "postgresql+asyncpg://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


class Settings(BaseSettings):
    """Process-wide settings resolved once at import."""

    app_name: str = Field(default="Terminal Terrors Backend", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    # Storage
    database_url: str = Field(default="sqlite:///./terminal_terrors.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Sessions: HS256 tokens valid for seven days
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7, ge=1, alias="ACCESS_TOKEN_EXPIRE_MINUTES"
    )
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # Presence
    presence_window_seconds: int = Field(default=300, ge=1, alias="PRESENCE_WINDOW_SECONDS")
    presence_sweep_enabled: bool = Field(default=True, alias="PRESENCE_SWEEP_ENABLED")
    presence_sweep_interval_seconds: float = Field(
        default=300.0, gt=0, alias="PRESENCE_SWEEP_INTERVAL_SECONDS"
    )

    # CORS
    cors_origins: list[str] = Field(default=ITCH_ORIGINS, alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization", "X-Requested-With"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Database URL in use, honouring ``USE_TEST_DATABASE``."""
        url = self.database_url
        if self.use_testing_database and self.test_database_url:
            url = self.test_database_url
        return normalize_database_url(url)

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == DEFAULT_SECRET_KEY


settings = Settings()
