from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./hireboard.db"

    # Credential hashing (bcrypt cost factor, 4..31)
    BCRYPT_ROUNDS: int = 12

    # Password policy
    PASSWORD_MIN_LENGTH: int = 8
    PASSWORD_MAX_LENGTH: int = 128
    PASSWORD_SPECIAL_CHARACTERS: str = "@$!%*?&"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
