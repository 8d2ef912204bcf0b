"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    FIREBASE_CREDENTIALS: str = ""
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    RATE_LIMIT: str = "100/minute"
    DEBUG: bool = False

    # Remote compatibility check (used by services.remote)
    COMPATIBILITY_API_URL: str = "http://localhost:8000/api/v1"
    COMPATIBILITY_TIMEOUT: float = 10.0

    # Pedigree maintenance
    ANCESTRY_MAX_GENERATIONS: int = 5
    SEED_SAMPLE_DATA: bool = True

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
