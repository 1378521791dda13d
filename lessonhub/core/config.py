from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Lesson Catalog"

    # Lesson content
    LESSONS_DIR: str = "./lessons"
    COURSE_LAYOUT: str = "certificate"

    # Live reload
    WATCH_ENABLED: bool = True
    WATCH_DEBOUNCE_MS: int = 100
    WATCH_FORCE_POLLING: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    DEBUG: bool = False
    RELOAD: bool = False
    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_SECONDS: float = 2.0

    # BACKEND_CORS_ORIGINS is a comma-separated list of origins
    BACKEND_CORS_ORIGINS: str = "*"

    @property
    def cors_origins(self) -> List[str]:
        """Get the CORS origins as a list."""
        return [
            origin.strip()
            for origin in self.BACKEND_CORS_ORIGINS.split(",")
            if origin.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )


settings = Settings()
