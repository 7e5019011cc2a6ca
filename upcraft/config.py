from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # REST backend
    UPCRAFT_API_BASE_URL: str = "http://localhost:5000"
    UPCRAFT_REQUEST_TIMEOUT: float = 30.0
    UPCRAFT_AI_TIMEOUT: float = 90.0  # /api/ai/* and chat wait on the model

    # Whose data the views show
    UPCRAFT_USER_ID: int = 1

    # UI behaviour
    UPCRAFT_CACHE_TTL: int = 60  # seconds before a query is refetched
    UPCRAFT_ASSESSMENT_WORKERS: int = 8
    UPCRAFT_ACTIVITY_LIMIT: int = 10

    UPCRAFT_LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
