from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    APP_NAME: str = "Resume Studio API"
    DATABASE_URL: str = "sqlite:///./resume_studio.db"
    GOOGLE_API_KEY: str | None = None
    GOOGLE_GENAI_USE_VERTEXAI: str = "FALSE"
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Namespaced, versioned key holding the whole {resumeId: record} map
    RESUME_STORE_KEY: str = "resumes.v1"

    EXPORT_SCALE: int = Field(default=2, ge=2)
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
