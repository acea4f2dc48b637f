from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = "sqlite:///./motivodo.db"
    DB_ECHO: bool = False

    # JWT session settings
    SESSION_SECRET: str = "motivodo-secret-key"
    ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 7
    TOKEN_COOKIE: str = "motivodo_token"

    # Password hashing cost (bcrypt log rounds)
    BCRYPT_ROUNDS: int = 10

    # Project settings
    PROJECT_NAME: str = "Motivodo API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma separated list of allowed frontend origins
    CORS_ORIGINS: str = "http://localhost:5000,http://localhost:5173"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    # Unknown keys in .env are ignored instead of raising "Extra inputs are not permitted"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
