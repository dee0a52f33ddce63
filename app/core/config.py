from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
import os
from functools import lru_cache
from typing import List, Optional
import secrets
import urllib.parse


class Settings(BaseSettings):
    # App settings
    APP_NAME: str = "Concursos API"
    API_PREFIX: str = "/api"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    VERSION: str = "0.1.0"

    # Database settings - managed Postgres
    # DATABASE_URL wins over the individual parts when set
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DB_SERVER: str = os.getenv("DB_SERVER", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", "postgres")
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "postgres")

    # Security settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", secrets.token_hex(32))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))  # 24 hours
    REFRESH_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_MINUTES", "10080"))  # 1 Week
    ALGORITHM: str = "HS256"

    # CORS settings
    CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # VIES (EU VAT validation) settings
    VIES_BASE_URL: str = os.getenv("VIES_BASE_URL", "https://ec.europa.eu/taxation_customs/vies/rest-api")
    VIES_COUNTRY_CODE: str = os.getenv("VIES_COUNTRY_CODE", "PT")
    VIES_USER_AGENT: str = os.getenv("VIES_USER_AGENT", "ConcursoPublico/1.0")
    VIES_TIMEOUT: Optional[float] = float(os.getenv("VIES_TIMEOUT")) if os.getenv("VIES_TIMEOUT") else None

    # Wall-clock timezone used for "today" (IANA name); empty means the server's local time
    TIMEZONE: str = os.getenv("TIMEZONE", "Europe/Lisbon")

    # Environment name
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    model_config = ConfigDict(
        # This will look for environment-specific files first, then fall back to the default
        env_file = (".env.{environment}", ".env"),
        case_sensitive = True,
        extra = "ignore"
    )

    @field_validator('ENVIRONMENT', mode='before')
    def set_environment(cls, v):
        """Get environment from ENV variable or use default"""
        return os.getenv('ENVIRONMENT', v)

    def __init__(self, **kwargs):
        # Replace {environment} placeholder with actual environment name
        if isinstance(self.model_config['env_file'], tuple):
            env_files = []
            for file in self.model_config['env_file']:
                if '{environment}' in file:
                    env = os.getenv('ENVIRONMENT', 'development')
                    file = file.format(environment=env)
                env_files.append(file)
            self.model_config['env_file'] = tuple(env_files)

        super().__init__(**kwargs)

    @property
    def database_url(self) -> str:
        """
        Connection URL for SQLAlchemy. The password is URL encoded to handle special characters.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        encoded_password = urllib.parse.quote_plus(self.DB_PASSWORD)
        return f"postgresql+psycopg2://{self.DB_USER}:{encoded_password}@{self.DB_SERVER}:{self.DB_PORT}/{self.DB_NAME}"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached settings instance to avoid loading .env file on each request
    """
    return Settings()


settings = get_settings()
