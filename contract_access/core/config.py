# =====================================================
# FILE: contract_access/core/config.py
# Application Settings
# =====================================================

from typing import List, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables and .env"""

    PROJECT_NAME: str = "Contract Access Core"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database (read-only snapshot loading)
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "contracts"
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Department visibility exception.
    # Members of the head office see every department; the always-visible
    # departments are visible to everyone.
    HEAD_OFFICE_DEPARTMENT: str = "Genel Müdürlük"
    ALWAYS_VISIBLE_DEPARTMENTS: List[str] = ["Genel Müdürlük", "Hukuk"]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        # URL-encode the password to handle special characters like @ # $
        encoded_password = quote_plus(self.DB_PASSWORD)
        return (
            f"mysql+pymysql://{self.DB_USER}:{encoded_password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
