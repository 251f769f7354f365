from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    INVOICES_PATH: str = "/dashboard/invoices"
    ALLOW_INVOICE_DELETE: bool = True
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
