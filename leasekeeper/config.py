from dotenv import load_dotenv
from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Runtime configuration handed to every service at construction."""

    model_config = SettingsConfigDict(extra="ignore")

    # Administrative credentials
    admin_username: str = "admin"
    admin_password_hash: str = ""
    admin_notification_address: str = "admin@leasekeeper.app"

    # JWT configuration
    token_signing_key: str = "your_secret_key_here"
    token_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    admin_token_expire_hours: int = 24

    # Email configuration
    mail_api_key: str = ""
    mail_username: str = ""
    email_from: str = "no-reply@leasekeeper.app"
    email_from_name: str = "LeaseKeeper"
    email_server: str = "localhost"
    email_port: int = 1025
    email_starttls: bool = False
    email_ssl_tls: bool = False

    # Database configuration
    database_url: str = f"sqlite:///{BASE_DIR / 'leasekeeper.db'}"

    # Application configuration
    debug: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = 8000


@lru_cache
def get_settings() -> Settings:
    return Settings()
