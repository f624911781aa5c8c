"""Shared configuration for the platform."""
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB Configuration
    mongo_url: str = "mongodb://localhost:27017"
    mongo_db_name: str = "almonhna"

    # Redis Configuration (sessions, password reset tokens)
    redis_url: str = "redis://localhost:6379"
    session_ttl: int = 60 * 60 * 24 * 7  # seconds
    password_reset_ttl: int = 60 * 60  # seconds

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Public site URL used in outgoing emails
    site_url: str = "https://almonhna.lovable.app"

    # Email Configuration
    email_provider: str = "sendgrid"  # "sendgrid" or "smtp"
    sendgrid_api_key: str = ""
    sendgrid_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    mail_from_addr: str = "noreply@almonhna.com"
    mail_from_name: str = "المنحنى"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    email_timeout: int = 15

    # Image storage
    upload_dir: str = "media"
    media_url_prefix: str = "/media"
    max_upload_mb: int = 5

    # Default admin created by the one-time setup endpoint
    default_admin_email: str = "admin@almonhna.sa"
    default_admin_password: str = "Admin@123"
    default_admin_name: str = "admin"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
