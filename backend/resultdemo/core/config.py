"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/resultdemo/core/config.py
_current_file = Path(__file__).resolve()
BACKEND_DIR = _current_file.parent.parent.parent
PROJECT_ROOT = BACKEND_DIR.parent
ENV_FILE = PROJECT_ROOT / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = BACKEND_DIR / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "ActionResultDemo"
    app_env: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Logging level")
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API port")
    allowed_origins: str = Field(
        default="http://localhost:8000",
        description="Allowed CORS origins (comma-separated)"
    )

    # Logging
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"resultdemo.results": "DEBUG"})'
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_file_enabled: bool = Field(default=True, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/resultdemo.log",
        description="Path to log file (relative to project root)"
    )
    log_file_rotation: str = Field(
        default="midnight",
        description="Log file rotation: 'midnight' or weekly 'W0'..'W6'"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of days to keep log files"
    )
    log_sensitive_data: bool = Field(
        default=False,
        description="Enable logging of sensitive data (passwords, tokens) - NOT RECOMMENDED"
    )

    # Views and files
    templates_dir: Optional[str] = Field(
        default=None,
        description="Jinja2 templates directory (defaults to frontend/templates)"
    )
    files_dir: str = Field(
        default="files",
        description="Directory served by the download endpoint (relative to backend/)"
    )
    download_file: str = Field(default="sample.txt", description="File sent by the download endpoint")
    download_mime_type: str = Field(default="text/plain", description="MIME type of the download")
    download_name: Optional[str] = Field(
        default=None,
        description="Suggested download filename (defaults to the file name)"
    )
    external_redirect_url: str = Field(
        default="https://www.google.com",
        description="Target of the external redirect endpoint"
    )

    # Results
    validate_status_codes: bool = Field(
        default=True,
        description="Reject status codes outside 100-599 when building results"
    )

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Only json and text formats are supported"""
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def templates_path(self) -> Path:
        """Resolved templates directory"""
        if self.templates_dir:
            return Path(self.templates_dir)
        return PROJECT_ROOT / "frontend" / "templates"

    @property
    def files_path(self) -> Path:
        """Resolved download directory"""
        path = Path(self.files_dir)
        if not path.is_absolute():
            path = BACKEND_DIR / path
        return path

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
