"""
API configuration settings.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Bookshelf API"
    api_version: str = "1.0.0"
    api_description: str = "In-memory book catalogue with token-protected writes"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    # Security Settings
    jwt_secret: Optional[str] = None  # unset means login cannot sign tokens
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 1

    # Data Settings
    seed_sample_data: bool = True
    book_detail_applies_body: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"
    log_file: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "extra": "ignore"  # Ignore extra fields from .env
    }

    @field_validator('jwt_algorithm')
    @classmethod
    def validate_algorithm(cls, v):
        """Only symmetric HMAC algorithms are supported."""
        if v.upper() not in HMAC_ALGORITHMS:
            raise ValueError(f'jwt_algorithm must be one of: {list(HMAC_ALGORITHMS)}')
        return v.upper()

    @field_validator('token_expire_hours')
    @classmethod
    def validate_expiry(cls, v):
        """Ensure token lifetime is positive."""
        if v < 1:
            raise ValueError('token_expire_hours must be at least 1')
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()


# Global config instance
config = APIConfig()
