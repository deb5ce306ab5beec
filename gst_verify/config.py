"""
Configuration settings for the GST verification service
"""
from pydantic_settings import BaseSettings
from typing import List, Optional
import json
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings"""

    # Application Configuration
    ENVIRONMENT: str = "development"
    API_VERSION: str = "v1"
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG: bool = False

    # CORS Configuration
    ENABLE_CORS: bool = True
    ALLOWED_ORIGINS: str = '["http://localhost:3000"]'

    # GST Provider Configuration (AppyFlow verifyGST)
    GST_VERIFICATION_ENABLED: bool = True
    GST_PROVIDER_URL: str = "https://appyflow.in/api/verifyGST"
    GST_APPYFLOW_KEY: Optional[str] = None
    GST_APPYFLOW_KEY_SECRET: Optional[str] = None
    # None disables the total request timeout
    GST_PROVIDER_TIMEOUT_SECONDS: Optional[float] = 10.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env

    @property
    def gst_provider_key(self) -> Optional[str]:
        """Provider secret; some accounts are issued it as KEY_SECRET"""
        return self.GST_APPYFLOW_KEY or self.GST_APPYFLOW_KEY_SECRET or None

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS from JSON string to list, empty when malformed"""
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
        except (TypeError, ValueError):
            origins = None
        if not isinstance(origins, list):
            logger.warning("ALLOWED_ORIGINS is not a JSON list, no cross-origin requests will be allowed")
            return []
        return [str(origin) for origin in origins]


# Global settings instance
settings = Settings()


def validate_configuration(config: Optional[Settings] = None) -> bool:
    """Validate configuration settings.

    A missing provider key is not fatal: verification requests report
    the service as not configured instead.
    """
    config = config or settings

    if not config.GST_PROVIDER_URL.startswith(("http://", "https://")):
        raise ValueError("GST_PROVIDER_URL must be a valid URL")

    timeout = config.GST_PROVIDER_TIMEOUT_SECONDS
    if timeout is not None and timeout <= 0:
        raise ValueError("GST_PROVIDER_TIMEOUT_SECONDS must be positive")

    if not config.gst_provider_key:
        logger.warning(
            "GST_APPYFLOW_KEY is not set; GST verification will report the service as not configured"
        )

    return True
