"""
PDF to Images API Configuration
Every value can be overridden from the environment
"""
import os
import tempfile


def env_flag(name: str, default: str = "1") -> bool:
    """Read a boolean flag from the environment"""
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration"""
    # Server
    PORT = int(os.environ.get("PORT", "3000"))
    ENVIRONMENT = os.environ.get("APP_ENV") or os.environ.get("FLASK_ENV", "development")
    APP_VERSION = os.environ.get("APP_VERSION", "1.0.0")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Uploads
    MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", "10"))
    MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
    # Whole request body, leaves room for multipart framing
    MAX_CONTENT_LENGTH = MAX_UPLOAD_BYTES + 1024 * 1024
    TEMP_DIR = os.environ.get("TEMP_DIR") or tempfile.gettempdir()

    # Rendering
    CONVERTER = os.environ.get("CONVERTER", "pymupdf").strip().lower()
    RENDER_DPI = int(os.environ.get("RENDER_DPI", "150"))
    IMAGE_FORMAT = os.environ.get("IMAGE_FORMAT", "png").strip().lower()
    JPEG_QUALITY = int(os.environ.get("JPEG_QUALITY", "85"))
    DEGRADED_FALLBACK = env_flag("DEGRADED_FALLBACK", "1")

    # CloudConvert
    CLOUDCONVERT_API_KEY = os.environ.get("CLOUDCONVERT_API_KEY", "")
    CLOUDCONVERT_API_URL = os.environ.get("CLOUDCONVERT_API_URL", "https://api.cloudconvert.com/v2")
    CLOUDCONVERT_POLL_INTERVAL = float(os.environ.get("CLOUDCONVERT_POLL_INTERVAL", "2"))
    CLOUDCONVERT_POLL_ATTEMPTS = int(os.environ.get("CLOUDCONVERT_POLL_ATTEMPTS", "30"))
    CLOUDCONVERT_TIMEOUT = int(os.environ.get("CLOUDCONVERT_TIMEOUT", "60"))


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    ENVIRONMENT = os.environ.get("APP_ENV") or os.environ.get("FLASK_ENV", "production")


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    ENVIRONMENT = "testing"
    CONVERTER = "pymupdf"
    RENDER_DPI = 36
    IMAGE_FORMAT = "png"
    DEGRADED_FALLBACK = True
    CLOUDCONVERT_API_KEY = ""
    CLOUDCONVERT_POLL_INTERVAL = 0


# Config dictionary
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}

