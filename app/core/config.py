"""
Application configuration settings.
Loads from environment variables with type checking.
"""

from pydantic import AnyUrl, PostgresDsn, validator
from pydantic_settings import BaseSettings
from typing import Optional, List
import base64

class Settings(BaseSettings):
    # Application Metadata
    PROJECT_TITLE: str = "AtlasTHOUGHT API"
    PROJECT_DESCRIPTION: str = "Anonymous questions, answers and content sharing"
    PROJECT_VERSION: str = "1.0.0"
    OPENAPI_URL: str = "/openapi.json"
    DOCS_URL: str = "/docs"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"  # or 'testing', 'production'

    # Hosted database
    DATABASE_URL: PostgresDsn
    DATABASE_ECHO: bool = False
    FRONTEND_URL: AnyUrl = "http://localhost:8080"
    REPOSITORY_URL: AnyUrl = "https://github.com/rehan"

    # Hosted auth (sessions are issued by the provider, we only verify them)
    AUTH_JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    AUTH_ROUTE: str = "/auth"
    AUTH_SIGN_IN_URL: Optional[str] = None

    # Google Cloud Storage Settings
    GCS_PROJECT_ID: Optional[str] = None
    GCS_CREDENTIALS_JSON_B64: Optional[str] = None
    GCS_BASE_URL: str = "https://storage.googleapis.com"
    POST_IMAGES_BUCKET: str = "post-images"
    AVATARS_BUCKET: str = "avatars"
    AVATAR_PATH: str = "{user_id}/avatar.{ext}"
    MAX_POST_IMAGE_SIZE: int = 5 * 1024 * 1024  # 5MB
    MAX_AVATAR_SIZE: int = 2 * 1024 * 1024  # 2MB

    # Email Service
    RESEND_API_KEY: str = ""
    EMAILS_FROM_EMAIL: str = "noreply@atlasthought.app"
    EMAILS_FROM_NAME: str = "AtlasTHOUGHT"
    REPORTS_EMAIL: str = "reports@atlasthought.app"
    CONTACT_EMAIL: str = "contact@atlasthought.app"

    HOMEPAGE_POST_LIMIT: int = 20

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @validator("MAX_POST_IMAGE_SIZE", "MAX_AVATAR_SIZE")
    def validate_max_image_size(cls, v):
        if v > 10 * 1024 * 1024:  # 10MB max
            raise ValueError("Image size ceilings cannot exceed 10MB")
        return v

    @validator("MAX_AVATAR_SIZE")
    def validate_avatar_below_post_image(cls, v, values):
        post_limit = values.get("MAX_POST_IMAGE_SIZE")
        if post_limit is not None and v > post_limit:
            raise ValueError("MAX_AVATAR_SIZE cannot exceed MAX_POST_IMAGE_SIZE")
        return v

    def public_url(self, bucket: str, blob_path: str) -> str:
        return f"{self.GCS_BASE_URL}/{bucket}/{blob_path}"

    @property
    def GCS_CREDENTIALS_JSON(self) -> Optional[str]:
        """Decode base64 encoded credentials if available"""
        if self.GCS_CREDENTIALS_JSON_B64:
            try:
                return base64.b64decode(self.GCS_CREDENTIALS_JSON_B64).decode('utf-8')
            except Exception as e:
                raise ValueError(f"Failed to decode GCS credentials: {str(e)}")
        return None

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


settings = Settings()
