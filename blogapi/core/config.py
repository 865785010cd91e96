from pydantic_settings import BaseSettings
from typing import List, Literal, Optional


class Settings(BaseSettings):
    # MongoDB
    # Defaults to localhost for local development
    # Override with MONGODB_URL env var in deployed environments
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "blog"

    # Asset storage: "local" writes uploads to disk and serves them statically,
    # "remote" pushes them to the image host and stores the hosted URL
    asset_storage: Literal["local", "remote"] = "local"

    # Local asset storage
    public_base_url: str = "http://localhost:3000"  # Prefix for generated image URLs
    upload_dir: str = "uploads"
    static_path: str = "/uploads"

    # Remote asset host (Cloudinary-compatible upload API)
    asset_host_url: str = "https://api.cloudinary.com/v1_1"
    asset_host_cloud_name: Optional[str] = None
    asset_host_api_key: Optional[str] = None
    asset_host_api_secret: Optional[str] = None
    asset_host_folder: str = "blog"
    asset_host_timeout: float = 30.0  # seconds

    # CORS, comma-separated
    allowed_origins: str = "http://localhost:5173"

    # Application
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def cors_origins(self) -> List[str]:
        """Split the comma-separated origin list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
