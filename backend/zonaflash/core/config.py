from pydantic import BaseModel
import os
from typing import List


def _csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")  # dev, local, staging, prod
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./zonaflash.db")
    RUN_MIGRATIONS_ON_STARTUP: bool = os.getenv("RUN_MIGRATIONS_ON_STARTUP", "false").lower() == "true"

    # CORS (comma-separated origins, or "*")
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "*")

    # Hunter submissions
    # Comma-separated user ids trusted to submit official captures
    HUNTER_ALLOWED_UIDS: str = os.getenv("HUNTER_ALLOWED_UIDS", "")
    HUNT_REWARD_POINTS: int = int(os.getenv("HUNT_REWARD_POINTS", "10"))
    DUPLICATE_RADIUS_M: float = float(os.getenv("DUPLICATE_RADIUS_M", "20"))

    # Nearby search
    NEARBY_DEFAULT_RADIUS_M: float = float(os.getenv("NEARBY_DEFAULT_RADIUS_M", "5000"))
    NEARBY_MAX_RADIUS_M: float = float(os.getenv("NEARBY_MAX_RADIUS_M", "50000"))
    NEARBY_RESULT_LIMIT: int = int(os.getenv("NEARBY_RESULT_LIMIT", "50"))

    # Wallet defaults
    WALLET_DEFAULT_GOAL: float = float(os.getenv("WALLET_DEFAULT_GOAL", "500"))
    WALLET_DEFAULT_LEVEL: str = os.getenv("WALLET_DEFAULT_LEVEL", "Novato")

    # Capture photo storage (S3-compatible). Empty bucket disables uploads.
    MEDIA_BUCKET: str = os.getenv("MEDIA_BUCKET", "")
    MEDIA_REGION: str = os.getenv("MEDIA_REGION", "us-east-1")
    MEDIA_PREFIX: str = os.getenv("MEDIA_PREFIX", "zona_flash/captures")
    MEDIA_ENDPOINT_URL: str = os.getenv("MEDIA_ENDPOINT_URL", "")
    MEDIA_PUBLIC_BASE_URL: str = os.getenv("MEDIA_PUBLIC_BASE_URL", "https://storage.googleapis.com")

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL

    @property
    def hunter_allowed_uids(self) -> List[str]:
        return _csv(self.HUNTER_ALLOWED_UIDS)

    @property
    def allowed_origins(self) -> List[str]:
        return _csv(self.ALLOWED_ORIGINS) or ["*"]


settings = Settings()
