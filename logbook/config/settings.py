# logbook/config/settings.py
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LOGBOOK_",
        case_sensitive=False,
        extra="ignore",
    )

    # 없으면 저장소를 쓸 수 없음 (StoreUnavailable)
    database_url: Optional[str] = None

    firebase_credentials_path: str = "firebase-key.json"
    firebase_storage_bucket: Optional[str] = None

    timezone: str = "Asia/Tokyo"

    memo_max_length: int = 140
    image_max_bytes: int = 10 * 1024 * 1024

    # True: 개봉할 때마다 openedAt 갱신 / False: 첫 개봉 이후에는 아무 것도 안 함
    letter_reopen_restamps: bool = False

    cors_origins: List[str] = ["*"]

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


settings = Settings()
