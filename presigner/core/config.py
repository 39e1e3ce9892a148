from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from presigner.signing.signer import Credentials

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = "dev"
    app_name: str = "R2 Presigner"
    api_prefix: str = "/api/v1"
    debug: bool = False
    cors_allow_origins: str = "http://localhost:5173,http://localhost:3000"
    log_level: str = "INFO"

    r2_account_id: str = ""
    r2_access_key_id: str = ""
    r2_secret_access_key: str = Field(default="", repr=False)
    r2_bucket: str = ""
    # Empty token disables bearer auth entirely.
    r2_presigner_token: str = Field(default="", repr=False)
    r2_domain: str = "r2.cloudflarestorage.com"
    r2_region: str = "auto"

    store_timeout_seconds: float = Field(default=30.0, gt=0)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.r2_presigner_token)

    @property
    def missing_credentials(self) -> list[str]:
        required = {
            "R2_ACCOUNT_ID": self.r2_account_id,
            "R2_ACCESS_KEY_ID": self.r2_access_key_id,
            "R2_SECRET_ACCESS_KEY": self.r2_secret_access_key,
            "R2_BUCKET": self.r2_bucket,
        }
        return [name for name, value in required.items() if not value]

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            account_id=self.r2_account_id,
            access_key_id=self.r2_access_key_id,
            secret_access_key=self.r2_secret_access_key,
            bucket=self.r2_bucket,
            bearer_token=self.r2_presigner_token or None,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
