# app/config/settings.py
from pydantic_settings import BaseSettings
from typing import Dict, List
from decimal import Decimal
import os


DEFAULT_PARTNERS: List[Dict[str, str]] = [
    {"partner_ref_no": "FG-00001", "partner_key": "FAKEGOOGLE", "password": "FAKEPASSWORD1234"},
    {"partner_ref_no": "FG-00002", "partner_key": "FAKEPEOPLE", "password": "FAKEPASSWORD4578"},
]


class Settings(BaseSettings):
    # App Info
    app_name: str = "Partner Transaction API"
    version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 8000))
    api_prefix: str = "/api"

    # Transaction rules
    timestamp_tolerance_minutes: int = 5
    max_discount_percentage: Decimal = Decimal("20")

    # Partners (read-only once loaded). Override with a JSON list in PARTNERS.
    partners: List[Dict[str, str]] = DEFAULT_PARTNERS

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    log_file_name: str = "transaction-api.log"
    log_backup_count: int = 7
    # AES key material for partner passwords written to the logs
    log_encryption_key: str = os.getenv("LOG_ENCRYPTION_KEY", "change-this-key-in-production")

    @property
    def environment(self) -> str:
        return "development" if self.debug else "production"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
