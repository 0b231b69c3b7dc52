# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field, field_validator
from pydantic_settings import BaseSettings
from util.constants import DEFAULT_CACHE_EXPIRE_SECONDS
from util.enums import CacheBackend, Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=60, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Wit.ai
    WIT_ACCESS_TOKEN: str = Field(..., validation_alias="WIT_ACCESS_TOKEN")
    WIT_API_URL: str = "https://api.wit.ai"
    WIT_API_VERSION: str = "20170307"
    WIT_TIMEOUT_SECONDS: float = Field(
        default=10.0, validation_alias="WIT_TIMEOUT_SECONDS"
    )

    # Response cache: "none" | "redis" | "memcached"
    CACHE_BACKEND: str = Field(default="none", validation_alias="CACHE_BACKEND")
    CACHE_EXPIRE_SECONDS: int = Field(
        default=DEFAULT_CACHE_EXPIRE_SECONDS, validation_alias="CACHE_EXPIRE_SECONDS"
    )
    CACHE_PREFIX: str = Field(default="", validation_alias="CACHE_PREFIX")
    MEMCACHED_HOST: str = Field(default="127.0.0.1", validation_alias="MEMCACHED_HOST")
    MEMCACHED_PORT: int = Field(default=11211, validation_alias="MEMCACHED_PORT")

    # Logging knobs
    LOGGER_NAME: str = "wit-recognizer"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @field_validator("CACHE_BACKEND")
    @classmethod
    def _known_cache_backend(cls, v: str) -> str:
        v = (v or "none").strip().lower()
        allowed = {"none"} | {b.value for b in CacheBackend}
        if v not in allowed:
            raise ValueError(f"must be one of {sorted(allowed)}, got {v!r}")
        return v

    @property
    def cache_enabled(self) -> bool:
        return self.CACHE_BACKEND != "none"


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
