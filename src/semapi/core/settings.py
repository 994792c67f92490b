"""Service settings loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import yaml
from pydantic import BaseModel, Field, ValidationError

from semapi.utils.env import get_int_env


class RedisSettings(BaseModel):
    url: Optional[str] = None  # takes precedence over host/port/db when set
    host: str = "localhost"
    port: int = 6379
    password: Optional[str] = None
    db: int = Field(default=0, ge=0)
    key_prefix: str = ""
    socket_timeout: float = Field(default=2.0, gt=0)
    connect_timeout: float = Field(default=2.0, gt=0)

    def dsn(self) -> str:
        if self.url:
            return self.url
        auth = f":{quote(self.password, safe='')}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


class ServiceSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8686
    route_prefix: str = ""
    log_level: str = "INFO"
    audit_log_path: Optional[Path] = None
    redis: RedisSettings = Field(default_factory=RedisSettings)

    @classmethod
    def from_file(cls, path: Path) -> "ServiceSettings":
        data = yaml.safe_load(path.read_text()) or {}
        try:
            settings = cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid service settings: {exc}") from exc
        if settings.audit_log_path and not settings.audit_log_path.is_absolute():
            settings.audit_log_path = (path.parent / settings.audit_log_path).resolve()
        return settings

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "ServiceSettings":
        """Read settings from ``path`` when it exists, then apply environment overrides."""
        settings = cls.from_file(path) if path and path.exists() else cls()
        return settings.with_env_overrides()

    def with_env_overrides(self) -> "ServiceSettings":
        update: dict = {}
        if os.getenv("SEMAPI_HOST"):
            update["host"] = os.environ["SEMAPI_HOST"]
        update["port"] = get_int_env("SEMAPI_PORT", default=self.port)
        if os.getenv("SEMAPI_ROUTE_PREFIX") is not None:
            update["route_prefix"] = os.environ["SEMAPI_ROUTE_PREFIX"]
        if os.getenv("SEMAPI_LOG_LEVEL"):
            update["log_level"] = os.environ["SEMAPI_LOG_LEVEL"]
        if os.getenv("SEMAPI_AUDIT_LOG"):
            update["audit_log_path"] = Path(os.environ["SEMAPI_AUDIT_LOG"])

        redis_update: dict = {
            "port": get_int_env("REDIS_PORT", default=self.redis.port),
            "db": get_int_env("REDIS_DB", default=self.redis.db),
        }
        for env_name, field in (
            ("REDIS_URL", "url"),
            ("REDIS_HOST", "host"),
            ("REDIS_PASSWORD", "password"),
            ("SEMAPI_KEY_PREFIX", "key_prefix"),
        ):
            value = os.getenv(env_name)
            if value:
                redis_update[field] = value
        update["redis"] = self.redis.model_copy(update=redis_update)
        return self.model_copy(update=update)
