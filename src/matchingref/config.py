import os

from pydantic import BaseModel

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class Settings(BaseModel):
    embedded: bool = False
    base_url: str | None = None


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def get_settings() -> Settings:
    return Settings(
        embedded=_env_flag("MATCHINGREF_EMBEDDED"),
        base_url=os.getenv("MATCHINGREF_BASE_URL") or None,
    )
