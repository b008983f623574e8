from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class ClientSettings(BaseSettings):
    """Settings for the mentor client, read from MENTOR_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="MENTOR_", extra="ignore")

    functions_url: str = "http://localhost:8000/functions/v1"
    api_key: Optional[str] = None
    # Seconds allowed between two reads of a chat stream; None disables the bound.
    idle_timeout: Optional[float] = 60.0
    request_timeout: float = 30.0


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
