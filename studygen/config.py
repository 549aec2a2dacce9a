from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='STUDYGEN_', env_file='.env', extra='ignore')

    host: str = '0.0.0.0'
    port: int = 8000
    environment: str = 'development'
    log_level: str = 'INFO'
    cors_origin: str = '*'

    # caller-facing bounds; 0 is allowed so one output kind can be skipped
    flashcard_max_count: int = 20
    mcq_max_count: int = 15

    # unset means a fresh unseeded generator per request
    default_seed: Optional[int] = None

    @property
    def origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origin.split(',') if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
