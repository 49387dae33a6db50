# tmpl_funcs/config.py
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    LOG_LEVEL: str = "WARNING"

    # Seeds the process-wide random source; unset means OS entropy
    RANDOM_SEED: Optional[int] = Field(default=None, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="TMPL_FUNCS_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
