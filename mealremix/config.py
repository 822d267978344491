from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).parent


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MEALREMIX_")

    env: Env = Env.local
    html_dir: Path = PACKAGE_DIR / "templates"
    db_url: str = "sqlite+aiosqlite:///mealremix.db"
    mealdb_url: str = "https://www.themealdb.com/api/json/v1/1/"
    openai_url: str = "https://api.openai.com/v1/"
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MEALREMIX_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    remix_model: str = "gpt-4.1"
    remix_temperature: float = 0.8
    remix_max_tokens: int = 400
    # Seconds between frames of the "mixing" animation.
    tick_interval: float = 0.35
    timeout: float = 60 * 2

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.env == Env.local else "INFO"
