"""Settings and account configuration for zoneshift."""

import logging
from pathlib import Path

import aiofiles
import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from zoneshift.core.digitalocean import DEFAULT_API_URL
from zoneshift.core.exceptions import ConfigurationError
from zoneshift.core.models import Account

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Runtime settings, read from ZONESHIFT_* environment variables or .env."""

    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0
    accounts_file: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "zoneshift" / "accounts.yml"
    )
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="ZONESHIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AccountEntry(BaseModel):
    """One account in the accounts file."""

    token: str


class AccountsFile(BaseModel):
    """Layout of accounts.yml."""

    accounts: dict[str, AccountEntry] = Field(default_factory=dict)


def get_settings() -> Settings:
    return Settings()


async def load_accounts(path: Path) -> dict[str, Account]:
    """
    Load accounts keyed by name from a YAML file.

    Example::

        accounts:
          personal:
            token: dop_v1_...

    A missing file means no accounts are configured.
    """
    if not path.exists():
        logger.info("Accounts file %s not found", path)
        return {}

    async with aiofiles.open(path, "r") as f:
        content = await f.read()

    try:
        parsed = AccountsFile.model_validate(yaml.safe_load(content) or {})
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigurationError(f"Invalid accounts file {path}: {e}") from e

    return {
        name: Account(name=name, token=entry.token)
        for name, entry in parsed.accounts.items()
    }
