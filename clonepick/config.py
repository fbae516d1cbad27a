"""Configuration loading and application directories."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml

from .errors import FirstRun, InvalidConfiguration
from .store.cache import is_valid_cache_name

logger = logging.getLogger(__name__)

APP_NAME = "clonepick"

CONFIG_TEMPLATE = """\
# clonepick provider configuration.
#
# Each entry needs a provider kind (github or bitbucket), the base url of the
# instance and an access token. Use token_env instead of token to read the
# token from an environment variable. The optional symbol is shown in front
# of every clone url of that provider.

providers:
  - provider: github
    base_url: https://git.acme-enterprise.org
    token: s3cr3t
    symbol: GH

  - provider: bitbucket
    base_url: https://bitbucket.acme-enterprise.org
    token_env: BITBUCKET_TOKEN
    symbol: BB
"""


class ProviderKind(str, Enum):
    GITHUB = "github"
    BITBUCKET = "bitbucket"


@dataclass(frozen=True)
class ProviderConfig:
    """One configured remote hosting backend."""
    kind: ProviderKind
    base_url: str
    token: str
    symbol: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class Paths:
    """Directories the application reads from and writes to."""
    config_dir: Path
    cache_dir: Path

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.yaml"

    @classmethod
    def default(cls) -> "Paths":
        """Resolve directories from the environment, XDG-style."""
        home = Path.home()
        config_dir = os.environ.get("CLONEPICK_CONFIG_DIR") or Path(
            os.environ.get("XDG_CONFIG_HOME") or home / ".config"
        ) / APP_NAME
        cache_dir = os.environ.get("CLONEPICK_CACHE_DIR") or Path(
            os.environ.get("XDG_CACHE_HOME") or home / ".cache"
        ) / APP_NAME
        return cls(config_dir=Path(config_dir), cache_dir=Path(cache_dir))


def get_or_create_config_file(config_path: Path) -> Path:
    """Return ``config_path``, writing the template first if it is missing.

    Raises :class:`FirstRun` when the template had to be written.
    """
    if config_path.exists():
        return config_path

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as e:
        raise InvalidConfiguration(f"Could not create config file {config_path}: {e}") from e
    logger.info("Wrote config template to %s", config_path)
    raise FirstRun(config_path)


def load_config(config_path: Path | str) -> list[ProviderConfig]:
    """Load and validate provider entries from a YAML file."""
    config_path = get_or_create_config_file(Path(config_path))

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise InvalidConfiguration(f"Config file {config_path} is not valid YAML: {e}") from e
    except OSError as e:
        raise InvalidConfiguration(f"Could not read config file {config_path}: {e}") from e

    return parse_config(raw, config_path)


def parse_config(raw: object, config_path: Path | str = "<config>") -> list[ProviderConfig]:
    """Validate an already parsed config document."""
    if not isinstance(raw, dict):
        raise FirstRun(config_path)

    entries = raw.get("providers")
    if entries is None or entries == []:
        raise FirstRun(config_path)
    if not isinstance(entries, list):
        raise InvalidConfiguration("'providers' must be a list")

    return [_parse_provider(entry, index) for index, entry in enumerate(entries)]


def _parse_provider(entry: object, index: int) -> ProviderConfig:
    if not isinstance(entry, dict):
        raise InvalidConfiguration(f"Provider entry #{index + 1} must be a mapping")

    kind_raw = str(entry.get("provider", "")).strip().lower()
    try:
        kind = ProviderKind(kind_raw)
    except ValueError:
        raise InvalidConfiguration(
            f"Provider entry #{index + 1} has invalid provider '{kind_raw}'. "
            "Allowed providers are 'github' or 'bitbucket'"
        ) from None

    base_url = _optional_str(entry.get("base_url"))
    if not base_url:
        raise InvalidConfiguration(f"Provider entry #{index + 1} is missing 'base_url'")

    token = _optional_str(entry.get("token"))
    token_env = _optional_str(entry.get("token_env"))
    if not token and token_env:
        token = _optional_str(os.environ.get(token_env))
        if not token:
            raise InvalidConfiguration(
                f"Provider entry #{index + 1}: environment variable {token_env} is not set"
            )
    if not token:
        raise InvalidConfiguration(f"Provider entry #{index + 1} is missing 'token'")

    name = _optional_str(entry.get("name"))
    if name is not None and not is_valid_cache_name(name):
        raise InvalidConfiguration(
            f"Provider entry #{index + 1} has invalid name '{name}'. "
            "Names may not contain '/', '\\' or start with '.'"
        )

    return ProviderConfig(
        kind=kind,
        base_url=base_url.rstrip("/"),
        token=token,
        symbol=_optional_str(entry.get("symbol")),
        name=name,
    )


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
