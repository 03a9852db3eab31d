"""
Configuration loader for the hierarchy validator.

Builds a single Config from, in increasing priority: an optional .env
file, the process environment, and explicit CLI overrides. Only the CLI
calls this; everything downstream receives the Config object.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from . import envparse

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY = "seriously-not-prod/break-things-here"
DEFAULT_HOST = "github.com"
DEFAULT_TIMEOUT_SECONDS = 30

TOKEN_KEYS = ("GITHUB_TOKEN", "GH_TOKEN")


class ConfigError(Exception):
    """Required configuration is missing or malformed."""


@dataclass(frozen=True)
class Config:
    """Settings for one validation run."""
    token: str
    owner: str
    repo: str
    host: str = DEFAULT_HOST
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __repr__(self) -> str:
        # Never print the token
        return (
            f"Config(repository={self.repository!r}, host={self.host!r}, "
            f"timeout={self.timeout!r})"
        )


def parse_repository(value: str) -> tuple[str, str]:
    """Split an owner/repo coordinate.

    Raises:
        ConfigError: if the value is not exactly two non-empty parts
    """
    owner, sep, repo = value.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigError(f"Invalid repository '{value}': expected OWNER/REPO")
    return owner, repo


def parse_timeout(value) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout '{value}': expected a number of seconds") from None
    if not math.isfinite(timeout):
        raise ConfigError(f"Invalid timeout '{value}': must be finite")
    if timeout <= 0:
        raise ConfigError(f"Invalid timeout '{value}': must be positive")
    return timeout


def load_config(
    environ: Mapping[str, str],
    env_file: Optional[Path] = None,
    repository: Optional[str] = None,
    timeout: Optional[float | str] = None,
) -> Config:
    """
    Resolve the run configuration.

    Args:
        environ: Process environment (passed in, never read globally)
        env_file: Optional KEY=value file loaded beneath the environment
        repository: OWNER/REPO override from the command line
        timeout: Per-request timeout override from the command line

    Raises:
        ConfigError: if the token is missing or a value is malformed
    """
    values: dict[str, str] = {}
    if env_file is not None:
        try:
            values.update(envparse.load_env(env_file))
        except (FileNotFoundError, ValueError) as e:
            raise ConfigError(f"Cannot load {env_file}: {e}") from None
        logger.debug(f"Loaded {len(values)} settings from {env_file}")
    values.update({k: v for k, v in environ.items() if v})

    token = next((values[k] for k in TOKEN_KEYS if values.get(k)), None)
    if not token:
        raise ConfigError("GITHUB_TOKEN environment variable is required")

    if repository is None:
        repository = values.get("GITHUB_REPOSITORY") or DEFAULT_REPOSITORY
    owner, repo = parse_repository(repository)

    if timeout is None:
        timeout = values.get("HIERARCHY_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)

    return Config(
        token=token,
        owner=owner,
        repo=repo,
        host=values.get("GITHUB_HOST") or DEFAULT_HOST,
        timeout=parse_timeout(timeout),
    )
