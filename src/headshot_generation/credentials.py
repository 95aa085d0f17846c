"""API key resolution for the Gemini client.

The environment always wins; the local key file is the fallback store that
``headshots set-key`` writes to.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from dotenv import dotenv_values, load_dotenv, set_key

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_KEYS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
KEY_FILE_ENTRY = "GEMINI_API_KEY"
DEFAULT_KEY_FILE = Path.home() / ".config" / "headshots" / "credentials.env"


def load_env_files() -> None:
    """Best-effort load of .env files into the environment.

    Checks the project root, the cwd and HOME. Values already in the
    environment are never overwritten.
    """

    candidates = [
        Path(__file__).resolve().parents[2] / ".env",  # repo root
        Path.cwd() / ".env",
        Path.home() / ".env",
    ]
    for path in candidates:
        if path.exists():
            load_dotenv(path, override=False)


class CredentialProvider(Protocol):
    def resolve(self) -> Optional[str]:
        ...


class StaticCredentialProvider:
    def __init__(self, api_key: str | None) -> None:
        self.api_key = api_key

    def resolve(self) -> Optional[str]:
        return self.api_key or None


class EnvCredentialProvider:
    def __init__(self, names: tuple[str, ...] = ENV_KEYS) -> None:
        self.names = names

    def resolve(self) -> Optional[str]:
        for name in self.names:
            value = os.getenv(name)
            if value:
                return value
        return None


class KeyFileCredentialProvider:
    """Key-value file (dotenv format) holding a locally persisted API key."""

    def __init__(self, path: Path | str | None = None, entry: str = KEY_FILE_ENTRY) -> None:
        if path is None:
            path = os.getenv("HEADSHOTS_KEY_FILE") or DEFAULT_KEY_FILE
        self.path = Path(path).expanduser()
        self.entry = entry

    def resolve(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return dotenv_values(self.path).get(self.entry) or None

    def store(self, api_key: str) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(mode=0o600, exist_ok=True)
        set_key(str(self.path), self.entry, api_key, quote_mode="never")
        logger.info("Stored API key in %s", self.path)
        return self.path


class ChainCredentialProvider:
    def __init__(self, *providers: CredentialProvider) -> None:
        self.providers = providers

    def resolve(self) -> Optional[str]:
        for provider in self.providers:
            value = provider.resolve()
            if value:
                logger.debug("Resolved API key via %s", type(provider).__name__)
                return value
        return None


def default_credentials() -> ChainCredentialProvider:
    return ChainCredentialProvider(EnvCredentialProvider(), KeyFileCredentialProvider())


def resolve_api_key(provider: CredentialProvider | None = None) -> str:
    provider = provider or default_credentials()
    api_key = provider.resolve()
    if not api_key:
        raise ConfigurationError(
            "Missing Gemini API key. Set GEMINI_API_KEY (or GOOGLE_API_KEY) or store one with "
            "`headshots set-key`."
        )
    return api_key
