"""Platform configuration for pynibe."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pynibe._constants import DEFAULT_LOCALE, DEFAULT_POLL_INTERVAL, DEFAULT_RESOLVE_TIMEOUT
from pynibe.exceptions import NibeConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class NibeConfig:
    """Platform configuration.

    Parameters
    ----------
    client_id : str
        NIBE Uplink application identifier.
    client_secret : str
        NIBE Uplink application secret.
    redirect_uri : str
        OAuth callback URL registered for the application.
    auth_code : str
        One-time authorization code used for the first token exchange.
    system_id : str
        Uplink system whose service info is polled.
    language : str
        Locale code for labels (e.g. ``"sv"``). Falls back to English.
    interval : float
        Seconds between snapshot fetches.
    session_store : str or None
        Where the snapshot source persists its OAuth session.  Defaults to
        ``./session.<system_id>.json``.
    enable_manage : bool
        Passed through to the snapshot source.
    managed_parameters : tuple of str
        Parameter ids the snapshot source may write.  Passed through.
    resolve_timeout : float
        Upper bound in seconds for lazily resolving one category handler.
    lang_dir : Path or None
        Directory holding ``<locale>.json`` tables.  ``None`` uses the
        tables bundled with the package.
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    auth_code: str
    system_id: str
    language: str = DEFAULT_LOCALE
    interval: float = DEFAULT_POLL_INTERVAL
    session_store: str | None = None
    enable_manage: bool = True
    managed_parameters: tuple[str, ...] = ()
    resolve_timeout: float = DEFAULT_RESOLVE_TIMEOUT
    lang_dir: Path | None = None

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("client_id", "client_secret", "redirect_uri", "auth_code", "system_id")
            if not str(getattr(self, name) or "").strip()
        ]
        if missing:
            raise NibeConfigError(f"Missing required configuration: {', '.join(missing)}")
        if self.interval <= 0:
            raise NibeConfigError(f"interval must be positive, got {self.interval}")
        if self.resolve_timeout <= 0:
            raise NibeConfigError(f"resolve_timeout must be positive, got {self.resolve_timeout}")
        # Frozen dataclass: derived defaults go through object.__setattr__.
        object.__setattr__(self, "system_id", str(self.system_id).strip())
        if not self.language:
            object.__setattr__(self, "language", DEFAULT_LOCALE)
        if self.session_store is None:
            object.__setattr__(self, "session_store", f"./session.{self.system_id}.json")
        if not isinstance(self.managed_parameters, tuple):
            object.__setattr__(self, "managed_parameters", tuple(self.managed_parameters))

    @classmethod
    def from_env(cls, **overrides: Any) -> NibeConfig:
        """Create configuration from environment variables.

        Reads ``NIBE_CLIENT_ID``, ``NIBE_CLIENT_SECRET``,
        ``NIBE_REDIRECT_URI``, ``NIBE_AUTH_CODE``, ``NIBE_SYSTEM_ID`` and
        optional ``NIBE_*`` variables. Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "NIBE_CLIENT_ID": "client_id",
            "NIBE_CLIENT_SECRET": "client_secret",
            "NIBE_REDIRECT_URI": "redirect_uri",
            "NIBE_AUTH_CODE": "auth_code",
            "NIBE_SYSTEM_ID": "system_id",
            "NIBE_LANGUAGE": "language",
            "NIBE_SESSION_STORE": "session_store",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        interval_env = env.get("NIBE_INTERVAL")
        if interval_env is not None and "interval" not in overrides:
            config_kwargs["interval"] = float(interval_env)

        timeout_env = env.get("NIBE_RESOLVE_TIMEOUT")
        if timeout_env is not None and "resolve_timeout" not in overrides:
            config_kwargs["resolve_timeout"] = float(timeout_env)

        if "enable_manage" not in overrides:
            config_kwargs["enable_manage"] = _env_bool(env.get("NIBE_ENABLE_MANAGE"), True)

        lang_dir_env = env.get("NIBE_LANG_DIR")
        if lang_dir_env and "lang_dir" not in overrides:
            config_kwargs["lang_dir"] = Path(lang_dir_env)

        config_kwargs.update(overrides)
        return cls(**_fill_required(config_kwargs))

    @classmethod
    def from_mapping(cls, platform: Mapping[str, Any]) -> NibeConfig:
        """Create configuration from a host platform block.

        The host stores the platform settings under short keys
        (``identifier``, ``secret``, ``redirect``, ``code``, ``system``).
        """
        _PLATFORM_KEY_MAP = {
            "identifier": "client_id",
            "secret": "client_secret",
            "redirect": "redirect_uri",
            "code": "auth_code",
            "system": "system_id",
            "language": "language",
            "interval": "interval",
        }
        config_kwargs: dict[str, Any] = {}
        for key, field_name in _PLATFORM_KEY_MAP.items():
            if key in platform and platform[key] is not None:
                config_kwargs[field_name] = platform[key]
        if "interval" in config_kwargs:
            config_kwargs["interval"] = float(config_kwargs["interval"])
        config_kwargs["system_id"] = str(config_kwargs.get("system_id", ""))
        return cls(**_fill_required(config_kwargs))


def _fill_required(kwargs: dict[str, Any]) -> dict[str, Any]:
    # Let __post_init__ report every missing field at once instead of a TypeError.
    for name in ("client_id", "client_secret", "redirect_uri", "auth_code", "system_id"):
        kwargs.setdefault(name, "")
    return kwargs
