"""
Configuration objects and helpers for the PayPal agreement client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment

__all__ = [
    "ConfigError",
    "ConfigParameters",
    "LIVE_BASE_URL",
    "PayPalConfig",
    "SANDBOX_BASE_URL",
    "load_paypal_config",
]

SANDBOX_BASE_URL = "https://api-m.sandbox.paypal.com"
LIVE_BASE_URL = "https://api-m.paypal.com"

DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "client_id": "PAYPAL_CLIENT_ID",
    "client_secret": "PAYPAL_CLIENT_SECRET",
    "sandbox": "PAYPAL_SANDBOX",
    "base_url": "PAYPAL_BASE_URL",
    "timeout_seconds": "PAYPAL_TIMEOUT_SECONDS",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class ConfigParameters:
    """
    Explicit parameter bundle for constructing :class:`PayPalConfig`.

    Every field left as ``None`` falls back to the environment.
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    sandbox: Optional[bool | str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ConfigParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:  # pragma: no cover - callers pass fixed keys
            raise TypeError(f"Unknown PayPal parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _require(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None or not raw.strip():
        raise ConfigError(f"{key} must be provided")
    return raw.strip()


def _parse_bool(raw: str, field_name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{field_name} must be a boolean flag, got '{raw}'")


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"PAYPAL_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("PAYPAL_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class PayPalConfig:
    client_id: str
    client_secret: str
    sandbox: bool = True
    base_url: str = SANDBOX_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def for_environment(
        cls,
        client_id: str,
        client_secret: str,
        sandbox: bool = True,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "PayPalConfig":
        """
        Build a configuration pointing at the sandbox or the live API.
        """
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            sandbox=sandbox,
            base_url=SANDBOX_BASE_URL if sandbox else LIVE_BASE_URL,
            timeout_seconds=timeout_seconds,
        )

    def __repr__(self) -> str:
        return (
            f"PayPalConfig(client_id={self.client_id!r}, client_secret='***', "
            f"sandbox={self.sandbox!r}, base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "PayPalConfig":
        client_id = _require(values, "PAYPAL_CLIENT_ID")
        client_secret = _require(values, "PAYPAL_CLIENT_SECRET")
        sandbox = _parse_bool(values.get("PAYPAL_SANDBOX", "true"), "PAYPAL_SANDBOX")

        default_url = SANDBOX_BASE_URL if sandbox else LIVE_BASE_URL
        base_url = (values.get("PAYPAL_BASE_URL") or default_url).strip().rstrip("/")
        if not base_url.startswith(("http://", "https://")):
            raise ConfigError("PAYPAL_BASE_URL must be an http(s) URL")

        timeout_seconds = _parse_timeout(
            values.get("PAYPAL_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        )

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            sandbox=sandbox,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ConfigParameters] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        sandbox: Optional[bool | str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "PayPalConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "sandbox": sandbox,
                "base_url": base_url,
                "timeout_seconds": timeout_seconds,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_paypal_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ConfigParameters] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    sandbox: Optional[bool | str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> PayPalConfig:
    """
    Convenience wrapper that mirrors :meth:`PayPalConfig.from_env`.

    Credentials can come from environment variables, a ``.env`` file, direct
    keyword arguments, or any combination of the three.
    """
    return PayPalConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        client_id=client_id,
        client_secret=client_secret,
        sandbox=sandbox,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
    )
