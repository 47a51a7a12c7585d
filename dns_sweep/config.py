from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_RESOLV_CONF = "/etc/resolv.conf"
DEFAULT_QUERY_TIMEOUT = 2.0
DEFAULT_REVERSE_TIMEOUT = 5.0


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def resolv_conf_path() -> str:
    return os.getenv("DNS_SWEEP_RESOLV_CONF", "").strip() or DEFAULT_RESOLV_CONF


def query_timeout() -> float:
    return _float_env("DNS_SWEEP_QUERY_TIMEOUT", DEFAULT_QUERY_TIMEOUT)


def reverse_timeout() -> float:
    return _float_env("DNS_SWEEP_REVERSE_TIMEOUT", DEFAULT_REVERSE_TIMEOUT)


def log_level() -> int:
    raw = os.getenv("DNS_SWEEP_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING


@dataclass(frozen=True)
class LookupConfig:
    domain: str = ""
    server: str = ""
    ip: str | None = None
    resolv_conf: str = DEFAULT_RESOLV_CONF
    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    reverse_timeout: float = DEFAULT_REVERSE_TIMEOUT

    @classmethod
    def from_args(
        cls, domain: str | None = None, server: str | None = None, ip: str | None = None
    ) -> "LookupConfig":
        """Build a run configuration from parsed CLI arguments and the environment."""
        return cls(
            domain=(domain or "").strip(),
            server=(server or "").strip(),
            ip=ip.strip() if ip else None,
            resolv_conf=resolv_conf_path(),
            query_timeout=query_timeout(),
            reverse_timeout=reverse_timeout(),
        )
