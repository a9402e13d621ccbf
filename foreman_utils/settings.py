# foreman_utils/settings.py - build client Options from environment variables
"""
Reads ``<prefix>ADDRESS``, ``<prefix>API_VERSION``, ``<prefix>USERNAME``,
``<prefix>PASSWORD``, ``<prefix>TIMEOUT`` and ``<prefix>WRAP_ROOT_KEY``.
Unset or empty variables keep the ``Options`` defaults.
"""
import os
from typing import Mapping, Optional

from foreman_client import DEFAULT_TIMEOUT, Options
from foreman_errors import ConfigurationError

TRUE_WORDS = ("1", "true", "yes", "on")
FALSE_WORDS = ("0", "false", "no", "off")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_WORDS:
        return True
    if value in FALSE_WORDS:
        return False
    raise ConfigurationError(f"{name} must be one of {TRUE_WORDS + FALSE_WORDS}, got {raw!r}")


def options_from_env(environ: Optional[Mapping[str, str]] = None, prefix: str = "FOREMAN_") -> Options:
    env = os.environ if environ is None else environ

    def get(key):
        return (env.get(prefix + key) or "").strip()

    timeout = DEFAULT_TIMEOUT
    if get("TIMEOUT"):
        try:
            timeout = float(get("TIMEOUT"))
        except ValueError as exc:
            raise ConfigurationError(f"{prefix}TIMEOUT must be a number, got {get('TIMEOUT')!r}") from exc

    wrap_root_key = False
    if get("WRAP_ROOT_KEY"):
        wrap_root_key = _parse_bool(prefix + "WRAP_ROOT_KEY", get("WRAP_ROOT_KEY"))

    return Options(
        address=get("ADDRESS"),
        api_version=get("API_VERSION"),
        username=get("USERNAME"),
        # passwords are taken verbatim
        password=env.get(prefix + "PASSWORD") or "",
        timeout=timeout,
        wrap_root_key=wrap_root_key,
    )
