"""Optional ``.env`` loading for the CLI and host applications.

Purpose
-------
Let operators keep ``LOG_CONSOLE_*`` settings in a ``.env`` file next to the
project instead of exporting them by hand. Loading is opt-in (CLI flag or
:data:`DOTENV_ENV_VAR`) and never overrides variables that are already set.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_CONSOLE_USE_DOTENV"
#: Environment toggle consulted when no explicit CLI flag is given.

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED: Path | None = None
_LOCK = Lock()


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit flag wins; otherwise the environment toggle decides.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` (searching upwards from the working directory).

    Existing environment variables keep precedence. Repeated calls return the
    path loaded first without reading the file again.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, ``None`` when none was found.
    """

    global _LOADED
    with _LOCK:
        if _LOADED is not None:
            return _LOADED
        found = find_dotenv(usecwd=True)
        if not found:
            LOGGER.debug("No .env file found from %s", Path.cwd())
            return None
        path = Path(found).resolve()
        load_dotenv(path, override=False)
        LOGGER.debug("Loaded environment from %s", path)
        _LOADED = path
        return path


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED
    with _LOCK:
        _LOADED = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
