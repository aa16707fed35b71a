"""
Credentials file location and parsing.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from .models import Credentials


logger = logging.getLogger(__name__)

APP_NAME = "osutil"
CONFIG_FILENAME = "osutil.conf"
REQUIRED_KEYS = ("username", "password")


class ConfigError(Exception):
    """Base class for configuration problems."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigNotFoundError(ConfigError):
    """The config file does not exist."""


class ConfigReadError(ConfigError):
    """The config file exists but cannot be read."""


class ConfigSyntaxError(ConfigError):
    """A line of the config file is not a ``key = value`` pair."""

    def __init__(self, message: str, path: Optional[Path] = None, lineno: int = 0) -> None:
        super().__init__(message, path)
        self.lineno = lineno


class MissingConfigKeyError(ConfigError):
    """A required key is absent or empty."""

    def __init__(self, message: str, path: Optional[Path] = None, key: str = "") -> None:
        super().__init__(message, path)
        self.key = key


def config_path(
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return the config file path following the XDG base directory rules.

    Args:
        environ: Environment mapping, defaults to ``os.environ``
        home: Home directory, defaults to ``Path.home()``

    Returns:
        ``$XDG_CONFIG_HOME/osutil/osutil.conf``, or
        ``~/.config/osutil/osutil.conf`` when the variable is unset or empty
    """
    if environ is None:
        environ = os.environ
    config_home = environ.get("XDG_CONFIG_HOME", "")
    if config_home:
        base = Path(config_home)
    else:
        base = (home if home is not None else Path.home()) / ".config"
    return base / APP_NAME / CONFIG_FILENAME


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_config(text: str, path: Optional[Path] = None) -> Dict[str, str]:
    """Parse ``key = value`` lines into a dictionary.

    Blank lines and ``#`` comments are skipped, the value is everything after
    the first ``=``, and one pair of surrounding quotes is removed.
    """
    values: Dict[str, str] = {}
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            # Never echo the line, it may hold the password.
            first_word = line.split()[0]
            hint = f" after key '{first_word}'" if first_word in REQUIRED_KEYS else ""
            raise ConfigSyntaxError(
                f"{path or 'config'}:{lineno}: expected 'key = value', missing '='{hint}",
                path=path,
                lineno=lineno,
            )
        values[key] = _unquote(value.strip())
    return values


def load_credentials(path: Optional[Path] = None) -> Credentials:
    """Load credentials from the config file.

    Args:
        path: Config file, defaults to :func:`config_path`

    Returns:
        Credentials with the configured username and password

    Raises:
        ConfigNotFoundError: the file does not exist
        ConfigReadError: the file cannot be read or decoded
        ConfigSyntaxError: a line is not a ``key = value`` pair
        MissingConfigKeyError: ``username`` or ``password`` is missing
    """
    path = Path(path) if path is not None else config_path()
    logger.debug("Reading config file %s", path)

    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise ConfigNotFoundError(
            f"config file {path} not found; create it with 'username' and 'password' entries",
            path=path,
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"unable to read config file {path}: {exc}", path=path) from exc

    values = parse_config(text, path)
    for key in REQUIRED_KEYS:
        if not values.get(key):
            raise MissingConfigKeyError(
                f"config file {path} is missing required key '{key}'",
                path=path,
                key=key,
            )

    return Credentials(username=values["username"], password=values["password"])
