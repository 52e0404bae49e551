"""Credential and endpoint resolution from files, environment and arguments.

Configuration lives in INI files shared with the other API clients of the
same provider::

    [default]
    endpoint=ovh-eu

    [ovh-eu]
    application_key=my_app_key
    application_secret=my_application_secret
    consumer_key=my_consumer_key

Precedence (high to low):
    1. Explicit arguments to :func:`resolve_client_config`
    2. Environment variables ``OVH_ENDPOINT``, ``OVH_APPLICATION_KEY``,
       ``OVH_APPLICATION_SECRET``, ``OVH_CONSUMER_KEY``
    3. ``./ovh.conf``
    4. ``~/.ovh.conf``
    5. ``/etc/ovh.conf``

Credentials are looked up in the section named after the selected endpoint.
"""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from ovhapi.exceptions import ConfigError
from ovhapi.models import DEFAULT_TIMEOUT, ClientConfig

logger = logging.getLogger(__name__)

_ENV_PREFIX = "OVH_"
_DEFAULT_SECTION = "default"
_CONFIG_FILENAME = "ovh.conf"


def default_config_paths() -> list[Path]:
    """Return the configuration files to read, lowest precedence first."""
    paths = [Path("/etc") / _CONFIG_FILENAME]
    try:
        paths.append(Path.home() / f".{_CONFIG_FILENAME}")
    except RuntimeError:
        # No resolvable home directory; skip the per-user file.
        logger.debug("Home directory cannot be resolved, skipping ~/.%s", _CONFIG_FILENAME)
    paths.append(Path.cwd() / _CONFIG_FILENAME)
    return paths


def load_config_files(paths: Optional[Sequence[Path]] = None) -> configparser.ConfigParser:
    """Read every existing file in *paths*; later files override earlier ones.

    Missing files are skipped.

    Raises:
        ConfigError: If an existing file is not valid INI.
    """
    parser = configparser.ConfigParser(interpolation=None)
    for path in paths if paths is not None else default_config_paths():
        if not path.is_file():
            continue
        try:
            parser.read(path, encoding="utf-8")
        except (configparser.Error, UnicodeDecodeError) as exc:
            raise ConfigError(f"Invalid configuration file {path}: {exc}") from exc
        logger.debug("Loaded configuration from %s", path)
    return parser


def get_config_value(
    parser: configparser.ConfigParser, section: str, name: str
) -> str:
    """Return ``OVH_<NAME>`` from the environment, else ``name`` from *section*.

    Returns ``""`` when neither is set.
    """
    from_env = os.environ.get(_ENV_PREFIX + name.upper(), "")
    if from_env:
        return from_env
    return parser.get(section, name, fallback="")


def resolve_client_config(
    endpoint: Optional[str] = None,
    application_key: Optional[str] = None,
    application_secret: Optional[str] = None,
    consumer_key: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    config_paths: Optional[Sequence[Path]] = None,
) -> ClientConfig:
    """Resolve the full client configuration with the precedence chain above.

    Empty strings count as "not given", like ``None``.

    Args:
        endpoint: Endpoint name or base URL.
        application_key: Public application key.
        application_secret: Application secret.
        consumer_key: Consumer key.
        timeout: Per-call timeout in seconds.
        config_paths: Files to read instead of :func:`default_config_paths`.

    Returns:
        The resolved :class:`~ovhapi.models.ClientConfig`.

    Raises:
        ConfigError: If a configuration file cannot be parsed.
    """
    parser = load_config_files(config_paths)

    if not endpoint:
        endpoint = get_config_value(parser, _DEFAULT_SECTION, "endpoint")
    if not application_key:
        application_key = get_config_value(parser, endpoint, "application_key")
    if not application_secret:
        application_secret = get_config_value(parser, endpoint, "application_secret")
    if not consumer_key:
        consumer_key = get_config_value(parser, endpoint, "consumer_key")

    if not endpoint:
        logger.debug("No endpoint configured")

    return ClientConfig(
        endpoint=endpoint,
        application_key=application_key,
        application_secret=application_secret,
        consumer_key=consumer_key,
        timeout=timeout,
    )
