"""
Loading the credentials and the settings from the config files.

The config files are YAML documents with the credentials at the top level
and the settings grouped the same way as in :class:`ClientSettings`::

    username: jdoe
    api_key: 0123456789abcdef
    auth_url: https://auth.api.rackspacecloud.com/v1.0
    caching:
      enabled: true
      ttl: 30
    networking:
      request_timeout: 60

All fields are optional. Unknown groups or fields are errors, so that typos
do not go unnoticed.
"""
import dataclasses
import os
from collections.abc import Mapping
from typing import Any

import yaml

from rackctl._cogs.configs import configuration
from rackctl._cogs.structs import credentials

CREDENTIAL_FIELDS = ('username', 'api_key', 'auth_url')


class ConfigError(Exception):
    """ Raised when the config file cannot be interpreted. """


def read_config(path: str | os.PathLike[str]) -> Mapping[str, Any]:
    with open(path, encoding='utf-8') as f:
        config = yaml.safe_load(f.read()) or {}
    if not isinstance(config, Mapping):
        raise ConfigError(f"The config must be a mapping, got {type(config).__name__}: {path}")
    return config


def load_settings(
        config: Mapping[str, Any],
        settings: configuration.ClientSettings | None = None,
) -> configuration.ClientSettings:
    """
    Apply the config's settings groups on top of the default (or given) settings.
    """
    settings = settings if settings is not None else configuration.ClientSettings()
    groups = {field.name for field in dataclasses.fields(settings)}
    for name, values in config.items():
        if name in CREDENTIAL_FIELDS:
            continue
        if name not in groups:
            raise ConfigError(f"Unknown settings group: {name!r}")
        if not isinstance(values, Mapping):
            raise ConfigError(f"The settings group {name!r} must be a mapping.")
        group = getattr(settings, name)
        known = {field.name for field in dataclasses.fields(group)}
        for key, value in values.items():
            if key not in known:
                raise ConfigError(f"Unknown setting: {name}.{key}")
            setattr(group, key, value)
    return settings


def load_credentials(
        config: Mapping[str, Any],
        **overrides: str | None,
) -> credentials.ConnectionInfo | None:
    """
    Build the credentials from the config, with the explicit values overriding it.

    Returns ``None`` if the username or the API key are absent in both sources.
    """
    fields = {name: config.get(name) for name in CREDENTIAL_FIELDS}
    fields.update({name: value for name, value in overrides.items() if value is not None})
    if not fields.get('username') or not fields.get('api_key'):
        return None
    return credentials.ConnectionInfo(
        username=str(fields['username']),
        api_key=str(fields['api_key']),
        auth_url=fields.get('auth_url') or None,
    )
