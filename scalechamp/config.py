# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

"""Provider configuration.

The configuration is read from an optional YAML file and then overlaid with
environment variables, so a token exported in the shell always wins over one
written to disk:

    endpoint: https://api.scalechamp.com
    token: <api token>
    timeout: 30
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import pydantic
import yaml

from scalechamp.errors import ConfigurationException

LOG = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.scalechamp.com"
DEFAULT_TIMEOUT = 30
ENV_PREFIX = "SCALECHAMP_"
ENV_KEYS = ("endpoint", "token", "timeout")


class ProviderConfig(pydantic.BaseModel):
    """Settings needed to talk to the ScaleChamp API."""

    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)

    endpoint: str = DEFAULT_ENDPOINT
    token: pydantic.SecretStr
    timeout: float = pydantic.Field(default=DEFAULT_TIMEOUT, gt=0)

    @pydantic.field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return value.rstrip("/")


def _read_file(path: Path) -> dict[str, Any]:
    try:
        with path.open() as fp:
            content = yaml.safe_load(fp) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationException(f"Cannot read configuration {path}: {e}") from e
    if not isinstance(content, dict):
        raise ConfigurationException(f"Configuration {path} must be a mapping")
    return content


def _read_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    values = {}
    for key in ENV_KEYS:
        env_key = ENV_PREFIX + key.upper()
        if env_key in environ:
            LOG.debug(f"Using {env_key} from environment")
            values[key] = environ[env_key]
    return values


def load_config(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> ProviderConfig:
    """Load provider configuration from file and environment.

    :param path: optional YAML configuration file
    :param environ: environment mapping, defaults to os.environ
    :raises ConfigurationException: when the merged settings are invalid
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_file(path))
    values.update(_read_environ(os.environ if environ is None else environ))

    try:
        return ProviderConfig.model_validate(values)
    except pydantic.ValidationError as e:
        raise ConfigurationException(f"Invalid provider configuration: {e}") from e
