"""
Provider configuration for the Vertex AI RAG toolkit.

The configuration is resolved once, at startup, and handed to every
reconciler. Precedence for each value is:

    explicit argument > YAML credentials file > environment > absent

Nothing in the reconciliation core reads the environment directly.
"""

import os
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from ..exceptions import ConfigurationError
from .settings import (
    CREDENTIALS_SECTION,
    ENV_ACCESS_TOKEN,
    ENV_PROJECT,
    ENV_REGION,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
    """Project, region and access token shared by every call."""
    project: Optional[str] = None
    region: Optional[str] = None
    access_token: Optional[str] = None

    def validate(self) -> None:
        """Raise ConfigurationError if any value is missing."""
        missing = [key for key in ('project', 'region', 'access_token') if not getattr(self, key)]
        if missing:
            raise ConfigurationError(
                f"Missing provider configuration: {', '.join(missing)}. "
                f"Set them explicitly, in the '{CREDENTIALS_SECTION}' section of the credentials file, "
                f"or through {ENV_PROJECT}/{ENV_REGION}/{ENV_ACCESS_TOKEN}."
            )

    def __repr__(self) -> str:
        # Never expose the token
        token = '***' if self.access_token else None
        return f"ProviderConfig(project={self.project!r}, region={self.region!r}, access_token={token!r})"


def _load_credentials_file(credentials_file_path: str) -> Dict[str, Any]:
    """Load the provider section from a YAML credentials file"""
    if not os.path.exists(credentials_file_path):
        raise ConfigurationError(f"Credentials file not found: {credentials_file_path}")

    try:
        with open(credentials_file_path, 'r') as f:
            credentials = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in credentials file: {e}")

    if not credentials:
        raise ConfigurationError("Credentials file is empty or invalid")
    if not isinstance(credentials, dict):
        raise ConfigurationError("Credentials file must contain a mapping")

    section = credentials.get(CREDENTIALS_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{CREDENTIALS_SECTION}' section must be a mapping")
    return section


def load_provider_config(project: Optional[str] = None,
                         region: Optional[str] = None,
                         access_token: Optional[str] = None,
                         credentials_file_path: Optional[str] = None,
                         environ: Optional[Mapping[str, str]] = None) -> ProviderConfig:
    """
    Resolve the provider configuration

    Args:
        project: Explicit Google Cloud project ID
        region: Explicit Google Cloud region
        access_token: Explicit OAuth2 access token
        credentials_file_path: Optional path to a YAML credentials file
        environ: Environment mapping, defaults to os.environ

    Returns:
        ProviderConfig with each value taken from the highest-precedence source
    """
    if environ is None:
        environ = os.environ

    file_values: Dict[str, Any] = {}
    if credentials_file_path:
        file_values = _load_credentials_file(credentials_file_path)

    def pick(explicit: Optional[str], key: str, env_key: str) -> Optional[str]:
        if explicit:
            return explicit
        if file_values.get(key):
            return str(file_values[key])
        return environ.get(env_key) or None

    config = ProviderConfig(
        project=pick(project, 'project', ENV_PROJECT),
        region=pick(region, 'region', ENV_REGION),
        access_token=pick(access_token, 'access_token', ENV_ACCESS_TOKEN),
    )
    logger.debug(f"Resolved provider configuration: {config!r}")
    return config
