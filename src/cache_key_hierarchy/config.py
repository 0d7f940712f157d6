"""
Configuration management for key builders.

Resolves settings following the precedence rules:

1. Explicit argument (highest precedence)
2. Environment variable
3. Default value (lowest precedence)
"""

import os

from .constants import DEFAULT_DIAGNOSTICS_ENABLED, ENV_DIAGNOSTICS, ENV_SCOPE
from .validators import parse_boolean, validate_scope


class KeyBuilderConfig:
    """Configuration resolver for key builders."""

    ENV_SCOPE = ENV_SCOPE
    ENV_DIAGNOSTICS = ENV_DIAGNOSTICS

    DEFAULT_DIAGNOSTICS_ENABLED = DEFAULT_DIAGNOSTICS_ENABLED

    @classmethod
    def resolve_scope(cls, explicit_value: str | None = None) -> str | None:
        """Resolve static scope following precedence rules.

        Args:
            explicit_value: Explicit scope from the caller

        Returns:
            Validated scope, or None when no scope is configured

        Raises:
            CacheKeyConfigurationError: If the resolved scope is invalid
        """
        if explicit_value is not None:
            validate_scope(explicit_value)
            return explicit_value

        env_value = os.getenv(cls.ENV_SCOPE)
        if env_value:
            validate_scope(env_value)
            return env_value

        return None

    @classmethod
    def resolve_diagnostics_enabled(cls, explicit_value: bool | None = None) -> bool:
        """Resolve whether the default diagnostic listener is registered.

        Args:
            explicit_value: Explicit flag from the caller

        Returns:
            True if diagnostics are enabled

        Raises:
            CacheKeyConfigurationError: If the environment value is not a boolean
        """
        if explicit_value is not None:
            return explicit_value

        env_value = os.getenv(cls.ENV_DIAGNOSTICS)
        if env_value:
            return parse_boolean(cls.ENV_DIAGNOSTICS, env_value)

        return cls.DEFAULT_DIAGNOSTICS_ENABLED
