"""
Configuration validation utilities.

Validates values that are fixed when a key builder is wired. Nothing here
runs on the key-building path: fragments supplied per call (type names,
unique ids, method names, provider scopes) are trusted by contract.
"""

from .constants import (
    ERROR_BOOLEAN_ENV_INVALID,
    ERROR_FRAGMENT_CONTAINS_SEPARATOR,
    ERROR_FRAGMENT_TYPE_INVALID,
    ERROR_SCOPE_EMPTY,
    FALSE_VALUES,
    SEPARATOR,
    TRUE_VALUES,
)
from .exceptions import CacheKeyConfigurationError


def validate_key_fragment(name: str, value: str) -> None:
    """Validate a configured key fragment.

    Fragments become whole fields of a key, so they must be strings and
    must not contain the field separator.

    Args:
        name: Parameter name used in the error message
        value: Fragment to validate

    Raises:
        CacheKeyConfigurationError: If fragment is invalid
    """
    _validate_string_type(name, value)
    if SEPARATOR in value:
        raise CacheKeyConfigurationError(
            ERROR_FRAGMENT_CONTAINS_SEPARATOR.format(name=name, separator=SEPARATOR, value=value),
            key=value,
        )


def validate_scope(scope: str) -> None:
    """Validate a static scope value.

    Scope cannot be empty, whitespace-only or contain the separator.

    Args:
        scope: Scope value

    Raises:
        CacheKeyConfigurationError: If scope is invalid
    """
    validate_key_fragment("scope", scope)
    if not scope.strip():
        raise CacheKeyConfigurationError(ERROR_SCOPE_EMPTY, key=scope)


def parse_boolean(variable: str, value: str) -> bool:
    """Parse a boolean environment variable value.

    Args:
        variable: Environment variable name used in the error message
        value: Raw value

    Returns:
        Parsed boolean

    Raises:
        CacheKeyConfigurationError: If value is not a recognised boolean
    """
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False

    accepted = ", ".join(sorted(TRUE_VALUES | FALSE_VALUES))
    raise CacheKeyConfigurationError(ERROR_BOOLEAN_ENV_INVALID.format(variable=variable, accepted=accepted, value=value))


def _validate_string_type(name: str, value: object) -> None:
    """Validate parameter is a string."""
    if not isinstance(value, str):
        raise CacheKeyConfigurationError(ERROR_FRAGMENT_TYPE_INVALID.format(name=name, type_name=type(value).__name__))
