"""
Constants for the cache key hierarchy.

Defines the key grammar tokens, sentinels and message templates used
throughout the library.
"""

# Key grammar
SEPARATOR = "|"  # Field separator between hierarchy levels
PARAMETER_SEPARATOR = "$"  # Prefixed to every encoded parameter value

# Sentinel for None parameter values
NULL_PARAMETER_VALUE = "null"

# Type name used for parameters without annotation
UNANNOTATED_PARAMETER_TYPE = "Any"

# Environment variable names
ENV_SCOPE = "CACHE_KEY_SCOPE"
ENV_DIAGNOSTICS = "CACHE_KEY_DIAGNOSTICS"

# Default values
DEFAULT_DIAGNOSTICS_ENABLED = True
DEFAULT_METER_NAME = "cache_key_hierarchy"

# Accepted boolean spellings for environment variables
TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})

# Message templates
SUSPICIOUS_PARAMETER_MESSAGE = (
    "Cache key of type {type_name} equals its own type name. "
    "Possible bug in your ParameterEncoder implementation."
)
ERROR_SCOPE_EMPTY = "scope cannot be empty or whitespace-only"
ERROR_FRAGMENT_CONTAINS_SEPARATOR = "{name} cannot contain the key separator '{separator}', got {value!r}"
ERROR_FRAGMENT_TYPE_INVALID = "{name} must be str, got {type_name}"
ERROR_BOOLEAN_ENV_INVALID = "{variable} must be one of {accepted}, got {value!r}"
ERROR_NOT_AN_ENCODER = "parameter_encoder must implement encode() or be callable, got {type_name}"
ERROR_NOT_A_SCOPE_PROVIDER = "scope_provider must implement scope() or be callable, got {type_name}"
ERROR_NOT_A_LISTENER = "listener must implement notify() or be callable, got {type_name}"
