"""Application-level exceptions.

DAO-specific errors (conflicts, missing aliases, data store failures) live in
`linkalias.dao.exceptions`. This module holds everything raised above the data
access layer: request validation, alias allocation and configuration errors.
"""

from linkalias.dao.exceptions import AliasConflictError


class LinkAliasError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkalias_error'


class ValidationError(LinkAliasError):
    """Raised when a target URL or a requested alias is missing or malformed."""

    error_code = 'app:validation_error'


class AliasAllocationError(LinkAliasError, AliasConflictError):
    """Raised when no free alias could be generated within the retry budget."""

    error_code = 'app:alias_allocation_error'


class ConfigurationError(LinkAliasError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
