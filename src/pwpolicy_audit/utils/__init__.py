"""Utility functions for pwpolicy-audit."""

from pwpolicy_audit.utils.logging import configure_logging, get_logger, get_logger_with_context
from pwpolicy_audit.utils.errors import (
    PwPolicyAuditError,
    UnsupportedVersionError,
    PolicyFileExistsError,
    SchemaMismatchError,
    VersionMismatchError,
    ValidationError,
    ConfigurationError,
    validate_version_string,
)
from pwpolicy_audit.utils.config import (
    PwPolicyAuditConfig,
    DefaultsConfig,
    OutputConfig,
    DriftConfig,
    load_config,
    save_config,
    get_config,
    set_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "PwPolicyAuditError",
    "UnsupportedVersionError",
    "PolicyFileExistsError",
    "SchemaMismatchError",
    "VersionMismatchError",
    "ValidationError",
    "ConfigurationError",
    "validate_version_string",
    # Config
    "PwPolicyAuditConfig",
    "DefaultsConfig",
    "OutputConfig",
    "DriftConfig",
    "load_config",
    "save_config",
    "get_config",
    "set_config",
]
