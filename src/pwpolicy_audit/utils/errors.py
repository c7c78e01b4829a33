"""Error handling utilities for pwpolicy-audit."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pwpolicy_audit.models.common import AuditError

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+){1,3}$")


class PwPolicyAuditError(Exception):
    """Base exception for pwpolicy-audit."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_audit_error(self) -> AuditError:
        """Convert to AuditError model."""
        from pwpolicy_audit.models.common import AuditError

        return AuditError(code=self.code, message=self.message, details=self.details)


class UnsupportedVersionError(PwPolicyAuditError):
    """No default policy table row exists for the requested version."""

    def __init__(self, version: str, supported: list[str] | None = None):
        details: dict[str, Any] = {"version": version}
        if supported:
            details["supported"] = supported
        super().__init__(
            f"Unsupported version: {version}",
            code="UNSUPPORTED_VERSION",
            details=details,
        )


class PolicyFileExistsError(PwPolicyAuditError):
    """Refused to overwrite an existing policy configuration file."""

    def __init__(self, path: str):
        super().__init__(
            f"Policy configuration file already exists: {path}",
            code="FILE_EXISTS",
            details={"path": path},
        )


class SchemaMismatchError(PwPolicyAuditError):
    """Policy sets or documents do not share the same component, category or fields."""

    def __init__(self, message: str, **details: Any):
        super().__init__(message, code="SCHEMA_MISMATCH", details=details)


class VersionMismatchError(PwPolicyAuditError):
    """Baseline file does not describe the version being evaluated."""

    def __init__(self, version: str, available: list[str], path: str | None = None):
        details: dict[str, Any] = {"version": version, "available": available}
        if path:
            details["path"] = path
        source = path or "baseline"
        super().__init__(
            f"{source} has no policy block for version {version} "
            f"(found: {', '.join(available) or 'none'})",
            code="VERSION_MISMATCH",
            details=details,
        )


class ValidationError(PwPolicyAuditError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(PwPolicyAuditError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


def validate_version_string(version: str) -> None:
    """Validate a dotted release version string.

    Args:
        version: Version to validate (e.g. "5.1.0.0")

    Raises:
        ValidationError: If the version is empty or not dotted numbers
    """
    if not version:
        raise ValidationError("Version cannot be empty", field="version")

    if not _VERSION_PATTERN.match(version):
        raise ValidationError(
            f"Version must be dotted numbers, got: {version}",
            field="version",
        )
