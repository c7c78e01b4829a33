"""Data models for pwpolicy-audit.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from pwpolicy_audit.models.common import AuditError
from pwpolicy_audit.models.policy import (
    POLICY_SCHEMAS,
    AccountLockout,
    Component,
    ComponentPolicySet,
    EsxiPasswordComplexity,
    LinuxPasswordComplexity,
    LocalAccountLockout,
    LocalAccountPasswordExpiration,
    NsxEdgeAccountLockout,
    NsxManagerAccountLockout,
    NsxPasswordComplexity,
    PasswordComplexity,
    PasswordExpiration,
    PolicyCategory,
    PolicySettings,
    RootAccountPasswordExpiration,
    SsoPasswordComplexity,
    TimedAccountLockout,
    WsaPasswordComplexity,
    WsaPasswordExpiration,
    schema_for,
)
from pwpolicy_audit.models.drift import ComponentDrift, DriftEntry, DriftReport

__all__ = [
    # Common
    "AuditError",
    # Policy
    "Component",
    "PolicyCategory",
    "PolicySettings",
    "ComponentPolicySet",
    "POLICY_SCHEMAS",
    "schema_for",
    "PasswordExpiration",
    "LocalAccountPasswordExpiration",
    "RootAccountPasswordExpiration",
    "WsaPasswordExpiration",
    "EsxiPasswordComplexity",
    "PasswordComplexity",
    "SsoPasswordComplexity",
    "LinuxPasswordComplexity",
    "NsxPasswordComplexity",
    "WsaPasswordComplexity",
    "AccountLockout",
    "TimedAccountLockout",
    "LocalAccountLockout",
    "NsxManagerAccountLockout",
    "NsxEdgeAccountLockout",
    # Drift
    "ComponentDrift",
    "DriftEntry",
    "DriftReport",
]
