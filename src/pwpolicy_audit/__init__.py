"""pwpolicy-audit: password policy defaults and drift detection for VMware Cloud Foundation.

This package knows the out-of-the-box password policies (expiration,
complexity and account lockout) that each VCF release ships for its
components, and compares observed policies against them:

- **Default Policy Resolver**: Look up the defaults of a release, or write
  them out as a policy configuration file
- **Drift Comparator**: Compare observed policies with the defaults or with
  a baseline policy configuration file, field by field

Usage:
    # Library API
    from pwpolicy_audit import DefaultPolicyResolver, DriftComparator, SnapshotPolicySource

    resolver = DefaultPolicyResolver()
    resolver.generate_config_file("5.1.0.0", "policy.json")

    source = SnapshotPolicySource.from_file("observed.json")
    report = DriftComparator().evaluate("5.1.0.0", source.fetch_all(), baseline="policy.json")
    print(report.drift_count)

CLI:
    pwpolicy-audit versions
    pwpolicy-audit defaults <version>
    pwpolicy-audit generate <version> --output <file>
    pwpolicy-audit validate <file> --version <version>
    pwpolicy-audit drift --current <snapshot> --version <version> [--baseline <file>]
"""

__version__ = "0.1.0"

# Core classes
from pwpolicy_audit.core.resolver import DefaultPolicyResolver
from pwpolicy_audit.core.drift import DriftComparator
from pwpolicy_audit.core.sources import PolicySource, SnapshotPolicySource

# Models (commonly used)
from pwpolicy_audit.models.policy import Component, ComponentPolicySet, PolicyCategory
from pwpolicy_audit.models.drift import ComponentDrift, DriftEntry, DriftReport

# Errors
from pwpolicy_audit.utils.errors import (
    PolicyFileExistsError,
    PwPolicyAuditError,
    SchemaMismatchError,
    UnsupportedVersionError,
    VersionMismatchError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "DefaultPolicyResolver",
    "DriftComparator",
    "PolicySource",
    "SnapshotPolicySource",
    # Models
    "Component",
    "ComponentPolicySet",
    "PolicyCategory",
    "ComponentDrift",
    "DriftEntry",
    "DriftReport",
    # Errors
    "PwPolicyAuditError",
    "UnsupportedVersionError",
    "PolicyFileExistsError",
    "SchemaMismatchError",
    "VersionMismatchError",
]
