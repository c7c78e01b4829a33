"""Core domain logic for pwpolicy-audit.

This module provides the main library API for resolving default password
policies and detecting drift from them.
"""

from pwpolicy_audit.core.config_file import (
    dump_policy_document,
    parse_policy_document,
    read_policy_file,
    write_policy_file,
)
from pwpolicy_audit.core.drift import NORMALIZED_FIELDS, DriftComparator
from pwpolicy_audit.core.resolver import DefaultPolicyResolver, get_default_resolver
from pwpolicy_audit.core.sources import PolicySource, SnapshotPolicySource

__all__ = [
    "DefaultPolicyResolver",
    "get_default_resolver",
    "DriftComparator",
    "NORMALIZED_FIELDS",
    "PolicySource",
    "SnapshotPolicySource",
    "dump_policy_document",
    "parse_policy_document",
    "read_policy_file",
    "write_policy_file",
]
