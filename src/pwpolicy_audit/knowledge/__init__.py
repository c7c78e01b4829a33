"""Platform knowledge base.

Contains the hand-maintained table of out-of-the-box password policies
for each supported suite release.
"""

from pwpolicy_audit.knowledge.defaults import (
    DEFAULT_POLICIES,
    get_supported_versions,
    version_key,
)

__all__ = [
    "DEFAULT_POLICIES",
    "get_supported_versions",
    "version_key",
]
