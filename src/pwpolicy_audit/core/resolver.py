"""DefaultPolicyResolver for looking up out-of-the-box password policies."""

from __future__ import annotations

from pathlib import Path

from pwpolicy_audit.core.config_file import write_policy_file
from pwpolicy_audit.knowledge.defaults import DEFAULT_POLICIES, DefaultsTable, version_key
from pwpolicy_audit.models.policy import Component, ComponentPolicySet, PolicyCategory
from pwpolicy_audit.utils.errors import UnsupportedVersionError
from pwpolicy_audit.utils.logging import get_logger

logger = get_logger("resolver")


class DefaultPolicyResolver:
    """Resolver for the default password policies of a suite release.

    Lookups are exact: a version that is not in the table is rejected
    rather than matched to the nearest known release.

    Example:
        resolver = DefaultPolicyResolver()

        for policy_set in resolver.get_defaults("5.1.0.0"):
            print(policy_set.key, policy_set.to_fields())

        resolver.generate_config_file("5.1.0.0", "policy.json")
    """

    def __init__(self, table: DefaultsTable | None = None) -> None:
        """Initialize the resolver.

        Args:
            table: Defaults table to read. Uses the built-in table if None.
        """
        self._table = table if table is not None else DEFAULT_POLICIES

    def supported_versions(self) -> list[str]:
        """Get every supported version, oldest first."""
        return sorted(self._table, key=version_key)

    def is_supported(self, version: str) -> bool:
        return version in self._table

    def get_defaults(self, version: str) -> list[ComponentPolicySet]:
        """Get every default policy set for a release.

        Args:
            version: Suite version, e.g. "5.1.0.0"

        Returns:
            Policy sets ordered by component, then category

        Raises:
            UnsupportedVersionError: If the version has no table row
        """
        row = self._row(version)
        policy_sets = [
            policy_set
            for categories in row.values()
            for policy_set in categories.values()
        ]
        logger.debug("Resolved %d default policy sets for %s", len(policy_sets), version)
        return policy_sets

    def get_default(
        self,
        version: str,
        component: Component,
        category: PolicyCategory,
    ) -> ComponentPolicySet | None:
        """Get the default policy set for one component and category.

        Returns:
            The policy set, or None if the component or category does not
            apply to that release

        Raises:
            UnsupportedVersionError: If the version has no table row
        """
        categories = self._row(version).get(component)
        if categories is None:
            return None
        return categories.get(category)

    def components(self, version: str) -> list[Component]:
        """Get the components that exist in a release."""
        return list(self._row(version))

    def generate_config_file(
        self,
        version: str,
        path: Path | str,
        overwrite: bool = False,
    ) -> Path:
        """Write the defaults for a release as a policy configuration file.

        Args:
            version: Suite version to write
            path: Destination file
            overwrite: Replace the file if it already exists

        Returns:
            The path written

        Raises:
            UnsupportedVersionError: If the version has no table row
            PolicyFileExistsError: If the file exists and overwrite is False
            ConfigurationError: If the file cannot be written
        """
        policy_sets = self.get_defaults(version)
        return write_policy_file(path, version, policy_sets, overwrite=overwrite)

    def _row(self, version: str):
        try:
            return self._table[version]
        except KeyError:
            raise UnsupportedVersionError(version, self.supported_versions()) from None


_default_resolver: DefaultPolicyResolver | None = None


def get_default_resolver() -> DefaultPolicyResolver:
    """Get the shared resolver over the built-in table."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = DefaultPolicyResolver()
    return _default_resolver
