"""Sources of the current (live) password policy state."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol, runtime_checkable

from pwpolicy_audit.core.config_file import load_policy_document, parse_version_block
from pwpolicy_audit.models.policy import Component, ComponentPolicySet, PolicyCategory
from pwpolicy_audit.utils.logging import get_logger

logger = get_logger("sources")


@runtime_checkable
class PolicySource(Protocol):
    """Protocol for providers of current password policy state.

    A source hides how policies are retrieved (REST, SOAP, SSH, guest
    operations) and hands back ComponentPolicySet instances.

    To implement a custom source:
    1. Create a class that implements this protocol
    2. Pass its fetch_all() output to DriftComparator.evaluate

    Example:
        class SddcManagerSource:
            @property
            def name(self) -> str:
                return "sddc-manager"

            def fetch(self, component, category):
                fields = my_client.get_policy(component.value, category.value)
                return ComponentPolicySet.from_fields(component, category, fields)

            def fetch_all(self):
                ...
    """

    @property
    def name(self) -> str:
        """Name of this source."""
        ...

    def fetch(self, component: Component, category: PolicyCategory) -> ComponentPolicySet | None:
        """Fetch the current policy for one component and category.

        Returns:
            The policy set, or None if the source has nothing for it
        """
        ...

    def fetch_all(self) -> Iterator[ComponentPolicySet]:
        """Yield every policy set the source can provide."""
        ...


class SnapshotPolicySource:
    """Policy source backed by a JSON snapshot of observed policies.

    The snapshot has the shape of a single version block of a policy
    configuration file: component, then category, then fields.

    Example:
        source = SnapshotPolicySource.from_file("observed.json")
        current = source.fetch(Component.SSO, PolicyCategory.LOCKOUT)
    """

    def __init__(self, policy_sets: list[ComponentPolicySet], name: str = "snapshot") -> None:
        self._name = name
        self._sets = {(s.component, s.category): s for s in policy_sets}

    @classmethod
    def from_file(cls, path: Path | str) -> "SnapshotPolicySource":
        """Load a snapshot file.

        Raises:
            ConfigurationError: If the file is unreadable or not a JSON object
            SchemaMismatchError: If the snapshot does not follow the policy schemas
        """
        data = load_policy_document(path)
        policy_sets = parse_version_block(data, source=str(path))
        logger.debug("Loaded %d current policy sets from %s", len(policy_sets), path)
        return cls(policy_sets, name=str(path))

    @property
    def name(self) -> str:
        return self._name

    def fetch(self, component: Component, category: PolicyCategory) -> ComponentPolicySet | None:
        return self._sets.get((component, category))

    def fetch_all(self) -> Iterator[ComponentPolicySet]:
        yield from self._sets.values()

    def __len__(self) -> int:
        return len(self._sets)
