"""DriftComparator for comparing live password policies with expected ones."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pwpolicy_audit.core.config_file import read_policy_file
from pwpolicy_audit.core.resolver import DefaultPolicyResolver, get_default_resolver
from pwpolicy_audit.models.drift import DEFAULTS_SOURCE, ComponentDrift, DriftEntry, DriftReport
from pwpolicy_audit.models.policy import Component, ComponentPolicySet, PolicyCategory
from pwpolicy_audit.utils.errors import SchemaMismatchError
from pwpolicy_audit.utils.logging import get_logger_with_context

# SSO reports unset character-class limits as "" while baselines carry "0".
NORMALIZED_FIELDS: Mapping[tuple[Component, PolicyCategory], frozenset[str]] = MappingProxyType(
    {
        (Component.SSO, PolicyCategory.COMPLEXITY): frozenset(
            {
                "min_lowercase",
                "min_uppercase",
                "min_numeric",
                "min_special",
                "min_alphabetic",
                "max_identical_adjacent",
            }
        ),
        (Component.SSO, PolicyCategory.LOCKOUT): frozenset({"failure_interval"}),
    }
)

UNSET_MARKERS = frozenset({"", "0"})


def canonical_value(value: Any) -> str | None:
    """Reduce a policy value to the form used for equality.

    Numbers and numeric strings compare equal ("5" == 5); booleans become
    "true"/"false"; None stays None.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DriftComparator:
    """Comparator for current versus expected password policies.

    Expected values come from the default policy table or, when a baseline
    file is supplied, from that file's block for the evaluated version.

    Example:
        comparator = DriftComparator()

        entries = comparator.compare(current, expected)
        for entry in entries:
            if not entry.is_match:
                print(f"{entry.field_name}: {entry.current_value} != {entry.expected_value}")

        report = comparator.evaluate("5.1.0.0", current_sets, baseline="policy.json")
        print(report.drift_count)
    """

    def __init__(
        self,
        resolver: DefaultPolicyResolver | None = None,
        normalized_fields: Mapping[tuple[Component, PolicyCategory], frozenset[str]] | None = None,
    ) -> None:
        """Initialize the comparator.

        Args:
            resolver: Resolver for default policies. Uses the shared one if None.
            normalized_fields: Fields where "" and "0" mean unset, per
                component and category. Uses NORMALIZED_FIELDS if None.
        """
        self._resolver = resolver or get_default_resolver()
        self._normalized_fields = (
            normalized_fields if normalized_fields is not None else NORMALIZED_FIELDS
        )

    def compare(
        self, current: ComponentPolicySet, expected: ComponentPolicySet
    ) -> list[DriftEntry]:
        """Compare two policy sets field by field.

        Args:
            current: Policy observed on the component
            expected: Policy it should have

        Returns:
            One DriftEntry per field, in declaration order

        Raises:
            SchemaMismatchError: If component, category or fields differ
        """
        self._check_schema(current, expected)

        normalized = self._normalized_fields.get((current.component, current.category), frozenset())
        schema = type(current.settings)
        entries: list[DriftEntry] = []

        for name in schema.field_names():
            current_value = getattr(current.settings, name)
            expected_value = getattr(expected.settings, name)
            is_match = self._normalize(current_value, name in normalized) == self._normalize(
                expected_value, name in normalized
            )
            entries.append(
                DriftEntry(
                    field_name=schema.alias_for(name),
                    current_value=current_value,
                    expected_value=expected_value,
                    is_match=is_match,
                )
            )

        return entries

    def compare_sets(
        self, current: ComponentPolicySet, expected: ComponentPolicySet
    ) -> ComponentDrift:
        """Compare two policy sets and wrap the entries with their key."""
        return ComponentDrift(
            component=current.component,
            category=current.category,
            entries=self.compare(current, expected),
        )

    def evaluate(
        self,
        version: str,
        current_sets: Iterable[ComponentPolicySet],
        baseline: Path | str | None = None,
    ) -> DriftReport:
        """Evaluate drift for every current policy set of an environment.

        Args:
            version: Suite version of the environment
            current_sets: Policy sets observed on the environment
            baseline: Optional baseline file. Defaults are used if None.

        Returns:
            DriftReport with one result per current set that has an
            expected counterpart

        Raises:
            UnsupportedVersionError: If no baseline is given and the version
                has no defaults
            VersionMismatchError: If the baseline has no block for the version
            SchemaMismatchError: If a current set does not match its expected one
        """
        log = get_logger_with_context("drift", version=version)

        if baseline is not None:
            expected_sets = read_policy_file(baseline, version)
            source = str(baseline)
        else:
            expected_sets = self._resolver.get_defaults(version)
            source = DEFAULTS_SOURCE

        expected_by_key = {(s.component, s.category): s for s in expected_sets}

        results: list[ComponentDrift] = []
        not_applicable: list[str] = []
        for current in current_sets:
            expected = expected_by_key.get((current.component, current.category))
            if expected is None:
                log.bind(component=current.component).debug("No expected policy for %s", current.key)
                not_applicable.append(current.key)
                continue
            result = self.compare_sets(current, expected)
            if result.has_drift:
                log.bind(component=current.component, category=current.category).debug(
                    "Drifted fields: %s", ", ".join(e.field_name for e in result.mismatches)
                )
            results.append(result)

        report = DriftReport(
            version=version,
            source=source,
            generated_at=datetime.now(timezone.utc),
            results=results,
            not_applicable=not_applicable,
        )
        log.info(
            "Evaluated %d policy sets against %s: %d drifted fields",
            len(results),
            source,
            report.drift_count,
        )
        return report

    @staticmethod
    def _normalize(value: Any, treat_zero_as_unset: bool) -> str | None:
        canonical = canonical_value(value)
        if treat_zero_as_unset and canonical in UNSET_MARKERS:
            return None
        return canonical

    @staticmethod
    def _check_schema(current: ComponentPolicySet, expected: ComponentPolicySet) -> None:
        if current.category != expected.category:
            raise SchemaMismatchError(
                f"Cannot compare {current.category.value} with {expected.category.value}",
                current=current.key,
                expected=expected.key,
            )
        if current.component != expected.component:
            raise SchemaMismatchError(
                f"Cannot compare {current.component.value} with {expected.component.value}",
                current=current.key,
                expected=expected.key,
            )
        current_fields = type(current.settings).field_names()
        expected_fields = type(expected.settings).field_names()
        if type(current.settings) is not type(expected.settings) or current_fields != expected_fields:
            raise SchemaMismatchError(
                f"Field sets differ for {current.key}",
                current_fields=current_fields,
                expected_fields=expected_fields,
            )
