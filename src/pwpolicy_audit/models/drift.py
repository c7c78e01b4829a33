"""Drift-related data models."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from pwpolicy_audit.models.policy import Component, PolicyCategory

DEFAULTS_SOURCE = "defaults"


class DriftEntry(BaseModel):
    """Comparison of one policy field between current and expected state."""

    model_config = {"frozen": True}

    field_name: str = Field(description="Configuration file key of the field")
    current_value: Any = Field(default=None, description="Value observed on the component")
    expected_value: Any = Field(default=None, description="Value from defaults or baseline")
    is_match: bool = Field(description="Whether the values are equivalent")


class ComponentDrift(BaseModel):
    """All field comparisons for one component and category."""

    model_config = {"frozen": True}

    component: Component = Field(description="Component compared")
    category: PolicyCategory = Field(description="Policy category compared")
    entries: list[DriftEntry] = Field(default_factory=list, description="One entry per field")

    @property
    def has_drift(self) -> bool:
        return any(not e.is_match for e in self.entries)

    @property
    def mismatches(self) -> list[DriftEntry]:
        return [e for e in self.entries if not e.is_match]


class DriftReport(BaseModel):
    """Drift across every policy set evaluated for one environment."""

    model_config = {"frozen": True}

    version: str = Field(description="Suite version evaluated")
    source: str = Field(
        default=DEFAULTS_SOURCE,
        description="'defaults' or the baseline file the expected values came from",
    )
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Report generation timestamp",
    )
    results: list[ComponentDrift] = Field(default_factory=list, description="Per policy set results")
    not_applicable: list[str] = Field(
        default_factory=list,
        description="component/category keys with no expected counterpart",
    )

    @property
    def total_fields(self) -> int:
        return sum(len(r.entries) for r in self.results)

    @property
    def drift_count(self) -> int:
        """Number of fields that do not match."""
        return sum(len(r.mismatches) for r in self.results)

    @property
    def has_drift(self) -> bool:
        return self.drift_count > 0

    def results_for(self, component: Component) -> list[ComponentDrift]:
        """Filter results by component."""
        return [r for r in self.results if r.component == component]

    def results_by_category(self, category: PolicyCategory) -> list[ComponentDrift]:
        """Filter results by category."""
        return [r for r in self.results if r.category == category]
