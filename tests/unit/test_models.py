"""Unit tests for the policy and drift models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from pwpolicy_audit.models.common import AuditError
from pwpolicy_audit.models.drift import ComponentDrift, DriftEntry, DriftReport
from pwpolicy_audit.models.policy import (
    POLICY_SCHEMAS,
    Component,
    ComponentPolicySet,
    LocalAccountLockout,
    LocalAccountPasswordExpiration,
    NsxManagerAccountLockout,
    PasswordExpiration,
    PolicyCategory,
    SsoPasswordComplexity,
    TimedAccountLockout,
    schema_for,
)
from pwpolicy_audit.utils.errors import SchemaMismatchError


class TestPolicySettings:
    """Tests for the category records."""

    def test_counts_are_not_coerced(self):
        with pytest.raises(PydanticValidationError):
            PasswordExpiration(max_days=90.0)
        assert PasswordExpiration(max_days="90").max_days == "90"

    def test_records_are_frozen(self):
        settings = PasswordExpiration(max_days=90)
        with pytest.raises(PydanticValidationError):
            settings.max_days = 30  # type: ignore[misc]

    def test_unknown_field_rejected(self):
        with pytest.raises(PydanticValidationError):
            PasswordExpiration(max_days=90, min_days=1)

    def test_missing_field_rejected(self):
        with pytest.raises(PydanticValidationError):
            LocalAccountPasswordExpiration(max_days=90)

    def test_accepts_file_keys_and_field_names(self):
        by_alias = PasswordExpiration.model_validate({"maxDays": 90})
        by_name = PasswordExpiration(max_days=90)
        assert by_alias == by_name

    def test_category_tags(self):
        assert PasswordExpiration.category == PolicyCategory.EXPIRATION
        assert SsoPasswordComplexity.category == PolicyCategory.COMPLEXITY
        assert NsxManagerAccountLockout.category == PolicyCategory.LOCKOUT

    def test_every_schema_matches_its_category(self):
        for (component, category), schema in POLICY_SCHEMAS.items():
            assert schema.category == category

    def test_nsx_manager_lockout_splits_channels(self):
        fields = NsxManagerAccountLockout.field_names()
        assert any(f.startswith("api_") for f in fields)
        assert any(f.startswith("cli_") for f in fields)

    def test_alias_for(self):
        assert SsoPasswordComplexity.alias_for("max_identical_adjacent") == "maxIdenticalAdjacent"
        assert SsoPasswordComplexity.alias_for("history") == "history"


class TestComponentPolicySet:
    """Tests for ComponentPolicySet."""

    def test_category_comes_from_settings(self):
        policy_set = ComponentPolicySet(component=Component.ESXI, settings=PasswordExpiration(max_days=1))
        assert policy_set.category == PolicyCategory.EXPIRATION
        assert policy_set.key == "esxi/PasswordExpiration"

    def test_wrong_record_for_component(self):
        """Test a record with the right category but wrong shape is rejected."""
        with pytest.raises(SchemaMismatchError):
            ComponentPolicySet(
                component=Component.VCENTER,
                settings=PasswordExpiration(max_days=90),
            )

    def test_category_not_managed(self):
        with pytest.raises(SchemaMismatchError):
            schema_for(Component.VCENTER, PolicyCategory.COMPLEXITY)

    def test_wsa_local_users_use_pam_records(self):
        """Test WSA local users take appliance records, not directory ones."""
        assert schema_for(Component.WSA_LOCAL, PolicyCategory.LOCKOUT) is LocalAccountLockout
        assert schema_for(Component.WSA_DIRECTORY, PolicyCategory.LOCKOUT) is TimedAccountLockout
        with pytest.raises(SchemaMismatchError):
            schema_for(Component.WSA_LOCAL, PolicyCategory.EXPIRATION)
        with pytest.raises(SchemaMismatchError):
            ComponentPolicySet(
                component=Component.WSA_LOCAL,
                settings=TimedAccountLockout(max_failures=5, failure_interval=300, unlock_interval=900),
            )

    def test_from_fields_rejects_boolean_count(self):
        with pytest.raises(SchemaMismatchError):
            ComponentPolicySet.from_fields(Component.ESXI, PolicyCategory.EXPIRATION, {"maxDays": True})

    def test_from_fields(self):
        policy_set = ComponentPolicySet.from_fields(
            Component.SSO, PolicyCategory.EXPIRATION, {"maxDays": 90}
        )
        assert policy_set.settings == PasswordExpiration(max_days=90)
        assert policy_set.to_fields() == {"maxDays": 90}

    def test_from_fields_rejects_non_object(self):
        with pytest.raises(SchemaMismatchError):
            ComponentPolicySet.from_fields(Component.SSO, PolicyCategory.EXPIRATION, 90)  # type: ignore[arg-type]


class TestDriftReport:
    """Tests for drift report aggregation."""

    def test_counts(self):
        drifted = ComponentDrift(
            component=Component.SSO,
            category=PolicyCategory.LOCKOUT,
            entries=[
                DriftEntry(field_name="maxFailures", current_value=3, expected_value=5, is_match=False),
                DriftEntry(field_name="unlockInterval", current_value=300, expected_value=300, is_match=True),
            ],
        )
        clean = ComponentDrift(
            component=Component.ESXI,
            category=PolicyCategory.EXPIRATION,
            entries=[
                DriftEntry(field_name="maxDays", current_value=1, expected_value=1, is_match=True),
            ],
        )
        report = DriftReport(version="5.1.0.0", results=[drifted, clean])

        assert report.total_fields == 3
        assert report.drift_count == 1
        assert report.has_drift
        assert drifted.has_drift and not clean.has_drift
        assert [e.field_name for e in drifted.mismatches] == ["maxFailures"]

    def test_empty_report(self):
        report = DriftReport(version="5.1.0.0")
        assert report.source == "defaults"
        assert not report.has_drift
        assert report.total_fields == 0


class TestAuditError:
    """Tests for the error payload."""

    def test_str_and_detail_lines(self):
        error = AuditError(
            code="VERSION_MISMATCH",
            message="baseline.json has no policy block for version 5.0.0.0",
            details={"version": "5.0.0.0", "available": ["5.1.0.0"], "path": "baseline.json"},
        )
        assert str(error).startswith("[VERSION_MISMATCH] ")
        assert error.detail_lines() == [
            "version: 5.0.0.0",
            "available: 5.1.0.0",
            "path: baseline.json",
        ]

    def test_empty_list_detail(self):
        error = AuditError(code="X", message="m", details={"available": []})
        assert error.detail_lines() == ["available: none"]
