"""Unit tests for the DefaultPolicyResolver."""

import json

import pytest

from pwpolicy_audit.core.config_file import read_policy_file
from pwpolicy_audit.core.resolver import DefaultPolicyResolver
from pwpolicy_audit.knowledge.defaults import DEFAULT_POLICIES, get_supported_versions
from pwpolicy_audit.models.policy import (
    POLICY_SCHEMAS,
    Component,
    LinuxPasswordComplexity,
    LocalAccountLockout,
    PolicyCategory,
    WsaPasswordExpiration,
)
from pwpolicy_audit.utils.errors import PolicyFileExistsError, UnsupportedVersionError

SUPPORTED = [
    "4.4.0.0",
    "4.4.1.0",
    "4.5.0.0",
    "4.5.1.0",
    "4.5.2.0",
    "5.0.0.0",
    "5.0.0.1",
    "5.1.0.0",
    "5.1.1.0",
    "5.2.0.0",
]


class TestGetDefaults:
    """Tests for default policy lookup."""

    @pytest.mark.parametrize("version", SUPPORTED)
    def test_supported_version_returns_policies(self, resolver: DefaultPolicyResolver, version):
        """Test every supported version resolves to a non-empty result."""
        policy_sets = resolver.get_defaults(version)
        assert len(policy_sets) > 0

    def test_supported_versions_are_sorted(self, resolver: DefaultPolicyResolver):
        """Test versions are listed oldest first."""
        assert resolver.supported_versions() == SUPPORTED
        assert get_supported_versions() == SUPPORTED

    def test_is_supported(self, resolver: DefaultPolicyResolver):
        assert resolver.is_supported("5.0.0.1")
        assert not resolver.is_supported("5.0.0.2")

    @pytest.mark.parametrize("version", ["9.9.9.9", "5.1", "5.1.0", "", "latest"])
    def test_unknown_version_fails(self, resolver: DefaultPolicyResolver, version):
        """Test unknown versions are rejected rather than matched approximately."""
        with pytest.raises(UnsupportedVersionError) as exc_info:
            resolver.get_defaults(version)

        assert exc_info.value.code == "UNSUPPORTED_VERSION"
        assert exc_info.value.details["version"] == version
        assert "5.1.0.0" in exc_info.value.details["supported"]

    def test_results_ordered_by_component_then_category(self, resolver: DefaultPolicyResolver):
        """Test results follow component order, then category order."""
        policy_sets = resolver.get_defaults("5.1.0.0")
        components = list(dict.fromkeys(s.component for s in policy_sets))
        assert components == [c for c in Component if c in components]

        esxi = [s.category for s in policy_sets if s.component == Component.ESXI]
        assert esxi == list(PolicyCategory)

    def test_every_entry_uses_registered_schema(self):
        """Test every table entry carries the record class for its key."""
        for version, components in DEFAULT_POLICIES.items():
            for component, categories in components.items():
                for category, policy_set in categories.items():
                    assert type(policy_set.settings) is POLICY_SCHEMAS[(component, category)]

    def test_table_is_read_only(self):
        """Test the defaults table cannot be mutated."""
        with pytest.raises(TypeError):
            DEFAULT_POLICIES["9.9.9.9"] = {}  # type: ignore[index]
        with pytest.raises(TypeError):
            DEFAULT_POLICIES["5.1.0.0"][Component.ESXI] = {}  # type: ignore[index]

    def test_vcenter_has_expiration_only(self, resolver: DefaultPolicyResolver):
        """Test vCenter Server local accounts only manage expiration."""
        categories = [
            s.category for s in resolver.get_defaults("5.1.0.0") if s.component == Component.VCENTER
        ]
        assert categories == [PolicyCategory.EXPIRATION]

    @pytest.mark.parametrize("version", SUPPORTED)
    def test_workspace_one_access_families(self, resolver: DefaultPolicyResolver, version):
        """Test the directory and the appliance local users are separate components."""
        directory = [s for s in resolver.get_defaults(version) if s.component == Component.WSA_DIRECTORY]
        local = [s for s in resolver.get_defaults(version) if s.component == Component.WSA_LOCAL]

        assert [s.category for s in directory] == list(PolicyCategory)
        assert [s.category for s in local] == [PolicyCategory.COMPLEXITY, PolicyCategory.LOCKOUT]
        assert isinstance(local[0].settings, LinuxPasswordComplexity)
        assert isinstance(local[1].settings, LocalAccountLockout)
        assert isinstance(directory[0].settings, WsaPasswordExpiration)
        assert resolver.get_default(version, Component.WSA_LOCAL, PolicyCategory.EXPIRATION) is None


class TestReleaseDifferences:
    """Tests for defaults that changed between releases."""

    def test_nsx_edge_absent_before_45(self, resolver: DefaultPolicyResolver):
        """Test components that did not exist yet are omitted, not zero-filled."""
        components = resolver.components("4.4.0.0")
        assert Component.NSX_EDGE not in components
        assert all(s.component != Component.NSX_EDGE for s in resolver.get_defaults("4.4.1.0"))
        assert resolver.get_default("4.4.0.0", Component.NSX_EDGE, PolicyCategory.LOCKOUT) is None

    def test_nsx_edge_present_from_45(self, resolver: DefaultPolicyResolver):
        """Test NSX Edge defaults exist from 4.5.0.0 onwards."""
        for version in SUPPORTED[2:]:
            assert Component.NSX_EDGE in resolver.components(version)

    def test_missing_category_is_none(self, resolver: DefaultPolicyResolver):
        """Test a category a component does not manage resolves to None."""
        assert resolver.get_default("5.1.0.0", Component.VCENTER, PolicyCategory.LOCKOUT) is None

    def test_get_default_unknown_version(self, resolver: DefaultPolicyResolver):
        """Test single lookups reject unknown versions too."""
        with pytest.raises(UnsupportedVersionError):
            resolver.get_default("9.9.9.9", Component.SSO, PolicyCategory.EXPIRATION)

    def test_nsx_complexity_changes_with_nsx4(self, resolver: DefaultPolicyResolver):
        """Test NSX complexity class minimums change at 5.0.0.0."""
        old = resolver.get_default("4.5.2.0", Component.NSX_MANAGER, PolicyCategory.COMPLEXITY)
        new = resolver.get_default("5.0.0.0", Component.NSX_MANAGER, PolicyCategory.COMPLEXITY)

        assert old is not None and new is not None
        assert old.settings.min_lowercase == -1
        assert new.settings.min_lowercase == 1
        assert old.settings.min_length == new.settings.min_length == 12

    def test_vcenter_root_lockout_changes(self, resolver: DefaultPolicyResolver):
        """Test the vCenter Server root lockout default changes at 5.0.0.0."""
        old = resolver.get_default("4.5.2.0", Component.VCENTER_ROOT, PolicyCategory.LOCKOUT)
        new = resolver.get_default("5.0.0.0", Component.VCENTER_ROOT, PolicyCategory.LOCKOUT)

        assert old is not None and new is not None
        assert isinstance(old.settings, LocalAccountLockout)
        assert (old.settings.max_failures, old.settings.root_unlock_interval) == (3, 300)
        assert (new.settings.max_failures, new.settings.root_unlock_interval) == (5, 900)

    def test_sddc_manager_unlock_interval_changes(self, resolver: DefaultPolicyResolver):
        """Test the SDDC Manager unlock interval drops at 5.1.0.0."""
        old = resolver.get_default("5.0.0.1", Component.SDDC_MANAGER, PolicyCategory.LOCKOUT)
        new = resolver.get_default("5.1.0.0", Component.SDDC_MANAGER, PolicyCategory.LOCKOUT)

        assert old is not None and new is not None
        assert old.settings.unlock_interval == 86400
        assert new.settings.unlock_interval == 900


class TestGenerateConfigFile:
    """Tests for generating policy configuration files."""

    def test_generate_writes_version_block(self, resolver: DefaultPolicyResolver, tmp_path):
        """Test the generated file holds one block keyed by version."""
        path = resolver.generate_config_file("5.1.0.0", tmp_path / "policy.json")

        data = json.loads(path.read_text())
        assert list(data) == ["5.1.0.0"]
        assert data["5.1.0.0"]["esxi"]["PasswordExpiration"] == {"maxDays": 99999}
        assert data["5.1.0.0"]["nsxManager"]["AccountLockout"]["cliMaxFailures"] == 5

    def test_generate_twice_without_overwrite_fails(self, resolver: DefaultPolicyResolver, tmp_path):
        """Test the second generate at the same path is refused."""
        path = tmp_path / "policy.json"
        resolver.generate_config_file("5.1.0.0", path)
        original = path.read_text()

        with pytest.raises(PolicyFileExistsError) as exc_info:
            resolver.generate_config_file("4.4.0.0", path)

        assert exc_info.value.code == "FILE_EXISTS"
        assert path.read_text() == original
        assert sorted(p.name for p in tmp_path.iterdir()) == ["policy.json"]

    def test_generate_with_overwrite_replaces_file(self, resolver: DefaultPolicyResolver, tmp_path):
        """Test overwrite fully replaces the previous contents."""
        path = tmp_path / "policy.json"
        resolver.generate_config_file("5.1.0.0", path)
        resolver.generate_config_file("4.4.0.0", path, overwrite=True)

        data = json.loads(path.read_text())
        assert list(data) == ["4.4.0.0"]
        assert read_policy_file(path, "4.4.0.0") == resolver.get_defaults("4.4.0.0")

    def test_generate_unknown_version_writes_nothing(self, resolver: DefaultPolicyResolver, tmp_path):
        """Test an unsupported version fails before touching the filesystem."""
        path = tmp_path / "policy.json"
        with pytest.raises(UnsupportedVersionError):
            resolver.generate_config_file("9.9.9.9", path)
        assert not path.exists()

    def test_generate_creates_parent_directory(self, resolver: DefaultPolicyResolver, tmp_path):
        path = tmp_path / "nested" / "dir" / "policy.json"
        resolver.generate_config_file("5.2.0.0", path)
        assert path.exists()

    @pytest.mark.parametrize("version", SUPPORTED)
    def test_round_trip(self, resolver: DefaultPolicyResolver, tmp_path, version):
        """Test reading a generated file reproduces the defaults exactly."""
        path = resolver.generate_config_file(version, tmp_path / "policy.json")
        assert read_policy_file(path, version) == resolver.get_defaults(version)
