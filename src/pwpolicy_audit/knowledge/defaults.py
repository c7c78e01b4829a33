"""Out-of-the-box password policy defaults per suite release.

Values are whatever each release shipped; nothing here is derived. A row
lists only the components that exist in that release, and a component lists
only the categories it manages. Intervals are seconds.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pwpolicy_audit.models.policy import (
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
    PasswordExpiration,
    PolicyCategory,
    PolicySettings,
    RootAccountPasswordExpiration,
    SsoPasswordComplexity,
    TimedAccountLockout,
    WsaPasswordComplexity,
    WsaPasswordExpiration,
)

DefaultsTable = Mapping[str, Mapping[Component, Mapping[PolicyCategory, ComponentPolicySet]]]

EXP = PolicyCategory.EXPIRATION
CPX = PolicyCategory.COMPLEXITY
LCK = PolicyCategory.LOCKOUT

# ESXi 7.x (VCF 4.x) and 8.x (VCF 5.x); history defaults to 5 from 8.0.
_ESXI_PASSWDQC = "retry=3 min=disabled,disabled,disabled,7,7"

_ESXI_7 = {
    EXP: PasswordExpiration(max_days=99999),
    CPX: EsxiPasswordComplexity(policy=_ESXI_PASSWDQC, history=0),
    LCK: AccountLockout(max_failures=5, unlock_interval=900),
}

_ESXI_8 = {
    EXP: PasswordExpiration(max_days=99999),
    CPX: EsxiPasswordComplexity(policy=_ESXI_PASSWDQC, history=5),
    LCK: AccountLockout(max_failures=5, unlock_interval=900),
}

_SSO = {
    EXP: PasswordExpiration(max_days=90),
    CPX: SsoPasswordComplexity(
        min_length=8,
        max_length=20,
        min_lowercase=1,
        min_uppercase=1,
        min_numeric=1,
        min_special=1,
        min_alphabetic=2,
        max_identical_adjacent=3,
        history=5,
    ),
    LCK: TimedAccountLockout(max_failures=5, failure_interval=180, unlock_interval=300),
}

_VCENTER = {
    EXP: LocalAccountPasswordExpiration(max_days=90, min_days=0, warning_days=7),
}

_VCENTER_ROOT_COMPLEXITY = LinuxPasswordComplexity(
    min_length=6,
    min_lowercase=-1,
    min_uppercase=-1,
    min_numeric=-1,
    min_special=-1,
    history=5,
    min_unique=4,
    min_classes=0,
    max_sequence=0,
    max_retry=3,
)

_VCENTER_ROOT_7 = {
    EXP: RootAccountPasswordExpiration(max_days=90, min_days=0, warning_days=7, email=""),
    CPX: _VCENTER_ROOT_COMPLEXITY,
    LCK: LocalAccountLockout(max_failures=3, unlock_interval=900, root_unlock_interval=300),
}

_VCENTER_ROOT_8 = {
    EXP: RootAccountPasswordExpiration(max_days=90, min_days=0, warning_days=7, email=""),
    CPX: _VCENTER_ROOT_COMPLEXITY,
    LCK: LocalAccountLockout(max_failures=5, unlock_interval=900, root_unlock_interval=900),
}


def _nsx_complexity(class_minimum: int) -> NsxPasswordComplexity:
    return NsxPasswordComplexity(
        min_length=12,
        max_length=128,
        min_lowercase=class_minimum,
        min_uppercase=class_minimum,
        min_numeric=class_minimum,
        min_special=class_minimum,
        max_repeats=0,
        max_sequence=0,
        min_unique=0,
        history=5,
        hash_algorithm="sha512",
    )


# NSX-T 3.x expresses class minimums as pam credits (-1); NSX 4.x as counts.
_NSX_3_COMPLEXITY = _nsx_complexity(-1)
_NSX_4_COMPLEXITY = _nsx_complexity(1)

_NSX_MANAGER_LOCKOUT = NsxManagerAccountLockout(
    api_max_failures=5,
    api_unlock_interval=900,
    api_reset_period=900,
    cli_max_failures=5,
    cli_unlock_interval=900,
)

_NSX_EDGE_LOCKOUT = NsxEdgeAccountLockout(cli_max_failures=5, cli_unlock_interval=900)

_NSX_MANAGER_3 = {
    EXP: PasswordExpiration(max_days=90),
    CPX: _NSX_3_COMPLEXITY,
    LCK: _NSX_MANAGER_LOCKOUT,
}

_NSX_MANAGER_4 = {
    EXP: PasswordExpiration(max_days=90),
    CPX: _NSX_4_COMPLEXITY,
    LCK: _NSX_MANAGER_LOCKOUT,
}

_NSX_EDGE_3 = {
    EXP: PasswordExpiration(max_days=90),
    CPX: _NSX_3_COMPLEXITY,
    LCK: _NSX_EDGE_LOCKOUT,
}

_NSX_EDGE_4 = {
    EXP: PasswordExpiration(max_days=90),
    CPX: _NSX_4_COMPLEXITY,
    LCK: _NSX_EDGE_LOCKOUT,
}

_WSA_DIRECTORY = {
    EXP: WsaPasswordExpiration(
        max_days=90,
        warning_days=15,
        reminder_frequency_days=1,
        temp_password_hours=168,
    ),
    CPX: WsaPasswordComplexity(
        min_length=8,
        min_lowercase=1,
        min_uppercase=1,
        min_numeric=1,
        min_special=1,
        max_identical_adjacent=0,
        history=0,
    ),
    LCK: TimedAccountLockout(max_failures=5, failure_interval=300, unlock_interval=900),
}

# Appliance local users (admin, sshuser, root) are governed by pam on the WSA nodes.
_WSA_LOCAL = {
    CPX: LinuxPasswordComplexity(
        min_length=15,
        min_lowercase=-1,
        min_uppercase=-1,
        min_numeric=-1,
        min_special=-1,
        history=5,
        min_unique=4,
        min_classes=4,
        max_sequence=0,
        max_retry=3,
    ),
    LCK: LocalAccountLockout(max_failures=3, unlock_interval=900, root_unlock_interval=300),
}


def _sddc_manager(unlock_interval: int) -> dict[PolicyCategory, PolicySettings]:
    return {
        EXP: LocalAccountPasswordExpiration(max_days=90, min_days=0, warning_days=7),
        CPX: LinuxPasswordComplexity(
            min_length=15,
            min_lowercase=-1,
            min_uppercase=-1,
            min_numeric=-1,
            min_special=-1,
            history=5,
            min_unique=4,
            min_classes=4,
            max_sequence=0,
            max_retry=3,
        ),
        LCK: LocalAccountLockout(
            max_failures=3,
            unlock_interval=unlock_interval,
            root_unlock_interval=300,
        ),
    }


_SDDC_MANAGER_LONG_UNLOCK = _sddc_manager(86400)
_SDDC_MANAGER_SHORT_UNLOCK = _sddc_manager(900)

# NSX Edge password policy management first shipped with VCF 4.5.
_VCF_44 = {
    Component.ESXI: _ESXI_7,
    Component.SSO: _SSO,
    Component.VCENTER: _VCENTER,
    Component.VCENTER_ROOT: _VCENTER_ROOT_7,
    Component.NSX_MANAGER: _NSX_MANAGER_3,
    Component.WSA_DIRECTORY: _WSA_DIRECTORY,
    Component.WSA_LOCAL: _WSA_LOCAL,
    Component.SDDC_MANAGER: _SDDC_MANAGER_LONG_UNLOCK,
}

_VCF_45 = {
    Component.ESXI: _ESXI_7,
    Component.SSO: _SSO,
    Component.VCENTER: _VCENTER,
    Component.VCENTER_ROOT: _VCENTER_ROOT_7,
    Component.NSX_MANAGER: _NSX_MANAGER_3,
    Component.NSX_EDGE: _NSX_EDGE_3,
    Component.WSA_DIRECTORY: _WSA_DIRECTORY,
    Component.WSA_LOCAL: _WSA_LOCAL,
    Component.SDDC_MANAGER: _SDDC_MANAGER_LONG_UNLOCK,
}

_VCF_50 = {
    Component.ESXI: _ESXI_8,
    Component.SSO: _SSO,
    Component.VCENTER: _VCENTER,
    Component.VCENTER_ROOT: _VCENTER_ROOT_8,
    Component.NSX_MANAGER: _NSX_MANAGER_4,
    Component.NSX_EDGE: _NSX_EDGE_4,
    Component.WSA_DIRECTORY: _WSA_DIRECTORY,
    Component.WSA_LOCAL: _WSA_LOCAL,
    Component.SDDC_MANAGER: _SDDC_MANAGER_LONG_UNLOCK,
}

_VCF_51 = {
    **_VCF_50,
    Component.SDDC_MANAGER: _SDDC_MANAGER_SHORT_UNLOCK,
}

_RELEASES: dict[str, dict[Component, dict[PolicyCategory, PolicySettings]]] = {
    "4.4.0.0": _VCF_44,
    "4.4.1.0": _VCF_44,
    "4.5.0.0": _VCF_45,
    "4.5.1.0": _VCF_45,
    "4.5.2.0": _VCF_45,
    "5.0.0.0": _VCF_50,
    "5.0.0.1": _VCF_50,
    "5.1.0.0": _VCF_51,
    "5.1.1.0": _VCF_51,
    "5.2.0.0": _VCF_51,
}


def _freeze(
    releases: dict[str, dict[Component, dict[PolicyCategory, PolicySettings]]],
) -> DefaultsTable:
    table = {}
    for version, components in releases.items():
        frozen_components = {}
        for component in Component:
            if component not in components:
                continue
            categories = components[component]
            frozen_components[component] = MappingProxyType(
                {
                    category: ComponentPolicySet(component=component, settings=categories[category])
                    for category in PolicyCategory
                    if category in categories
                }
            )
        table[version] = MappingProxyType(frozen_components)
    return MappingProxyType(table)


DEFAULT_POLICIES: DefaultsTable = _freeze(_RELEASES)


def version_key(version: str) -> tuple[int, ...]:
    """Numeric sort key for a dotted version string."""
    return tuple(int(part) for part in version.split("."))


def get_supported_versions() -> list[str]:
    """Get every version the defaults table has a row for, oldest first."""
    return sorted(DEFAULT_POLICIES, key=version_key)
