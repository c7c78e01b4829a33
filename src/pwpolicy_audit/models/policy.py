"""Password policy data models.

Each policy category has a small family of frozen records, one per distinct
field set a component exposes. A record class is bound to a category through
its ``category`` class variable, and :data:`POLICY_SCHEMAS` binds each
(component, category) pair to exactly one record class.
"""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, Field, SerializeAsAny, StrictInt, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from pwpolicy_audit.utils.errors import SchemaMismatchError

# Text-based sources report numbers as strings; keep whatever arrived.
# Booleans and floats are rejected rather than coerced to integers.
Count = StrictInt | str


class PolicyCategory(str, Enum):
    """Password policy category, valued by its configuration file key."""

    EXPIRATION = "PasswordExpiration"
    COMPLEXITY = "PasswordComplexity"
    LOCKOUT = "AccountLockout"


class Component(str, Enum):
    """Managed component whose local accounts carry a password policy."""

    ESXI = "esxi"
    SSO = "sso"
    VCENTER = "vcenterServer"
    VCENTER_ROOT = "vcenterServerRoot"
    NSX_MANAGER = "nsxManager"
    NSX_EDGE = "nsxEdge"
    WSA_DIRECTORY = "wsaDirectory"
    WSA_LOCAL = "wsaLocal"
    SDDC_MANAGER = "sddcManager"


class PolicySettings(BaseModel):
    """Base for all policy records."""

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    category: ClassVar[PolicyCategory]

    @classmethod
    def field_names(cls) -> list[str]:
        """Python field names in declaration order."""
        return list(cls.model_fields)

    @classmethod
    def alias_for(cls, field_name: str) -> str:
        """Configuration file key for a field."""
        return cls.model_fields[field_name].alias or field_name

    def to_fields(self) -> dict[str, Any]:
        """Serialize to configuration file keys."""
        return self.model_dump(by_alias=True)


# Expiration


class PasswordExpiration(PolicySettings):
    """Maximum password age only."""

    category: ClassVar[PolicyCategory] = PolicyCategory.EXPIRATION

    max_days: Count = Field(description="Days before a password must change")


class LocalAccountPasswordExpiration(PasswordExpiration):
    """Appliance local account expiration (shadow style)."""

    min_days: Count = Field(description="Days before a password may change again")
    warning_days: Count = Field(description="Days of warning before expiry")


class RootAccountPasswordExpiration(LocalAccountPasswordExpiration):
    """vCenter Server root account expiration, with notification address."""

    email: str = Field(description="Address notified before expiry, empty for none")


class WsaPasswordExpiration(PasswordExpiration):
    """Workspace ONE Access directory expiration."""

    warning_days: Count = Field(description="Days before expiry that reminders start")
    reminder_frequency_days: Count = Field(description="Days between reminders")
    temp_password_hours: Count = Field(description="Lifetime of a temporary password in hours")


# Complexity


class EsxiPasswordComplexity(PolicySettings):
    """ESXi complexity, expressed as a pam_passwdqc policy string."""

    category: ClassVar[PolicyCategory] = PolicyCategory.COMPLEXITY

    policy: str = Field(description="Security.PasswordQualityControl value")
    history: Count = Field(description="Previous passwords that cannot be reused")


class PasswordComplexity(PolicySettings):
    """Character class complexity."""

    category: ClassVar[PolicyCategory] = PolicyCategory.COMPLEXITY

    min_length: Count = Field(description="Minimum password length")
    min_lowercase: Count = Field(description="Minimum lowercase characters")
    min_uppercase: Count = Field(description="Minimum uppercase characters")
    min_numeric: Count = Field(description="Minimum numeric characters")
    min_special: Count = Field(description="Minimum special characters")
    history: Count = Field(description="Previous passwords that cannot be reused")


class SsoPasswordComplexity(PasswordComplexity):
    max_length: Count = Field(description="Maximum password length")
    min_alphabetic: Count = Field(description="Minimum alphabetic characters")
    max_identical_adjacent: Count = Field(description="Maximum identical adjacent characters")


class LinuxPasswordComplexity(PasswordComplexity):
    """pam_pwquality complexity; negative class counts are credits."""

    min_unique: Count = Field(description="Minimum characters differing from the old password")
    min_classes: Count = Field(description="Minimum character classes")
    max_sequence: Count = Field(description="Maximum monotonic sequence length")
    max_retry: Count = Field(description="Prompts before the change fails")


class NsxPasswordComplexity(PasswordComplexity):
    max_length: Count = Field(description="Maximum password length")
    max_repeats: Count = Field(description="Maximum repeated characters")
    max_sequence: Count = Field(description="Maximum monotonic sequence length")
    min_unique: Count = Field(description="Minimum unique characters")
    hash_algorithm: str = Field(description="Password hash algorithm")


class WsaPasswordComplexity(PasswordComplexity):
    max_identical_adjacent: Count = Field(description="Maximum identical adjacent characters")


# Account lockout


class AccountLockout(PolicySettings):
    """Failures before lockout and how long the lock lasts (seconds)."""

    category: ClassVar[PolicyCategory] = PolicyCategory.LOCKOUT

    max_failures: Count = Field(description="Failed attempts before lockout")
    unlock_interval: Count = Field(description="Seconds until a locked account unlocks")


class TimedAccountLockout(AccountLockout):
    failure_interval: Count = Field(description="Window in seconds in which failures count")


class LocalAccountLockout(AccountLockout):
    """pam_faillock lockout, with a separate unlock time for root."""

    root_unlock_interval: Count = Field(description="Seconds until a locked root account unlocks")


class NsxManagerAccountLockout(PolicySettings):
    """NSX Manager lockout, tracked separately for API and CLI logins."""

    category: ClassVar[PolicyCategory] = PolicyCategory.LOCKOUT

    api_max_failures: Count = Field(description="API failures before lockout")
    api_unlock_interval: Count = Field(description="Seconds an API lockout lasts")
    api_reset_period: Count = Field(description="Seconds before the API failure count resets")
    cli_max_failures: Count = Field(description="CLI failures before lockout")
    cli_unlock_interval: Count = Field(description="Seconds a CLI lockout lasts")


class NsxEdgeAccountLockout(PolicySettings):
    category: ClassVar[PolicyCategory] = PolicyCategory.LOCKOUT

    cli_max_failures: Count = Field(description="CLI failures before lockout")
    cli_unlock_interval: Count = Field(description="Seconds a CLI lockout lasts")


POLICY_SCHEMAS: dict[tuple[Component, PolicyCategory], type[PolicySettings]] = {
    (Component.ESXI, PolicyCategory.EXPIRATION): PasswordExpiration,
    (Component.ESXI, PolicyCategory.COMPLEXITY): EsxiPasswordComplexity,
    (Component.ESXI, PolicyCategory.LOCKOUT): AccountLockout,
    (Component.SSO, PolicyCategory.EXPIRATION): PasswordExpiration,
    (Component.SSO, PolicyCategory.COMPLEXITY): SsoPasswordComplexity,
    (Component.SSO, PolicyCategory.LOCKOUT): TimedAccountLockout,
    (Component.VCENTER, PolicyCategory.EXPIRATION): LocalAccountPasswordExpiration,
    (Component.VCENTER_ROOT, PolicyCategory.EXPIRATION): RootAccountPasswordExpiration,
    (Component.VCENTER_ROOT, PolicyCategory.COMPLEXITY): LinuxPasswordComplexity,
    (Component.VCENTER_ROOT, PolicyCategory.LOCKOUT): LocalAccountLockout,
    (Component.NSX_MANAGER, PolicyCategory.EXPIRATION): PasswordExpiration,
    (Component.NSX_MANAGER, PolicyCategory.COMPLEXITY): NsxPasswordComplexity,
    (Component.NSX_MANAGER, PolicyCategory.LOCKOUT): NsxManagerAccountLockout,
    (Component.NSX_EDGE, PolicyCategory.EXPIRATION): PasswordExpiration,
    (Component.NSX_EDGE, PolicyCategory.COMPLEXITY): NsxPasswordComplexity,
    (Component.NSX_EDGE, PolicyCategory.LOCKOUT): NsxEdgeAccountLockout,
    (Component.WSA_DIRECTORY, PolicyCategory.EXPIRATION): WsaPasswordExpiration,
    (Component.WSA_DIRECTORY, PolicyCategory.COMPLEXITY): WsaPasswordComplexity,
    (Component.WSA_DIRECTORY, PolicyCategory.LOCKOUT): TimedAccountLockout,
    (Component.WSA_LOCAL, PolicyCategory.COMPLEXITY): LinuxPasswordComplexity,
    (Component.WSA_LOCAL, PolicyCategory.LOCKOUT): LocalAccountLockout,
    (Component.SDDC_MANAGER, PolicyCategory.EXPIRATION): LocalAccountPasswordExpiration,
    (Component.SDDC_MANAGER, PolicyCategory.COMPLEXITY): LinuxPasswordComplexity,
    (Component.SDDC_MANAGER, PolicyCategory.LOCKOUT): LocalAccountLockout,
}


def schema_for(component: Component, category: PolicyCategory) -> type[PolicySettings]:
    """Get the record class for a component and category.

    Raises:
        SchemaMismatchError: If the component has no policy in that category
    """
    try:
        return POLICY_SCHEMAS[(component, category)]
    except KeyError:
        raise SchemaMismatchError(
            f"{component.value} has no {category.value} policy",
            component=component.value,
            category=category.value,
        ) from None


class ComponentPolicySet(BaseModel):
    """Policy values for one component in one category."""

    model_config = {"frozen": True}

    component: Component = Field(description="Component the policy belongs to")
    settings: SerializeAsAny[PolicySettings] = Field(description="Category specific policy record")

    @property
    def category(self) -> PolicyCategory:
        return self.settings.category

    @model_validator(mode="after")
    def _check_schema(self) -> "ComponentPolicySet":
        expected = schema_for(self.component, self.category)
        if type(self.settings) is not expected:
            raise SchemaMismatchError(
                f"{self.component.value}/{self.category.value} expects "
                f"{expected.__name__}, got {type(self.settings).__name__}",
                component=self.component.value,
                category=self.category.value,
            )
        return self

    @classmethod
    def from_fields(
        cls,
        component: Component,
        category: PolicyCategory,
        fields: dict[str, Any],
    ) -> "ComponentPolicySet":
        """Build a policy set from configuration file keys.

        Raises:
            SchemaMismatchError: If the keys do not match the record's fields
        """
        schema = schema_for(component, category)
        if not isinstance(fields, dict):
            raise SchemaMismatchError(
                f"{component.value}/{category.value} must be an object",
                component=component.value,
                category=category.value,
            )
        try:
            settings = schema.model_validate(fields)
        except PydanticValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise SchemaMismatchError(
                f"{component.value}/{category.value} does not match {schema.__name__}: "
                + "; ".join(problems),
                component=component.value,
                category=category.value,
                problems=problems,
            ) from e
        return cls(component=component, settings=settings)

    def to_fields(self) -> dict[str, Any]:
        """Serialize the record to configuration file keys."""
        return self.settings.to_fields()

    @property
    def key(self) -> str:
        return f"{self.component.value}/{self.category.value}"
