"""Shared test fixtures for pwpolicy-audit tests."""

import json
import logging
from pathlib import Path

import pytest

from pwpolicy_audit.cli.utils import console
from pwpolicy_audit.core.config_file import dump_policy_document
from pwpolicy_audit.core.drift import DriftComparator
from pwpolicy_audit.core.resolver import DefaultPolicyResolver
from pwpolicy_audit.models.policy import (
    Component,
    ComponentPolicySet,
    PasswordExpiration,
    SsoPasswordComplexity,
    TimedAccountLockout,
)
from pwpolicy_audit.utils.config import PwPolicyAuditConfig, set_config


@pytest.fixture(autouse=True)
def isolated_config():
    """Keep a developer's own config file out of the tests."""
    set_config(PwPolicyAuditConfig())
    yield
    set_config(None)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers and console settings the CLI installs."""
    no_color = console.no_color
    yield
    console.no_color = no_color
    logger = logging.getLogger("pwpolicy_audit")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def resolver() -> DefaultPolicyResolver:
    return DefaultPolicyResolver()


@pytest.fixture
def comparator(resolver: DefaultPolicyResolver) -> DriftComparator:
    return DriftComparator(resolver=resolver)


@pytest.fixture
def sso_complexity() -> ComponentPolicySet:
    """SSO complexity as shipped."""
    return ComponentPolicySet(
        component=Component.SSO,
        settings=SsoPasswordComplexity(
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
    )


@pytest.fixture
def sso_expiration() -> ComponentPolicySet:
    return ComponentPolicySet(component=Component.SSO, settings=PasswordExpiration(max_days=90))


@pytest.fixture
def sso_lockout() -> ComponentPolicySet:
    return ComponentPolicySet(
        component=Component.SSO,
        settings=TimedAccountLockout(max_failures=5, failure_interval=180, unlock_interval=300),
    )


@pytest.fixture
def snapshot_file(tmp_path, resolver: DefaultPolicyResolver) -> Path:
    """Snapshot of a 5.1.0.0 environment with two drifted fields."""
    document = dump_policy_document("5.1.0.0", resolver.get_defaults("5.1.0.0"))
    block = document["5.1.0.0"]
    block["sso"]["AccountLockout"]["maxFailures"] = 3
    block["esxi"]["PasswordExpiration"]["maxDays"] = 90

    path = tmp_path / "observed.json"
    path.write_text(json.dumps(block, indent=2))
    return path


@pytest.fixture
def baseline_file(tmp_path, resolver: DefaultPolicyResolver) -> Path:
    """Baseline for 5.1.0.0 that hardens SSO lockout to 3 failures."""
    document = dump_policy_document("5.1.0.0", resolver.get_defaults("5.1.0.0"))
    document["5.1.0.0"]["sso"]["AccountLockout"]["maxFailures"] = 3

    path = tmp_path / "baseline.json"
    path.write_text(json.dumps(document, indent=4))
    return path
