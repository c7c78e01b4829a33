"""Reading and writing password policy configuration files.

A policy configuration file is a JSON document nested four levels deep::

    {
        "5.1.0.0": {
            "esxi": {
                "PasswordExpiration": {"maxDays": 99999},
                ...
            },
            ...
        }
    }

The standard library encoder has no nesting limit, so every level is
written in full.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from pwpolicy_audit.models.policy import Component, ComponentPolicySet, PolicyCategory
from pwpolicy_audit.utils.errors import (
    ConfigurationError,
    PolicyFileExistsError,
    SchemaMismatchError,
    VersionMismatchError,
)
from pwpolicy_audit.utils.logging import get_logger

logger = get_logger("config_file")

JSON_INDENT = 4


def dump_policy_document(
    version: str, policy_sets: Iterable[ComponentPolicySet]
) -> dict[str, Any]:
    """Build the JSON document for a single version block.

    Args:
        version: Suite version the policies belong to
        policy_sets: Policy sets to include

    Returns:
        Document keyed by version, component, category and field
    """
    block: dict[str, dict[str, dict[str, Any]]] = {}
    for policy_set in policy_sets:
        component = block.setdefault(policy_set.component.value, {})
        component[policy_set.category.value] = policy_set.to_fields()
    return {version: block}


def write_policy_file(
    path: Path | str,
    version: str,
    policy_sets: Iterable[ComponentPolicySet],
    overwrite: bool = False,
) -> Path:
    """Write policy sets to a configuration file.

    The document is written to a temporary file beside the target and moved
    into place once flushed, so a failed write never leaves a partial file.

    Args:
        path: Destination file
        version: Suite version the policies belong to
        policy_sets: Policy sets to write
        overwrite: Replace the file if it already exists

    Returns:
        The path written

    Raises:
        PolicyFileExistsError: If the file exists and overwrite is False
        ConfigurationError: If the directory or file cannot be written
    """
    path = Path(path)
    if path.exists() and not overwrite:
        raise PolicyFileExistsError(str(path))

    content = json.dumps(dump_policy_document(version, policy_sets), indent=JSON_INDENT)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
    except OSError as e:
        raise ConfigurationError(f"Cannot write policy configuration file {path}: {e}") from e

    try:
        with handle:
            handle.write(content)
            handle.write("\n")
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(handle.name, path)
    except OSError as e:
        Path(handle.name).unlink(missing_ok=True)
        raise ConfigurationError(f"Cannot write policy configuration file {path}: {e}") from e
    except BaseException:
        Path(handle.name).unlink(missing_ok=True)
        raise

    logger.info("Wrote %s policy configuration to %s", version, path)
    return path


def load_policy_document(path: Path | str) -> dict[str, Any]:
    """Load a configuration file without interpreting it.

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Policy configuration file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in policy configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read policy configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Policy configuration file {path} must contain a JSON object")
    return data


def document_versions(data: dict[str, Any]) -> list[str]:
    """List the version blocks present in a document."""
    return list(data.keys())


def parse_policy_document(
    data: dict[str, Any],
    version: str,
    source: str | None = None,
) -> list[ComponentPolicySet]:
    """Parse the block for one version out of a configuration document.

    Args:
        data: Parsed JSON document
        version: Version whose block to read
        source: Where the document came from, for error messages

    Returns:
        Policy sets in file order

    Raises:
        VersionMismatchError: If the document has no block for the version
        SchemaMismatchError: If any component, category or field is unknown
    """
    if version not in data:
        raise VersionMismatchError(version, document_versions(data), path=source)
    return parse_version_block(data[version], source=source)


def parse_version_block(block: Any, source: str | None = None) -> list[ComponentPolicySet]:
    """Parse a component -> category -> fields mapping into policy sets.

    Raises:
        SchemaMismatchError: If the block does not follow the policy schemas
    """
    where = f" in {source}" if source else ""
    if not isinstance(block, dict):
        raise SchemaMismatchError(f"Version block{where} must be an object")

    policy_sets: list[ComponentPolicySet] = []
    for component_key, categories in block.items():
        component = _parse_enum(Component, component_key, "component", where)
        if not isinstance(categories, dict):
            raise SchemaMismatchError(
                f"Component {component_key}{where} must be an object",
                component=component_key,
            )
        for category_key, fields in categories.items():
            category = _parse_enum(PolicyCategory, category_key, "category", where)
            policy_sets.append(ComponentPolicySet.from_fields(component, category, fields))

    logger.debug("Parsed %d policy sets%s", len(policy_sets), where)
    return policy_sets


def read_policy_file(path: Path | str, version: str) -> list[ComponentPolicySet]:
    """Read the policy sets recorded for a version in a configuration file.

    Args:
        path: Configuration file to read
        version: Version whose block to read

    Returns:
        Policy sets in file order

    Raises:
        ConfigurationError: If the file is unreadable or not a JSON object
        VersionMismatchError: If the file has no block for the version
        SchemaMismatchError: If the block does not follow the policy schemas
    """
    data = load_policy_document(path)
    return parse_policy_document(data, version, source=str(path))


def _parse_enum(enum_cls, value: str, kind: str, where: str):
    try:
        return enum_cls(value)
    except ValueError:
        known = ", ".join(member.value for member in enum_cls)
        raise SchemaMismatchError(
            f"Unknown {kind} '{value}'{where} (expected one of: {known})",
            **{kind: value},
        ) from None
