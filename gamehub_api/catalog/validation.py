"""Registry validation — structural and referential integrity checks."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .models import Component, ValidationResult

if TYPE_CHECKING:
    from .registry import ComponentRegistry


_MD5 = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)
_DIGITS = re.compile(r"[0-9]+")


def _validate_component(component: Component) -> list[str]:
    errs: list[str] = []
    cid = component.id

    if not isinstance(component.file_size, str) or not _DIGITS.fullmatch(component.file_size):
        errs.append(f"Component {cid}: file_size must be a string of digits")

    if not isinstance(component.file_md5, str) or not _MD5.fullmatch(component.file_md5):
        errs.append(f"Component {cid}: invalid MD5 hash")

    if not component.name:
        errs.append(f"Component {cid}: missing name")
    if not component.file_name:
        errs.append(f"Component {cid}: missing file_name")
    if not component.download_url:
        errs.append(f"Component {cid}: missing download_url")

    return errs


def validate_registry(registry: ComponentRegistry) -> ValidationResult:
    """Check the registry and return every violation found (empty = valid)."""
    errors: list[str] = []

    # ── Required data ──
    if registry.get_total_count() == 0:
        errors.append("No components loaded")
    if registry.imagefs is None:
        errors.append("Imagefs not loaded")
    if not registry.containers:
        errors.append("No containers loaded")
    if registry.defaults is None:
        errors.append("Defaults not loaded")
    if registry.execution_config is None:
        errors.append("Execution config not loaded")

    # ── Per-component fields ──
    for component in registry.get_all_components():
        errors.extend(_validate_component(component))

    # ── Default references ──
    defaults = registry.defaults
    if defaults is not None:
        for slot, cid in (
            ("dxvk", defaults.dxvk),
            ("vkd3d", defaults.vkd3d),
            ("steamClient", defaults.steam_client),
        ):
            if registry.get_by_id(cid) is None:
                errors.append(f"Default {slot} ID {cid} not found")

        if registry.containers and registry.get_container(defaults.container) is None:
            errors.append(f"Default container ID {defaults.container} not found")

        for cid in defaults.generic_component_ids:
            if registry.get_by_id(cid) is None:
                errors.append(f"Generic script component ID {cid} not found")
        for cid in defaults.qualcomm_component_ids:
            if registry.get_by_id(cid) is None:
                errors.append(f"Qualcomm script component ID {cid} not found")

    return ValidationResult(errors=errors)
