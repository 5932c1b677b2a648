"""Simulator endpoint fixtures (simulator/v2/* and simulator/executeScript/*).

Every builder emits keys in the exact order the client's recorded responses
use; the client compares these documents structurally.

Failure modes differ on purpose:
  - getDefaultComponent raises when dxvk, vkd3d or steamClient is unknown.
  - executeScript raises when the default container is unknown, but drops
    unknown component ids from ``component`` while ``component_ids`` still
    lists every configured id.
"""

from __future__ import annotations

from gamehub_api.catalog import (
    Component, ComponentRegistry, ComponentType, Container, Defaults,
    ExecutionConfig, ExecutionContext, Imagefs,
)
from .documents import GenerationError, success


VARIANTS = ("generic", "qualcomm")


# ── Entry builders ─────────────────────────────────────────────────

def to_all_component_entry(c: Component) -> dict:
    """getAllComponentList entry: has is_ui, no blurb or gpu_range."""
    return {
        "display_name": c.display_name or "",
        "download_url": c.download_url,
        "file_md5": c.file_md5,
        "file_name": c.file_name,
        "file_size": c.file_size,
        "id": c.id,
        "is_ui": 1,
        "logo": c.logo,
        "name": c.name,
        "type": c.type,
        "version": c.version,
        "version_code": c.version_code,
    }


def to_component_list_entry(c: Component) -> dict:
    """getComponentList entry: has blurb and gpu_range, no is_ui."""
    return {
        "blurb": c.blurb or "",
        "display_name": c.display_name or "",
        "download_url": c.download_url,
        "file_md5": c.file_md5,
        "file_name": c.file_name,
        "file_size": c.file_size,
        "gpu_range": c.gpu_range or "",
        "id": c.id,
        "logo": c.logo,
        "name": c.name,
        "type": c.type,
        "version": c.version,
        "version_code": c.version_code,
    }


def to_default_component_entry(c: Component) -> dict:
    return {
        "blurb": c.blurb or "",
        "display_name": c.display_name or "",
        "download_url": c.download_url,
        "file_md5": c.file_md5,
        "file_name": c.file_name,
        "file_size": c.file_size,
        "id": c.id,
        "logo": c.logo,
        "name": c.name,
        "type": c.type,
        "version": c.version,
        "version_code": c.version_code,
    }


def empty_component_entry() -> dict:
    """Placeholder for the translator slot, which is never configured."""
    return {
        "blurb": "",
        "display_name": "",
        "download_url": "",
        "file_md5": "",
        "file_name": "",
        "file_size": "",
        "id": 0,
        "logo": "",
        "name": "",
        "type": 0,
        "version": "",
        "version_code": 0,
    }


def to_execute_component(c: Component) -> dict:
    return {
        "base_type": 0,
        "blurb": c.blurb or "",
        "display_name": c.display_name or "",
        "download_url": c.download_url,
        "file_md5": c.file_md5,
        "file_name": c.file_name,
        "file_size": c.file_size,
        "id": c.id,
        "is_base": 0,
        "is_ui": 1,
        "logo": c.logo,
        "name": c.name,
        "type": c.type,
        "version": c.version,
        "version_code": c.version_code,
    }


def to_container_entry(container: Container) -> dict:
    d = {
        "display_name": container.display_name,
        "download_url": container.download_url,
        "file_md5": container.file_md5,
        "file_name": container.file_name,
        "file_size": container.file_size,
        "framework": container.framework,
        "framework_type": container.framework_type,
        "id": container.id,
        "is_steam": container.is_steam,
        "logo": container.logo,
        "name": container.name,
    }
    # sub_data is left out when the source never listed it; an explicit null stays
    if container.sub_data is not None:
        d["sub_data"] = {
            "sub_file_name": container.sub_data.sub_file_name,
            "sub_download_url": container.sub_data.sub_download_url,
            "sub_file_md5": container.sub_data.sub_file_md5,
        }
    elif container.sub_data_listed:
        d["sub_data"] = None
    d["version"] = container.version
    d["version_code"] = container.version_code
    return d


def to_container_ref(container: Container) -> dict:
    """Container as embedded in executeScript: an empty blurb comes first."""
    return {"blurb": "", **to_container_entry(container)}


def to_imagefs_ref(imagefs: Imagefs) -> dict:
    return {
        "display_name": imagefs.display_name,
        "download_url": imagefs.download_url,
        "file_md5": imagefs.file_md5,
        "file_name": imagefs.file_name,
        "file_size": imagefs.file_size,
        "id": imagefs.id,
        "logo": imagefs.logo,
        "name": imagefs.name,
        "version": imagefs.version,
        "version_code": imagefs.version_code,
    }


def to_imagefs_detail(imagefs: Imagefs) -> dict:
    return {
        "id": imagefs.id,
        "version": imagefs.version,
        "version_code": imagefs.version_code,
        "name": imagefs.name,
        "logo": imagefs.logo,
        "upgrade_msg": imagefs.upgrade_msg,
        "blurb": imagefs.blurb,
        "download_url": imagefs.download_url,
        "file_md5": imagefs.file_md5,
        "file_size": imagefs.file_size,
        "file_name": imagefs.file_name,
        "display_name": imagefs.display_name,
    }


def context_to_dict(ctx: ExecutionContext) -> dict:
    return {
        "params": list(ctx.params),
        "script_id": ctx.script_id,
        "timestamp": ctx.timestamp,
    }


# ── Singleton access ───────────────────────────────────────────────

def _require_defaults(registry: ComponentRegistry, document: str) -> Defaults:
    if registry.defaults is None:
        raise GenerationError(document, "defaults not loaded")
    return registry.defaults


def _require_imagefs(registry: ComponentRegistry, document: str) -> Imagefs:
    if registry.imagefs is None:
        raise GenerationError(document, "imagefs not loaded")
    return registry.imagefs


def _require_execution_config(registry: ComponentRegistry, document: str) -> ExecutionConfig:
    if registry.execution_config is None:
        raise GenerationError(document, "execution config not loaded")
    return registry.execution_config


# ── Documents ──────────────────────────────────────────────────────

def generate_all_component_list(registry: ComponentRegistry, timestamp: str | None = None) -> dict:
    components = registry.sort_by_type_and_id_descending(registry.get_all_components())
    entries = [to_all_component_entry(c) for c in components]
    return success({"list": entries, "total": len(entries)}, timestamp, timed=True)


def generate_component_list(registry: ComponentRegistry, timestamp: str | None = None) -> dict:
    """Box64/FEX components only, with the fixed first-page paging fields."""
    components = registry.sort_by_id_descending(registry.get_by_type(ComponentType.BOX64_FEX))
    entries = [to_component_list_entry(c) for c in components]
    return success(
        {"list": entries, "total": len(entries), "page": 1, "pageSize": 10},
        timestamp,
        timed=True,
    )


def generate_container_list(registry: ComponentRegistry, timestamp: str | None = None) -> dict:
    return success([to_container_entry(c) for c in registry.containers], timestamp, timed=True)


def generate_default_component(registry: ComponentRegistry, timestamp: str | None = None) -> dict:
    document = "getDefaultComponent"
    defaults = _require_defaults(registry, document)

    resolved = {}
    missing = []
    for slot, cid in (
        ("dxvk", defaults.dxvk),
        ("vkd3d", defaults.vkd3d),
        ("steamClient", defaults.steam_client),
    ):
        component = registry.get_by_id(cid)
        if component is None:
            missing.append(f"{slot}={cid}")
        else:
            resolved[slot] = component
    if missing:
        raise GenerationError(
            document, f"default components not found in registry: {', '.join(missing)}"
        )

    return success({
        "container": None,
        "gpu": None,
        "dxvk": to_default_component_entry(resolved["dxvk"]),
        "vkd3d": to_default_component_entry(resolved["vkd3d"]),
        "translator": empty_component_entry(),
        "steamClient": to_default_component_entry(resolved["steamClient"]),
    }, timestamp, timed=True)


def generate_imagefs_detail(registry: ComponentRegistry, timestamp: str | None = None) -> dict:
    imagefs = _require_imagefs(registry, "getImagefsDetail")
    return success(to_imagefs_detail(imagefs), timestamp, timed=True)


def generate_execute_script(
    registry: ComponentRegistry,
    variant: str,
    timestamp: str | None = None,
) -> dict:
    """executeScript for the ``generic`` or ``qualcomm`` GPU variant."""
    if variant not in VARIANTS:
        raise ValueError(f"Unknown executeScript variant {variant!r}, expected one of {VARIANTS}")

    document = f"executeScript/{variant}"
    defaults = _require_defaults(registry, document)
    config = _require_execution_config(registry, document)
    imagefs = _require_imagefs(registry, document)

    container = registry.get_container(defaults.container)
    if container is None:
        raise GenerationError(document, f"Container {defaults.container} not found")

    if variant == "generic":
        component_ids = defaults.generic_component_ids
        context = defaults.generic_context
    else:
        component_ids = defaults.qualcomm_component_ids
        context = defaults.qualcomm_context
    if context is None:
        raise GenerationError(document, f"{variant} execution context not loaded")

    components = []
    for cid in component_ids:
        component = registry.get_by_id(cid)
        if component is not None:
            components.append(to_execute_component(component))

    return success({
        "audio_driver": config.audio_driver,
        "component": components,
        "component_ids": list(component_ids),
        "container": to_container_ref(container),
        "container_id": defaults.container,
        "controller": {
            "dinput": config.controller.dinput,
            "xinput": config.controller.xinput,
            "xboxLayout": config.controller.xbox_layout,
            "vibration": config.controller.vibration,
        },
        "cpu_limitations": config.cpu_limitations,
        "directx_panel": config.directx_panel,
        "environment": config.environment,
        "execution_context": context_to_dict(context),
        "imagefs": to_imagefs_ref(imagefs),
        "launch_windowed_mode": config.launch_windowed_mode,
        "start_param": config.start_param,
        "translations": {
            "box64": dict(config.box64_translations),
            "fex": dict(config.fex_translations),
        },
        "video_memory": config.video_memory,
    }, timestamp, timed=True)
