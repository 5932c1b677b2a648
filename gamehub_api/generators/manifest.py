"""Per-type manifests (components/*_manifest) and the components index."""

from __future__ import annotations

from gamehub_api.catalog import COMPONENT_TYPE_META, COMPONENT_TYPES, Component, ComponentRegistry
from .documents import success


def to_manifest_component(c: Component) -> dict:
    # keys in alphabetical order, matching the published files
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


def generate_manifest(registry: ComponentRegistry, component_type: int) -> dict:
    """Manifest for one component type, newest id first."""
    meta = COMPONENT_TYPE_META[component_type]
    components = registry.sort_by_id_descending(registry.get_by_type(component_type))
    entries = [to_manifest_component(c) for c in components]

    return success({
        "type": int(component_type),
        "type_name": meta.name,
        "display_name": meta.display_name,
        "total": len(entries),
        "components": entries,
    })


def generate_all_manifests(registry: ComponentRegistry) -> dict[str, dict]:
    """Manifest name → manifest document, for types 1..7 in order."""
    return {
        COMPONENT_TYPE_META[t].manifest: generate_manifest(registry, t)
        for t in COMPONENT_TYPES
    }


def generate_index(registry: ComponentRegistry) -> dict:
    categories = []
    for t in COMPONENT_TYPES:
        meta = COMPONENT_TYPE_META[t]
        categories.append({
            "count": registry.get_count_by_type(t),
            "display_name": meta.display_name,
            "manifest_url": f"/components/{meta.manifest}",
            "name": meta.name,
            "type": t,
        })

    return success({
        "categories": categories,
        "total_components": registry.get_total_count(),
    })
