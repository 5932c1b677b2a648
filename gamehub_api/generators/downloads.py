"""components/downloads — flat list of every downloadable file."""

from __future__ import annotations

from gamehub_api.catalog import Component, ComponentRegistry
from .documents import success


def to_download_entry(c: Component) -> dict:
    # No id, logo, display_name, version_code or is_ui in this view.
    return {
        "download_url": c.download_url,
        "file_md5": c.file_md5,
        "file_name": c.file_name,
        "file_size": c.file_size,
        "name": c.name,
        "type": c.type,
        "version": c.version,
    }


def _download_order(c: Component) -> tuple:
    # plain code point order on the name within a type
    return (c.type, c.name)


def generate_downloads(registry: ComponentRegistry) -> dict:
    components = sorted(registry.get_all_components(), key=_download_order)
    downloads = [to_download_entry(c) for c in components]
    return success({
        "downloads": downloads,
        "total": len(downloads),
    })
