"""Document paths and JSON output."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gamehub_api.catalog import ComponentRegistry
from gamehub_api.generators import (
    generate_all_component_list,
    generate_all_manifests,
    generate_component_list,
    generate_container_list,
    generate_default_component,
    generate_downloads,
    generate_execute_script,
    generate_imagefs_detail,
    generate_index,
)


log = logging.getLogger("gamehub.output")


def format_json(data: Any) -> str:
    """2-space indented JSON.  Keys stay in insertion order, no trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_documents(registry: ComponentRegistry, timestamp: str) -> dict[str, dict]:
    """Every output document keyed by its path relative to the output root.

    Raises GenerationError if a strict reference cannot be resolved; in that
    case nothing should be written.
    """
    docs: dict[str, dict] = {}

    for name, manifest in generate_all_manifests(registry).items():
        docs[f"components/{name}"] = manifest
    docs["components/index"] = generate_index(registry)
    docs["components/downloads"] = generate_downloads(registry)

    docs["simulator/v2/getAllComponentList"] = generate_all_component_list(registry, timestamp)
    docs["simulator/v2/getComponentList"] = generate_component_list(registry, timestamp)
    docs["simulator/v2/getContainerList"] = generate_container_list(registry, timestamp)
    docs["simulator/v2/getDefaultComponent"] = generate_default_component(registry, timestamp)
    docs["simulator/v2/getImagefsDetail"] = generate_imagefs_detail(registry, timestamp)
    docs["simulator/executeScript/generic"] = generate_execute_script(registry, "generic", timestamp)
    docs["simulator/executeScript/qualcomm"] = generate_execute_script(registry, "qualcomm", timestamp)

    return docs


def write_output(base_path: Path, relative_path: str, data: Any) -> Path:
    full_path = Path(base_path) / relative_path
    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_text(format_json(data), encoding="utf-8")
    log.info("  wrote %s", relative_path)
    return full_path


def write_documents(base_path: Path, documents: dict[str, dict]) -> list[Path]:
    return [write_output(base_path, rel, doc) for rel, doc in documents.items()]
