"""Projection generators — registry state to output documents.

Submodules:
  documents  Response envelope, build timestamp, GenerationError.
  manifest   Per-type manifests and the components index.
  downloads  Flat download list.
  simulator  simulator/v2/* and simulator/executeScript/* fixtures.
"""

from .documents import GenerationError, get_timestamp, success
from .manifest import generate_manifest, generate_all_manifests, generate_index
from .downloads import generate_downloads
from .simulator import (
    VARIANTS,
    generate_all_component_list,
    generate_component_list,
    generate_container_list,
    generate_default_component,
    generate_imagefs_detail,
    generate_execute_script,
)

__all__ = [
    # Envelope
    "GenerationError", "get_timestamp", "success",
    # Components
    "generate_manifest", "generate_all_manifests", "generate_index",
    "generate_downloads",
    # Simulator
    "VARIANTS", "generate_all_component_list", "generate_component_list",
    "generate_container_list", "generate_default_component",
    "generate_imagefs_detail", "generate_execute_script",
]
