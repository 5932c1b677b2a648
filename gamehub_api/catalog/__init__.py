"""Component catalog — models, source loading, registry and validation."""

from .models import (
    ComponentType, TypeMeta, COMPONENT_TYPE_META, COMPONENT_TYPES,
    Component, SubData, Container, Imagefs, ExecutionContext, Defaults,
    Controller, ExecutionConfig, ComponentOrigin, ValidationResult,
)
from .records import CatalogEntry, OverrideEntry, to_component
from .registry import ComponentRegistry, RegistryFrozenError, build_registry
from .validation import validate_registry
from .sources import (
    SourceError, BuildSources, parse_xml_content, parse_xml_file,
    parse_custom_components, load_containers, load_imagefs, load_defaults,
    load_execution_config, load_sources,
)

__all__ = [
    # Models
    "ComponentType", "TypeMeta", "COMPONENT_TYPE_META", "COMPONENT_TYPES",
    "Component", "SubData", "Container", "Imagefs", "ExecutionContext",
    "Defaults", "Controller", "ExecutionConfig", "ComponentOrigin",
    "ValidationResult",
    # Records
    "CatalogEntry", "OverrideEntry", "to_component",
    # Registry / Validation
    "ComponentRegistry", "RegistryFrozenError", "build_registry",
    "validate_registry",
    # Sources
    "SourceError", "BuildSources", "parse_xml_content", "parse_xml_file",
    "parse_custom_components", "load_containers", "load_imagefs",
    "load_defaults", "load_execution_config", "load_sources",
]
