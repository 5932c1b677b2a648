"""Component registry — the canonical, deduplicated store one build pass reads from.

Lifecycle: construct with a BuildConfig, add components and reference data,
then ``freeze()``.  Validation and every generator work on the frozen value;
nothing is global.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from gamehub_api.config import BuildConfig
from .models import (
    COMPONENT_TYPE_META, COMPONENT_TYPES, Component, ComponentOrigin,
    Container, Defaults, ExecutionConfig, Imagefs, TypeMeta, ValidationResult,
)


log = logging.getLogger("gamehub.registry")


class RegistryFrozenError(Exception):
    """Raised when the registry is modified after the load phase ended."""


class ComponentRegistry:
    """Central store for components and the singleton reference datasets."""

    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self._by_id: dict[int, Component] = {}
        self._by_name: dict[str, Component] = {}
        self._by_type: dict[int, list[Component]] = {t: [] for t in COMPONENT_TYPES}
        self._origins: dict[int, ComponentOrigin] = {}
        self._frozen = False

        self.containers: tuple[Container, ...] = ()
        self.imagefs: Imagefs | None = None
        self.defaults: Defaults | None = None
        self.execution_config: ExecutionConfig | None = None

    # ── Load phase ─────────────────────────────────────────────────

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Registry is frozen; the load phase has ended")

    def add_component(self, component: Component) -> bool:
        """Register *component*.  Returns False when its id was already taken.

        The first registration of an id wins; later ones are discarded with
        a warning.  download_url and logo are replaced by the configured
        values whatever the source said.
        """
        self._check_mutable()

        existing = self._by_id.get(component.id)
        if existing is not None:
            log.warning(
                'Duplicate ID %d: "%s" conflicts with "%s". Keeping first.',
                component.id, component.name, existing.name,
            )
            return False

        if component.type not in self._by_type:
            raise ValueError(f"Component {component.id}: unknown type {component.type}")

        rewritten = replace(
            component,
            download_url=f"{self.config.cdn_base_url}/{component.file_name}",
            logo=self.config.logo_url,
        )
        self._by_id[component.id] = rewritten
        self._by_name[component.name] = rewritten
        self._by_type[component.type].append(rewritten)
        self._origins[component.id] = ComponentOrigin(
            id=component.id,
            name=component.name,
            original_download_url=component.download_url,
            asset_name=component.file_name,
        )
        return True

    def add_components(self, components: Iterable[Component]) -> None:
        for component in components:
            self.add_component(component)

    def set_reference_data(
        self,
        *,
        containers: Iterable[Container] | None = None,
        imagefs: Imagefs | None = None,
        defaults: Defaults | None = None,
        execution_config: ExecutionConfig | None = None,
    ) -> None:
        """Load the singleton datasets.  Arguments left as None are untouched."""
        self._check_mutable()
        if containers is not None:
            self.containers = tuple(containers)
        if imagefs is not None:
            self.imagefs = imagefs
        if defaults is not None:
            self.defaults = defaults
        if execution_config is not None:
            self.execution_config = execution_config

    def freeze(self) -> ComponentRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── Lookups ────────────────────────────────────────────────────

    def get_by_id(self, component_id: int) -> Component | None:
        return self._by_id.get(component_id)

    def get_by_name(self, name: str) -> Component | None:
        return self._by_name.get(name)

    def get_by_type(self, component_type: int) -> list[Component]:
        """Components of one type in registration order (a copy)."""
        return list(self._by_type.get(component_type, ()))

    def get_all_components(self) -> list[Component]:
        return list(self._by_id.values())

    def get_total_count(self) -> int:
        return len(self._by_id)

    def get_count_by_type(self, component_type: int) -> int:
        return len(self._by_type.get(component_type, ()))

    def get_counts_by_type(self) -> dict[int, int]:
        return {t: self.get_count_by_type(t) for t in COMPONENT_TYPES}

    def get_highest_id(self) -> int:
        return max(self._by_id, default=0)

    def get_container(self, container_id: int) -> Container | None:
        for container in self.containers:
            if container.id == container_id:
                return container
        return None

    def get_type_meta(self, component_type: int) -> TypeMeta:
        return COMPONENT_TYPE_META[component_type]

    def get_origin(self, component_id: int) -> ComponentOrigin | None:
        return self._origins.get(component_id)

    def get_all_origins(self) -> list[ComponentOrigin]:
        return list(self._origins.values())

    # ── Ordering ───────────────────────────────────────────────────

    @staticmethod
    def sort_by_id_descending(components: Iterable[Component]) -> list[Component]:
        """Newest first.  Stable: equal ids keep their input order."""
        return sorted(components, key=lambda c: -c.id)

    @staticmethod
    def sort_by_type_and_id_descending(components: Iterable[Component]) -> list[Component]:
        """Type ascending, then id descending within each type."""
        return sorted(components, key=lambda c: (c.type, -c.id))

    # ── Validation ─────────────────────────────────────────────────

    def validate(self) -> ValidationResult:
        from .validation import validate_registry
        return validate_registry(self)


def build_registry(
    config: BuildConfig,
    components: Iterable[Component],
    *,
    containers: Iterable[Container] = (),
    imagefs: Imagefs | None = None,
    defaults: Defaults | None = None,
    execution_config: ExecutionConfig | None = None,
) -> ComponentRegistry:
    """Construct, populate and freeze a registry in one step."""
    registry = ComponentRegistry(config)
    registry.add_components(components)
    registry.set_reference_data(
        containers=containers,
        imagefs=imagefs,
        defaults=defaults,
        execution_config=execution_config,
    )
    return registry.freeze()
