"""Layer taxonomy for the Khaos architecture.

Holds one :class:`LayerProfile` per layer: the bilingual keyword set used by
the classifier, tier labels, scoring weight, the authoritative list of
allowed dependencies and the naming pattern a component name must satisfy.

``DEFAULT_TAXONOMY`` is built once at import time and never mutated.  The
analyzers take a :class:`Taxonomy` argument so tests can inject alternates.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from .models import LayerId, Tier, parse_layer

DASH_CASE_PATTERN = r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$"
FEATURE_PATTERN = r"^[a-z][a-z0-9]*-[a-z0-9]+(-[a-z0-9]+)*$"
ENTITY_PATTERN = r"^T[A-Z][a-zA-Z]*Entity$"
GATEWAY_PATTERN = r"^(find-one|find-many|create|update|delete)-[a-z0-9]+(-[a-z0-9]+)*$"


class LayerProfile(BaseModel):
    """Static description of one layer."""

    model_config = ConfigDict(frozen=True)

    layer: LayerId = Field(..., description="Layer this profile describes")
    keywords: tuple[str, ...] = Field(default=(), description="Portuguese + English match words")
    complexity: Tier = Field(default=Tier.MEDIUM)
    dependency_tier: str = Field(
        default="none", description="Informational label, e.g. 'molecules+atoms'"
    )
    reusability: Tier = Field(default=Tier.MEDIUM)
    weight: float = Field(default=1.0, gt=0.0, description="Raw score multiplier")
    allowed_dependencies: tuple[LayerId, ...] = Field(
        default=(), description="Layers this layer may depend on"
    )
    naming_pattern: str = Field(default=DASH_CASE_PATTERN)
    component_suffix: str = Field(default="", description="Exported component suffix, e.g. 'Atom'")
    directory: str = Field(default="", description="Plural source directory, e.g. 'atoms'")

    def matches_name(self, name: str) -> bool:
        """Return ``True`` if *name* satisfies this layer's naming pattern."""
        return re.match(self.naming_pattern, name) is not None


class Taxonomy:
    """Read-only registry of layer profiles keyed by :class:`LayerId`."""

    def __init__(self, profiles: Mapping[LayerId, LayerProfile] | list[LayerProfile]) -> None:
        if isinstance(profiles, Mapping):
            items = dict(profiles)
        else:
            items = {p.layer: p for p in profiles}
        self._profiles: Mapping[LayerId, LayerProfile] = MappingProxyType(items)

    def __iter__(self) -> Iterator[LayerProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, layer: object) -> bool:
        return layer in self._profiles

    @property
    def layers(self) -> list[LayerId]:
        return list(self._profiles)

    def profile(self, layer: LayerId | str) -> LayerProfile:
        """Return the profile for *layer*.

        Raises:
            InvalidLayerError: If *layer* is not a known layer id.
            KeyError: If the layer id is valid but missing from this taxonomy.
        """
        layer_id = parse_layer(layer)
        try:
            return self._profiles[layer_id]
        except KeyError:
            raise KeyError(f"Layer '{layer_id.value}' has no profile in this taxonomy") from None

    def allowed_dependencies(self, layer: LayerId | str) -> list[LayerId]:
        return list(self.profile(layer).allowed_dependencies)

    def by_directory(self, directory: str) -> LayerId | None:
        """Map a plural directory name (``"molecules"``) back to its layer."""
        for profile in self._profiles.values():
            if profile.directory and profile.directory == directory:
                return profile.layer
        return None

    def with_weights(self, weights: Mapping[LayerId, float]) -> "Taxonomy":
        """Return a copy of this taxonomy with some layer weights replaced."""
        if not weights:
            return self
        return Taxonomy({
            layer: (
                profile.model_copy(update={"weight": weights[layer]})
                if layer in weights else profile
            )
            for layer, profile in self._profiles.items()
        })

    # ------------------------------------------------------------------
    # Graph queries
    # ------------------------------------------------------------------

    def can_reach(self, start: LayerId, target: LayerId) -> bool:
        """Return ``True`` if *target* is reachable from *start* via allowed-dependency edges."""
        seen: set[LayerId] = set()
        stack = [start]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            profile = self._profiles.get(current)
            if profile is None:
                continue
            for dep in profile.allowed_dependencies:
                if dep == target:
                    return True
                stack.append(dep)
        return False

    def find_cycle(self) -> list[LayerId] | None:
        """Return one dependency cycle as a list of layers, or ``None`` if acyclic."""
        visiting: list[LayerId] = []
        done: set[LayerId] = set()

        def _visit(layer: LayerId) -> list[LayerId] | None:
            if layer in visiting:
                return visiting[visiting.index(layer):] + [layer]
            if layer in done:
                return None
            visiting.append(layer)
            profile = self._profiles.get(layer)
            for dep in profile.allowed_dependencies if profile else ():
                cycle = _visit(dep)
                if cycle:
                    return cycle
            visiting.pop()
            done.add(layer)
            return None

        for layer in self._profiles:
            cycle = _visit(layer)
            if cycle:
                return cycle
        return None


# ---------------------------------------------------------------------------
# Default taxonomy
# ---------------------------------------------------------------------------

_L = LayerId

DEFAULT_TAXONOMY = Taxonomy([
    LayerProfile(
        layer=_L.ATOM,
        keywords=("botão", "button", "input", "ícone", "icon", "texto", "text",
                  "imagem", "image", "básico", "basic", "simples", "simple"),
        complexity=Tier.LOW,
        dependency_tier="none",
        reusability=Tier.HIGH,
        weight=1.0,
        allowed_dependencies=(),
        component_suffix="Atom",
        directory="atoms",
    ),
    LayerProfile(
        layer=_L.MOLECULE,
        keywords=("modal", "card", "formulário", "form", "lista", "list",
                  "combinação", "combination", "dropdown", "select"),
        complexity=Tier.MEDIUM,
        dependency_tier="atoms",
        reusability=Tier.MEDIUM,
        weight=1.2,
        allowed_dependencies=(_L.ATOM,),
        component_suffix="Molecule",
        directory="molecules",
    ),
    LayerProfile(
        layer=_L.ORGANISM,
        keywords=("header", "cabeçalho", "sidebar", "navegação", "navigation",
                  "complexo", "complex", "seção", "section"),
        complexity=Tier.HIGH,
        dependency_tier="molecules+atoms",
        reusability=Tier.MEDIUM,
        weight=1.5,
        allowed_dependencies=(_L.MOLECULE, _L.ATOM),
        component_suffix="Organism",
        directory="organisms",
    ),
    LayerProfile(
        layer=_L.TEMPLATE,
        keywords=("layout", "estrutura", "structure", "página", "page", "grid", "template"),
        complexity=Tier.MEDIUM,
        dependency_tier="organisms+molecules+atoms",
        reusability=Tier.LOW,
        weight=1.3,
        allowed_dependencies=(_L.ORGANISM, _L.MOLECULE, _L.ATOM, _L.UTIL),
        component_suffix="Template",
        directory="templates",
    ),
    LayerProfile(
        layer=_L.FEATURE,
        keywords=("tela", "screen", "página", "page", "funcionalidade", "functionality",
                  "fluxo", "flow", "processo", "process"),
        complexity=Tier.HIGH,
        dependency_tier="all",
        reusability=Tier.LOW,
        weight=2.0,
        allowed_dependencies=(_L.TEMPLATE, _L.ORGANISM, _L.MOLECULE, _L.ATOM, _L.UTIL,
                              _L.MODEL, _L.ENTITY, _L.GATEWAY, _L.REPOSITORY),
        naming_pattern=FEATURE_PATTERN,
        component_suffix="Feature",
        directory="features",
    ),
    LayerProfile(
        layer=_L.LAYOUT,
        keywords=("navegação", "navigation", "stack", "tabs", "drawer", "rota", "route"),
        complexity=Tier.LOW,
        dependency_tier="navigation",
        reusability=Tier.HIGH,
        weight=1.1,
        allowed_dependencies=(_L.FEATURE,),
        component_suffix="Layout",
        directory="layouts",
    ),
    LayerProfile(
        layer=_L.PARTICLE,
        keywords=("serviço", "service", "contexto", "context", "provider",
                  "compartilhado", "shared"),
        complexity=Tier.MEDIUM,
        dependency_tier="services+contexts",
        reusability=Tier.HIGH,
        weight=1.4,
        allowed_dependencies=(_L.UTIL,),
        component_suffix="Particle",
        directory="particles",
    ),
    LayerProfile(
        layer=_L.MODEL,
        keywords=("modelo", "model", "regra", "rule", "negócio", "business",
                  "transformação", "transformation"),
        complexity=Tier.MEDIUM,
        dependency_tier="entities",
        reusability=Tier.HIGH,
        weight=1.3,
        allowed_dependencies=(_L.ENTITY,),
        component_suffix="Model",
        directory="models",
    ),
    LayerProfile(
        layer=_L.ENTITY,
        keywords=("tipo", "type", "dados", "data", "api", "interface", "estrutura", "structure"),
        complexity=Tier.LOW,
        dependency_tier="none",
        reusability=Tier.HIGH,
        weight=1.0,
        allowed_dependencies=(),
        naming_pattern=ENTITY_PATTERN,
        component_suffix="",
        directory="entities",
    ),
    LayerProfile(
        layer=_L.UTIL,
        keywords=("utilitário", "utility", "helper", "função", "function",
                  "formatador", "formatter", "validador", "validator"),
        complexity=Tier.LOW,
        dependency_tier="none",
        reusability=Tier.HIGH,
        weight=1.0,
        allowed_dependencies=(),
        component_suffix="Util",
        directory="utils",
    ),
    LayerProfile(
        layer=_L.GATEWAY,
        keywords=("api", "chamada", "call", "requisição", "request", "externo",
                  "external", "buscar", "fetch"),
        complexity=Tier.MEDIUM,
        dependency_tier="entities",
        reusability=Tier.MEDIUM,
        weight=1.2,
        allowed_dependencies=(_L.ENTITY,),
        naming_pattern=GATEWAY_PATTERN,
        component_suffix="Gateway",
        directory="gateways",
    ),
    LayerProfile(
        layer=_L.REPOSITORY,
        keywords=("orquestração", "orchestration", "combinação", "combination",
                  "múltiplos", "multiple", "gerenciamento", "management"),
        complexity=Tier.HIGH,
        dependency_tier="gateways+models",
        reusability=Tier.MEDIUM,
        weight=1.6,
        allowed_dependencies=(_L.GATEWAY, _L.MODEL, _L.ENTITY),
        component_suffix="Repository",
        directory="repositories",
    ),
])


def get_profile(layer: LayerId | str) -> LayerProfile:
    """Shortcut for ``DEFAULT_TAXONOMY.profile(layer)``."""
    return DEFAULT_TAXONOMY.profile(layer)
