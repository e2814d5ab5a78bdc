"""Dependency analysis for classified components.

Given a description and its layer, derives the layers the component is
expected to depend on, validates them against the taxonomy's
allowed-dependency edges and produces the import and file manifests a
scaffolder needs.  Violations are reported as data; nothing here raises for a
bad dependency set.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import (
    DependencySet,
    FileSuggestion,
    HierarchyCheck,
    ImportKind,
    ImportSuggestion,
    LayerId,
    Severity,
    Violation,
    ViolationKind,
    parse_layer,
)
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy
from .text import contains_any, normalize_text


# ---------------------------------------------------------------------------
# Detection word lists
# ---------------------------------------------------------------------------

UI_ELEMENT_WORDS = ("botão", "button", "input", "ícone", "icon", "texto", "text")
COMPLEX_UI_WORDS = ("modal", "formulário", "form", "lista", "list", "navegação", "navigation")
BUSINESS_LOGIC_WORDS = ("validação", "validation", "regra", "rule", "lógica", "logic",
                        "processo", "process")
API_CALL_WORDS = ("api", "buscar", "fetch", "carregar", "load", "salvar", "save", "dados", "data")
TRANSFORMATION_WORDS = ("transformar", "transform", "converter", "convert", "mapear", "map",
                        "processar", "process")
FORMATTING_WORDS = ("formatar", "format", "formatação", "formatting", "máscara", "mask")
SHARED_STATE_WORDS = ("compartilhado", "shared", "global", "contexto", "context",
                      "estado", "state")
VALIDATION_WORDS = ("validação", "validation", "validar", "validate", "verificar", "verify")
SHARED_SERVICE_WORDS = ("serviço", "service", "compartilhado", "shared", "reutilizável",
                        "reusable")

# Feature flag -> dependency it implies.
_FEATURE_DEPENDENCIES: dict[str, LayerId] = {
    "validation": LayerId.UTIL,
    "formatting": LayerId.UTIL,
    "state-management": LayerId.PARTICLE,
}


# ---------------------------------------------------------------------------
# Import tables
# ---------------------------------------------------------------------------

def _named(module: str, imports: list[str], source: str, required: bool) -> ImportSuggestion:
    return ImportSuggestion(
        module=module, imports=imports, source=source, kind=ImportKind.NAMED, required=required
    )


_REACT_FC = _named("React", ["FC"], "react", True)
_TEST_ID = _named("TWithTestID", ["TWithTestID"], "@types/global", True)

_BASE_IMPORTS: dict[LayerId, tuple[ImportSuggestion, ...]] = {
    LayerId.ATOM: (_REACT_FC, _TEST_ID),
    LayerId.MOLECULE: (_REACT_FC, _TEST_ID),
    LayerId.ORGANISM: (_REACT_FC, _TEST_ID),
    LayerId.TEMPLATE: (_REACT_FC, _TEST_ID),
    LayerId.FEATURE: (_REACT_FC, _TEST_ID),
    LayerId.LAYOUT: (_REACT_FC,),
    LayerId.PARTICLE: (_REACT_FC,),
    LayerId.REPOSITORY: (_named("React", ["useCallback", "useMemo"], "react", True),),
}

# One representative import per dependency layer.
_DEPENDENCY_IMPORTS: dict[LayerId, ImportSuggestion] = {
    LayerId.ATOM: _named("ButtonAtom", ["ButtonAtom"], "atoms/button", False),
    LayerId.MOLECULE: _named("ModalMolecule", ["ModalMolecule"], "molecules/modal", False),
    LayerId.UTIL: _named("formatDateUtil", ["formatDateUtil"], "utils/format-date", False),
    LayerId.ENTITY: _named("TUserEntity", ["TUserEntity"], "entities/user", False),
    LayerId.GATEWAY: _named(
        "findOneUserGateway", ["findOneUserGateway"], "gateways/find-one-user", False
    ),
    LayerId.REPOSITORY: _named(
        "useUserRepository", ["useUserRepository"], "repositories/user", False
    ),
}

_USE_CASE_LAYERS = (LayerId.MOLECULE, LayerId.ORGANISM, LayerId.FEATURE)


def _dedupe(items: Iterable[LayerId]) -> list[LayerId]:
    return list(dict.fromkeys(items))


# ---------------------------------------------------------------------------
# DependencyAnalyzer
# ---------------------------------------------------------------------------

class DependencyAnalyzer:
    """Derives and validates the dependencies of a component."""

    def __init__(self, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> None:
        self.taxonomy = taxonomy
        self.taxonomy_cycle = taxonomy.find_cycle()

    def analyze_dependencies(
        self,
        description: str,
        layer: LayerId | str,
        features: Sequence[str] = (),
        declared: Iterable[LayerId | str] = (),
        name: str = "component",
    ) -> DependencySet:
        """Run the full dependency analysis for one component.

        Args:
            description: Natural-language component description.
            layer: The component's layer (a :class:`LayerId` or its value).
            features: Feature flags such as ``"validation"``.
            declared: Dependencies stated explicitly by the caller or an
                external analysis.  Appended to the derived ones.
            name: Base file name used in the file manifest.

        Raises:
            InvalidLayerError: If *layer* or a declared dependency is unknown.
        """
        layer_id = parse_layer(layer)
        declared_ids = [parse_layer(dep) for dep in declared]
        normalized = normalize_text(description)

        required = self._required_dependencies(normalized, layer_id, features, declared_ids)
        optional = self._optional_dependencies(normalized, layer_id)
        hierarchy = self.validate_hierarchy(layer_id, [*required, *optional])

        return DependencySet(
            required=required,
            optional=optional,
            violations=self.detect_violations(layer_id, required, optional, hierarchy),
            hierarchy_check=hierarchy,
            imports=self.suggest_imports(layer_id, [*required, *optional]),
            structure=self.suggest_structure(layer_id, features, name),
        )

    def validate_hierarchy(
        self, layer: LayerId | str, dependencies: Iterable[LayerId | str]
    ) -> HierarchyCheck:
        """Check each dependency against the layer's allowed-dependency list."""
        layer_id = parse_layer(layer)
        allowed = self.taxonomy.allowed_dependencies(layer_id)
        violations = [
            f"Layer '{layer_id.value}' cannot depend on '{dep.value}'"
            for dep in (parse_layer(d) for d in dependencies)
            if dep not in allowed
        ]
        return HierarchyCheck(
            is_valid=not violations, violations=violations, allowed_dependencies=allowed
        )

    def detect_violations(
        self,
        layer: LayerId,
        required: Sequence[LayerId],
        optional: Sequence[LayerId],
        hierarchy: HierarchyCheck,
    ) -> list[Violation]:
        violations = [
            Violation(
                kind=ViolationKind.INVALID_LAYER,
                message=message,
                severity=Severity.ERROR,
                suggestion="Remove dependency or restructure component",
            )
            for message in hierarchy.violations
        ]

        if layer == LayerId.MOLECULE and LayerId.ATOM not in required:
            violations.append(Violation(
                kind=ViolationKind.MISSING_DEPENDENCY,
                message="Molecules should typically use atoms",
                severity=Severity.WARNING,
                suggestion="Consider using atomic components",
            ))

        if layer == LayerId.FEATURE and LayerId.TEMPLATE not in required:
            violations.append(Violation(
                kind=ViolationKind.MISSING_DEPENDENCY,
                message="Features must render templates exclusively",
                severity=Severity.ERROR,
                suggestion="Add template dependency",
            ))

        cycle_through = self._circular_dependency(layer, [*required, *optional])
        if cycle_through is not None:
            if cycle_through == layer:
                message = f"Circular dependency detected: '{layer.value}' depends on itself"
            else:
                message = (
                    f"Circular dependency detected: '{layer.value}' -> "
                    f"'{cycle_through.value}' -> '{layer.value}'"
                )
            violations.append(Violation(
                kind=ViolationKind.CIRCULAR,
                message=message,
                severity=Severity.ERROR,
                suggestion="Restructure dependencies to avoid cycles",
            ))
        elif self.taxonomy_cycle is not None:
            path = " -> ".join(f"'{step.value}'" for step in self.taxonomy_cycle)
            violations.append(Violation(
                kind=ViolationKind.CIRCULAR,
                message=f"Circular dependency detected in taxonomy: {path}",
                severity=Severity.ERROR,
                suggestion="Remove one of the allowed dependencies that form the cycle",
            ))

        return violations

    def suggest_imports(
        self, layer: LayerId, dependencies: Iterable[LayerId]
    ) -> list[ImportSuggestion]:
        """Base imports for *layer* plus one import per dependency layer."""
        imports = list(_BASE_IMPORTS.get(layer, ()))
        imports.extend(_DEPENDENCY_IMPORTS[dep] for dep in dependencies if dep in _DEPENDENCY_IMPORTS)

        seen: set[tuple[str, tuple[str, ...]]] = set()
        unique: list[ImportSuggestion] = []
        for imp in imports:
            key = (imp.source, tuple(imp.imports))
            if key not in seen:
                seen.add(key)
                unique.append(imp)
        return unique

    def suggest_structure(
        self, layer: LayerId, features: Sequence[str] = (), name: str = "component"
    ) -> list[FileSuggestion]:
        """File manifest for a component of *layer* named *name*."""
        files = [
            FileSuggestion(filename=f"{name}.{layer.value}.tsx", purpose="Main component file"),
            FileSuggestion(filename=f"{name}.type.ts", purpose="Type definitions"),
            FileSuggestion(filename="index.ts", purpose="Export barrel"),
        ]
        stories = FileSuggestion(
            filename=f"{name}.stories.tsx", purpose="Storybook stories", required=False
        )
        unit_test = FileSuggestion(filename=f"{name}.spec.ts", purpose="Unit tests", required=False)

        if layer == LayerId.ATOM:
            files += [stories, unit_test]
        elif layer in _USE_CASE_LAYERS:
            files.append(FileSuggestion(filename=f"{name}.use-case.ts", purpose="Business logic hook"))
            files += [stories, unit_test]
            if layer == LayerId.ORGANISM and "validation" in features:
                files.append(FileSuggestion(
                    filename=f"{name}.scheme.ts", purpose="Validation schema", required=False
                ))
        elif layer == LayerId.UTIL:
            files.append(unit_test.model_copy(update={"required": True}))

        return files

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _required_dependencies(
        self,
        normalized: str,
        layer: LayerId,
        features: Sequence[str],
        declared: Sequence[LayerId],
    ) -> list[LayerId]:
        deps: list[LayerId] = []

        if layer == LayerId.MOLECULE:
            if contains_any(normalized, UI_ELEMENT_WORDS):
                deps.append(LayerId.ATOM)
        elif layer == LayerId.ORGANISM:
            if contains_any(normalized, COMPLEX_UI_WORDS):
                deps += [LayerId.MOLECULE, LayerId.ATOM]
        elif layer == LayerId.TEMPLATE:
            deps += [LayerId.ORGANISM, LayerId.MOLECULE, LayerId.ATOM]
        elif layer == LayerId.FEATURE:
            deps.append(LayerId.TEMPLATE)
            if contains_any(normalized, BUSINESS_LOGIC_WORDS):
                deps += [LayerId.MODEL, LayerId.REPOSITORY]
            if contains_any(normalized, API_CALL_WORDS):
                deps += [LayerId.GATEWAY, LayerId.ENTITY]
        elif layer == LayerId.REPOSITORY:
            deps.append(LayerId.GATEWAY)
            if contains_any(normalized, TRANSFORMATION_WORDS):
                deps.append(LayerId.MODEL)
            deps.append(LayerId.ENTITY)
        elif layer in (LayerId.GATEWAY, LayerId.MODEL):
            deps.append(LayerId.ENTITY)

        for feature in features:
            implied = _FEATURE_DEPENDENCIES.get(feature)
            if implied is not None:
                deps.append(implied)

        deps.extend(declared)
        return _dedupe(deps)

    def _optional_dependencies(self, normalized: str, layer: LayerId) -> list[LayerId]:
        deps: list[LayerId] = []
        if contains_any(normalized, FORMATTING_WORDS):
            deps.append(LayerId.UTIL)
        if contains_any(normalized, SHARED_STATE_WORDS):
            deps.append(LayerId.PARTICLE)
        if layer == LayerId.ORGANISM and contains_any(normalized, VALIDATION_WORDS):
            deps.append(LayerId.UTIL)
        if layer == LayerId.FEATURE and contains_any(normalized, SHARED_SERVICE_WORDS):
            deps.append(LayerId.PARTICLE)
        return _dedupe(deps)

    def _circular_dependency(
        self, layer: LayerId, dependencies: Sequence[LayerId]
    ) -> LayerId | None:
        """Return the dependency that closes a cycle back to *layer*, if any."""
        for dep in dependencies:
            if dep == layer or self.taxonomy.can_reach(dep, layer):
                return dep
        return None


def analyze_dependencies(
    description: str,
    layer: LayerId | str,
    features: Sequence[str] = (),
    declared: Iterable[LayerId | str] = (),
    name: str = "component",
) -> DependencySet:
    """Analyze dependencies with the default taxonomy."""
    return DependencyAnalyzer().analyze_dependencies(
        description, layer, features, declared=declared, name=name
    )
