"""Naming suggester.

Proposes a component name that satisfies the target layer's naming pattern.
Concepts are taken from an optional analysis provider or, by default, from a
bilingual (Portuguese -> English) concept dictionary plus the meaningful
words of the description.  Candidates are generated per layer convention,
validated, then ranked by length, description coverage and readability.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import combinations
from typing import Optional

from khaos.config import NamingConfig

from .models import LayerId, NamingContext, NamingSuggestion, parse_layer
from .provider import AnalysisProvider, request_analysis
from .taxonomy import DEFAULT_TAXONOMY, LayerProfile, Taxonomy
from .text import EXTENDED_STOP_WORDS, is_stop_word, normalize_text, to_dash_case, to_pascal_case


# Keys are normalized (accent-free) words.
CONCEPT_DICTIONARY: dict[str, tuple[str, ...]] = {
    # Components
    "botao": ("button",),
    "input": ("input", "field"),
    "icone": ("icon",),
    "modal": ("modal", "dialog"),
    "formulario": ("form",),
    "lista": ("list",),
    "card": ("card",),
    "header": ("header",),
    "cabecalho": ("header",),
    "sidebar": ("sidebar",),
    "navegacao": ("navigation",),
    "tela": ("screen", "page"),
    "pagina": ("page",),
    "layout": ("layout",),
    "template": ("template",),
    # Adjectives
    "reutilizavel": ("reusable",),
    "simples": ("simple",),
    "complexo": ("complex",),
    "basico": ("basic",),
    "avancado": ("advanced",),
    # Actions
    "criar": ("create",),
    "editar": ("edit",),
    "deletar": ("delete",),
    "buscar": ("search", "find"),
    "filtrar": ("filter",),
    "ordenar": ("sort",),
    "validar": ("validate",),
    "formatar": ("format",),
}

RESERVED_WORDS = frozenset({
    "class", "function", "var", "let", "const", "if", "else", "for", "while",
    "return", "import", "export", "default", "interface", "type", "enum",
    "public", "private", "protected", "static", "readonly", "abstract",
})

GATEWAY_VERBS = ("find-one", "find-many", "create", "update", "delete")
UTIL_VERBS = ("format", "validate", "parse", "convert", "calculate")

FALLBACK_NAMES: dict[LayerId, str] = {
    LayerId.ATOM: "basic-atom",
    LayerId.MOLECULE: "basic-molecule",
    LayerId.ORGANISM: "basic-organism",
    LayerId.TEMPLATE: "basic-template",
    LayerId.FEATURE: "module-feature",  # with the default module prefix
    LayerId.LAYOUT: "basic-layout",
    LayerId.PARTICLE: "basic-particle",
    LayerId.MODEL: "basic-model",
    LayerId.ENTITY: "TBasicEntity",
    LayerId.UTIL: "basic-util",
    LayerId.GATEWAY: "find-one-basic",
    LayerId.REPOSITORY: "basic",
}


class NamingSuggester:
    """Suggests layer-conformant component names."""

    def __init__(
        self,
        taxonomy: Taxonomy = DEFAULT_TAXONOMY,
        config: NamingConfig | None = None,
        provider: AnalysisProvider | None = None,
    ) -> None:
        self.taxonomy = taxonomy
        self.config = config or NamingConfig()
        self.provider = provider

    def suggest_name(
        self,
        description: str,
        layer: LayerId | str,
        context: Optional[NamingContext] = None,
    ) -> NamingSuggestion:
        """Suggest a name for a component of *layer* described by *description*.

        Raises:
            InvalidLayerError: If *layer* is not a known layer id.
        """
        layer_id = parse_layer(layer)
        profile = self.taxonomy.profile(layer_id)
        context = context or NamingContext()

        concepts = self.extract_concepts(description)
        candidates = self.generate_candidates(concepts, layer_id, context)
        valid = [c for c in candidates if self.is_valid_name(c, profile, context)]
        ranked = sorted(valid, key=lambda c: self.score_name(c, description, profile), reverse=True)

        primary = ranked[0] if ranked else self.fallback_name(layer_id, context)
        return NamingSuggestion(
            primary=primary,
            alternatives=ranked[1:1 + self.config.max_alternatives],
            reasoning=self._explain(primary, concepts, profile, fallback=not ranked),
            confidence=self.naming_confidence(primary, description),
        )

    # ------------------------------------------------------------------
    # Concepts
    # ------------------------------------------------------------------

    def extract_concepts(self, description: str) -> list[str]:
        """Provider concepts when available, otherwise the dictionary lookup."""
        analysis = request_analysis(self.provider, description, {"purpose": "naming"})
        if analysis is not None:
            concepts = [c.strip() for c in analysis.concepts if c and c.strip()]
            if concepts:
                return list(dict.fromkeys(concepts))
        return self._rule_based_concepts(description)

    def _rule_based_concepts(self, description: str) -> list[str]:
        concepts: list[str] = []
        for word in normalize_text(description).split():
            if word in CONCEPT_DICTIONARY:
                concepts.extend(CONCEPT_DICTIONARY[word])
            elif len(word) > 3 and not is_stop_word(word, EXTENDED_STOP_WORDS):
                concepts.append(word)
        return list(dict.fromkeys(concepts))

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def generate_candidates(
        self, concepts: Sequence[str], layer: LayerId, context: NamingContext
    ) -> list[str]:
        prefix = context.prefix or ""
        if layer == LayerId.FEATURE and not prefix:
            prefix = f"{self._module_prefix(context)}-"
        suffix = context.suffix or ""

        names = [f"{prefix}{to_dash_case(c)}{suffix}" for c in concepts]
        names += [f"{prefix}{to_dash_case(f'{a}-{b}')}{suffix}" for a, b in combinations(concepts, 2)]
        names += self._layer_specific(concepts, layer, context)
        return [n for n in dict.fromkeys(names) if n]

    def _layer_specific(
        self, concepts: Sequence[str], layer: LayerId, context: NamingContext
    ) -> list[str]:
        if layer == LayerId.FEATURE:
            module = self._module_prefix(context)
            return [f"{module}-{to_dash_case(c)}" for c in concepts]
        if layer == LayerId.GATEWAY:
            return [f"{verb}-{to_dash_case(c)}" for verb in GATEWAY_VERBS for c in concepts]
        if layer == LayerId.ENTITY:
            return [f"T{to_pascal_case(c)}Entity" for c in concepts]
        if layer == LayerId.UTIL:
            return [f"{verb}-{to_dash_case(c)}" for verb in UTIL_VERBS for c in concepts]
        if layer == LayerId.REPOSITORY:
            return [to_dash_case(c) for c in concepts]
        return []

    def _module_prefix(self, context: NamingContext) -> str:
        return (context.prefix or self.config.module_prefix).rstrip("-")

    def fallback_name(self, layer: LayerId, context: NamingContext | None = None) -> str:
        """Name used when no candidate survives validation."""
        if layer == LayerId.FEATURE:
            return f"{self._module_prefix(context or NamingContext())}-feature"
        return FALLBACK_NAMES[layer]

    # ------------------------------------------------------------------
    # Validation & ranking
    # ------------------------------------------------------------------

    def is_valid_name(
        self, name: str, profile: LayerProfile, context: NamingContext | None = None
    ) -> bool:
        """Pattern, length, reserved-word and uniqueness checks."""
        if not profile.matches_name(name):
            return False
        if not self.config.min_length <= len(name) <= self.config.max_length:
            return False
        if name.lower() in RESERVED_WORDS:
            return False
        if context is not None and name in context.existing_names:
            return False
        return True

    def score_name(self, name: str, description: str, profile: LayerProfile) -> float:
        score = max(0, 20 - abs(len(name) - self.config.ideal_length))

        normalized = normalize_text(description)
        score += sum(15 for part in name.split("-") if part and part in normalized)

        if profile.matches_name(name):
            score += 10

        score += max(0, 10 - name.count("-") * 2)
        return score

    def naming_confidence(self, name: str, description: str) -> float:
        """Share of name segments found in the description, plus a 0.2 base."""
        if not name:
            return 0.0
        normalized = normalize_text(description)
        parts = name.split("-")
        matches = sum(1 for part in parts if part and part in normalized)
        return min(1.0, matches / len(parts) + 0.2)

    def _explain(
        self, name: str, concepts: Sequence[str], profile: LayerProfile, fallback: bool = False
    ) -> str:
        explanation = f"Name '{name}' chosen for layer '{profile.layer.value}' based on: "
        used = [c for c in concepts if c.lower() in name.lower()]
        if used:
            explanation += f"identified concepts ({', '.join(used)}), "
        elif fallback:
            explanation += "no valid candidate (layer fallback), "
        explanation += f"following pattern {profile.naming_pattern}"
        return explanation


def suggest_name(
    description: str,
    layer: LayerId | str,
    context: Optional[NamingContext] = None,
) -> NamingSuggestion:
    """Suggest a name with the default taxonomy and naming settings."""
    return NamingSuggester().suggest_name(description, layer, context)
