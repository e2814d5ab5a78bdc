"""Rule-weighted layer classifier.

Scores a free-text component description against every layer profile in the
taxonomy and ranks the results.  Pure keyword heuristics -- no AI calls.

Per profile the raw score is the sum of four sub-scores (keyword, feature,
complexity-tier and dependency-tier matches), multiplied by the profile
weight and floored at zero.  Confidence is the margin of the winner over the
runner-up.  If scoring fails for any reason the classifier degrades to a
fixed keyword cascade that cannot fail.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from khaos.config import ScoringConfig
from khaos.utils import print_warning

from .models import ClassificationCandidate, ClassificationResult, LayerId, Tier
from .taxonomy import DEFAULT_TAXONOMY, LayerProfile, Taxonomy
from .text import contains_any, meaningful_words, normalize_text


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_COMPLEXITY_INDICATORS: dict[Tier, tuple[str, ...]] = {
    Tier.LOW: ("simples", "básico", "pequeno", "único", "simple", "basic", "small", "single"),
    Tier.MEDIUM: ("médio", "combinação", "grupo", "conjunto", "medium", "combination", "group", "set"),
    Tier.HIGH: ("complexo", "avançado", "múltiplo", "completo", "complex", "advanced",
                "multiple", "complete"),
}

# Keyed by LayerProfile.dependency_tier; tiers not listed score nothing.
_DEPENDENCY_TIER_KEYWORDS: dict[str, tuple[str, ...]] = {
    "none": ("independente", "isolado", "standalone", "independent"),
    "atoms": ("átomo", "elemento", "componente", "atom", "element", "component"),
    "molecules+atoms": ("molécula", "combinação", "molecule", "combination"),
    "all": ("tudo", "completo", "integrado", "all", "complete", "integrated"),
}

_SYNONYMS: dict[str, tuple[str, ...]] = {
    "botao": ("button", "btn", "clique", "click"),
    "modal": ("popup", "dialog", "overlay"),
    "formulario": ("form", "input", "campo", "field"),
    "tela": ("screen", "page", "pagina", "view"),
}

# Ordered cascade used when scoring cannot produce a ranking.
_FALLBACK_RULES: tuple[tuple[tuple[str, ...], LayerId, float, str], ...] = (
    (("botão", "input", "ícone", "button", "icon"), LayerId.ATOM, 0.7,
     "basic elements identified"),
    (("modal", "card", "formulário", "form"), LayerId.MOLECULE, 0.6,
     "composite components identified"),
    (("header", "sidebar", "navegação", "navigation"), LayerId.ORGANISM, 0.6,
     "complex components identified"),
    (("tela", "página", "screen", "page"), LayerId.FEATURE, 0.5,
     "complete feature identified"),
)
_FALLBACK_DEFAULT = (LayerId.ATOM, 0.3, "default classification")


# ---------------------------------------------------------------------------
# LayerClassifier
# ---------------------------------------------------------------------------

class LayerClassifier:
    """Classifies descriptions into taxonomy layers.

    Stateless apart from the injected taxonomy and scoring constants, so one
    instance can be shared freely.
    """

    def __init__(
        self,
        taxonomy: Taxonomy = DEFAULT_TAXONOMY,
        scoring: ScoringConfig | None = None,
    ) -> None:
        self.taxonomy = taxonomy
        self.scoring = scoring or ScoringConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(self, description: str, features: Sequence[str] = ()) -> ClassificationResult:
        """Classify *description* into a ranked list of layers.

        Args:
            description: Natural-language component description.
            features: Extra feature tags supplied by the caller.

        Returns:
            A :class:`ClassificationResult`.  Never raises for any string
            input; scoring failures resolve through the fallback cascade.
        """
        try:
            ranked = self.rank(description, features)
        except Exception as exc:  # noqa: BLE001
            print_warning(f"Layer scoring failed, using fallback classification: {exc}")
            return self.fallback_classification(description)

        if not ranked:
            return self.fallback_classification(description)

        primary = ranked[0]
        alternatives = ranked[1:1 + self.scoring.max_alternatives]
        secondary_score = ranked[1].score if len(ranked) > 1 else 0.0
        return ClassificationResult(
            primary=primary,
            alternatives=alternatives,
            confidence=self.calculate_confidence(primary.score, secondary_score),
            reasoning=self._generate_reasoning(description, primary, alternatives),
        )

    def rank(self, description: str, features: Sequence[str] = ()) -> list[ClassificationCandidate]:
        """Score every layer and return candidates sorted by descending score.

        Ties keep taxonomy order.
        """
        scores = self.score_layers(description, features)
        candidates = [ClassificationCandidate(layer=layer, score=score) for layer, score in scores.items()]
        return sorted(candidates, key=lambda c: c.score, reverse=True)

    def score_layers(self, description: str, features: Sequence[str] = ()) -> dict[LayerId, float]:
        """Return the weighted score of every layer in the taxonomy."""
        normalized = normalize_text(description)
        all_features = [*features, *meaningful_words(description)]

        scores: dict[LayerId, float] = {}
        for profile in self.taxonomy:
            raw = (
                self._keyword_score(normalized, profile.keywords)
                + self._feature_score(all_features, profile.keywords)
                + self._complexity_score(normalized, profile.complexity)
                + self._dependency_score(normalized, profile.dependency_tier)
            )
            scores[profile.layer] = max(0.0, raw * profile.weight)
        return scores

    def calculate_confidence(self, primary_score: float, secondary_score: float) -> float:
        """Margin of the primary score over the runner-up, in [0, 1]."""
        if primary_score == 0:
            return 0.0
        if secondary_score == 0:
            return 1.0
        margin = min(1.0, (primary_score - secondary_score) / primary_score)
        return max(self.scoring.min_confidence, margin)

    def fallback_classification(self, description: str) -> ClassificationResult:
        """Fixed keyword cascade. Terminal case: never raises."""
        try:
            normalized = normalize_text(description)
        except Exception:  # noqa: BLE001
            normalized = ""

        for terms, layer, confidence, reason in _FALLBACK_RULES:
            if contains_any(normalized, terms):
                return _fallback_result(layer, confidence, reason)
        return _fallback_result(*_FALLBACK_DEFAULT)

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def _keyword_score(self, normalized: str, keywords: Iterable[str]) -> float:
        score = 0.0
        words = normalized.split()
        for keyword in keywords:
            kw = normalize_text(keyword)
            if not kw:
                continue
            if kw in normalized:
                score += self.scoring.exact_match
            for word in words:
                if kw in word or word in kw:
                    score += self.scoring.partial_match
            if any(syn in normalized for syn in _SYNONYMS.get(kw, ())):
                score += self.scoring.synonym_match
        return score

    def _feature_score(self, features: Iterable[str], keywords: Sequence[str]) -> float:
        score = 0.0
        normalized_keywords = [normalize_text(k) for k in keywords]
        for feature in features:
            normalized_feature = normalize_text(feature)
            for kw in normalized_keywords:
                if kw and kw in normalized_feature:
                    score += self.scoring.feature_match
        return score

    def _complexity_score(self, normalized: str, complexity: Tier) -> float:
        indicators = _COMPLEXITY_INDICATORS.get(complexity, ())
        hits = sum(1 for ind in indicators if normalize_text(ind) in normalized)
        return hits * self.scoring.complexity_match

    def _dependency_score(self, normalized: str, dependency_tier: str) -> float:
        keywords = _DEPENDENCY_TIER_KEYWORDS.get(dependency_tier, ())
        hits = sum(1 for kw in keywords if normalize_text(kw) in normalized)
        return hits * self.scoring.dependency_match

    # ------------------------------------------------------------------
    # Reasoning
    # ------------------------------------------------------------------

    def _generate_reasoning(
        self,
        description: str,
        primary: ClassificationCandidate,
        alternatives: Sequence[ClassificationCandidate],
    ) -> str:
        profile: LayerProfile = self.taxonomy.profile(primary.layer)
        normalized = normalize_text(description)
        matched = [k for k in profile.keywords if normalize_text(k) in normalized]

        reasoning = f"Classified as '{primary.layer.value}' based on:"
        if matched:
            reasoning += f" matched keywords ({', '.join(matched)}),"
        reasoning += f" complexity {profile.complexity.value}"
        reasoning += f", dependencies: {profile.dependency_tier}"
        reasoning += f", reusability {profile.reusability.value}"
        if alternatives:
            names = ", ".join(alt.layer.value for alt in alternatives)
            reasoning += f". Alternatives considered: {names}"
        return reasoning


def _fallback_result(layer: LayerId, confidence: float, reason: str) -> ClassificationResult:
    return ClassificationResult(
        primary=ClassificationCandidate(layer=layer, score=confidence * 100),
        alternatives=[],
        confidence=confidence,
        reasoning=f"Fallback: {reason}",
        fallback=True,
    )


def classify(description: str, features: Sequence[str] = ()) -> ClassificationResult:
    """Classify *description* with the default taxonomy and scoring constants."""
    return LayerClassifier().classify(description, features)
