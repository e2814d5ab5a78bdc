"""Analyzer suite: the composition root of the analyzers.

Builds every analyzer from one :class:`~khaos.config.Config` (so they share
the same weighted taxonomy) and merges their output, plus an optional
provider analysis, into a single :class:`ComponentAnalysis`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from khaos.config import Config
from khaos.utils import print_warning

from .classifier import LayerClassifier
from .code_analyzer import CodeAnalyzer
from .dependencies import DependencyAnalyzer
from .models import (
    CodeAnalysisResult,
    ComponentAnalysis,
    InvalidLayerError,
    LayerId,
    NamingContext,
    PartialAnalysis,
    parse_layer,
)
from .naming import NamingSuggester
from .provider import AnalysisProvider, provider_name, request_analysis


class AnalyzerSuite:
    """All analyzers wired from a single configuration.

    Example::

        suite = AnalyzerSuite()
        analysis = suite.analyze("tela de login com chamada de api")
        analysis.layer          # LayerId.FEATURE
        analysis.dependencies.required
    """

    def __init__(
        self,
        config: Config | None = None,
        provider: AnalysisProvider | None = None,
    ) -> None:
        self.config = config or Config()
        self.provider = provider
        self.taxonomy = self.config.taxonomy()

        self.classifier = LayerClassifier(self.taxonomy, self.config.scoring)
        self.dependency_analyzer = DependencyAnalyzer(self.taxonomy)
        self.naming_suggester = NamingSuggester(self.taxonomy, self.config.naming, provider)
        self.code_analyzer = CodeAnalyzer(self.taxonomy)

    def analyze(
        self,
        description: str,
        features: Sequence[str] = (),
        context: Optional[NamingContext] = None,
    ) -> ComponentAnalysis:
        """Classify, name and analyze the dependencies of one component.

        The heuristic classification is authoritative unless the provider
        reports a valid layer with strictly higher confidence.

        Args:
            description: Natural-language component description.
            features: Feature flags forwarded to the classifier and the
                dependency analyzer.
            context: Naming hints (prefix, suffix, names already taken).
        """
        context = context or NamingContext()
        classification = self.classifier.classify(description, features)
        layer = classification.primary.layer
        layer_confidence = classification.confidence

        partial = request_analysis(
            self.provider, description, {"purpose": "classification", "features": list(features)}
        )
        declared: list[LayerId] = []
        if partial is not None:
            provider_layer = self._provider_layer(partial)
            if provider_layer is not None and (partial.confidence or 0.0) > layer_confidence:
                layer = provider_layer
                layer_confidence = min(1.0, max(0.0, partial.confidence or 0.0))
            declared = self._provider_dependencies(partial)

        naming = self.naming_suggester.suggest_name(description, layer, context)
        name = naming.primary
        if partial is not None and partial.component_name:
            candidate = partial.component_name
            if (
                self.taxonomy.profile(layer).matches_name(candidate)
                and candidate not in context.existing_names
            ):
                name = candidate

        dependencies = self.dependency_analyzer.analyze_dependencies(
            description, layer, features, declared=declared, name=name
        )

        return ComponentAnalysis(
            description=description,
            layer=layer,
            name=name,
            classification=classification,
            naming=naming,
            dependencies=dependencies,
            confidence=min(layer_confidence, naming.confidence),
            provider=provider_name(self.provider) if partial is not None else "none",
        )

    def analyze_code(self, code: str, layer: LayerId | str) -> CodeAnalysisResult:
        """Shortcut for :meth:`CodeAnalyzer.analyze_code` with the suite's taxonomy."""
        return self.code_analyzer.analyze_code(code, layer)

    # ------------------------------------------------------------------
    # Provider merge helpers
    # ------------------------------------------------------------------

    def _provider_layer(self, partial: PartialAnalysis) -> LayerId | None:
        if not partial.layer:
            return None
        try:
            return parse_layer(partial.layer)
        except InvalidLayerError as exc:
            print_warning(f"Ignoring provider layer: {exc}")
            return None

    def _provider_dependencies(self, partial: PartialAnalysis) -> list[LayerId]:
        layers: list[LayerId] = []
        for dep in partial.dependencies:
            try:
                layers.append(parse_layer(dep))
            except InvalidLayerError as exc:
                print_warning(f"Ignoring provider dependency: {exc}")
        return layers
