"""Khaos layer analyzers.

Classifies natural-language component descriptions into the twelve
architectural layers, validates inter-layer dependencies, suggests
layer-conformant names and checks component code against layer conventions.

Usage::

    from khaos.analyzers import classify, analyze_dependencies, suggest_name

    result = classify("um botão reutilizável")
    print(result.primary.layer, result.confidence)

    deps = analyze_dependencies("tela de login com chamada de api", "feature")
    print(deps.required, deps.hierarchy_check.is_valid)

    print(suggest_name("botão com variantes de cor", "atom").primary)
"""

from khaos.analyzers.models import (
    ArchitecturalViolation,
    ClassificationCandidate,
    ClassificationResult,
    CodeAnalysisResult,
    ComponentAnalysis,
    DependencySet,
    HierarchyCheck,
    InvalidLayerError,
    LayerId,
    NamingContext,
    NamingSuggestion,
    PartialAnalysis,
    Violation,
    parse_layer,
)
from khaos.analyzers.taxonomy import DEFAULT_TAXONOMY, LayerProfile, Taxonomy, get_profile
from khaos.analyzers.text import normalize_text
from khaos.analyzers.classifier import LayerClassifier, classify
from khaos.analyzers.dependencies import DependencyAnalyzer, analyze_dependencies
from khaos.analyzers.naming import NamingSuggester, suggest_name
from khaos.analyzers.code_analyzer import CodeAnalyzer, analyze_code_violations
from khaos.analyzers.provider import AnalysisProvider
from khaos.analyzers.suite import AnalyzerSuite

__all__ = [
    "classify",
    "analyze_dependencies",
    "suggest_name",
    "analyze_code_violations",
    "normalize_text",
    "LayerClassifier",
    "DependencyAnalyzer",
    "NamingSuggester",
    "CodeAnalyzer",
    "AnalyzerSuite",
    "AnalysisProvider",
    "Taxonomy",
    "LayerProfile",
    "DEFAULT_TAXONOMY",
    "get_profile",
    "LayerId",
    "InvalidLayerError",
    "parse_layer",
    "ClassificationCandidate",
    "ClassificationResult",
    "DependencySet",
    "HierarchyCheck",
    "Violation",
    "NamingContext",
    "NamingSuggestion",
    "ArchitecturalViolation",
    "CodeAnalysisResult",
    "PartialAnalysis",
    "ComponentAnalysis",
]
