"""Khaos layer analyzer.

Layer-classification and dependency-validation engine for the Khaos
component architecture.
"""

# The analyzers package must load before khaos.config, which imports from it.
from khaos.analyzers import (
    AnalyzerSuite,
    LayerId,
    analyze_code_violations,
    analyze_dependencies,
    classify,
    suggest_name,
)
from khaos.config import Config

__version__ = "0.1.0"

__all__ = [
    "AnalyzerSuite",
    "Config",
    "LayerId",
    "analyze_code_violations",
    "analyze_dependencies",
    "classify",
    "suggest_name",
]
