"""Optional analysis provider capability.

A provider is anything with a ``name`` and an ``analyze_description`` method
returning a :class:`PartialAnalysis`; an LLM-backed client, a cached result
store or a test double all qualify.  Analyzers hold ``provider: AnalysisProvider
| None`` and always fall back to their deterministic heuristics when it is
absent or raises.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from khaos.utils import print_warning

from .models import PartialAnalysis


@runtime_checkable
class AnalysisProvider(Protocol):
    """Structural interface for an external description analyzer."""

    name: str

    def analyze_description(
        self, text: str, context: Optional[dict[str, Any]] = None
    ) -> PartialAnalysis:
        ...


def provider_name(provider: AnalysisProvider | None) -> str:
    if provider is None:
        return "none"
    return getattr(provider, "name", type(provider).__name__)


def request_analysis(
    provider: AnalysisProvider | None,
    text: str,
    context: Optional[dict[str, Any]] = None,
) -> PartialAnalysis | None:
    """Ask *provider* for a partial analysis without ever raising.

    Returns ``None`` when there is no provider, when it raises, or when it
    returns something that is not a :class:`PartialAnalysis`.
    """
    if provider is None:
        return None
    try:
        result = provider.analyze_description(text, context)
    except Exception as exc:  # noqa: BLE001
        print_warning(
            f"Provider '{provider_name(provider)}' failed, using heuristic analysis: {exc}"
        )
        return None
    if not isinstance(result, PartialAnalysis):
        print_warning(
            f"Provider '{provider_name(provider)}' returned {type(result).__name__}, "
            "expected PartialAnalysis; using heuristic analysis"
        )
        return None
    return result
