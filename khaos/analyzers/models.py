"""Pydantic v2 models for the Khaos layer analyzers.

Defines the value objects produced by the classifier, the dependency
analyzer, the naming suggester and the code analyzer.  Every result model is
frozen: once an analyzer returns it, it is never mutated.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LayerId(str, Enum):
    """The twelve architectural layers. Declaration order is the canonical order."""
    ATOM = "atom"
    MOLECULE = "molecule"
    ORGANISM = "organism"
    TEMPLATE = "template"
    FEATURE = "feature"
    LAYOUT = "layout"
    PARTICLE = "particle"
    MODEL = "model"
    ENTITY = "entity"
    UTIL = "util"
    GATEWAY = "gateway"
    REPOSITORY = "repository"


class Tier(str, Enum):
    """Complexity / reusability tier of a layer."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ViolationKind(str, Enum):
    """Classification of dependency violations."""
    INVALID_LAYER = "invalid-layer"
    MISSING_DEPENDENCY = "missing-dependency"
    CIRCULAR = "circular"


class ImportKind(str, Enum):
    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"


class IssueSeverity(str, Enum):
    """Severity of a code issue, used for score deductions."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class InvalidLayerError(ValueError):
    """Raised when a layer id outside the taxonomy is passed explicitly."""


def parse_layer(value: LayerId | str) -> LayerId:
    """Coerce *value* to a :class:`LayerId`.

    Raises:
        InvalidLayerError: If *value* is not one of the twelve layers.
    """
    if isinstance(value, LayerId):
        return value
    try:
        return LayerId(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(layer.value for layer in LayerId)
        raise InvalidLayerError(
            f"Invalid layer {value!r}. Expected one of: {valid}"
        ) from None


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Classification Models
# ---------------------------------------------------------------------------

class ClassificationCandidate(_Frozen):
    """A single (layer, score) pair from one classification call."""
    layer: LayerId = Field(..., description="Candidate layer")
    score: float = Field(default=0.0, ge=0.0, description="Weighted score (never negative)")


class ClassificationResult(_Frozen):
    """Ranked outcome of classifying a description.

    ``confidence`` is the margin of the primary candidate over the runner-up,
    not a calibrated probability.
    """
    primary: ClassificationCandidate = Field(..., description="Top-ranked candidate")
    alternatives: list[ClassificationCandidate] = Field(
        default_factory=list, description="Next best candidates (at most three)"
    )
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Margin over runner-up")
    reasoning: str = Field(default="", description="Human-readable explanation")
    fallback: bool = Field(
        default=False, description="Whether the rule-based fallback cascade produced this result"
    )


# ---------------------------------------------------------------------------
# Dependency Models
# ---------------------------------------------------------------------------

class Violation(_Frozen):
    """A dependency rule violation, reported as data rather than raised."""
    kind: ViolationKind = Field(..., description="Violation category")
    message: str = Field(..., description="What is wrong")
    severity: Severity = Field(..., description="error blocks generation, warning does not")
    suggestion: str = Field(default="", description="How to fix it")


class HierarchyCheck(_Frozen):
    """Result of validating dependencies against the allowed-dependency edges."""
    is_valid: bool = Field(default=True)
    violations: list[str] = Field(default_factory=list)
    allowed_dependencies: list[LayerId] = Field(default_factory=list)


class ImportSuggestion(_Frozen):
    """An import the generated component is expected to need."""
    module: str = Field(..., description="Imported symbol or module name")
    imports: list[str] = Field(default_factory=list, description="Names imported")
    source: str = Field(..., description="Module path imported from, e.g. 'atoms/button'")
    kind: ImportKind = Field(default=ImportKind.NAMED)
    required: bool = Field(default=False)


class FileSuggestion(_Frozen):
    """A file in the generated component's manifest."""
    filename: str = Field(..., description="File name, e.g. 'button.atom.tsx'")
    purpose: str = Field(default="", description="What the file is for")
    required: bool = Field(default=True)


class DependencySet(_Frozen):
    """Complete dependency analysis for one component."""
    required: list[LayerId] = Field(default_factory=list)
    optional: list[LayerId] = Field(default_factory=list)
    violations: list[Violation] = Field(default_factory=list)
    hierarchy_check: HierarchyCheck = Field(default_factory=HierarchyCheck)
    imports: list[ImportSuggestion] = Field(default_factory=list)
    structure: list[FileSuggestion] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """``True`` if any violation has error severity."""
        return any(v.severity == Severity.ERROR for v in self.violations)


# ---------------------------------------------------------------------------
# Naming Models
# ---------------------------------------------------------------------------

class NamingContext(_Frozen):
    """Optional caller hints for name generation."""
    prefix: Optional[str] = Field(default=None, description="Prefix, e.g. 'wallet-' for features")
    suffix: Optional[str] = Field(default=None, description="Suffix appended to generic candidates")
    existing_names: list[str] = Field(
        default_factory=list, description="Names already taken in the project"
    )


class NamingSuggestion(_Frozen):
    """Ranked naming proposal for a component."""
    primary: str = Field(..., description="Best candidate or the per-layer fallback")
    alternatives: list[str] = Field(default_factory=list, description="Up to four runners-up")
    reasoning: str = Field(default="")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


# ---------------------------------------------------------------------------
# Code Analysis Models
# ---------------------------------------------------------------------------

class ArchitecturalViolation(_Frozen):
    """A layer-convention violation found in code text."""
    rule: str = Field(..., description="Rule identifier, e.g. 'atom-no-use-case'")
    description: str = Field(...)
    severity: Severity = Field(...)
    suggestion: str = Field(default="")


class CodeIssue(_Frozen):
    """A non-architectural code issue (style, length)."""
    rule: str = Field(...)
    message: str = Field(...)
    severity: IssueSeverity = Field(default=IssueSeverity.LOW)
    line: Optional[int] = Field(default=None, description="1-based line number")
    suggestion: str = Field(default="")


class CodeSuggestion(_Frozen):
    """An improvement suggestion for the analyzed code."""
    type: str = Field(..., description="'refactor', 'optimize', 'convention' or 'architecture'")
    description: str = Field(...)
    impact: Tier = Field(default=Tier.MEDIUM)
    effort: Tier = Field(default=Tier.MEDIUM)


class CodeMetrics(_Frozen):
    """Simple text metrics for a code blob."""
    complexity: float = Field(default=0.0)
    maintainability: float = Field(default=0.0)
    readability: float = Field(default=0.0)
    testability: float = Field(default=0.0)
    reusability: float = Field(default=0.0)
    lines: int = Field(default=0)
    functions: int = Field(default=0)
    dependencies: int = Field(default=0)


class CodeAnalysisResult(_Frozen):
    """Aggregated result of a static code analysis pass."""
    is_valid: bool = Field(default=True, description="No error-severity violations")
    score: float = Field(default=100.0, ge=0.0, le=100.0)
    issues: list[CodeIssue] = Field(default_factory=list)
    suggestions: list[CodeSuggestion] = Field(default_factory=list)
    metrics: CodeMetrics = Field(default_factory=CodeMetrics)
    violations: list[ArchitecturalViolation] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Provider & Complete Analysis Models
# ---------------------------------------------------------------------------

class PartialAnalysis(_Frozen):
    """Analysis returned by an external provider. Every field is optional."""
    layer: Optional[str] = Field(default=None, description="Suggested layer id (unvalidated)")
    confidence: Optional[float] = Field(default=None, description="Provider confidence, 0-1")
    component_name: Optional[str] = Field(default=None)
    dependencies: list[str] = Field(default_factory=list)
    concepts: list[str] = Field(default_factory=list, description="Naming concepts")
    reasoning: str = Field(default="")


class ComponentAnalysis(_Frozen):
    """Merged classification, naming and dependency analysis for one description."""
    description: str = Field(...)
    layer: LayerId = Field(..., description="Chosen layer")
    name: str = Field(..., description="Chosen component name")
    classification: ClassificationResult = Field(...)
    naming: NamingSuggestion = Field(...)
    dependencies: DependencySet = Field(...)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Minimum of the parts")
    provider: str = Field(default="none", description="Name of the provider consulted")
    analyzed_at: datetime = Field(default_factory=datetime.now)
