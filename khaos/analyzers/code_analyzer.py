"""Code-convention analysis for generated components.

Scans the source text of a single React/TypeScript component for violations
of its layer's conventions (use-case hooks, template-only features, pure
utils, component suffixes, cross-layer imports), a few general smells and
simple text metrics.  Purely textual: the code is never parsed or executed.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .models import (
    ArchitecturalViolation,
    CodeAnalysisResult,
    CodeIssue,
    CodeMetrics,
    CodeSuggestion,
    IssueSeverity,
    LayerId,
    Severity,
    Tier,
    parse_layer,
)
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_RE_RENDERS_ATOM_OR_MOLECULE = re.compile(r"<\w+Atom|<\w+Molecule")
_RE_MODULE_PREFIX = re.compile(r"\w+-\w+")
_RE_EXPORTED_COMPONENT = re.compile(r"export\s+(?:const|function)\s+(\w+)")
_RE_IMPORT_PATH = re.compile(r"""import\s+.*from\s+['"]([^'"]+)['"]""")
_RE_IMPORT_STATEMENT = re.compile(r"import\s+.*from")
_RE_FUNCTION_DECL = re.compile(r"function\s+\w+|const\s+\w+\s*=")
_RE_FUNCTION_OR_ARROW = re.compile(r"function|=>")

_CYCLOMATIC_KEYWORDS = ("if", "else", "for", "while", "switch", "case", "&&", "||")
_RE_CYCLOMATIC = re.compile(
    "|".join(
        rf"\b{kw}\b" if kw.isalpha() else re.escape(kw)
        for kw in _CYCLOMATIC_KEYWORDS
    )
)

_BUSINESS_LOGIC_MARKERS = ("useState", "useEffect", "api", "fetch", "axios")
_USE_CASE_MARKERS = ("use-case", "useCase")

MAX_LINE_LENGTH = 120
MAX_COMPONENT_LINES = 200

_ISSUE_PENALTIES = {
    IssueSeverity.CRITICAL: 20,
    IssueSeverity.HIGH: 10,
    IssueSeverity.MEDIUM: 5,
    IssueSeverity.LOW: 2,
}
_VIOLATION_PENALTIES = {Severity.ERROR: 15, Severity.WARNING: 5}


def _has_use_case(code: str) -> bool:
    return any(marker in code for marker in _USE_CASE_MARKERS)


def _violation(rule: str, description: str, severity: Severity, suggestion: str) -> ArchitecturalViolation:
    return ArchitecturalViolation(
        rule=rule, description=description, severity=severity, suggestion=suggestion
    )


# ---------------------------------------------------------------------------
# Layer rules
# ---------------------------------------------------------------------------

def _check_atom(code: str) -> list[ArchitecturalViolation]:
    violations = []
    if _has_use_case(code):
        violations.append(_violation(
            "atom-no-use-case", "Atoms cannot contain use-case logic", Severity.ERROR,
            "Remove use-case logic or move to molecule layer",
        ))
    if code.count("useState") > 2:
        violations.append(_violation(
            "atom-simple-state", "Atoms should have minimal state management", Severity.WARNING,
            "Consider moving complex state to molecule layer",
        ))
    return violations


def _check_molecule(code: str) -> list[ArchitecturalViolation]:
    violations = []
    if not _has_use_case(code):
        violations.append(_violation(
            "molecule-requires-use-case", "Molecules must implement use-case hook", Severity.ERROR,
            "Add use-case hook implementation",
        ))
    if "_partials" in code or "partial" in code:
        violations.append(_violation(
            "molecule-no-partials", "Molecules cannot contain partials", Severity.ERROR,
            "Move partials to organism layer",
        ))
    return violations


def _check_organism(code: str) -> list[ArchitecturalViolation]:
    if _has_use_case(code):
        return []
    return [_violation(
        "organism-requires-use-case", "Organisms must implement use-case hook", Severity.ERROR,
        "Add use-case hook implementation",
    )]


def _check_feature(code: str) -> list[ArchitecturalViolation]:
    violations = []
    if _RE_RENDERS_ATOM_OR_MOLECULE.search(code):
        violations.append(_violation(
            "feature-template-only", "Features must render templates exclusively", Severity.ERROR,
            "Wrap atoms/molecules in templates",
        ))
    if not _RE_MODULE_PREFIX.search(code):
        violations.append(_violation(
            "feature-module-prefix", "Features must have module prefix in name", Severity.ERROR,
            "Add module prefix (e.g., wallet-deposit.feature.tsx)",
        ))
    return violations


def _check_template(code: str) -> list[ArchitecturalViolation]:
    violations = []
    if _has_use_case(code):
        violations.append(_violation(
            "template-no-use-case", "Templates cannot contain use-case logic", Severity.ERROR,
            "Move logic to feature layer",
        ))
    if any(marker in code for marker in _BUSINESS_LOGIC_MARKERS):
        violations.append(_violation(
            "template-no-business-logic", "Templates should focus on layout only", Severity.ERROR,
            "Move business logic to feature layer",
        ))
    return violations


def _check_util(code: str) -> list[ArchitecturalViolation]:
    if "import React" in code or "from 'react'" in code:
        return [_violation(
            "util-pure-functions", "Utils should be pure functions without React dependencies",
            Severity.ERROR, "Remove React dependencies or move to appropriate layer",
        )]
    return []


_LAYER_RULES: dict[LayerId, Callable[[str], list[ArchitecturalViolation]]] = {
    LayerId.ATOM: _check_atom,
    LayerId.MOLECULE: _check_molecule,
    LayerId.ORGANISM: _check_organism,
    LayerId.FEATURE: _check_feature,
    LayerId.TEMPLATE: _check_template,
    LayerId.UTIL: _check_util,
}


# ---------------------------------------------------------------------------
# CodeAnalyzer
# ---------------------------------------------------------------------------

class CodeAnalyzer:
    """Checks component source text against its layer's conventions.

    Produces a :class:`CodeAnalysisResult` with architectural violations,
    style issues, metrics, a 0-100 score and improvement suggestions.
    """

    def __init__(self, taxonomy: Taxonomy = DEFAULT_TAXONOMY) -> None:
        self.taxonomy = taxonomy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze_code(self, code: str, layer: LayerId | str) -> CodeAnalysisResult:
        """Run every check on *code* for a component of *layer*.

        Raises:
            InvalidLayerError: If *layer* is not a known layer id.
        """
        layer_id = parse_layer(layer)
        violations = self.detect_violations(code, layer_id)
        issues = self.check_issues(code)
        metrics = self.calculate_metrics(code)

        return CodeAnalysisResult(
            is_valid=not any(v.severity == Severity.ERROR for v in violations),
            score=self.calculate_score(issues, violations, metrics),
            issues=issues,
            suggestions=self.suggest_improvements(code, layer_id),
            metrics=metrics,
            violations=violations,
        )

    def detect_violations(self, code: str, layer: LayerId | str) -> list[ArchitecturalViolation]:
        """Layer rules, general smells, naming and import checks, in that order."""
        layer_id = parse_layer(layer)
        violations: list[ArchitecturalViolation] = []

        rule = _LAYER_RULES.get(layer_id)
        if rule is not None:
            violations.extend(rule(code))

        if "console.log" in code:
            violations.append(_violation(
                "no-console-log", "Remove console.log statements", Severity.WARNING,
                "Use proper logging or remove debug statements",
            ))
        if ": any" in code or "<any>" in code:
            violations.append(_violation(
                "no-any-type", 'Avoid using "any" type', Severity.WARNING,
                'Use specific types instead of "any"',
            ))

        violations.extend(self._check_component_name(code, layer_id))
        violations.extend(self._check_imports(code, layer_id))
        return violations

    def check_issues(self, code: str) -> list[CodeIssue]:
        issues = []
        for index, line in enumerate(code.split("\n"), start=1):
            if len(line) > MAX_LINE_LENGTH:
                issues.append(CodeIssue(
                    rule="max-line-length",
                    message=f"Line too long (>{MAX_LINE_LENGTH} characters)",
                    severity=IssueSeverity.LOW,
                    line=index,
                    suggestion="Break line into multiple lines",
                ))
        return issues

    def calculate_metrics(self, code: str) -> CodeMetrics:
        lines = code.split("\n")
        line_count = len(lines)

        complexity = min(100, (1 + len(_RE_CYCLOMATIC.findall(code))) * 2)

        functions_or_arrows = len(_RE_FUNCTION_OR_ARROW.findall(code))
        maintainability = min(100.0, max(0.0, 100 - line_count / max(1, functions_or_arrows)))

        comments = sum(1 for line in lines if line.strip().startswith("//"))
        readability = min(100.0, 50 + comments / line_count * 50)

        testability = 100
        if code.count("useState") > 3:
            testability -= 30
        if "useEffect" in code:
            testability -= 20

        reusability = 80 if ("Props" in code or "props" in code) else 40
        reusability -= min(40, code.count("import") * 5)

        return CodeMetrics(
            complexity=complexity,
            maintainability=maintainability,
            readability=readability,
            testability=max(0, testability),
            reusability=max(0, reusability),
            lines=line_count,
            functions=len(_RE_FUNCTION_DECL.findall(code)),
            dependencies=len(_RE_IMPORT_STATEMENT.findall(code)),
        )

    def calculate_score(
        self,
        issues: list[CodeIssue],
        violations: list[ArchitecturalViolation],
        metrics: CodeMetrics,
    ) -> float:
        score = 100.0
        score -= sum(_ISSUE_PENALTIES[issue.severity] for issue in issues)
        score -= sum(_VIOLATION_PENALTIES[v.severity] for v in violations)
        score *= metrics.maintainability / 100
        return max(0.0, min(100.0, score))

    def suggest_improvements(self, code: str, layer: LayerId | str) -> list[CodeSuggestion]:
        layer_id = parse_layer(layer)
        suggestions = []

        if "useEffect" in code and "useMemo" not in code:
            suggestions.append(CodeSuggestion(
                type="optimize",
                description="Consider using useMemo for expensive calculations",
                impact=Tier.MEDIUM, effort=Tier.LOW,
            ))
        if len(code.split("\n")) > MAX_COMPONENT_LINES:
            suggestions.append(CodeSuggestion(
                type="refactor",
                description="Component is too large, consider breaking into smaller components",
                impact=Tier.HIGH, effort=Tier.HIGH,
            ))
        if "testID" not in code:
            suggestions.append(CodeSuggestion(
                type="convention",
                description="Add testID prop for testing",
                impact=Tier.LOW, effort=Tier.LOW,
            ))
        if layer_id == LayerId.MOLECULE and "use-case" not in code:
            suggestions.append(CodeSuggestion(
                type="architecture",
                description="Add use-case hook for business logic",
                impact=Tier.HIGH, effort=Tier.MEDIUM,
            ))
        return suggestions

    # ------------------------------------------------------------------
    # Naming & import checks
    # ------------------------------------------------------------------

    def _check_component_name(self, code: str, layer: LayerId) -> list[ArchitecturalViolation]:
        match = _RE_EXPORTED_COMPONENT.search(code)
        if match is None:
            return []
        name = match.group(1)
        suffix = self.taxonomy.profile(layer).component_suffix
        if name.endswith(suffix):
            return []
        return [_violation(
            "component-naming-convention", f"Component should end with {suffix}", Severity.ERROR,
            f"Rename to {name}{suffix}",
        )]

    def _check_imports(self, code: str, layer: LayerId) -> list[ArchitecturalViolation]:
        """Flag imports whose path goes through a layer directory *layer* may not use."""
        allowed = self.taxonomy.allowed_dependencies(layer)
        violations = []
        for path in _RE_IMPORT_PATH.findall(code):
            for segment in path.split("/"):
                target = self.taxonomy.by_directory(segment)
                if target is None or target == layer or target in allowed:
                    continue
                violations.append(_violation(
                    "invalid-layer-import",
                    f"Invalid import from {path}: '{layer.value}' cannot depend on '{target.value}'",
                    Severity.ERROR,
                    "Remove invalid import or restructure dependencies",
                ))
                break
        return violations


def analyze_code_violations(code: str, layer: LayerId | str) -> list[ArchitecturalViolation]:
    """Return the architectural violations in *code* for the default taxonomy."""
    return CodeAnalyzer().detect_violations(code, layer)
