"""Rich rendering of analyzer results.

Pretty-prints classification rankings, dependency reports, naming
suggestions, code analyses and complete component analyses to the shared
console.  Display only: nothing here changes a result.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from khaos.analyzers.models import (
    ClassificationResult,
    CodeAnalysisResult,
    ComponentAnalysis,
    DependencySet,
    NamingSuggestion,
    Severity,
)
from khaos.utils import (
    console,
    format_confidence,
    format_score,
    print_error,
    print_success,
    print_summary_table,
)

_SEVERITY_STYLES = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def _confidence_style(confidence: float) -> str:
    if confidence >= 0.7:
        return "green"
    if confidence >= 0.4:
        return "yellow"
    return "red"


def print_classification(result: ClassificationResult) -> None:
    """Print the ranked layers of a classification."""
    style = _confidence_style(result.confidence)
    table = Table(title="Layer Classification", show_lines=True)
    table.add_column("Rank", justify="right", width=6)
    table.add_column("Layer", width=14)
    table.add_column("Score", justify="right", width=10)

    for rank, candidate in enumerate([result.primary, *result.alternatives], start=1):
        layer = candidate.layer.value
        table.add_row(
            str(rank),
            f"[bold]{layer}[/bold]" if rank == 1 else layer,
            format_score(candidate.score),
        )
    console.print(table)

    source = " (fallback)" if result.fallback else ""
    console.print(
        f"Confidence: [{style}]{format_confidence(result.confidence)}[/{style}]{source}"
    )
    console.print(f"[dim]{escape(result.reasoning)}[/dim]")


def print_dependency_report(deps: DependencySet) -> None:
    """Print required/optional layers, violations and the file manifest."""
    required = ", ".join(d.value for d in deps.required) or "-"
    optional = ", ".join(d.value for d in deps.optional) or "-"
    status = "[green bold]VALID[/green bold]" if deps.hierarchy_check.is_valid else "[red bold]INVALID[/red bold]"
    console.print(
        Panel(
            f"Required: {required}\n"
            f"Optional: {optional}\n"
            f"Hierarchy: {status}",
            title="Dependencies",
            border_style="green" if not deps.has_errors else "red",
        )
    )

    if deps.violations:
        table = Table(title="Violations", show_lines=True)
        table.add_column("Kind", width=20)
        table.add_column("Severity", width=10)
        table.add_column("Message", width=50)
        table.add_column("Suggestion", width=40)
        for v in deps.violations:
            style = _SEVERITY_STYLES.get(v.severity, "white")
            table.add_row(
                v.kind.value,
                f"[{style}]{v.severity.value}[/{style}]",
                escape(v.message),
                escape(v.suggestion),
            )
        console.print(table)

    if deps.structure:
        table = Table(title="Files")
        table.add_column("File", width=30)
        table.add_column("Purpose", width=30)
        table.add_column("Required", width=9)
        for f in deps.structure:
            table.add_row(f.filename, f.purpose, "yes" if f.required else "no")
        console.print(table)


def print_naming(suggestion: NamingSuggestion) -> None:
    """Print a naming suggestion with its alternatives."""
    style = _confidence_style(suggestion.confidence)
    alternatives = ", ".join(suggestion.alternatives) or "-"
    console.print(
        Panel(
            f"[bold]{escape(suggestion.primary)}[/bold]\n"
            f"Alternatives: {escape(alternatives)}\n"
            f"Confidence: [{style}]{format_confidence(suggestion.confidence)}[/{style}]",
            title="Name",
            border_style="cyan",
        )
    )


def print_code_analysis(result: CodeAnalysisResult) -> None:
    """Print a code analysis score, violations and suggestions."""
    status = "[green bold]VALID[/green bold]" if result.is_valid else "[red bold]INVALID[/red bold]"
    console.print(
        Panel(
            f"Status: {status}\n"
            f"Score: {format_score(result.score)}/100\n"
            f"Lines: {result.metrics.lines}  Functions: {result.metrics.functions}  "
            f"Imports: {result.metrics.dependencies}",
            title="Code Analysis",
            border_style="green" if result.is_valid else "red",
        )
    )

    if result.violations:
        table = Table(title="Convention Violations", show_lines=True)
        table.add_column("Rule", width=30)
        table.add_column("Severity", width=10)
        table.add_column("Description", width=50)
        for v in result.violations:
            style = _SEVERITY_STYLES.get(v.severity, "white")
            table.add_row(v.rule, f"[{style}]{v.severity.value}[/{style}]", escape(v.description))
        console.print(table)

    for suggestion in result.suggestions:
        console.print(f"  [cyan]- {escape(suggestion.description)}[/cyan]")

    errors = sum(1 for v in result.violations if v.severity == Severity.ERROR)
    if errors:
        print_error(f"{errors} blocking convention violation(s)")
    elif not result.violations:
        print_success("No convention violations")


def print_analysis(analysis: ComponentAnalysis) -> None:
    """Print a complete component analysis."""
    console.print("\n")
    style = _confidence_style(analysis.confidence)
    print_summary_table(
        {
            "Name": f"[bold]{escape(analysis.name)}[/bold]",
            "Layer": analysis.layer.value,
            "Description": escape(analysis.description),
            "Confidence": f"[{style}]{format_confidence(analysis.confidence)}[/{style}]",
            "Provider": escape(analysis.provider),
        },
        title="Khaos Analysis",
    )
    print_classification(analysis.classification)
    print_naming(analysis.naming)
    print_dependency_report(analysis.dependencies)
    console.print("")
