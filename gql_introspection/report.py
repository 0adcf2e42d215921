"""Output formatting and reporting."""

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Optional

from graphql import DocumentNode, SchemaDefinitionNode, print_ast
from rich.console import Console
from rich.table import Table

from . import utils
from .document import root_types
from .parser import ParseResult

console = Console()

KIND_LABELS = {
    "scalar_type_definition": "Scalars",
    "object_type_definition": "Objects",
    "interface_type_definition": "Interfaces",
    "union_type_definition": "Unions",
    "enum_type_definition": "Enums",
    "input_object_type_definition": "Input objects",
}


@dataclass
class SchemaSummary:
    """Summary of a decoded introspection document."""

    query: Optional[str]
    mutation: Optional[str]
    subscription: Optional[str]
    type_counts: dict[str, int]
    field_count: int
    unresolved_types: list[str] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)


def summarize(result: ParseResult) -> SchemaSummary:
    """
    Collect counts and sanity checks from a parse result.

    Args:
        result: Output of parser.parse_with_diagnostics

    Returns:
        SchemaSummary
    """
    document = result.document
    roots = root_types(document)
    counts: Counter = Counter()
    field_count = 0
    defined = set()
    referenced = set()

    for definition in utils.iter_type_definitions(document):
        counts[KIND_LABELS[definition.kind]] += 1
        defined.add(definition.name.value)
        field_count += len(getattr(definition, "fields", None) or ())
        referenced.update(ref.name.value for ref in utils.iter_type_references(definition))

    for root in (roots.query, roots.mutation, roots.subscription):
        if root:
            referenced.add(root)

    return SchemaSummary(
        query=roots.query,
        mutation=roots.mutation,
        subscription=roots.subscription,
        type_counts={label: counts[label] for label in KIND_LABELS.values()},
        field_count=field_count,
        unresolved_types=sorted(referenced - defined),
        diagnostics=[str(d) for d in result.diagnostics],
    )


def printable(document: DocumentNode) -> DocumentNode:
    """Drop a schema definition without root operations, which SDL cannot express."""
    definitions = tuple(
        d for d in document.definitions if not (isinstance(d, SchemaDefinitionNode) and not d.operation_types)
    )
    return DocumentNode(definitions=definitions)


def render(result: ParseResult, fmt: str) -> str:
    """Render a parse result as SDL or as a JSON summary."""
    if fmt == "sdl":
        return print_ast(printable(result.document)) + "\n"
    if fmt == "json":
        return utils.to_json(asdict(summarize(result))) + "\n"
    raise ValueError(f"Unknown output format: {fmt}")


def emit(result: ParseResult, fmt: str) -> None:
    """
    Output a parse result.

    Args:
        result: Decoded document and diagnostics
        fmt: Output format ("sdl", "json" or "summary")
    """
    if fmt != "summary":
        print(render(result, fmt), end="")
        return

    summary = summarize(result)
    console.print("\n[bold cyan]Schema Summary[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    for label, root in (
        ("Query", summary.query),
        ("Mutation", summary.mutation),
        ("Subscription", summary.subscription),
    ):
        table.add_row(label, root or "[dim]-[/dim]")

    for label, count in summary.type_counts.items():
        table.add_row(label, str(count))
    table.add_row("Fields", str(summary.field_count))

    console.print(table)

    if summary.unresolved_types:
        console.print("\n[bold yellow]Unresolved type references:[/bold yellow]\n")
        for name in summary.unresolved_types:
            console.print(f"  [yellow]⚠[/yellow] {name}")

    if summary.diagnostics:
        console.print("\n[bold cyan]Ignored keys:[/bold cyan]\n")
        for message in summary.diagnostics:
            console.print(f"  [blue]•[/blue] [dim]{message}[/dim]")
    else:
        console.print("\n[green]✓ No unknown keys[/green]")

    console.print()


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for pull, config init).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
