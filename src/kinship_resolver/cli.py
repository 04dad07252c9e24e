"""CLI interface for the kinship resolver."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import load_config
from .exceptions import SnapshotError
from .logging import configure_logging
from .models import RelationshipResult
from .snapshot import GroupSnapshot

app = typer.Typer(
    name="kinship",
    help="Kinship relationship resolver for family groups",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Resolve family relationships from a group snapshot."""
    config = load_config()
    if verbose:
        configure_logging("DEBUG", json_logs=False)
    else:
        configure_logging(config.log_level)


def _load_snapshot(path: Path) -> GroupSnapshot:
    try:
        return GroupSnapshot.load(path)
    except SnapshotError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _format_path(result: RelationshipResult) -> str:
    if not result.path:
        return ""
    parts = [result.path[0].user_id]
    for step in result.path[1:]:
        parts.append(f"-{step.edge_type.value}-> {step.user_id}")
    return " ".join(parts)


@app.command()
def resolve(
    snapshot: Path = typer.Argument(..., help="Group snapshot JSON file"),
    ego: str = typer.Argument(..., help="User the relationship is seen from"),
    alter: str = typer.Argument(..., help="User to label"),
    neutral: bool = typer.Option(False, "--neutral", help="Use gender-neutral labels"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Show how ALTER is related to EGO."""
    from .resolver import GroupResolver

    config = load_config()
    resolver = GroupResolver.from_snapshot(_load_snapshot(snapshot), config=config)
    result = resolver.resolve(ego, alter, apply_gender=False if neutral else None)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.found:
        console.print(f"[yellow]No relationship found between {ego} and {alter}[/yellow]")
        return

    console.print(Panel(
        f"[bold]{result.relationship}[/bold]\n"
        f"Steps: {result.steps}\n"
        f"Path: {_format_path(result)}",
        title=f"{alter} is {ego}'s",
    ))


@app.command("map")
def relationship_map(
    snapshot: Path = typer.Argument(..., help="Group snapshot JSON file"),
    ego: str = typer.Argument(..., help="User the relationships are seen from"),
    neutral: bool = typer.Option(False, "--neutral", help="Use gender-neutral labels"),
    desc: bool = typer.Option(False, "--desc", help="Farthest relatives first"),
):
    """List every member's relationship to EGO, closest first."""
    from .resolver import GroupResolver, sort_results

    config = load_config()
    resolver = GroupResolver.from_snapshot(_load_snapshot(snapshot), config=config)
    results = resolver.relationship_map(ego, apply_gender=False if neutral else None)

    table = Table(title=f"Relationships of {ego}")
    table.add_column("Member")
    table.add_column("Relationship")
    table.add_column("Steps", justify="right")

    table.add_row(ego, config.self_label, "0")
    for user_id in sort_results(results, descending=desc):
        result = results[user_id]
        if result.found:
            table.add_row(user_id, result.relationship, str(result.steps))
        else:
            table.add_row(user_id, "[dim]not connected[/dim]", "-")

    console.print(table)


@app.command("rules")
def list_rules(
    family: str = typer.Option(None, "--family", "-f", help="Filter by rule family"),
    contains: str = typer.Option(None, "--contains", "-c", help="Filter by label text"),
):
    """List the path-shape rule catalog."""
    from .rules import CATALOG, RuleFamily

    family_filter = None
    if family:
        try:
            family_filter = RuleFamily(family.lower())
        except ValueError:
            console.print(f"[red]Invalid family. Choose from: {[f.value for f in RuleFamily]}[/red]")
            raise typer.Exit(1)

    table = Table(title="Kinship Rules")
    table.add_column("Path")
    table.add_column("Label")
    table.add_column("Family", style="dim")

    count = 0
    for rule in CATALOG:
        if family_filter and rule.family is not family_filter:
            continue
        if contains and contains.lower() not in rule.label.lower():
            continue
        table.add_row(rule.key, rule.label, rule.family.value)
        count += 1

    console.print(table)
    console.print(f"[dim]{count} rules[/dim]")


if __name__ == "__main__":
    app()
