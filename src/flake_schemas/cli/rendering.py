"""Human-readable rendering of inventory reports."""

from rich.markup import escape
from rich.tree import Tree

from flake_schemas.report import FlakeReport, NodeReport


def _label(name: str, node: NodeReport) -> str:
    parts = [f"[bold]{escape(name)}[/bold]"]
    if node.what is not None:
        parts.append(f"[cyan]{escape(node.what)}[/cyan]")
    if node.short_description:
        parts.append(f"[dim]{escape(node.short_description)}[/dim]")
    if node.derivation is not None:
        parts.append(f"[magenta]{escape(node.derivation)}[/magenta]")
    for check in node.checks:
        mark = "[green]✔[/green]" if check.passed else "[red]✘[/red]"
        parts.append(f"{mark} {escape(check.name)}")
    return " ".join(parts)


def add_node(tree: Tree, name: str, node: NodeReport) -> None:
    """Append node and its reported children under tree."""
    branch = tree.add(_label(name, node))
    for child_name, child in (node.children or {}).items():
        add_node(branch, child_name, child)


def render_node(name: str, node: NodeReport) -> Tree:
    tree = Tree(_label(name, node))
    for child_name, child in (node.children or {}).items():
        add_node(tree, child_name, child)
    return tree


def render_flake(report: FlakeReport) -> Tree:
    tree = Tree("[bold]outputs[/bold]")
    for name, node in report.outputs.items():
        add_node(tree, name, node)
    for name in report.unknown:
        tree.add(f"[bold]{escape(name)}[/bold] [yellow]unknown flake output[/yellow]")
    return tree
