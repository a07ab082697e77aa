"""
Action tree CLI: run trees from files, check them, and list node types.

Output goes through rich; deliveries are simulated by the logging notifier and
summarised in a table after each run.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from actiontree.config import StepErrorPolicy, TreeServiceConfig
from actiontree.core.actions.condition import ConditionAction
from actiontree.core.channels import LoggingNotifier, RecordingNotifier
from actiontree.core.errors import ActionTreeError, ExpressionEvaluationError, format_validation_errors
from actiontree.core.expression import validate_expression_syntax
from actiontree.core.registry import get_action_registry
from actiontree.examples import DEMO_CONTEXTS, DEMO_TREES
from actiontree.io import LoaderError, load_context, load_tree
from actiontree.services import DecisionTreeService, RunResult
from actiontree.utils.logging import configure_logging

app = typer.Typer(help="Action tree CLI: run, check and inspect JSON/YAML action trees.")
console = Console()


def _parse_vars(items: List[str]) -> Dict[str, Any]:
    """Parse key=value pairs; values are read as JSON when possible, else kept as text."""
    variables: Dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            console.print(f"[red]Bad --var[/red] (expected key=value): {item}")
            raise typer.Exit(code=2)
        key, raw = item.split("=", 1)
        raw = raw.strip()
        try:
            value: Any = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        variables[key.strip()] = value
    return variables


def _build_context(variables: List[str], context_file: Optional[str]) -> Dict[str, Any]:
    context: Dict[str, Any] = {}
    if context_file:
        try:
            context.update(load_context(context_file))
        except LoaderError as err:
            console.print(f"[red]Failed to load context:[/red] {err}")
            raise typer.Exit(code=1)
    context.update(_parse_vars(variables))
    return context


def _make_service(fail_fast: bool, verbose: bool) -> tuple[DecisionTreeService, RecordingNotifier]:
    try:
        config = TreeServiceConfig.from_env()
    except ValidationError as err:
        console.print(f"[red]Bad ACTIONTREE_* environment setting:[/red] {format_validation_errors(err.errors())}")
        raise typer.Exit(code=2)
    if fail_fast:
        config = config.model_copy(update={"step_error_policy": StepErrorPolicy.FAIL_FAST})
    if verbose:
        config = config.model_copy(update={"log_level": "INFO"})
    configure_logging(config.log_level)
    recorder = RecordingNotifier(forward_to=LoggingNotifier())
    return DecisionTreeService(notifier=recorder, config=config), recorder


def _render_result(result: RunResult, recorder: RecordingNotifier) -> None:
    if result.ok:
        console.print("[bold]Status:[/bold] [green]success[/green]")
    else:
        console.print("[bold]Status:[/bold] [red]error[/red]")
        console.print(f"[bold]{result.error_type}:[/bold] {result.message}")

    if not recorder.outbox:
        console.print("[dim]No notifications sent[/dim]")
        return

    table = Table(title="Deliveries")
    table.add_column("#")
    table.add_column("Channel")
    table.add_column("To")
    table.add_column("From")
    for idx, notification in enumerate(recorder.outbox, start=1):
        table.add_row(str(idx), notification.channel, notification.address_to, notification.sender or "")
    console.print(table)


@app.command()
def run(
    file_path: str = typer.Argument(..., help="Tree file (.json, .yaml or .yml)"),
    variables: List[str] = typer.Option([], "--var", "-v", help="Context variable as key=value"),
    context_file: Optional[str] = typer.Option(None, "--context-file", "-c", help="JSON/YAML file with context variables"),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop a sequence at its first failing step"),
    verbose: bool = typer.Option(False, "--verbose", help="Log each node as it executes"),
) -> None:
    """Run an action tree against a context."""
    context = _build_context(variables, context_file)
    try:
        tree = load_tree(file_path)
    except LoaderError as err:
        console.print(f"[red]Failed to load tree:[/red] {err}")
        raise typer.Exit(code=1)

    service, recorder = _make_service(fail_fast, verbose)
    result = service.run(tree, context)
    _render_result(result, recorder)
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def check(
    file_path: str = typer.Argument(..., help="Tree file (.json, .yaml or .yml)"),
) -> None:
    """Build a tree without running it and print its canonical form."""
    try:
        tree = load_tree(file_path)
    except LoaderError as err:
        console.print(f"[red]Failed to load tree:[/red] {err}")
        raise typer.Exit(code=1)

    service = DecisionTreeService()
    try:
        action = service.build(tree)
    except ActionTreeError as err:
        console.print(f"[red]{type(err).__name__}:[/red] {err}")
        raise typer.Exit(code=1)

    nodes = list(action.walk())
    console.print(f"[green]OK[/green] Built {len(nodes)} node(s)")
    console.print_json(data=action.to_node())

    for node in nodes:
        if not isinstance(node, ConditionAction):
            continue
        try:
            validate_expression_syntax(node.expression)
        except ExpressionEvaluationError as err:
            console.print(f"[yellow]Warning:[/yellow] {err} (will evaluate as false)")


@app.command()
def types() -> None:
    """List registered action types."""
    table = Table(title="Action types")
    table.add_column("Type")
    for type_tag in get_action_registry().list_registered_types():
        table.add_row(type_tag)
    console.print(table)


@app.command()
def demo(
    name: Optional[str] = typer.Argument(None, help="Demo tree name (runs all if omitted)"),
    variables: List[str] = typer.Option([], "--var", "-v", help="Context variable as key=value"),
    verbose: bool = typer.Option(False, "--verbose", help="Log each node as it executes"),
) -> None:
    """Run the built-in demo trees."""
    if name is not None and name not in DEMO_TREES:
        console.print(f"[red]Unknown demo[/red]: {name}. Available: {', '.join(sorted(DEMO_TREES))}")
        raise typer.Exit(code=2)

    overrides = _parse_vars(variables)
    names = [name] if name is not None else list(DEMO_TREES)
    failed = False
    for demo_name in names:
        console.print(f"\n[bold]=== Executing {demo_name} ===[/bold]")
        service, recorder = _make_service(False, verbose)
        context = {**DEMO_CONTEXTS[demo_name], **overrides}
        result = service.run(DEMO_TREES[demo_name], context)
        _render_result(result, recorder)
        failed = failed or not result.ok
    if failed:
        raise typer.Exit(code=1)


__all__ = ["app"]
