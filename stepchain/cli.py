"""
CLI for stepchain
Provides lint, order, and demo commands
"""

import logging
import sys
from enum import Enum

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .errors import PipelineError
from .loader import ConfigLoadError, lint_config, load_config
from .models import MissingArgPolicy, PipelineConfig
from .orchestrator import Pipeline, order_steps
from .steps import Step


app = typer.Typer(help="stepchain function-chaining pipeline CLI")
console = Console()


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@app.command()
def lint(
    config_path: str = typer.Argument(
        ...,
        help="Path to pipeline config YAML",
    ),
    step: list[str] | None = typer.Option(
        None,
        "--step",
        "-s",
        help="Registered step name to check references against (repeatable)",
    ),
):
    """Validate and lint a pipeline configuration"""
    console.print(f"\n[bold]Linting {config_path}...[/bold]\n")

    try:
        load_config(config_path)
    except ConfigLoadError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}\n")
        sys.exit(1)

    console.print("[green]✓[/green] Schema validation passed")
    console.print("[green]✓[/green] Pydantic parsing passed")

    warnings = lint_config(config_path, step_names=step or None)
    if warnings:
        console.print(f"\n[yellow]⚠[/yellow] {len(warnings)} warnings:")
        for warning in warnings:
            console.print(f"  - {escape(warning)}")
    else:
        console.print("\n[green]✓[/green] No warnings")

    console.print("\n[bold green]Config is valid![/bold green]\n")


@app.command()
def order(
    config_path: str = typer.Argument(
        ...,
        help="Path to pipeline config YAML",
    ),
    step: list[str] = typer.Option(
        ...,
        "--step",
        "-s",
        help="Registered step name, in registration order (repeatable)",
    ),
):
    """Show the execution order a config gives for registered steps"""
    try:
        config = load_config(config_path)
    except ConfigLoadError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}\n")
        sys.exit(1)

    placeholders = [Step(name, _noop, ()) for name in step]
    ordered = order_steps(placeholders, config.step_order, logging.getLogger("stepchain.cli"))

    console.print("\n[cyan]Execution order:[/cyan]")
    for index, entry in enumerate(ordered):
        console.print(f"  {index + 1}. {entry.name}")
    console.print()


@app.command()
def demo(
    config_path: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Optional pipeline config YAML",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING,
        case_sensitive=False,
        help="Log level",
    ),
):
    """Run the two-step demo pipeline"""
    logging.basicConfig(
        level=log_level.value,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    if config_path:
        try:
            config = load_config(config_path)
        except ConfigLoadError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}\n")
            sys.exit(1)
    else:
        config = PipelineConfig(missing_arg_policy=MissingArgPolicy.USE_LATEST)

    pipeline = build_demo_pipeline(config)

    try:
        outputs = pipeline.execute()
    except PipelineError as e:
        console.print(f"[bold red]Pipeline failed:[/bold red] {escape(str(e))}\n")
        sys.exit(1)

    table = Table(title="Pipeline Outputs")
    table.add_column("Step", style="cyan")
    table.add_column("Outputs")
    for step_name, values in outputs.items():
        table.add_row(step_name, escape(", ".join(repr(v) for v in values)))
    console.print(table)


def build_demo_pipeline(config: PipelineConfig) -> Pipeline:
    """Two steps: a producer and a consumer of its string output"""
    pipeline = Pipeline(config, logger=logging.getLogger("stepchain.demo"))

    def step1() -> str:
        return "Hello from Step1!"

    def step2(s: str) -> int:
        console.print(f"Step2 received: {escape(s)}")
        return len(s.strip())

    pipeline.add_step("Step1", step1)
    pipeline.add_step("Step2", step2)
    pipeline.add_initial_inputs("extra input 1", "extra input 2")
    return pipeline


def _noop(*args):
    return None


def main():
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    main()
