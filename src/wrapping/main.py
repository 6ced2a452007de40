import json
import typer
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from wrapping import __version__
from wrapping.config import load_options_file, resolve, validate
from wrapping.exceptions import ConfigError, WrappingError
from wrapping.filetypes import detect_filetype
from wrapping.host.memory import InMemoryHost
from wrapping.integration import setup
from wrapping.logging_config import logger
from wrapping.syntax import SyntaxQueryCounter

# Global textwidth used when the CLI simulates an editor session
DEFAULT_TEXTWIDTH = 80

app = typer.Typer(help="Decide between hard and soft wrapping for text files.")
console = Console()


def _load_options(config_path: Optional[Path]) -> Dict[str, Any]:
    if config_path is None:
        return {}
    try:
        return load_options_file(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def version():
    """
    Prints the current version of wrapping.
    """
    typer.echo(f"wrapping v{__version__}")


@app.command()
def decide(
    path: Path = typer.Argument(..., help="File to inspect.", exists=True, dir_okay=False, readable=True),
    filetype: Optional[str] = typer.Option(
        None, "--filetype", "-f", help="Filetype to assume (default: detected from the file name)."
    ),
    textwidth: Optional[int] = typer.Option(
        None, "--textwidth", help="Buffer textwidth, as if set by a modeline (default: global textwidth)."
    ),
    global_textwidth: int = typer.Option(
        DEFAULT_TEXTWIDTH, "--global-textwidth", help="Global textwidth of the simulated editor."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON file with wrapping options.", dir_okay=False
    ),
    force: bool = typer.Option(
        False, "--force", help="Ignore the filetype allow/deny lists."
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Runs the wrap mode heuristic on a file.
    """
    options = _load_options(config_path)
    host = InMemoryHost(textwidth=global_textwidth)

    try:
        plugin = setup(host, options)
        ft = filetype if filetype is not None else detect_filetype(path)
        buffer = host.open_file(path, filetype=ft, textwidth=textwidth)

        if force:
            mode = plugin.engine.apply_heuristic(buffer)
        elif plugin.auto_enabled:
            mode = plugin.engine.decide(buffer)
        else:
            mode = None
    except WrappingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    result = {
        "path": str(path),
        "filetype": ft,
        "mode": mode.value if mode is not None else None,
        "textwidth": host.get_buffer_option(buffer, "textwidth"),
        "wrap": host.get_buffer_option(buffer, "wrap"),
        "warnings": [message for level, message in host.notifications if level == "warning"],
    }
    logger.debug(f"decide {path}: {result['mode']}")

    if json_output:
        typer.echo(json.dumps(result, indent=2))
        return

    for warning in result["warnings"]:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    if mode is None:
        console.print(f"[dim]{path}: skipped (auto mode is off or filetype {ft!r} is not enabled; use --force)[/dim]")
    else:
        color = "green" if result["mode"] == "soft" else "cyan"
        console.print(f"{path}: [bold {color}]{result['mode']}[/bold {color}] wrap mode")


@app.command()
def count(
    path: Path = typer.Argument(..., help="File to inspect.", exists=True, dir_okay=False, readable=True),
    language: str = typer.Option(..., "--language", "-l", help="Language the query is written for."),
    query: str = typer.Option(..., "--query", "-q", help="tree-sitter query, e.g. '(comment) @c'."),
    filetype: Optional[str] = typer.Option(
        None, "--filetype", "-f", help="Filetype to assume (default: detected from the file name)."
    ),
    line: Optional[int] = typer.Option(
        None, "--line", help="Also report whether this 1-based line starts inside a comment."
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Counts lines and characters covered by a syntax query.
    """
    host = InMemoryHost()
    try:
        ft = filetype if filetype is not None else detect_filetype(path)
        buffer = host.open_file(path, filetype=ft)
        counter = SyntaxQueryCounter(host)
        result = counter.count_query_matches(language, query, buffer)

        in_comment = None
        if line is not None:
            host.set_cursor(buffer, max(line - 1, 0), 0)
            in_comment = counter.cursor_in_comment(buffer)
    except WrappingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    payload = result.model_dump()
    payload["available"] = counter.provider.available
    if in_comment is not None:
        payload["cursor_in_comment"] = in_comment

    if json_output:
        typer.echo(json.dumps(payload, indent=2))
        return

    if not counter.provider.available:
        console.print("[yellow]tree-sitter is not installed; counts are zero.[/yellow]")

    table = Table(title=f"Query matches in '{path}'")
    table.add_column("Lines", justify="right", style="cyan")
    table.add_column("Characters", justify="right", style="magenta")
    table.add_row(str(result.lines), str(result.chars))
    console.print(table)
    if in_comment is not None:
        console.print(f"Line {line} in comment: [bold]{in_comment}[/bold]")


@app.command(name="config")
def show_config(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON file with wrapping options.", dir_okay=False
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Shows the resolved configuration and whether it is valid.
    """
    options = _load_options(config_path)
    try:
        config = resolve(options)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    error = None
    try:
        validate(config)
    except ConfigError as e:
        error = str(e)

    payload = config.model_dump(mode="json")
    for key in ("auto_set_mode_filetype_allowlist", "auto_set_mode_filetype_denylist"):
        payload[key] = sorted(payload[key])

    if json_output:
        typer.echo(json.dumps({"config": payload, "valid": error is None, "error": error}, indent=2))
        return

    table = Table(title="wrapping configuration")
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="magenta")
    for key, value in payload.items():
        table.add_row(key, json.dumps(value))
    console.print(table)

    if error is not None:
        console.print(f"[yellow]Warning: {error}[/yellow]")


if __name__ == "__main__":
    app()
