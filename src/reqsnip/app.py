"""Typer application and CLI entry point for reqsnip.

Commands:

* ``reqsnip list SPEC`` -- table of the operations declared in a spec.
* ``reqsnip render SPEC METHOD PATH`` -- print the curl and/or Python
  snippet for one operation.
* ``reqsnip config show|set`` -- view and change the user configuration
  (:mod:`reqsnip.commands.config`).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Errors deriving from
:class:`~reqsnip.exceptions.ReqsnipError` exit with their own code; anything
else is written to a crash log under the data directory.

See Also:
    :mod:`reqsnip.config`: Configuration precedence.
    :mod:`reqsnip.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from reqsnip import __version__
from reqsnip.exceptions import InvalidUsageError, ReqsnipError
from reqsnip.exit_codes import EXIT_GENERIC_FAILURE
from reqsnip.models import Operation, SnippetConfig
from reqsnip.renderers import RendererKind

app = typer.Typer(
    name="reqsnip",
    help="Render curl and Python request snippets from OpenAPI 3.0/3.1 specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

from reqsnip.commands.config import config_app  # noqa: E402

app.add_typer(config_app, name="config", help="View and change the user configuration.")

ALL_TARGETS = "all"


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"reqsnip {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Append snippets to this file."
    ),
) -> None:
    """Install the global :class:`~reqsnip.output.OutputManager` from CLI flags."""
    from reqsnip.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )


def parse_credentials(pairs: Optional[list[str]]) -> dict[str, str]:
    """Turn repeated ``NAME=VALUE`` options into a dict.

    Raises:
        InvalidUsageError: If an entry has no ``=`` or an empty name.
    """
    credentials: dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise InvalidUsageError(f"Expected NAME=VALUE for --credential, got '{pair}'")
        credentials[name] = value
    return credentials


def parse_targets(target: str) -> list[RendererKind]:
    """Map a ``--target`` value onto renderer kinds (``all`` selects every one).

    Raises:
        InvalidUsageError: For an unknown target name.
    """
    if target == ALL_TARGETS:
        return list(RendererKind)
    try:
        return [RendererKind(target)]
    except ValueError:
        choices = ", ".join([*(kind.value for kind in RendererKind), ALL_TARGETS])
        raise InvalidUsageError(f"Unknown target '{target}' (choose from {choices})") from None


def _load_operations(spec: str, config: SnippetConfig) -> list[Operation]:
    from reqsnip.config import resolve_credentials
    from reqsnip.output import debug
    from reqsnip.parser import extract_operations, load_spec, validate_openapi_version

    debug(f"Loading spec from {spec}")
    raw = load_spec(spec)
    version = validate_openapi_version(raw)
    operations = extract_operations(
        raw,
        credentials=resolve_credentials(config),
        server_url=config.server_url,
    )
    debug(f"OpenAPI {version}: {len(operations)} operations")
    return operations


@app.command("list")
def list_command(
    spec: str = typer.Argument(..., help="OpenAPI document path, or '-' for stdin."),
) -> None:
    """List the operations declared in SPEC.

    Example::

        reqsnip list petstore.yaml
    """
    from reqsnip.config import resolve_config
    from reqsnip.output import error, format_value, print_table, warning

    try:
        operations = _load_operations(spec, resolve_config())
    except ReqsnipError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not operations:
        warning(f"No operations found in {spec}")

    rows = [
        [op.method.value.upper(), op.path, format_value(op.operation_id), format_value(op.summary)]
        for op in operations
    ]
    print_table(
        ["Method", "Path", "Operation ID", "Summary"],
        rows,
        title=f"Operations ({len(rows)})",
    )


@app.command("render")
def render_command(
    spec: str = typer.Argument(..., help="OpenAPI document path, or '-' for stdin."),
    method: str = typer.Argument(..., help="HTTP method, e.g. get."),
    path: str = typer.Argument(..., help="Path template exactly as in the spec, e.g. /pets/{petId}."),
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="Snippet target: curl, python, or all."
    ),
    server: Optional[str] = typer.Option(
        None, "--server", help="Server URL to use instead of the spec's first server."
    ),
    base_href: Optional[str] = typer.Option(
        None, "--base-href", help="Base URL that relative server URLs are resolved against."
    ),
    credential: Optional[list[str]] = typer.Option(
        None,
        "--credential",
        "-c",
        help="Credential shown for a security scheme, as NAME=VALUE. Repeatable.",
    ),
) -> None:
    """Render the request snippet for METHOD PATH in SPEC.

    Example::

        reqsnip render petstore.yaml post /pets --target python
        reqsnip render petstore.yaml get /pets/{petId} -c api_key=env:PETSTORE_KEY
    """
    from reqsnip.config import resolve_config
    from reqsnip.output import error, get_output, print_snippet, success
    from reqsnip.parser import find_operation
    from reqsnip.renderers import render_snippet

    try:
        config = resolve_config(
            cli_base_href=base_href,
            cli_server_url=server,
            cli_target=target,
            cli_credentials=parse_credentials(credential),
        )
        kinds = parse_targets(config.target)
        operation = find_operation(_load_operations(spec, config), method, path)
    except ReqsnipError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    for kind in kinds:
        print_snippet(
            render_snippet(operation, kind, config.base_href),
            kind.language,
            title=kind.value,
        )

    output_file = get_output().output_file
    if output_file:
        success(f"Wrote {len(kinds)} snippet(s) to {output_file}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback under the data directory and return its path."""
    from reqsnip.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now().strftime('%Y%m%d-%H%M%S')}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``reqsnip`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from reqsnip.output import error

        if isinstance(exc, ReqsnipError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
