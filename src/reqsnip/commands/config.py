"""Config commands -- view and modify the user configuration.

Provides the ``reqsnip config`` sub-command group. Settings are persisted in
``config.json`` under the reqsnip config directory and supply the defaults
that project config, environment variables, and CLI flags can override (see
:func:`~reqsnip.config.resolve_config`).
"""

from __future__ import annotations

import typer
from pydantic import ValidationError

from reqsnip.exceptions import InvalidUsageError, ReqsnipError

config_app = typer.Typer(no_args_is_help=True)

CREDENTIALS_KEY = "credentials"


@config_app.command("show")
def config_show() -> None:
    """Show the user configuration as a Key/Value table.

    Credentials are listed one row per security scheme as
    ``credentials.<scheme>``.

    Example::

        reqsnip config show
        reqsnip --json config show
    """
    from reqsnip.config import get_config_dir, load_user_config
    from reqsnip.output import debug, error, format_value, print_table

    try:
        config = load_user_config()
    except ReqsnipError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Config directory: {get_config_dir()}")
    data = config.model_dump(mode="json")
    credentials = data.pop(CREDENTIALS_KEY)
    rows = [[key, format_value(value)] for key, value in data.items()]
    rows.extend([f"{CREDENTIALS_KEY}.{name}", source] for name, source in credentials.items())
    print_table(["Key", "Value"], rows, title="User config")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key: base_href, target, server_url, or credentials.<scheme>."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    ``target`` is checked against the known snippet targets. Credential
    values may be literals or ``env:VAR`` / ``file:PATH`` sources; they are
    stored as given and resolved at render time.

    Raises:
        typer.Exit: With code 2 if the key is unknown or the value is
            rejected, or with the config error's code if the existing file
            cannot be read.

    Example::

        reqsnip config set target all
        reqsnip config set credentials.api_key env:PETSTORE_KEY
    """
    from reqsnip.app import parse_targets
    from reqsnip.config import load_user_config, save_user_config
    from reqsnip.models import SnippetConfig
    from reqsnip.output import error, success

    try:
        data = load_user_config().model_dump(mode="json")
        name, _, scheme = key.partition(".")
        if name == CREDENTIALS_KEY and scheme:
            data[CREDENTIALS_KEY][scheme] = value
        elif scheme or name == CREDENTIALS_KEY or name not in data:
            raise InvalidUsageError(f"Unknown config key: {key}")
        else:
            if name == "target":
                parse_targets(value)
            data[name] = value

        try:
            new_config = SnippetConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidUsageError(f"Validation error: {exc}") from exc

        save_user_config(new_config)
    except ReqsnipError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Set {key} = {value}")
