"""``catalogcli config`` -- inspect and edit the user's ``config.json``.

Keys use dot notation over :class:`~catalogcli.models.GlobalConfig`::

    base_url
    request.timeout            request.connect_timeout
    request.verify_ssl         request.max_retries       request.page_size
    cache.default_ttl_seconds  cache.long_ttl_seconds
    output.format

Only the user file is touched. Project files and ``CATALOGCLI_BASE_URL``
still take precedence when a command runs.
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from catalogcli.exceptions import InvalidUsageError
from catalogcli.output import error, format_response, info, success

config_app = typer.Typer(no_args_is_help=True)

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off")


def _coerce(key: str, current: Any, raw: str) -> Any:
    """Parse *raw* as the type of the value currently stored under *key*."""
    if isinstance(current, bool):
        lowered = raw.lower()
        if lowered in _TRUE or lowered in _FALSE:
            return lowered in _TRUE
        raise InvalidUsageError(f"Expected true or false for {key}, got: {raw}")
    for kind, label in ((int, "an integer"), (float, "a number")):
        if isinstance(current, kind):
            try:
                return kind(raw)
            except ValueError:
                raise InvalidUsageError(f"Expected {label} for {key}, got: {raw}") from None
    return raw


def _assign(data: dict[str, Any], key: str, raw: str) -> Any:
    """Set dotted *key* inside the dumped config *data*; return the stored value."""
    *parents, leaf = key.split(".")
    section = data
    for name in parents:
        section = section.get(name)
        if not isinstance(section, dict):
            raise InvalidUsageError(f"Unknown config key: {key}")
    if leaf not in section or isinstance(section[leaf], dict):
        raise InvalidUsageError(f"Unknown config key: {key}")
    section[leaf] = _coerce(key, section[leaf], raw)
    return section[leaf]


@config_app.command("show")
def config_show() -> None:
    """Print the saved configuration.

    Example::

        catalogcli --json config show
    """
    from catalogcli.config import get_config_dir, load_global_config

    info(f"Config directory: {get_config_dir()}")
    format_response(load_global_config().model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted key, e.g. 'cache.default_ttl_seconds'."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Change one setting.

    Example::

        catalogcli config set base_url http://localhost:3000/
        catalogcli config set request.max_retries 2
    """
    from catalogcli.config import load_global_config, save_global_config
    from catalogcli.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")
    try:
        stored = _assign(data, key, value)
        updated = GlobalConfig.model_validate(data)
    except InvalidUsageError as exc:
        error(exc.message)
        raise typer.Exit(code=exc.exit_code) from None
    except ValidationError as exc:
        error(f"Invalid value for {key}: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=InvalidUsageError.exit_code) from None

    save_global_config(updated)
    success(f"Set {key} = {stored}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
) -> None:
    """Restore every setting to its default."""
    from catalogcli.config import save_global_config
    from catalogcli.models import GlobalConfig

    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
