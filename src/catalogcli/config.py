"""Where catalogcli keeps its settings, and how the effective settings are chosen.

Files:

* ``config.json`` in the config directory holds the user's
  :class:`~catalogcli.models.GlobalConfig` (API root, request timeouts,
  cache TTLs, default output format).
* ``catalogcli.json`` in the working directory may pin ``base_url`` for one
  project, e.g. a local DummyJSON mirror.

Directories follow the XDG Base Directory layout on Linux and BSD and fall
back to ``~/.catalogcli/`` elsewhere. The crash-log directory is resolved
the same way.

Each source overrides the one before it when :func:`resolve_config` layers
them: defaults, the user file, the project file, ``CATALOGCLI_BASE_URL``
and finally the command-line flags.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from catalogcli.exceptions import ConfigError
from catalogcli.models import GlobalConfig

_APP_NAME = "catalogcli"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "catalogcli.json"

ENV_BASE_URL = "CATALOGCLI_BASE_URL"

# XDG variable, default location under $HOME, sub-directory off XDG platforms
_DIRS = {
    "config": ("XDG_CONFIG_HOME", (".config",), None),
    "data": ("XDG_DATA_HOME", (".local", "share"), "logs"),
}


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    env_var, home_segments, fallback_sub = _DIRS[kind]
    if _is_xdg_platform():
        root = os.environ.get(env_var) or str(Path.home().joinpath(*home_segments))
        path = Path(root) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if fallback_sub:
            path = path / fallback_sub
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json``; created on first use.

    ``$XDG_CONFIG_HOME/catalogcli`` (default ``~/.config/catalogcli``) on
    Linux/BSD, ``~/.catalogcli`` elsewhere.
    """
    return _app_dir("config")


def get_data_dir() -> Path:
    """Directory for crash logs; created on first use.

    ``$XDG_DATA_HOME/catalogcli`` (default ``~/.local/share/catalogcli``) on
    Linux/BSD, ``~/.catalogcli/logs`` elsewhere.
    """
    return _app_dir("data")


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* so readers never see a half-written file.

    The text goes to a temp file next to *path*, is fsynced and then renamed
    over the target. If anything fails the temp file is deleted and *path*
    keeps its previous content.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as handle:
        tmp = Path(handle.name)
        try:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        except BaseException:
            handle.close()
            tmp.unlink(missing_ok=True)
            raise
    try:
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def _read_json(path: Path, label: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """Read ``config.json``, or return defaults when it does not exist.

    Raises:
        ConfigError: The file is not valid JSON or does not validate
            against :class:`~catalogcli.models.GlobalConfig`.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    text = json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    _atomic_write(get_config_dir() / _CONFIG_FILENAME, text)


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./catalogcli.json`` if present.

    Raises:
        ConfigError: The file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def resolve_config(
    cli_base_url: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Build the configuration a command runs with.

    ``base_url`` comes from the first of: ``--base-url``,
    ``CATALOGCLI_BASE_URL``, ``./catalogcli.json``, the user's
    ``config.json``, the built-in default. ``--json``/``--plain`` replace
    ``output.format``. Every other setting comes from the user's file.
    """
    config = load_global_config()
    project = load_project_config() or {}

    for candidate in (cli_base_url, os.environ.get(ENV_BASE_URL), project.get("base_url")):
        if candidate:
            config.base_url = str(candidate)
            break

    if cli_format is not None:
        config.output.format = cli_format
    return config
