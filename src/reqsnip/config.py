"""Configuration management with XDG paths, atomic writes, and precedence resolution.

The rendering core takes all of its inputs as arguments; this module only
serves the ``reqsnip`` CLI:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.reqsnip/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User config** -- a single :class:`~reqsnip.models.SnippetConfig` JSON
  file, read by :func:`load_user_config` and written by
  :func:`save_user_config`.
* **Project config** -- ``./reqsnip.json``, layered over the user config.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config, and user config.
* **Credential resolution** -- :func:`resolve_credential` expands
  ``env:VAR`` and ``file:PATH`` sources into the value shown in snippets.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from reqsnip.exceptions import ConfigError
from reqsnip.models import SnippetConfig

_APP_NAME = "reqsnip"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "reqsnip.json"

ENV_BASE_HREF = "REQSNIP_BASE_HREF"
ENV_SERVER_URL = "REQSNIP_SERVER_URL"
ENV_TARGET = "REQSNIP_TARGET"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory spec (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/reqsnip/`` (default ``~/.config/reqsnip/``).
    On macOS/Windows: ``~/.reqsnip/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/reqsnip/`` (default ``~/.local/share/reqsnip/``).
    On macOS/Windows: ``~/.reqsnip/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to a temp file next to *path*, then rename it over *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as fd:
            tmp_path = fd.name
            fd.write(data)
            fd.flush()
            os.fsync(fd.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


# --- Config files ---


def _user_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def _read_json(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} config at {path}: expected a JSON object")
    return data


def load_user_config() -> SnippetConfig:
    """Load the user configuration, or defaults when there is none.

    Raises:
        ConfigError: If the file exists but is not valid JSON or fails
            Pydantic validation.
    """
    path = _user_config_path()
    data = _read_json(path, "user")
    if data is None:
        return SnippetConfig()
    try:
        return SnippetConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid user config at {path}: {exc}") from exc


def save_user_config(config: SnippetConfig) -> None:
    """Persist the user configuration atomically."""
    data = config.model_dump(mode="json", exclude_none=True)
    _atomic_write(_user_config_path(), json.dumps(data, indent=2) + "\n")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./reqsnip.json`` as a dict, or ``None`` if absent.

    Raises:
        ConfigError: If the file exists but contains invalid JSON.
    """
    return _read_json(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project")


# --- Precedence resolution ---


def resolve_config(
    cli_base_href: Optional[str] = None,
    cli_server_url: Optional[str] = None,
    cli_target: Optional[str] = None,
    cli_credentials: Optional[dict[str, str]] = None,
) -> SnippetConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``REQSNIP_BASE_HREF``,
           ``REQSNIP_SERVER_URL``, ``REQSNIP_TARGET``)
        3. Project config (``./reqsnip.json``)
        4. User config (``~/.config/reqsnip/config.json``)
        5. Defaults

    Credentials merge key by key rather than replacing each other.

    Raises:
        ConfigError: If a config file is invalid.
    """
    merged = load_user_config().model_dump()

    project = load_project_config()
    if project is not None:
        credentials = {**merged["credentials"], **(project.get("credentials") or {})}
        merged.update(project)
        merged["credentials"] = credentials

    for field, env_var in (
        ("base_href", ENV_BASE_HREF),
        ("server_url", ENV_SERVER_URL),
        ("target", ENV_TARGET),
    ):
        env_value = os.environ.get(env_var)
        if env_value:
            merged[field] = env_value

    for field, cli_value in (
        ("base_href", cli_base_href),
        ("server_url", cli_server_url),
        ("target", cli_target),
    ):
        if cli_value is not None:
            merged[field] = cli_value
    if cli_credentials:
        merged["credentials"] = {**merged["credentials"], **cli_credentials}

    try:
        return SnippetConfig.model_validate(merged)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Expand a credential source into the value shown in snippets.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads the file, stripped of whitespace
        - anything else -- used literally

    Raises:
        ConfigError: If the variable is unset or the file cannot be read.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(f"Environment variable '{var_name}' is not set (source: {source})")
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    return source


def resolve_credentials(config: SnippetConfig) -> dict[str, str]:
    """Expand every credential source in *config*."""
    return {name: resolve_credential(source) for name, source in config.credentials.items()}
