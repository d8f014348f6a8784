"""Release configuration.

The runner never looks at the process working directory. Everything it
needs is carried by an explicit ``ReleaseConfig``:

    repository_root     git working tree the release runs against
    resource_directory  directory holding one ``<version>.txt`` per release
    remote / branch     defaults for push and tag push

Resolution order for each field: explicit override (CLI flag) >
``RELFLOW_ROOT`` environment variable (root only) > ``relflow.toml`` in the
repository root > built-in defaults.

Example ``relflow.toml``:

    [release]
    messages_dir = "docs/releases"
    remote = "upstream"
    branch = "trunk"
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_BRANCH",
    "DEFAULT_MESSAGES_DIR",
    "DEFAULT_REMOTE",
    "ROOT_ENV_VAR",
    "ConfigError",
    "FileConfig",
    "ReleaseConfig",
    "find_repository_root",
    "load_file_config",
    "resolve_config",
]

CONFIG_FILENAME = "relflow.toml"
ROOT_ENV_VAR = "RELFLOW_ROOT"

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_MESSAGES_DIR = "versions"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when relflow.toml cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Values read from the ``[release]`` table (all optional)."""

    messages_dir: str | None = None
    remote: str | None = None
    branch: str | None = None

    @classmethod
    def from_dict(cls, data: StrDict) -> FileConfig:
        release: StrDict = get_table(data, "release") or {}
        return cls(
            messages_dir=get_str(release, "messages_dir"),
            remote=get_str(release, "remote"),
            branch=get_str(release, "branch"),
        )


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Resolved configuration handed to the release runner."""

    repository_root: Path
    resource_directory: Path
    remote: str = DEFAULT_REMOTE
    branch: str = DEFAULT_BRANCH

    @property
    def config_path(self) -> Path:
        return self.repository_root / CONFIG_FILENAME


def find_repository_root(start: Path) -> Path | None:
    """Search upward from start for a directory containing ``.git``."""
    for parent in (start, *start.parents):
        if (parent / ".git").exists():
            return parent
    return None


def load_file_config(path: Path) -> Result[FileConfig, ConfigError]:
    """Parse relflow.toml. A missing file yields an empty FileConfig."""
    import tomllib

    if not path.exists():
        return Ok(FileConfig())

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(FileConfig.from_dict(data))


def _resolve_root(root: Path | None, start_dir: Path | None) -> Path:
    if root is not None:
        return root.expanduser().resolve()

    env_value = os.environ.get(ROOT_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser().resolve()

    start = (start_dir or Path.cwd()).resolve()
    # Fall back to the start directory so repository checks can report it.
    return find_repository_root(start) or start


def resolve_config(
    *,
    root: Path | None = None,
    messages_dir: Path | None = None,
    remote: str | None = None,
    branch: str | None = None,
    start_dir: Path | None = None,
) -> Result[ReleaseConfig, ConfigError]:
    """Build a ReleaseConfig from overrides, environment and relflow.toml."""
    repository_root = _resolve_root(root, start_dir)

    file_result = load_file_config(repository_root / CONFIG_FILENAME)
    if isinstance(file_result, Err):
        return file_result
    file_cfg = file_result.value

    if messages_dir is not None:
        # Flag values are relative to the caller, file values to the repository.
        resource_directory = messages_dir.expanduser().resolve()
    else:
        resource_directory = Path(file_cfg.messages_dir or DEFAULT_MESSAGES_DIR).expanduser()
        if not resource_directory.is_absolute():
            resource_directory = repository_root / resource_directory

    return Ok(
        ReleaseConfig(
            repository_root=repository_root,
            resource_directory=resource_directory,
            remote=remote or file_cfg.remote or DEFAULT_REMOTE,
            branch=branch or file_cfg.branch or DEFAULT_BRANCH,
        )
    )
