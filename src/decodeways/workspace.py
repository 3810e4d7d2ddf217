from __future__ import annotations

import os
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

ProfileSource = Union[Path, "Traversable"]


def workspace_dir() -> Path:
    env = os.environ.get("DECODEWAYS_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / "Documents" / "DecodeWays").resolve()


def profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def packaged_profile(name: str) -> Traversable | None:
    """
    Resource handle of a profile shipped inside the package, or None.
    Opened in place, so it also works when the package lives in a zip.
    """
    ref = pkg_files("decodeways") / "profiles" / f"{name}.toml"
    if not ref.is_file():
        return None
    return ref


def packaged_profile_names() -> list[str]:
    ref = pkg_files("decodeways") / "profiles"
    try:
        return sorted(
            entry.name[:-5] for entry in ref.iterdir()
            if entry.name.endswith(".toml")
        )
    except (FileNotFoundError, NotADirectoryError):
        return []


def profile_path(name: str) -> ProfileSource | None:
    """
    Resolve a profile with override semantics:

      1) <Workspace>/profiles/<name>.toml  (if present)
      2) Packaged resource: decodeways/profiles/<name>.toml
    """
    p = profiles_dir() / f"{name}.toml"
    if p.is_file():
        return p
    return packaged_profile(name)
