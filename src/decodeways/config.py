from __future__ import annotations

from dataclasses import dataclass
from typing import Any

try:
    import tomllib as toml
except ImportError:  # Python < 3.11
    import tomli as toml  # type: ignore

from decodeways.utility import UserInputError
from decodeways.workspace import ProfileSource, packaged_profile_names, profile_path, profiles_dir

# Built-in values for every key the program reads; profiles override them.
DEFAULTS: dict[str, dict[str, Any]] = {
    "BEHAVIOUR": {"DEBUG": False},
    "INPUT": {"STRIP_WHITESPACE": False},
    "OUTPUT": {"FORMAT": "full", "MAX_DIGITS": 0},
    "FORMATTING": {"NUM_ABBR_HEAD": 10, "NUM_ABBR_TAIL": 10, "ELLIPSIS": "…"},
}

OUTPUT_FORMATS = ("full", "short")


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if not given in [PROFILE])
      - description: one-line description from [PROFILE] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: ProfileSource | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------

def _load_toml(path: ProfileSource) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


# --- Metadata handling -----------------------------------------------------

def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    raw = {k: v for k, v in raw.items() if k != "PROFILE"}

    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))

    return raw, name, description


def _merge_defaults(data: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {k: dict(v) for k, v in DEFAULTS.items()}
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def _validate(data: dict[str, Any], source: str) -> None:
    fmt = str(data["OUTPUT"].get("FORMAT", "full")).strip().lower()
    if fmt not in OUTPUT_FORMATS:
        raise UserInputError(
            f"{source}: OUTPUT.FORMAT must be one of {', '.join(OUTPUT_FORMATS)}, got {fmt!r}."
        )
    data["OUTPUT"]["FORMAT"] = fmt

    max_digits = data["OUTPUT"].get("MAX_DIGITS", 0)
    if isinstance(max_digits, bool) or not isinstance(max_digits, int) or max_digits < 0:
        raise UserInputError(f"{source}: OUTPUT.MAX_DIGITS must be a non-negative integer.")


# --- Public API ------------------------------------------------------------

def list_all_profiles() -> list[str]:
    """
    Names of packaged profiles plus any in the workspace (filename stems).
    """
    names = set(packaged_profile_names())
    pdir = profiles_dir()
    if pdir.exists():
        names.update(p.stem for p in pdir.glob("*.toml"))
    return sorted(names)


def has_profile(name: str) -> bool:
    return profile_path(name) is not None


def load_settings(name: str | None) -> Settings:
    """
    Load a profile by name (default 'default'), strip the [PROFILE] metadata,
    fill in missing keys from DEFAULTS and return
    Settings(data=..., name=..., description=..., _source=path).
    """
    if not name:
        name = "default"

    path = profile_path(name)
    if path is None:
        raise FileNotFoundError(f"Profile '{name}' not found in {profiles_dir()} or the package")

    raw = _load_toml(path)

    # Pull out metadata (name/description) and remove [PROFILE] from settings
    data, resolved_name, description = _split_profile_data(raw, name)
    data = _merge_defaults(data)
    _validate(data, path.name)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
