"""Server options from initialization options and YAML config files."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from wordnet_ls.exceptions import ConfigurationError

CONFIG_KEYS = frozenset({"wordnet", "lexicon", "scratch_dir", "log_level"})


def expand_home(path: str | Path) -> Path:
    """Expand a leading ``~/`` against the invoking user's home directory."""
    text = str(path)
    if text.startswith("~/"):
        return Path.home() / text[2:]
    return Path(text)


@dataclass(frozen=True)
class ServerOptions:
    """Settings the session runs with."""

    wordnet: Path
    lexicon: str | None = None
    scratch_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))


def decode_initialization_options(
    value: Any, defaults: dict[str, Any] | None = None
) -> ServerOptions:
    """Build ServerOptions from the client's initializationOptions.

    ``defaults`` (usually from a config file) fill keys the client leaves
    out.

    Raises:
        ConfigurationError: If no WordNet location is given or a value has
            the wrong type.
    """
    merged: dict[str, Any] = dict(defaults or {})
    if value is not None:
        if not isinstance(value, dict):
            raise ConfigurationError(
                f"Invalid initialization options: expected an object, "
                f"got {type(value).__name__}"
            )
        merged.update({k: v for k, v in value.items() if v is not None})

    if not merged:
        raise ConfigurationError(
            "No initialization options given, need it for wordnet location at least"
        )

    wordnet = merged.get("wordnet")
    if not isinstance(wordnet, str) or not wordnet:
        raise ConfigurationError(
            "Invalid initialization options: 'wordnet' must be a path string"
        )

    lexicon = merged.get("lexicon")
    if lexicon is not None and not isinstance(lexicon, str):
        raise ConfigurationError(
            "Invalid initialization options: 'lexicon' must be a string"
        )

    kwargs: dict[str, Any] = {"wordnet": expand_home(wordnet), "lexicon": lexicon}
    scratch_dir = merged.get("scratch_dir")
    if scratch_dir is not None:
        if not isinstance(scratch_dir, str):
            raise ConfigurationError(
                "Invalid initialization options: 'scratch_dir' must be a path string"
            )
        kwargs["scratch_dir"] = expand_home(scratch_dir)

    return ServerOptions(**kwargs)


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load server defaults from a YAML file.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            its root is not a mapping.
    """
    path = expand_home(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" (line {mark.line + 1})" if mark else ""
        raise ConfigurationError(f"Invalid YAML in {path}{where}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")

    unknown = set(data) - CONFIG_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown config keys in {path}: {', '.join(sorted(unknown))}"
        )
    return data
