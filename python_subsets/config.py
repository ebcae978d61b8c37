import logging
import os
from dataclasses import dataclass, replace, fields
from typing import Any, Dict, Literal, Optional
from contextlib import contextmanager

import yaml

DEFAULT_CONFIG_FILE = "python-subsets.cfg"

# ---------------------------------------------------------------------------#
# Immutable configuration object
# ---------------------------------------------------------------------------#
@dataclass(frozen=True, slots=True)
class Config:
    workers: Optional[int] = None
    min_chunk: int = 1024
    output_format: Literal["text", "json"] = "text"
    output: Optional[str] = None


_cfg: Config = Config()           # single authoritative instance


def get() -> Config:
    """Return current configuration (read-only)."""
    return _cfg


def update(**kwargs) -> None:
    """Atomically replace the configuration with a modified copy."""
    global _cfg
    _cfg = replace(_cfg, **kwargs)


@contextmanager
def temporary_config(**kwargs):
    """Temporarily override configuration values inside a *with* block."""
    old = _cfg
    update(**kwargs)
    try:
        yield
    finally:
        update(**{f.name: getattr(old, f.name) for f in fields(old)})


# ---------------------------------------------------------------------------#
# Config files
# ---------------------------------------------------------------------------#
def load_from_file(path: str) -> Dict[str, Any]:
    """
    Read a YAML config file and return its contents as a dict. An empty file
    yields an empty dict.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid config file {path}: expected a mapping, got {type(data).__name__}")
    return data


def _validate(data: Dict[str, Any]) -> None:
    output_format = data.get('output_format', 'text')
    if output_format not in ('text', 'json'):
        raise ValueError(
            f"Invalid output_format: {output_format!r} (must be 'text' or 'json')")
    workers = data.get('workers')
    if workers is not None and (not isinstance(workers, int) or workers < 1):
        raise ValueError(f"Invalid workers: {workers!r} (must be a positive integer)")
    min_chunk = data.get('min_chunk', 1)
    if not isinstance(min_chunk, int) or min_chunk < 1:
        raise ValueError(f"Invalid min_chunk: {min_chunk!r} (must be a positive integer)")
    output = data.get('output')
    if output is not None and not isinstance(output, str):
        raise ValueError(f"Invalid output: {output!r} (must be a path)")


def load_config_file(path: Optional[str] = None) -> None:
    """
    Load settings from `path`, or from python-subsets.cfg in the current
    directory when no path is given. A missing default file is not an error.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_FILE):
            return
        path = DEFAULT_CONFIG_FILE
    data = load_from_file(path)

    known = {f.name for f in fields(Config)}
    unknown = sorted(k for k in data if k not in known)
    if unknown:
        logging.getLogger(__name__).warning(
            "Ignoring unknown config keys in %s: %s", path, ", ".join(unknown))
    settings = {k: v for k, v in data.items() if k in known}
    _validate(settings)
    if settings:
        logging.getLogger(__name__).debug("Loaded config from %s: %s", path, settings)
        update(**settings)


def to_yaml() -> str:
    """Render the effective configuration as a YAML config file."""
    values = {f.name: getattr(_cfg, f.name) for f in fields(_cfg)
              if getattr(_cfg, f.name) is not None}
    header = (
        "# python-subsets configuration file\n"
        f"# Save as {DEFAULT_CONFIG_FILE} in the working directory, or pass it with --config-file\n"
    )
    return header + yaml.safe_dump(values, sort_keys=False, default_flow_style=False)
