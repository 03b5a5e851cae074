"""Configuration and persistence for debugkit.

Masks and registries persist as JSON in their wire forms:
    TopicSet       {"topics": [{"level": 2, "label": "error"}, ...]}
    TopicRegistry  {"topics": [{"level": 2, "label": "error",
                                "description": "..."}, ...]}

Mask resolution for applications (highest priority wins):
  1. CLI flags — topic specs given on the command line
  2. Project config — .debugkit.json found walking up from start_dir,
     or the file named explicitly with --config
  3. Nothing — an empty mask

Project config keys:
    "debug": ["info", "error"]        topic specs, resolved via the registry
    "mask":  {"topics": [...]}        a mask in wire form
"""

import json
import os
from pathlib import Path

from debugkit.errors import DecodeError
from debugkit.registry import TopicRegistry
from debugkit.topicset import TopicSet

PROJECT_CONFIG_NAME = ".debugkit.json"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .debugkit.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Loading and saving
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON file, returning empty dict when it cannot be read or parsed."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}


def save_json(data, path):
    """Write ``data`` as indented JSON; returns the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return path


def load_mask(path):
    """Load a TopicSet; a missing or unparsable file gives an empty mask.

    Raises DecodeError when the JSON parses but is not a valid mask.
    """
    data = load_json(path)
    if not data:
        return TopicSet.empty()
    return TopicSet.from_dict(data)


def save_mask(mask, path):
    return save_json(mask.to_dict(), path)


def load_registry(path):
    """Load a TopicRegistry; a missing or unparsable file gives an empty one."""
    data = load_json(path)
    if not data:
        return TopicRegistry()
    return TopicRegistry.from_dict(data)


def save_registry(registry, path):
    return save_json(registry.to_dict(), path)


def load_project_config(start_dir=None, path=None):
    """Load the explicit config file, or the nearest .debugkit.json.

    Returns (config_dict, path_or_None).
    """
    if path is None:
        path = find_project_config(start_dir)
    if path:
        data = load_json(path)
        return (data if isinstance(data, dict) else {}), Path(path)
    return {}, None


# ---------------------------------------------------------------------------
# Mask resolution
# ---------------------------------------------------------------------------
def resolve_mask(cli_specs, registry, config_path=None, start_dir=None):
    """Resolve the active mask using CLI > project config > empty.

    Raises:
        UnknownTopic: a spec does not resolve in ``registry``
        DecodeError: the config holds a malformed "mask" or "debug"
    """
    if cli_specs:
        return registry.mask(cli_specs)

    project_cfg, _ = load_project_config(start_dir, config_path)
    if "mask" in project_cfg:
        return TopicSet.from_dict(project_cfg["mask"])
    specs = project_cfg.get("debug")
    if specs:
        if not isinstance(specs, list) or not all(isinstance(s, str) for s in specs):
            raise DecodeError("debug", specs, "expected an array of topic names")
        return registry.mask(specs)
    return TopicSet.empty()
