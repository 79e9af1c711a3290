"""
Helpers to load game content from JSON data files.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_debug

# Directory holding the bundled data files.
DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[Any, Any]],
    description: str,
) -> dict[Any, Any]:
    """Helper to load and validate JSON files"""
    try:
        log_debug(
            f"Loading {description} using {loader_func.__name__}...",
            {"path": str(filepath)},
        )
        # Validate file path
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        # Load and validate JSON
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e
