"""
Convert between flat KEY=VALUE env files and flat JSON objects.

Parsing is deliberately literal: a line is split on its first '=', nothing
is trimmed, quotes and comments are not interpreted, lines without '=' are
skipped.

Library API like core.files: callers import it directly, the HTTP service
does not serve it.
"""

import json
from pathlib import Path

from devprobe.core.errors import FileOperationError

__all__ = ["parse_env_lines", "env_to_json_string", "json_string_to_env"]


def parse_env_lines(data: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for line in data.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            pairs[key] = value
    return pairs


def env_to_json_string(env_path: str) -> str:
    """Read *env_path* and return its entries as a compact JSON object string."""
    try:
        data = Path(env_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError(f"Failed to read .env: {e}") from e
    return json.dumps(parse_env_lines(data), separators=(",", ":"), ensure_ascii=False)


def json_string_to_env(json_str: str, env_path: str) -> None:
    """
    Write a flat JSON object to *env_path* as KEY=VALUE lines.

    Non-string values are written as empty strings.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise FileOperationError(f"Failed to parse to JSON: {e}") from e
    if not isinstance(data, dict):
        raise FileOperationError("Cannot convert JSON string to object")

    try:
        f = open(env_path, "w", encoding="utf-8", newline="\n")
    except OSError as e:
        raise FileOperationError(f"Failed to create output file: {e}") from e
    with f:
        for key, value in data.items():
            try:
                f.write(f"{key}={value if isinstance(value, str) else ''}\n")
            except OSError as e:
                raise FileOperationError(f"Failed to write to output file: {e}") from e
