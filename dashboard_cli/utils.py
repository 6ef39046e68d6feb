"""Utility functions for the dashboard CLI."""
import json
import typing as t
from pathlib import Path

from rich.console import Console

err_console = Console(stderr=True)


def load_records(path_str: t.Optional[str]) -> list[dict[str, t.Any]]:
    """Load a JSON array of records from a file.

    Args:
        path_str: Path to a JSON file, or None for no records

    Returns:
        List of record dicts (non-object entries are skipped)

    Raises:
        SystemExit: If the file is not valid JSON or not an array
    """
    if path_str is None:
        return []

    path = Path(path_str)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] Could not read '{path_str}': {e}")
        raise SystemExit(1)

    if not isinstance(data, list):
        err_console.print(f"[red]Error:[/red] '{path_str}' must contain a JSON array of records.")
        raise SystemExit(1)

    return [item for item in data if isinstance(item, dict)]
