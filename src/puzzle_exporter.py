# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Puzzle export and import.

Writes assembled puzzles as YAML or JSON in the exchange shape from
Puzzle.to_dict(), and reads them back.
"""

import json
from pathlib import Path
from typing import Any, Dict

import yaml

from models import Puzzle

FORMAT_EXTENSIONS = {
    "yaml": "yaml",
    "json": "json",
}

YAML_HEADER = (
    "# Quartiles Puzzle\n"
    "# Tiles, valid words and quartiles for one board\n\n"
)


class PuzzleExportError(Exception):
    """Raised when a puzzle cannot be written or read back."""
    pass


class PuzzleExporter:
    """
    Serializes puzzles to disk.

    Usage:
        exporter = PuzzleExporter()
        text = exporter.export(puzzle, "yaml")
        path = exporter.save(puzzle, "output", "json")
    """

    def export(self, puzzle: Puzzle, fmt: str = "yaml") -> str:
        """
        Export a puzzle to a string.

        Args:
            puzzle: Assembled puzzle
            fmt: 'yaml' or 'json'

        Returns:
            Serialized puzzle
        """
        data = puzzle.to_dict()

        if fmt == "json":
            return json.dumps(data, indent=2) + "\n"

        if fmt == "yaml":
            return YAML_HEADER + yaml.safe_dump(
                data,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                indent=2,
                width=80,
            )

        raise PuzzleExportError(
            f"Unsupported format '{fmt}'. Must be one of: {list(FORMAT_EXTENSIONS)}"
        )

    def save(self, puzzle: Puzzle, directory: str, fmt: str = "yaml") -> str:
        """
        Save a puzzle as <directory>/<puzzle id>.<ext>.

        Returns:
            Path to saved file
        """
        content = self.export(puzzle, fmt)

        path = Path(directory) / f"{puzzle.id}.{FORMAT_EXTENSIONS[fmt]}"
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)

        return str(path)


def load_puzzle(path: str) -> Puzzle:
    """
    Load a puzzle written by PuzzleExporter.

    The format is taken from the file extension.

    Raises:
        PuzzleExportError: If the file is missing or malformed
    """
    path = Path(path)

    if not path.exists():
        raise PuzzleExportError(f"Puzzle file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise PuzzleExportError(f"Invalid puzzle file {path}: {e}")

    if not isinstance(data, dict):
        raise PuzzleExportError(f"Puzzle file must contain a mapping: {path}")

    return _puzzle_from_data(data, path)


def _puzzle_from_data(data: Dict[str, Any], path: Path) -> Puzzle:
    try:
        return Puzzle.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise PuzzleExportError(f"Missing or invalid puzzle field in {path}: {e}")
