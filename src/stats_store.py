# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML persistence for lifetime player statistics.
"""

import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Optional

import yaml

from models import GameStats


class StatsStoreError(Exception):
    """Raised when the stats file cannot be read or written."""
    pass


class StatsStore:
    """
    Loads and saves GameStats at a fixed path.

    A missing file reads as fresh stats.
    """

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger if logger else logging.getLogger(__name__)

    def load(self) -> GameStats:
        if not self.path.exists():
            self.logger.debug(f"No stats file at {self.path}, starting fresh")
            return GameStats()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StatsStoreError(f"Invalid YAML in stats file: {e}")

        if data is None:
            return GameStats()
        if not isinstance(data, dict):
            raise StatsStoreError(f"Stats file must contain a mapping: {self.path}")

        # Unknown keys from other versions are ignored.
        known = {f.name for f in fields(GameStats)}
        values = {k: v for k, v in data.items() if k in known}
        if values.get("last_played_date") is not None:
            values["last_played_date"] = str(values["last_played_date"])
        values["rank_history"] = list(values.get("rank_history") or [])

        try:
            return GameStats(**values)
        except TypeError as e:
            raise StatsStoreError(f"Invalid stats file {self.path}: {e}")

    def save(self, stats: GameStats) -> str:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(asdict(stats), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise StatsStoreError(f"Could not write stats file {self.path}: {e}")
        self.logger.debug(f"Saved stats to {self.path}")
        return str(self.path)
