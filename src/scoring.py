# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Scoring rules: points per tile count, completion bonus and ranks.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ALL_QUARTILES_BONUS = 40
QUARTILES_PER_PUZZLE = 5

# tile count -> points; 4 or more tiles always score the top value
_POINTS_BY_TILES = {1: 1, 2: 2, 3: 4}
QUARTILE_POINTS = 8


class Rank(Enum):
    BEGINNER = "Beginner"
    NOVICE = "Novice"
    SKILLED = "Skilled"
    EXPERT = "Expert"
    MASTER = "Master"
    GENIUS = "Genius"


# Ordered lowest first. Genius has no score threshold of its own.
RANK_THRESHOLDS = [
    (Rank.BEGINNER, 0),
    (Rank.NOVICE, 25),
    (Rank.SKILLED, 50),
    (Rank.EXPERT, 75),
    (Rank.MASTER, 100),
]


def points_for_tiles(tile_count: int) -> int:
    """
    Get the point value of a word built from tile_count tiles.

    Raises:
        ValueError: If tile_count is less than 1
    """
    if tile_count < 1:
        raise ValueError(f"tile_count must be at least 1, got {tile_count}")
    return _POINTS_BY_TILES.get(tile_count, QUARTILE_POINTS)


def completion_bonus(previous_quartiles: int, new_quartiles: int) -> int:
    """Bonus earned by moving from previous_quartiles to new_quartiles."""
    if previous_quartiles < QUARTILES_PER_PUZZLE <= new_quartiles:
        return ALL_QUARTILES_BONUS
    return 0


def calculate_rank(score: int, quartiles_found: int) -> Rank:
    """Get the rank for a cumulative score."""
    rank = Rank.BEGINNER
    for candidate, threshold in RANK_THRESHOLDS:
        if score >= threshold:
            rank = candidate
    if rank == Rank.MASTER and quartiles_found >= QUARTILES_PER_PUZZLE:
        return Rank.GENIUS
    return rank


@dataclass(frozen=True)
class RankProgress:
    """Where a score sits between two rank thresholds."""
    rank: Rank
    next_rank: Optional[Rank]
    next_threshold: Optional[int]
    points_needed: int
    fraction: float


def rank_progress(score: int) -> RankProgress:
    """
    Progress toward the next score-based rank.

    Args:
        score: Current cumulative score

    Returns:
        RankProgress; at Master the fraction is 1.0 and there is no next rank
    """
    for i, (rank, threshold) in enumerate(RANK_THRESHOLDS):
        if i + 1 == len(RANK_THRESHOLDS):
            return RankProgress(rank, None, None, 0, 1.0)
        next_rank, next_threshold = RANK_THRESHOLDS[i + 1]
        if score < next_threshold:
            span = next_threshold - threshold
            fraction = max(0.0, (score - threshold) / span)
            return RankProgress(
                rank=rank,
                next_rank=next_rank,
                next_threshold=next_threshold,
                points_needed=next_threshold - score,
                fraction=fraction,
            )
    return RankProgress(Rank.MASTER, None, None, 0, 1.0)
