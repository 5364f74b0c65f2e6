# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Game session state for playing an assembled puzzle.

Every operation takes a GameState and returns a new one; nothing here
mutates its input or touches storage. Persisting GameStats is left to
stats_store.
"""

import random
import time
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from models import GameStats, Puzzle, ValidWord
from scoring import (
    QUARTILES_PER_PUZZLE, Rank, calculate_rank, completion_bonus, points_for_tiles
)

MAX_SELECTED_TILES = 4
HINT_LENGTH = 4


class SubmissionOutcome(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    ALREADY_FOUND = "already-found"
    EMPTY = "empty"


@dataclass(frozen=True)
class TileState:
    """Per-game usage and selection of one board tile."""
    tile_id: str
    text: str
    position: int
    is_used: bool = False
    is_selected: bool = False


@dataclass(frozen=True)
class FoundWord:
    word: str
    tile_ids: tuple
    tile_count: int
    points: int
    is_quartile: bool
    found_at: float


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    word: str
    points: int = 0
    bonus: int = 0


@dataclass(frozen=True)
class GameState:
    puzzle: Puzzle
    tiles: tuple
    selected: tuple = ()
    found_words: tuple = ()
    score: int = 0
    quartiles_found: int = 0
    is_complete: bool = False
    hints_used: int = 0
    last_result: Optional[SubmissionResult] = None

    def tile(self, tile_id: str) -> Optional[TileState]:
        for t in self.tiles:
            if t.tile_id == tile_id:
                return t
        return None


def _shuffled(items: List, rng: Optional[random.Random]) -> List:
    items = list(items)
    (rng or random).shuffle(items)
    return items


def new_game(puzzle: Puzzle, rng: Optional[random.Random] = None) -> GameState:
    """Start a game with the puzzle's tiles in shuffled positions."""
    tiles = _shuffled(puzzle.tile_objects(), rng)
    return GameState(
        puzzle=puzzle,
        tiles=tuple(
            TileState(tile_id=t.tile_id, text=t.text, position=pos)
            for pos, t in enumerate(tiles)
        ),
    )


def _set_selected(tiles: tuple, selected: Tuple[str, ...]) -> tuple:
    chosen = set(selected)
    return tuple(replace(t, is_selected=t.tile_id in chosen) for t in tiles)


def select_tile(state: GameState, tile_id: str) -> GameState:
    """Append a tile to the selection if it is free and there is room."""
    tile = state.tile(tile_id)
    if tile is None or tile.is_used or state.is_complete:
        return state
    if tile_id in state.selected or len(state.selected) >= MAX_SELECTED_TILES:
        return state
    selected = state.selected + (tile_id,)
    return replace(
        state,
        selected=selected,
        tiles=_set_selected(state.tiles, selected),
        last_result=None,
    )


def deselect_tile(state: GameState, tile_id: str) -> GameState:
    """Remove the most recently selected tile; other tiles are ignored."""
    if not state.selected or state.selected[-1] != tile_id:
        return state
    selected = state.selected[:-1]
    return replace(state, selected=selected, tiles=_set_selected(state.tiles, selected))


def clear_selection(state: GameState) -> GameState:
    return replace(state, selected=(), tiles=_set_selected(state.tiles, ()))


def current_word(state: GameState) -> str:
    """Text spelled by the selected tiles, in selection order."""
    return "".join(state.tile(tid).text for tid in state.selected)


def submit_word(state: GameState) -> Tuple[GameState, SubmissionResult]:
    """
    Check the current selection against the puzzle's valid words.

    Points come from the number of selected tiles. A 4-tile word counts
    as a quartile and uses up its tiles; the completion bonus is added
    once, when the fifth quartile is found.
    """
    if not state.selected or state.is_complete:
        result = SubmissionResult(SubmissionOutcome.EMPTY, "")
        return replace(state, last_result=result), result

    word = current_word(state)

    if any(f.word == word for f in state.found_words):
        result = SubmissionResult(SubmissionOutcome.ALREADY_FOUND, word)
        return replace(clear_selection(state), last_result=result), result

    if state.puzzle.find_word(word) is None:
        result = SubmissionResult(SubmissionOutcome.INCORRECT, word)
        return replace(clear_selection(state), last_result=result), result

    tile_count = len(state.selected)
    points = points_for_tiles(tile_count)
    is_quartile = tile_count >= MAX_SELECTED_TILES
    quartiles_found = state.quartiles_found + (1 if is_quartile else 0)
    bonus = completion_bonus(state.quartiles_found, quartiles_found)

    found = FoundWord(
        word=word,
        tile_ids=state.selected,
        tile_count=tile_count,
        points=points,
        is_quartile=is_quartile,
        found_at=time.time(),
    )

    # Only quartiles take their tiles off the board.
    used = set(state.selected) if is_quartile else set()
    tiles = tuple(
        replace(t, is_selected=False, is_used=t.is_used or t.tile_id in used)
        for t in state.tiles
    )

    result = SubmissionResult(SubmissionOutcome.CORRECT, word, points, bonus)
    new_state = replace(
        state,
        tiles=tiles,
        selected=(),
        found_words=state.found_words + (found,),
        score=state.score + points + bonus,
        quartiles_found=quartiles_found,
        is_complete=quartiles_found >= QUARTILES_PER_PUZZLE,
        last_result=result,
    )
    return new_state, result


def shuffle_tiles(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Shuffle the free tiles; used tiles stay at the end in their order."""
    free = _shuffled([t for t in state.tiles if not t.is_used], rng)
    used = [t for t in state.tiles if t.is_used]
    tiles = tuple(
        replace(t, position=pos, is_selected=False)
        for pos, t in enumerate(free + used)
    )
    return replace(state, tiles=tiles, selected=())


def unfound_quartiles(state: GameState) -> List[ValidWord]:
    found = {f.word for f in state.found_words}
    return [q for q in state.puzzle.quartiles if q.word not in found]


def use_hint(
    state: GameState,
    rng: Optional[random.Random] = None
) -> Tuple[GameState, Optional[str]]:
    """Reveal the opening letters of a random unfound quartile."""
    unfound = unfound_quartiles(state)
    if not unfound:
        return state, None
    word = (rng or random).choice(unfound).word
    return replace(state, hints_used=state.hints_used + 1), word[:HINT_LENGTH] + "..."


def rank(state: GameState) -> Rank:
    return calculate_rank(state.score, state.quartiles_found)


def share_text(state: GameState) -> str:
    """Plain text summary of a finished game."""
    return (
        "Quartiles\n\n"
        f"Score: {state.score}\n"
        f"Rank: {rank(state).value}\n"
        f"Quartiles: {state.quartiles_found}/{QUARTILES_PER_PUZZLE}\n"
        f"Words: {len(state.found_words)}"
    )


def record_completion(
    stats: GameStats,
    state: GameState,
    today: Optional[date] = None
) -> GameStats:
    """
    Fold a completed game into lifetime stats.

    Returns stats unchanged when the game is not complete.
    """
    if not state.is_complete:
        return stats
    today = today or date.today()
    streak = stats.current_streak + 1
    return GameStats(
        games_played=stats.games_played + 1,
        games_completed=stats.games_completed + 1,
        total_score=stats.total_score + state.score,
        best_score=max(stats.best_score, state.score),
        quartiles_found=stats.quartiles_found + state.quartiles_found,
        current_streak=streak,
        longest_streak=max(stats.longest_streak, streak),
        last_played_date=today.isoformat(),
        rank_history=stats.rank_history + [rank(state).value],
    )
