# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Puzzle assembler.

Turns five chunked theme words into a 20-tile board:
1. Flatten chunks into the tile sequence
2. Emit one quartile per source word
3. Scan 1-3 chunk spans inside each word against the dictionary
4. Scan every ordered tile pair across the board against the dictionary
5. Total the achievable score
"""

import logging
import uuid
from datetime import date
from typing import List, Dict, Optional, Sequence, Union

from models import SourceWord, ValidWord, Puzzle
from scoring import ALL_QUARTILES_BONUS, QUARTILES_PER_PUZZLE, points_for_tiles
from word_dictionary import WordDictionary

CHUNKS_PER_WORD = 4
BOARD_SIZE = QUARTILES_PER_PUZZLE * CHUNKS_PER_WORD

logger = logging.getLogger(__name__)


class AssemblyError(ValueError):
    """Raised when assembly input breaks the board preconditions."""
    pass


def _as_source_word(item: Union[SourceWord, Dict]) -> SourceWord:
    if isinstance(item, SourceWord):
        return item
    return SourceWord(word=item.get("word", ""), chunks=list(item.get("chunks", [])))


class PuzzleAssembler:
    """
    Builds immutable Puzzle objects from validated source words.

    Usage:
        assembler = PuzzleAssembler()
        puzzle = assembler.assemble("Food", [
            SourceWord("RESTAURANT", ["RES", "TAU", "RA", "NT"]), ...
        ])
    """

    def __init__(self, dictionary: Optional[WordDictionary] = None):
        """
        Initialize the assembler.

        Args:
            dictionary: Allow-list for sub-words (default word list if omitted)
        """
        self.dictionary = dictionary or WordDictionary()

    def assemble(
        self,
        theme: Optional[str],
        words: Sequence[Union[SourceWord, Dict]],
        puzzle_id: Optional[str] = None,
        puzzle_date: Optional[str] = None
    ) -> Puzzle:
        """
        Assemble a puzzle.

        Args:
            theme: Theme label for the puzzle
            words: Exactly five source words with four chunks each
            puzzle_id: Optional identifier (random if omitted)
            puzzle_date: Optional ISO date (today if omitted)

        Returns:
            Assembled Puzzle

        Raises:
            AssemblyError: If the words do not satisfy the board preconditions
        """
        sources = [_as_source_word(w) for w in words]
        self._check_sources(sources)

        tiles: List[str] = []
        spans: List[List[int]] = []
        for source in sources:
            start = len(tiles)
            tiles.extend(source.chunks)
            spans.append(list(range(start, len(tiles))))

        seen = set()
        valid_words: List[ValidWord] = []

        def add(text: str, indices: Sequence[int]) -> Optional[ValidWord]:
            if text in seen:
                return None
            count = len(indices)
            entry = ValidWord(
                word=text,
                tile_indices=tuple(indices),
                tile_count=count,
                points=points_for_tiles(count),
                is_quartile=count >= CHUNKS_PER_WORD,
            )
            seen.add(text)
            valid_words.append(entry)
            return entry

        quartiles = []
        for source, indices in zip(sources, spans):
            quartiles.append(add(source.word, indices))

        for indices in spans:
            for length in (1, 2, 3):
                for start in range(0, CHUNKS_PER_WORD - length + 1):
                    run = indices[start:start + length]
                    text = "".join(tiles[i] for i in run)
                    if self.dictionary.is_valid(text):
                        add(text, run)

        # Both orders of every pair are candidates, including j before i.
        for i in range(len(tiles)):
            for j in range(len(tiles)):
                if i == j:
                    continue
                text = tiles[i] + tiles[j]
                if self.dictionary.is_valid(text):
                    add(text, (i, j))

        max_score = sum(w.points for w in valid_words) + ALL_QUARTILES_BONUS

        puzzle = Puzzle(
            id=puzzle_id or f"puzzle-{uuid.uuid4().hex[:12]}",
            date=puzzle_date or date.today().isoformat(),
            tiles=tuple(tiles),
            valid_words=tuple(valid_words),
            quartiles=tuple(quartiles),
            max_score=max_score,
            theme=theme,
            source_words=tuple(sources),
        )
        logger.debug(
            f"Assembled {puzzle.id}: {len(tiles)} tiles, "
            f"{len(valid_words)} valid words, max score {max_score}"
        )
        return puzzle

    def _check_sources(self, sources: List[SourceWord]):
        """Reject input that cannot form a full board."""
        if len(sources) != QUARTILES_PER_PUZZLE:
            raise AssemblyError(
                f"Expected {QUARTILES_PER_PUZZLE} words, got {len(sources)}"
            )
        texts = set()
        for source in sources:
            if len(source.chunks) != CHUNKS_PER_WORD:
                raise AssemblyError(
                    f"Word '{source.word}' must have exactly "
                    f"{CHUNKS_PER_WORD} chunks, found {len(source.chunks)}"
                )
            if not source.reconstructs():
                raise AssemblyError(
                    f"Chunks {source.chunks} don't reconstruct word '{source.word}'"
                )
            if source.word in texts:
                raise AssemblyError(f"Duplicate word '{source.word}'")
            texts.add(source.word)
