# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Tests for the fallback word set.

These tests verify that:
1. The fallback words split into valid 4-chunk tiles
2. The fallback board assembles with the expected words and score
3. A puzzle is produced without an API key
"""

import os
import sys
import unittest
from unittest.mock import patch

# Add src to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chunk_splitter import split_word
from config import QuartilesConfig
from puzzle_generator import FALLBACK_WORDS, SOURCE_FALLBACK, PuzzleGenerator


class TestFallbackPuzzle(unittest.TestCase):
    """Test the built-in fallback puzzle."""

    def test_fallback_words_split_cleanly(self):
        """Test every fallback word gives four reconstructing chunks."""
        self.assertEqual(len(FALLBACK_WORDS), 5)
        self.assertEqual(len(set(FALLBACK_WORDS)), 5)
        for word in FALLBACK_WORDS:
            chunks = split_word(word)
            self.assertEqual(len(chunks), 4, word)
            self.assertEqual("".join(chunks), word)

    def test_fallback_board(self):
        """Test the fallback board's tiles, words and score."""
        generator = PuzzleGenerator(QuartilesConfig(), word_source=_Unavailable())
        puzzle = generator.fallback_puzzle("Anything", "fb-1", "2026-01-02")

        self.assertEqual(puzzle.tiles[:4], ("BEA", "UT", "IF", "UL"))
        self.assertEqual(
            [w.word for w in puzzle.valid_words],
            FALLBACK_WORDS + ["AS", "BUT"]
        )
        self.assertEqual(puzzle.find_word("AS").tile_indices, (13,))
        self.assertEqual(puzzle.max_score, 5 * 8 + 1 + 1 + 40)

    def test_generation_without_api_key(self):
        """Test generate() falls back when no API key is configured."""
        with patch.dict(os.environ, {}, clear=True), \
                patch("puzzle_generator.discover_api_key", return_value=None):
            generator = PuzzleGenerator(QuartilesConfig())
            puzzle = generator.generate("Weather")

        self.assertFalse(generator.word_source.is_available())
        self.assertEqual(puzzle.theme, "Weather")
        self.assertEqual([q.word for q in puzzle.quartiles], FALLBACK_WORDS)
        self.assertEqual(generator.last_generation.source, SOURCE_FALLBACK)


class _Unavailable:
    def is_available(self):
        return False


if __name__ == '__main__':
    unittest.main()
