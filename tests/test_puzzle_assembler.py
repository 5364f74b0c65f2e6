# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for puzzle_assembler module."""

import dataclasses
import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from chunk_splitter import split_word
from models import SourceWord
from puzzle_assembler import AssemblyError, PuzzleAssembler
from word_dictionary import WordDictionary

WORDS = [
    SourceWord("RESTAURANT", ["RES", "TAU", "RA", "NT"]),
    SourceWord("BREAKFAST", ["BRE", "AK", "FA", "ST"]),
    SourceWord("QUARTERBACK", ["QUA", "RTE", "RBA", "CK"]),
    SourceWord("PLANETARIUM", ["PLA", "NET", "ARI", "UM"]),
    SourceWord("SANDWICHES", ["SAN", "DWI", "CH", "ES"]),
]


class TestPuzzleAssembler(unittest.TestCase):
    """Tests for PuzzleAssembler class."""

    def setUp(self):
        self.assembler = PuzzleAssembler()
        self.puzzle = self.assembler.assemble(
            "Food", WORDS, puzzle_id="p-1", puzzle_date="2026-01-02"
        )

    def test_tiles_in_source_order(self):
        """Test tiles are the chunks of each word, flattened in order."""
        self.assertEqual(len(self.puzzle.tiles), 20)
        self.assertEqual(self.puzzle.tiles[:4], ("RES", "TAU", "RA", "NT"))
        self.assertEqual(self.puzzle.tiles[-4:], ("SAN", "DWI", "CH", "ES"))

    def test_metadata(self):
        """Test id, date and theme are carried through."""
        self.assertEqual(self.puzzle.id, "p-1")
        self.assertEqual(self.puzzle.date, "2026-01-02")
        self.assertEqual(self.puzzle.theme, "Food")

    def test_quartiles(self):
        """Test one quartile per source word, using its own four tiles."""
        quartiles = self.puzzle.quartiles
        self.assertEqual([q.word for q in quartiles], [w.word for w in WORDS])
        self.assertEqual(quartiles[0].tile_indices, (0, 1, 2, 3))
        self.assertEqual(quartiles[4].tile_ids, ["tile-16", "tile-17", "tile-18", "tile-19"])
        for q in quartiles:
            self.assertTrue(q.is_quartile)
            self.assertEqual(q.points, 8)

    def test_valid_words_in_discovery_order(self):
        """Test quartiles come first, then in-word spans, then tile pairs."""
        self.assertEqual(
            [w.word for w in self.puzzle.valid_words],
            [
                "RESTAURANT", "BREAKFAST", "QUARTERBACK", "PLANETARIUM", "SANDWICHES",
                "RANT", "BREAK", "FAST", "NET", "PLANET",
                "TAUNT", "PLANT",
            ]
        )

    def test_span_words(self):
        """Test words made from contiguous chunks of one source word."""
        self.assertEqual(self.puzzle.find_word("RANT").tile_indices, (2, 3))
        net = self.puzzle.find_word("NET")
        self.assertEqual(net.tile_indices, (13,))
        self.assertEqual(net.points, 1)
        self.assertFalse(net.is_quartile)

    def test_pair_words(self):
        """Test non-adjacent and reverse-order tile pairs are found."""
        self.assertEqual(self.puzzle.find_word("TAUNT").tile_indices, (1, 3))
        plant = self.puzzle.find_word("PLANT")
        self.assertEqual(plant.tile_indices, (12, 3))
        self.assertEqual(plant.points, 2)

    def test_no_duplicate_words(self):
        """Test a word reachable several ways is listed once."""
        words = [w.word for w in self.puzzle.valid_words]
        self.assertEqual(len(words), len(set(words)))

    def test_max_score(self):
        """Test max score is every word's points plus the bonus."""
        self.assertEqual(self.puzzle.max_score, 5 * 8 + 13 + 40)

    def test_extra_dictionary_words(self):
        """Test a larger dictionary surfaces more words."""
        assembler = PuzzleAssembler(WordDictionary(extra_words=["TAU"]))
        puzzle = assembler.assemble("Food", WORDS)
        self.assertIsNotNone(puzzle.find_word("TAU"))
        self.assertEqual(puzzle.max_score, self.puzzle.max_score + 1)

    def test_generated_id_and_date(self):
        """Test id and date defaults."""
        puzzle = self.assembler.assemble(None, WORDS)
        self.assertTrue(puzzle.id.startswith("puzzle-"))
        self.assertEqual(len(puzzle.date), 10)
        self.assertIsNone(puzzle.theme)

    def test_accepts_dicts(self):
        """Test plain dict words are accepted."""
        puzzle = self.assembler.assemble("Food", [w.to_dict() for w in WORDS])
        self.assertEqual(puzzle.tiles, self.puzzle.tiles)

    def test_puzzle_is_hashable_and_frozen(self):
        """Test assembled puzzles and their source words cannot be changed."""
        self.assertIsInstance(hash(self.puzzle), int)
        self.assertEqual(self.puzzle.source_words[0].chunks, ("RES", "TAU", "RA", "NT"))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.puzzle.source_words[0].chunks = ("X",)


class TestSplitWordBoard(unittest.TestCase):
    """Tests for a board built straight from split_word."""

    def setUp(self):
        words = ["RESTAURANT", "INGREDIENT", "VEGETABLES", "DELICIOUS", "BREAKFAST"]
        sources = [SourceWord(w, split_word(w)) for w in words]
        self.puzzle = PuzzleAssembler().assemble("Food", sources)

    def test_board_shape(self):
        """Test 20 tiles and five 4-tile quartiles worth 8 points each."""
        self.assertEqual(len(self.puzzle.tiles), 20)
        self.assertEqual(len(self.puzzle.quartiles), 5)
        for q in self.puzzle.quartiles:
            self.assertEqual(q.tile_count, 4)
            self.assertEqual(q.points, 8)

    def test_every_word_spelled_by_its_tiles(self):
        """Test each valid word is the concatenation of its tiles."""
        for valid in self.puzzle.valid_words:
            text = "".join(self.puzzle.tiles[i] for i in valid.tile_indices)
            self.assertEqual(text, valid.word)
            self.assertEqual(valid.tile_count, len(valid.tile_indices))

    def test_found_words_and_score(self):
        """Test the sub-words found and the max score total."""
        self.assertEqual(
            [w.word for w in self.puzzle.valid_words[5:]],
            ["RANT", "RED", "US", "BREAK", "FAST", "TAUNT", "STING"]
        )
        self.assertEqual(
            self.puzzle.max_score,
            sum(w.points for w in self.puzzle.valid_words) + 40
        )
        self.assertEqual(self.puzzle.max_score, 92)


class TestAssemblyPreconditions(unittest.TestCase):
    """Tests for rejected input."""

    def setUp(self):
        self.assembler = PuzzleAssembler()

    def test_wrong_word_count(self):
        """Test four words are rejected."""
        with self.assertRaises(AssemblyError):
            self.assembler.assemble("Food", WORDS[:4])

    def test_wrong_chunk_count(self):
        """Test three-chunk words are rejected."""
        words = WORDS[:4] + [SourceWord("SANDWICHES", ["SAND", "WICH", "ES"])]
        with self.assertRaises(AssemblyError):
            self.assembler.assemble("Food", words)

    def test_chunks_must_reconstruct(self):
        """Test chunks that do not spell the word are rejected."""
        words = WORDS[:4] + [SourceWord("SANDWICHES", ["SAN", "DWI", "CH", "EZ"])]
        with self.assertRaises(AssemblyError):
            self.assembler.assemble("Food", words)

    def test_duplicate_words(self):
        """Test the same word twice is rejected."""
        with self.assertRaises(AssemblyError):
            self.assembler.assemble("Food", WORDS[:4] + [WORDS[0]])


if __name__ == '__main__':
    unittest.main()
