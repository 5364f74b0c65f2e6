#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
AI-Themed Quartiles Puzzle Generator

Builds quartiles puzzles using:
1. AI (Claude API) for five themed words
2. Local chunk splitting into 4 tiles per word
3. Board assembly with dictionary-checked sub-words
4. A fixed fallback word set when generation keeps failing

Usage:
    quartiles --theme "Space Exploration"
    quartiles --daily --format json
    quartiles --config quartiles.yaml
"""

import logging
import os
import random
import sys
import time
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union

from ai_word_generator import AIWordGenerator
from chunk_splitter import split_word
from config import (
    QuartilesConfig, create_argument_parser, load_config,
    discover_api_key, get_model, ConfigValidationError
)
from logging_config import setup_logging
from models import Puzzle, SourceWord
from prompt_loader import PromptLoader, PromptSchemaError
from puzzle_assembler import PuzzleAssembler
from puzzle_exporter import PuzzleExporter
from response_parser import parse_theme_words
from retry import AttemptLog, FailureKind, Result, Success, attempt
from scoring import QUARTILES_PER_PUZZLE
from stats_store import StatsStore
from word_dictionary import WordDictionary

THEMES = [
    "Animals", "Space", "Food", "Music", "Sports", "Ocean", "Weather",
    "Science", "Travel", "Technology", "History", "Nature", "Movies",
    "Geography", "Architecture", "Medicine", "Literature", "Holidays",
    "Transportation", "Mythology",
]

# Used when the model cannot produce a valid word set.
FALLBACK_WORDS = [
    "BEAUTIFUL",
    "WONDERFUL",
    "ADVENTURE",
    "TREASURES",
    "BUTTERFLY",
]

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


def daily_theme_index(date_string: str, theme_count: int) -> int:
    """
    Map a date string to a theme index.

    Order-sensitive rolling hash (h * 31 + char) kept in signed 32-bit
    range, then absolute value modulo theme_count.
    """
    h = 0
    for ch in date_string:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) % theme_count


@dataclass(frozen=True)
class GenerationReport:
    """How the most recent puzzle was produced."""
    theme: str
    source: str
    attempts: int
    failures: tuple = ()
    elapsed_seconds: float = 0.0


class PuzzleGenerator:
    """
    Puzzle generation orchestrator.

    Workflow:
    1. Pick a theme (given, random, or derived from the date)
    2. Ask the word source for five themed words
    3. Parse and validate the reply, re-splitting every word locally
    4. Retry from scratch on any failure, up to max_retries attempts
    5. Assemble the board, or the fallback board once attempts run out

    generate() and generate_daily() always return a Puzzle.
    """

    def __init__(
        self,
        config: Optional[QuartilesConfig] = None,
        word_source: Optional[object] = None,
        dictionary: Optional[WordDictionary] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the generator.

        Args:
            config: QuartilesConfig (defaults if omitted)
            word_source: Object with is_available() and request_theme_words();
                an AIWordGenerator built from config if omitted
            dictionary: Allow-list for sub-words
            rng: Random source for theme selection
            logger: Logger instance (uses module logger if not provided)
        """
        self.config = config or QuartilesConfig()
        self.logger = logger if logger else logging.getLogger(__name__)
        self.word_source = word_source or self._build_word_source()
        self.assembler = PuzzleAssembler(dictionary)
        self.rng = rng or random.Random()
        self.attempt_log = AttemptLog()
        self.last_generation: Optional[GenerationReport] = None

    def _build_word_source(self) -> AIWordGenerator:
        prompt_loader = None
        prompt_path = self.config.ai.prompt_config
        if prompt_path and os.path.exists(prompt_path):
            try:
                prompt_loader = PromptLoader(prompt_path)
            except PromptSchemaError as e:
                self.logger.warning(f"Could not load prompts: {e}")

        return AIWordGenerator(
            api_key=discover_api_key(self.config),
            model=get_model(self.config),
            prompt_loader=prompt_loader,
            logger=self.logger,
        )

    def random_theme(self) -> str:
        return self.rng.choice(THEMES)

    def generate(
        self,
        theme: Optional[str] = None,
        puzzle_id: Optional[str] = None,
        puzzle_date: Optional[str] = None
    ) -> Puzzle:
        """
        Generate a puzzle for a theme.

        Args:
            theme: Theme to use; a random one from THEMES if None or blank
            puzzle_id: Optional puzzle identifier
            puzzle_date: Optional ISO date for the puzzle

        Returns:
            Assembled Puzzle (fallback words if generation failed)
        """
        if not theme or not theme.strip():
            theme = self.random_theme()
            self.logger.info(f"No theme given, picked '{theme}'")
        return self._generate_for(theme.strip(), puzzle_id, puzzle_date)

    def generate_daily(self, day: Union[date, str, None] = None) -> Puzzle:
        """
        Generate the puzzle for a calendar date.

        The theme is a pure function of the date string; the words are
        not, since the model is not deterministic.
        """
        if day is None:
            day = date.today()
        # strftime drops the time part of datetime values.
        date_string = day.strftime("%Y-%m-%d") if isinstance(day, date) else str(day)
        theme = THEMES[daily_theme_index(date_string, len(THEMES))]
        self.logger.info(f"Daily puzzle for {date_string}: theme '{theme}'")
        return self._generate_for(theme, f"daily-{date_string}", date_string)

    def fallback_puzzle(
        self,
        theme: str,
        puzzle_id: Optional[str] = None,
        puzzle_date: Optional[str] = None
    ) -> Puzzle:
        """Assemble the built-in word set under the requested theme."""
        sources = [SourceWord(word=w, chunks=split_word(w)) for w in FALLBACK_WORDS]
        return self.assembler.assemble(theme, sources, puzzle_id, puzzle_date)

    def _generate_for(
        self,
        theme: str,
        puzzle_id: Optional[str],
        puzzle_date: Optional[str]
    ) -> Puzzle:
        start = time.time()

        if not self.word_source.is_available():
            self.logger.warning("AI word source unavailable, using fallback words")
            puzzle = self.fallback_puzzle(theme, puzzle_id, puzzle_date)
            self.last_generation = GenerationReport(
                theme, SOURCE_FALLBACK, 0, elapsed_seconds=time.time() - start
            )
            return puzzle

        max_retries = self.config.generation.max_retries
        outcome = attempt(
            lambda number: self._attempt_once(theme, number, max_retries),
            max_retries,
            log=self.attempt_log,
        )
        elapsed = time.time() - start
        failures = tuple(str(f) for f in outcome.failures)

        if isinstance(outcome, Success):
            puzzle = self.assembler.assemble(
                theme, list(outcome.value.words), puzzle_id, puzzle_date
            )
            self.logger.info(
                f"Generated {puzzle.id} for '{theme}' in {outcome.attempts} "
                f"attempt(s): {', '.join(s.word for s in puzzle.source_words)}"
            )
            self.last_generation = GenerationReport(
                theme, SOURCE_AI, outcome.attempts, failures, elapsed
            )
            return puzzle

        self.logger.warning(
            f"Generation for '{theme}' failed after {outcome.attempts} attempts, "
            f"using fallback words (last error: {outcome.last_failure})"
        )
        puzzle = self.fallback_puzzle(theme, puzzle_id, puzzle_date)
        self.last_generation = GenerationReport(
            theme, SOURCE_FALLBACK, outcome.attempts, failures, elapsed
        )
        return puzzle

    def _attempt_once(self, theme: str, number: int, max_retries: int) -> Result:
        """One request -> parse -> validate cycle."""
        min_length, max_length = self.config.prompt_length_range()
        self.logger.info(f"Attempt {number}/{max_retries}: requesting words for '{theme}'")

        try:
            text = self.word_source.request_theme_words(
                theme,
                min_length=min_length,
                max_length=max_length,
                word_count=QUARTILES_PER_PUZZLE,
            )
        except Exception as e:
            self.logger.error(f"Word source error: {e}", exc_info=True)
            return Result.fail(FailureKind.EXTERNAL_CALL, str(e))

        if text is None:
            return Result.fail(FailureKind.EXTERNAL_CALL, "No response from word source")

        self.logger.debug(f"Raw response: {text}")
        try:
            return parse_theme_words(
                text,
                min_length=self.config.generation.min_word_length,
                max_length=self.config.generation.max_word_length,
                word_count=QUARTILES_PER_PUZZLE,
            )
        except Exception as e:
            self.logger.error(f"Unexpected error parsing response: {e}", exc_info=True)
            return Result.fail(FailureKind.PARSE, f"{type(e).__name__}: {e}")


def _log_summary(logger: logging.Logger, puzzle: Puzzle, report: Optional[GenerationReport]):
    logger.info("=" * 60)
    logger.info("PUZZLE GENERATED")
    logger.info("=" * 60)
    logger.info(f"   Id: {puzzle.id}")
    logger.info(f"   Date: {puzzle.date}")
    logger.info(f"   Theme: {puzzle.theme}")
    if report:
        logger.info(f"   Source: {report.source} ({report.attempts} attempts)")
    logger.info(f"   Quartiles: {', '.join(q.word for q in puzzle.quartiles)}")
    logger.info(f"   Valid words: {len(puzzle.valid_words)}")
    logger.info(f"   Max score: {puzzle.max_score}")
    logger.debug(f"   Tiles: {' '.join(puzzle.tiles)}")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)

        if args.dry_run:
            print("Configuration valid:")
            print(f"  Theme: {config.theme or '(random)'}")
            print(f"  Mode: {config.mode}")
            print(f"  Daily: {config.daily}")
            print(f"  Max Retries: {config.generation.max_retries}")
            print(f"  Output Directory: {config.output.directory}")
            return

        setup_logging(
            output_dir=config.output.directory,
            log_level=config.output.log_level,
            log_file_prefix=config.output.log_file_prefix,
            enable_console=config.output.enable_console_logging,
        )
        logger = logging.getLogger(__name__)

        generator = PuzzleGenerator(config, logger=logger)
        if config.daily:
            puzzle = generator.generate_daily(config.date)
        else:
            puzzle = generator.generate(config.theme)

        _log_summary(logger, puzzle, generator.last_generation)

        path = PuzzleExporter().save(puzzle, config.output.directory, config.output.format)
        logger.info(f"Saved puzzle to {path}")

        if config.output.stats_file:
            stats = StatsStore(config.output.stats_file).load()
            logger.info(
                f"Player stats: {stats.games_completed}/{stats.games_played} completed, "
                f"best score {stats.best_score}, streak {stats.current_streak}"
            )

    except ConfigValidationError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nGeneration cancelled.")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
