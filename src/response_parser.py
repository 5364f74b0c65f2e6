# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Parser for themed word responses from the language model.

The model is asked for:
    {"theme": "...", "words": [{"word": "...", "chunks": [...]}, ...]}

Only the word fields are trusted. Chunks are always recomputed locally so
every word is guaranteed to reconstruct from its tiles.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from chunk_splitter import clean_word, split_word
from models import SourceWord
from retry import FailureKind, Result

DEFAULT_MIN_LENGTH = 8
DEFAULT_MAX_LENGTH = 14
DEFAULT_WORD_COUNT = 5

_CODE_FENCE = re.compile(r'```(?:json)?\s*\n?|\n?```', re.IGNORECASE)


@dataclass(frozen=True)
class ThemeWords:
    """Validated theme words ready for assembly."""
    theme: str
    words: tuple


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences around a response."""
    return _CODE_FENCE.sub('', text).strip()


def _validation(message: str) -> Result:
    return Result.fail(FailureKind.VALIDATION, message)


def parse_theme_words(
    text: Optional[str],
    min_length: int = DEFAULT_MIN_LENGTH,
    max_length: int = DEFAULT_MAX_LENGTH,
    word_count: int = DEFAULT_WORD_COUNT
) -> Result:
    """
    Parse and validate a themed word response.

    Args:
        text: Raw response text (may be wrapped in code fences)
        min_length: Minimum letters per word after cleaning
        max_length: Maximum letters per word after cleaning
        word_count: Number of words the puzzle needs

    Returns:
        Result holding ThemeWords, or a PARSE/VALIDATION failure
    """
    if not text or not text.strip():
        return Result.fail(FailureKind.PARSE, "Empty response")

    cleaned = strip_code_fences(text)
    try:
        data: Any = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deep nesting exhausts the decoder stack.
        return Result.fail(FailureKind.PARSE, f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        return _validation("Response is not an object")

    theme = data.get("theme")
    if not isinstance(theme, str) or not theme.strip():
        return _validation("Missing theme")

    entries = data.get("words")
    if not isinstance(entries, list):
        return _validation("Missing words array")
    if len(entries) < word_count:
        return _validation(f"Expected {word_count} words, got {len(entries)}")

    accepted: List[str] = []
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("word"), str):
            continue
        word = clean_word(entry["word"])
        if not min_length <= len(word) <= max_length:
            continue
        if word in accepted:
            continue
        accepted.append(word)

    if len(accepted) < word_count:
        return _validation(
            f"Only {len(accepted)} words of {min_length}-{max_length} letters, "
            f"need {word_count}"
        )

    sources = []
    for word in accepted[:word_count]:
        chunks = split_word(word)
        source = SourceWord(word=word, chunks=chunks)
        if len(chunks) != 4 or not source.reconstructs():
            return _validation(f"Chunks {chunks} don't reconstruct word '{word}'")
        sources.append(source)

    return Result.ok(ThemeWords(theme=theme.strip(), words=tuple(sources)))

