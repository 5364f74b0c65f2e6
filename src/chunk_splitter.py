# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Chunk splitter for quartile words.

Splits a word into contiguous letter fragments that become board tiles:
- Words of 8+ letters are split into 4 balanced chunks
- Shorter words are split into 3 equal chunks (remainder letters dropped)
- Chunks shorter than 2 letters are merged into a neighbour
"""

import re
from typing import List

FOUR_CHUNK_MIN_LENGTH = 8
MIN_CHUNK_LENGTH = 2

_NON_LETTERS = re.compile(r'[^A-Z]')


def clean_word(word: str) -> str:
    """Uppercase a word and strip everything that is not a letter."""
    return _NON_LETTERS.sub('', word.upper())


def _four_spans(word: str) -> List[str]:
    base, extra = divmod(len(word), 4)
    chunks = []
    pos = 0
    for i in range(4):
        length = base + (1 if i < extra else 0)
        chunks.append(word[pos:pos + length])
        pos += length
    return chunks


def _three_spans(word: str) -> List[str]:
    # Leftover letters past 3 * base are not carried into any chunk.
    base = len(word) // 3
    return [word[i * base:(i + 1) * base] for i in range(3)]


def _merge_short_chunks(chunks: List[str]) -> List[str]:
    """Fold chunks below MIN_CHUNK_LENGTH into the previous or next chunk."""
    merged = [c for c in chunks if c]
    i = 0
    while i < len(merged):
        if len(merged[i]) >= MIN_CHUNK_LENGTH or len(merged) == 1:
            i += 1
            continue
        if i > 0:
            merged[i - 1] += merged[i]
            del merged[i]
        else:
            merged[i + 1] = merged[i] + merged[i + 1]
            del merged[i]
    return merged


def split_word(word: str) -> List[str]:
    """
    Split a word into ordered chunks.

    Args:
        word: Word to split (cleaned to uppercase letters first)

    Returns:
        List of chunks. For words of 8+ letters this is exactly 4 chunks
        whose concatenation is the cleaned word; for shorter words the
        concatenation is the first 3 * (len // 3) letters.
    """
    word = clean_word(word)
    if len(word) >= FOUR_CHUNK_MIN_LENGTH:
        chunks = _four_spans(word)
    else:
        chunks = _three_spans(word)
    return _merge_short_chunks(chunks)


def reconstructs(word: str, chunks: List[str]) -> bool:
    """Check that chunks concatenate back to the cleaned word."""
    return "".join(chunks) == clean_word(word)
