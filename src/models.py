"""
Data models for the quartiles puzzle engine.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


def tile_id(index: int) -> str:
    """Stable identifier for a board position."""
    return f"tile-{index}"


@dataclass(frozen=True)
class Tile:
    """A single letter fragment placed on the board."""
    index: int
    text: str
    word_index: int

    @property
    def tile_id(self) -> str:
        return tile_id(self.index)


@dataclass(frozen=True)
class SourceWord:
    """A theme word and the chunks it was split into."""
    word: str
    chunks: tuple = ()

    def __post_init__(self):
        # Normalised in place; lists are accepted and stored as tuples.
        object.__setattr__(self, "word", self.word.upper().replace(" ", "").replace("-", ""))
        object.__setattr__(self, "chunks", tuple(c.upper() for c in self.chunks))

    def reconstructs(self) -> bool:
        """Check that the chunks spell the word exactly."""
        return "".join(self.chunks) == self.word

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "chunks": list(self.chunks)}


@dataclass(frozen=True)
class ValidWord:
    """A scoring tile combination."""
    word: str
    tile_indices: tuple
    tile_count: int
    points: int
    is_quartile: bool

    @property
    def tile_ids(self) -> List[str]:
        return [tile_id(i) for i in self.tile_indices]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "tileIds": self.tile_ids,
            "tileCount": self.tile_count,
            "points": self.points,
            "isQuartile": self.is_quartile,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ValidWord':
        indices = tuple(
            int(str(t).rsplit("-", 1)[-1]) for t in data["tileIds"]
        )
        return cls(
            word=data["word"],
            tile_indices=indices,
            tile_count=data.get("tileCount", len(indices)),
            points=data["points"],
            is_quartile=data.get("isQuartile", len(indices) >= 4),
        )


@dataclass(frozen=True)
class Puzzle:
    """
    A fully assembled board.

    Built once by the assembler and never mutated afterwards; game
    state keeps its own per-tile usage and selection.
    """
    id: str
    date: str
    tiles: tuple
    valid_words: tuple
    quartiles: tuple
    max_score: int
    theme: Optional[str] = None
    source_words: tuple = ()

    def tile_objects(self) -> List[Tile]:
        """Build Tile objects, tagging each with its source word."""
        owners = []
        for word_index, source in enumerate(self.source_words):
            owners.extend([word_index] * len(source.chunks))
        if len(owners) != len(self.tiles):
            owners = [i // 4 for i in range(len(self.tiles))]
        return [
            Tile(index=i, text=text, word_index=owners[i])
            for i, text in enumerate(self.tiles)
        ]

    def find_word(self, text: str) -> Optional[ValidWord]:
        """Look up a valid word by its text."""
        text = text.upper()
        for valid in self.valid_words:
            if valid.word == text:
                return valid
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Exchange shape consumed by the UI layer."""
        return {
            "id": self.id,
            "date": self.date,
            "theme": self.theme,
            "tiles": list(self.tiles),
            "validWords": [w.to_dict() for w in self.valid_words],
            "quartiles": [w.to_dict() for w in self.quartiles],
            "maxScore": self.max_score,
            "sourceWords": [s.to_dict() for s in self.source_words],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Puzzle':
        return cls(
            id=data["id"],
            date=str(data["date"]),
            tiles=tuple(data["tiles"]),
            valid_words=tuple(
                ValidWord.from_dict(w) for w in data.get("validWords", [])
            ),
            quartiles=tuple(
                ValidWord.from_dict(w) for w in data.get("quartiles", [])
            ),
            max_score=data["maxScore"],
            theme=data.get("theme"),
            source_words=tuple(
                SourceWord(s["word"], s.get("chunks", []))
                for s in data.get("sourceWords", [])
            ),
        )


@dataclass
class GameStats:
    """Lifetime statistics persisted between sessions."""
    games_played: int = 0
    games_completed: int = 0
    total_score: int = 0
    best_score: int = 0
    quartiles_found: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_played_date: Optional[str] = None
    rank_history: List[str] = field(default_factory=list)
