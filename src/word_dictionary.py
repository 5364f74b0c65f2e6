# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Short-word allow-list used to validate tile combinations.

This is a curated list, not a dictionary service: membership is an exact,
case-insensitive match with no inflection or fuzzy matching.
"""

from typing import Iterable, Optional, FrozenSet

SHORT_WORDS: FrozenSet[str] = frozenset("""
    AN AS AT BE BY DO GO HE IN IS IT ME MY NO OF ON OR SO TO UP US WE

    ACE ACT AGE AIR ALL AND ANT ARE ART ATE BAR BAT BED BEE BIG BOX BOY
    BUS BUT CAN CAP CAR CAT CUP CUT DAY DOG EAT EGG END ERA EYE FAN FAR
    FAT FIT FOR FUN GET HAT HER HIT HOT ICE KEY LAW LEG LET MAN MAP MEN
    NET NEW NOT NOW OAK OIL OLD ONE OUR OUT OWN PAN PEN PET PIE PIN POT
    RAN RAT RAW RED ROW RUN SAD SAT SAW SEA SET SHE SIT SKY SON SUN TAN
    TEA TEN THE TIE TIN TOE TOP TOY TWO USE VAN WAR WAS WAY WEB WET WIN
    YES YET ZOO

    BALL BEAR BIRD BOAT BOOK CAKE CASE DEAR DOOR EAST FACE FARM FAST FIRE
    FISH FOOD GAME GATE HAND HEAT HOME IDEA IRON KING LAND LIFE LINE MOON
    NEST NOTE PART PLAY RAIN RANT READ REST RING ROAD ROCK SAND SHIP SING
    SNOW STAR TEAM TIME TREE WIND WORK

    BREAK HEART LIGHT PLANT RIVER STING STONE TAUNT WATER

    BUTTER GARDEN ORANGE PLANET ROCKET SILVER SISTER SUMMER WINTER
""".split())



class WordDictionary:
    """
    Fixed set of known-valid short English words.

    Usage:
        dictionary = WordDictionary()
        if dictionary.is_valid("star"):
            ...
    """

    def __init__(self, extra_words: Optional[Iterable[str]] = None):
        """
        Initialize the dictionary.

        Args:
            extra_words: Optional additional words to accept
        """
        words = set(SHORT_WORDS)
        if extra_words:
            words.update(w.strip().upper() for w in extra_words if w.strip())
        self._words: FrozenSet[str] = frozenset(words)

    def is_valid(self, word: str) -> bool:
        """Exact, case-insensitive membership check."""
        if not word:
            return False
        return word.upper() in self._words

    def __contains__(self, word: str) -> bool:
        return self.is_valid(word)

    def __len__(self) -> int:
        return len(self._words)


_default_dictionary = WordDictionary()


def is_valid_word(word: str) -> bool:
    """Check a word against the default allow-list."""
    return _default_dictionary.is_valid(word)
