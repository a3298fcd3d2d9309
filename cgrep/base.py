from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .errors import InvalidBigram


ALPHABET = " abcdefghijklmnopqrstuvwxyz"
ALPHABET_SIZE = len(ALPHABET)  # 27
BIGRAM_DOMAIN = ALPHABET_SIZE * ALPHABET_SIZE  # 729


def magnitude(symbol: str) -> int:
    """Position of a symbol in ' ', 'a', ..., 'z'; -1 if it is not in the alphabet."""
    if symbol == " ":
        return 0
    if "a" <= symbol <= "z" and len(symbol) == 1:
        return ord(symbol) - ord("a") + 1
    return -1


class MatchType(Enum):
    """How a window relates to the needle."""
    EXACT = "exact"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class Bigram:
    """
    Ordered pair of adjacent symbols from the 27-symbol alphabet.

    Indices run '  ', ' a', ..., ' z', 'a ', 'aa', ..., 'zz' (0 to 728).
    """
    a: str
    b: str

    def __post_init__(self):
        if magnitude(self.a) < 0 or magnitude(self.b) < 0:
            raise InvalidBigram(f"invalid character in bigram '{self.a}{self.b}'")

    def index(self) -> int:
        return magnitude(self.a) * ALPHABET_SIZE + magnitude(self.b)

    @classmethod
    def from_string(cls, ab: str) -> "Bigram":
        if len(ab) != 2:
            raise InvalidBigram(f"invalid bigram length [{len(ab)}], required: 2")
        return cls(ab[0], ab[1])

    @classmethod
    def last(cls) -> "Bigram":
        return cls("z", "z")

    def __str__(self) -> str:
        return self.a + self.b


@dataclass
class WindowMatch:
    """A window of haystack words that scored at or above the threshold."""
    text: str
    position: int  # index of the window's first word
    score: float
    edit_ratio: float
    match_type: MatchType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "position": self.position,
            "score": self.score,
            "edit_ratio": self.edit_ratio,
            "match_type": self.match_type.value
        }
