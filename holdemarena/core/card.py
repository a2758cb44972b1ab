"""
Card and Deck classes for the Hold'em table.

Cards carry their face rank (2..14, Ace high) and suit symbol directly, so a
card serializes to the same ``{"rank": 14, "suit": "♠"}`` shape the room
clients use.

Decks are never shuffled with the global RNG: every deck is produced from an
integer seed by a linear congruential generator and a Fisher-Yates pass, so a
client and a server holding the same seed see the same cards.
"""

from __future__ import annotations
from typing import Any, Dict, List, Sequence
from enum import Enum, IntEnum

from holdemarena.core.exceptions import DeckExhaustedError


class Suit(Enum):
    """Card suits, in canonical deck order."""
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (14, highest)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {s.value: s for s in Suit}

# Tie-break order for equal ranks, so card selection never depends on input order
SUIT_ORDER = {suit: i for i, suit in enumerate(Suit)}

# LCG constants shared with the room clients
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - Plain values: Card(14, "♠")
    - String notation: Card.from_string("As") or Card.from_string("A♠")
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Card is immutable")

    def __reduce__(self):
        return (Card, (self._rank, self._suit))

    def __copy__(self) -> Card:
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> Card:
        return self

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "2c" (rank + suit char)
        - "A♠", "K♥", "T♦", "2♣" (rank + suit symbol)
        - "10h" for a ten
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        if s.startswith("10"):
            rank_char, suit_part = "T", s[2:]
        else:
            rank_char, suit_part = s[0].upper(), s[1:]

        if rank_char not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(CHAR_TO_RANK[rank_char], suit)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Card:
        return cls(Rank(int(data["rank"])), Suit(data["suit"]))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"rank": int(self._rank), "suit": self._suit.value}

    @property
    def key(self) -> str:
        """Stable identifier like '14♠'."""
        return f"{int(self._rank)}{self._suit.value}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    @property
    def sort_key(self) -> tuple:
        """Rank descending, then canonical suit order."""
        return (-int(self._rank), SUIT_ORDER[self._suit])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return False

    def __hash__(self) -> int:
        return hash((int(self._rank), self._suit.value))

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{self._suit.value}"


class SeededRNG:
    """
    Linear congruential generator.

    ``next()`` advances ``seed = (seed * 9301 + 49297) % 233280`` and returns
    ``seed / 233280``, a float in [0, 1).
    """

    def __init__(self, seed: int):
        self.seed = int(seed)

    def next(self) -> float:
        self.seed = (self.seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.seed / LCG_MODULUS


def canonical_cards() -> List[Card]:
    """The 52 cards in fixed (suit, rank) order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def create_deck(seed: int) -> List[Card]:
    """
    Build a deterministically shuffled 52-card deck.

    Fisher-Yates from the last index down to 1, swapping index ``i`` with
    ``floor(rng() * (i + 1))``. The same seed always yields the same order.
    """
    rng = SeededRNG(seed)
    cards = canonical_cards()
    for i in range(len(cards) - 1, 0, -1):
        j = int(rng.next() * (i + 1))
        cards[i], cards[j] = cards[j], cards[i]
    return cards


class Deck:
    """
    A seeded 52-card deck consumed from the front.

    Usage:
        deck = Deck.from_seed(1234)
        hole_cards = deck.deal(2)
        flop = deck.deal(3)
    """

    def __init__(self, cards: Sequence[Card], seed: int = 0):
        self._cards: List[Card] = list(cards)
        self._dealt: List[Card] = []
        self.seed = seed

    @classmethod
    def from_seed(cls, seed: int) -> Deck:
        return cls(create_deck(seed), seed=seed)

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the front of the deck.

        Raises:
            DeckExhaustedError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckExhaustedError(
                f"Cannot deal {n} cards, only {len(self._cards)} remain"
            )

        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        self._dealt.extend(dealt)
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    def copy(self) -> Deck:
        clone = Deck(self._cards, seed=self.seed)
        clone._dealt = list(self._dealt)
        return clone

    @property
    def cards(self) -> List[Card]:
        """Remaining cards, next card first."""
        return list(self._cards)

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck(seed={self.seed}, {self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ T♦" (with symbols)
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    result = []
    i = 0
    while i < len(cards_str):
        if i + 1 < len(cards_str) and (
            cards_str[i + 1] in SYMBOL_TO_SUIT or cards_str[i + 1].lower() in CHAR_TO_SUIT
        ):
            result.append(Card.from_string(cards_str[i:i + 2]))
            i += 2
        else:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")

    return result
