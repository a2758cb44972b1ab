"""
Hand Evaluation for the Hold'em table.

This module scores the best hand from 2 hole cards plus 0-5 community cards.
Every result carries a category (0 = high card .. 9 = royal flush) and a
score used to order hands inside and across categories:

    Royal Flush       9000
    Straight Flush    8000 + top rank
    Four of a Kind    7000 + quad rank
    Full House        6000 + trips rank
    Flush             5000 + top rank
    Straight          4000 + top rank (wheel A-2-3-4-5 is 5-high)
    Three of a Kind   3000 + trips rank
    Two Pair          2000 + high pair + low pair / 100
    One Pair          1000 + pair rank
    High Card         top rank

Scores ignore kickers outside the formula, so hands with the same category
and score split the pot. Scores are compared with an epsilon of 0.01
because the two pair score is fractional.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from holdemarena.core.card import Card, Rank, Suit
from holdemarena.core.rules import HAND_SIZE, HOLE_CARDS, SCORE_EPSILON, TOTAL_COMMUNITY_CARDS


class HandRank(IntEnum):
    """Hand categories from worst (0) to best (9)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


# Hand rank names for display
HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

ROYAL_FLUSH_SCORE = 9000
CATEGORY_BASE = {
    HandRank.STRAIGHT_FLUSH: 8000,
    HandRank.FOUR_OF_A_KIND: 7000,
    HandRank.FULL_HOUSE: 6000,
    HandRank.FLUSH: 5000,
    HandRank.STRAIGHT: 4000,
    HandRank.THREE_OF_A_KIND: 3000,
    HandRank.TWO_PAIR: 2000,
    HandRank.ONE_PAIR: 1000,
    HandRank.HIGH_CARD: 0,
}

WHEEL_LOW_RANKS = (Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO)


@dataclass
class HandResult:
    """
    Evaluated hand.

    Attributes:
        rank: Hand category
        score: Ordering score (see module docstring)
        winning_cards: The cards forming the hand, strongest first
        description: Human-readable description
    """
    rank: HandRank
    score: float
    winning_cards: List[Card] = field(default_factory=list)
    description: str = ""

    def beats(self, other: HandResult) -> bool:
        return compare_results(self, other) > 0

    def ties(self, other: HandResult) -> bool:
        return compare_results(self, other) == 0

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": int(self.rank),
            "name": self.name,
            "score": self.score,
            "description": self.description,
            "cards": [card.to_dict() for card in self.winning_cards],
        }


def compare_results(a: HandResult, b: HandResult) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if a wins, -1 if b wins, 0 if tie
    """
    if a.rank != b.rank:
        return 1 if a.rank > b.rank else -1
    # Scores have two decimals; rounding keeps pairs exactly 0.01 apart distinct
    diff = round(a.score - b.score, 2)
    if abs(diff) < SCORE_EPSILON:
        return 0
    return 1 if diff > 0 else -1


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandResult:
    """
    Evaluate the best hand from hole cards and community cards.

    Args:
        hole_cards: Exactly 2 cards
        community_cards: 0-5 cards

    Returns:
        HandResult for the best hand

    Raises:
        ValueError: On a wrong card count or duplicate cards
    """
    hole = list(hole_cards)
    community = list(community_cards)
    if len(hole) != HOLE_CARDS:
        raise ValueError(f"Need {HOLE_CARDS} hole cards, got {len(hole)}")
    if len(community) > TOTAL_COMMUNITY_CARDS:
        raise ValueError(f"At most {TOTAL_COMMUNITY_CARDS} community cards, got {len(community)}")

    all_cards = sorted(hole + community, key=lambda c: c.sort_key)
    if len(set(all_cards)) != len(all_cards):
        raise ValueError("Duplicate cards in hand")

    by_suit: Dict[Suit, List[Card]] = {suit: [] for suit in Suit}
    for card in all_cards:
        by_suit[card.suit].append(card)
    flush_suit = next((s for s in Suit if len(by_suit[s]) >= HAND_SIZE), None)

    # Straight flush / royal flush
    if flush_suit is not None:
        straight_flush = _find_straight(by_suit[flush_suit])
        if straight_flush:
            top = straight_flush[0].rank
            if top == Rank.ACE and any(c.rank == Rank.KING for c in straight_flush):
                return _result(HandRank.ROYAL_FLUSH, ROYAL_FLUSH_SCORE, straight_flush)
            return _result(HandRank.STRAIGHT_FLUSH, 8000 + top, straight_flush)

    groups: Dict[Rank, List[Card]] = {}
    for card in all_cards:
        groups.setdefault(card.rank, []).append(card)
    quads = _groups_of(groups, 4)
    trips = _groups_of(groups, 3)
    pairs = _groups_of(groups, 2)

    if quads:
        main = quads[0]
        kicker = _kickers(all_cards, main, 1)
        return _result(HandRank.FOUR_OF_A_KIND, 7000 + main[0].rank, main + kicker)

    if trips and (len(trips) > 1 or pairs):
        main = trips[0]
        secondary = trips[1][:2] if len(trips) > 1 else pairs[0]
        return _result(HandRank.FULL_HOUSE, 6000 + main[0].rank, main + secondary)

    if flush_suit is not None:
        flush_cards = by_suit[flush_suit][:HAND_SIZE]
        return _result(HandRank.FLUSH, 5000 + flush_cards[0].rank, flush_cards)

    straight = _find_straight(all_cards)
    if straight:
        return _result(HandRank.STRAIGHT, 4000 + straight[0].rank, straight)

    if trips:
        main = trips[0]
        return _result(
            HandRank.THREE_OF_A_KIND, 3000 + main[0].rank, main + _kickers(all_cards, main, 2)
        )

    if len(pairs) >= 2:
        main = pairs[0] + pairs[1]
        score = 2000 + pairs[0][0].rank + pairs[1][0].rank / 100
        return _result(HandRank.TWO_PAIR, score, main + _kickers(all_cards, main, 1))

    if pairs:
        main = pairs[0]
        return _result(HandRank.ONE_PAIR, 1000 + main[0].rank, main + _kickers(all_cards, main, 3))

    return _result(HandRank.HIGH_CARD, all_cards[0].rank, all_cards[:HAND_SIZE])


def _result(rank: HandRank, score: float, cards: List[Card]) -> HandResult:
    result = HandResult(rank=rank, score=float(score), winning_cards=list(cards))
    result.description = describe_hand(result)
    return result


def _groups_of(groups: Dict[Rank, List[Card]], size: int) -> List[List[Card]]:
    """Rank groups of exactly ``size`` cards, highest rank first."""
    return sorted(
        (g for g in groups.values() if len(g) == size),
        key=lambda g: g[0].rank,
        reverse=True,
    )


def _kickers(all_cards: List[Card], used: List[Card], count: int) -> List[Card]:
    """Best ``count`` cards not already used (all_cards is sorted strongest first)."""
    used_ranks = {c.rank for c in used}
    return [c for c in all_cards if c.rank not in used_ranks][:count]


def _find_straight(cards: List[Card]) -> Optional[List[Card]]:
    """
    Find the highest straight in rank-sorted cards.

    Returns:
        The 5 straight cards from top to bottom (wheel as 5-4-3-2-A), or None
    """
    unique: List[Card] = []
    seen = set()
    for card in cards:
        if card.rank not in seen:
            unique.append(card)
            seen.add(card.rank)

    if len(unique) < HAND_SIZE:
        return None

    for i in range(len(unique) - HAND_SIZE + 1):
        window = unique[i:i + HAND_SIZE]
        if window[0].rank - window[-1].rank == HAND_SIZE - 1:
            return window

    # Wheel (A-2-3-4-5)
    if unique[0].rank == Rank.ACE and all(r in seen for r in WHEEL_LOW_RANKS):
        low = [next(c for c in unique if c.rank == r) for r in WHEEL_LOW_RANKS]
        return low + [unique[0]]

    return None


def compare_hands(
    hole1: Sequence[Card],
    hole2: Sequence[Card],
    community_cards: Sequence[Card],
) -> int:
    """
    Compare two hole-card hands on the same board.

    Returns:
        1 if hole1 wins, -1 if hole2 wins, 0 if tie
    """
    return compare_results(
        evaluate_hand(hole1, community_cards),
        evaluate_hand(hole2, community_cards),
    )


def describe_hand(result: HandResult) -> str:
    """Get a human-readable description of an evaluated hand."""
    cards = result.winning_cards
    hand_type = result.rank
    if not cards:
        return HAND_RANK_NAMES[hand_type]

    if hand_type == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    elif hand_type == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(cards[0].rank)} high"
    elif hand_type == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(cards[0].rank)}"
    elif hand_type == HandRank.FULL_HOUSE:
        return f"Full House, {_plural(cards[0].rank)} full of {_plural(cards[3].rank)}"
    elif hand_type == HandRank.FLUSH:
        return f"Flush, {_rank_name(cards[0].rank)} high"
    elif hand_type == HandRank.STRAIGHT:
        if cards[0].rank == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(cards[0].rank)} high"
    elif hand_type == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(cards[0].rank)}"
    elif hand_type == HandRank.TWO_PAIR:
        return f"Two Pair, {_plural(cards[0].rank)} and {_plural(cards[2].rank)}"
    elif hand_type == HandRank.ONE_PAIR:
        return f"Pair of {_plural(cards[0].rank)}"
    else:
        return f"High Card, {_rank_name(cards[0].rank)}"


def _rank_name(rank: Rank) -> str:
    """Get the name of a rank."""
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace"
    }
    return names[rank]


def _plural(rank: Rank) -> str:
    return "Sixes" if rank == Rank.SIX else f"{_rank_name(rank)}s"
