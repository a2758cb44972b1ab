"""
Advisory odds calculator.

Two estimates for a hero hand against an unknown opponent:

- calculate_equity: Monte Carlo simulation against one random opponent hand.
- calculate_outs: counts cards that improve the hand category on the flop or
  turn and converts them with the rule of 4 and 2.

Both use the table's own evaluator, so hands that tie on score split even
when kickers differ. The numbers are guidance for a player, not exact
equity.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
from dataclasses import dataclass, field
import logging
import random

from holdemarena.core.card import Card, canonical_cards
from holdemarena.core.hand import HAND_RANK_NAMES, HandRank, compare_results, evaluate_hand
from holdemarena.core.rules import FLOP_CARDS, HOLE_CARDS, TOTAL_COMMUNITY_CARDS


logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 1000
MAX_ITERATIONS = 100000

# Rule of 4 and 2: above this many outs the flop estimate is corrected down
FLOP_OUTS_CORRECTION = 8


@dataclass
class EquityResult:
    """Monte Carlo result; equity is a percentage (0-100)."""
    equity: float
    wins: int
    ties: int
    iterations: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "equity": self.equity,
            "wins": self.wins,
            "ties": self.ties,
            "iterations": self.iterations,
        }


@dataclass
class OutGroup:
    """Cards that improve the hand to one category."""
    rank: HandRank
    cards: List[Card] = field(default_factory=list)
    is_excluded: bool = False

    @property
    def count(self) -> int:
        return len(self.cards)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hand": HAND_RANK_NAMES[self.rank],
            "count": self.count,
            "cards": [str(c) for c in self.cards],
            "excluded": self.is_excluded,
        }


@dataclass
class OutsResult:
    """Outs analysis of the hero hand on the current board."""
    current_hand: str
    total_outs: int = 0
    effective_outs: int = 0
    groups: List[OutGroup] = field(default_factory=list)
    rule_of_4_and_2: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_hand": self.current_hand,
            "total_outs": self.total_outs,
            "effective_outs": self.effective_outs,
            "groups": [g.to_dict() for g in self.groups],
            "rule_of_4_and_2": self.rule_of_4_and_2,
        }


def _validate(hero: Sequence[Card], board: Sequence[Card]) -> None:
    if len(hero) != HOLE_CARDS:
        raise ValueError(f"Need {HOLE_CARDS} hero cards, got {len(hero)}")
    if len(board) > TOTAL_COMMUNITY_CARDS:
        raise ValueError(f"At most {TOTAL_COMMUNITY_CARDS} board cards, got {len(board)}")
    known = list(hero) + list(board)
    if len(set(known)) != len(known):
        raise ValueError("Duplicate cards")


def _unseen(hero: Sequence[Card], board: Sequence[Card]) -> List[Card]:
    known = set(hero) | set(board)
    return [c for c in canonical_cards() if c not in known]


def calculate_equity(
    hero: Sequence[Card],
    board: Sequence[Card],
    iterations: int = DEFAULT_ITERATIONS,
    rng: Optional[random.Random] = None,
) -> EquityResult:
    """
    Estimate hero equity against one random opponent hand.

    Args:
        hero: The hero's 2 hole cards
        board: 0-5 known community cards
        iterations: Number of simulated deals
        rng: Random source (module random by default)

    Returns:
        EquityResult with equity = (wins + ties / 2) / iterations * 100
    """
    hero = list(hero)
    board = list(board)
    _validate(hero, board)
    if not 1 <= iterations <= MAX_ITERATIONS:
        raise ValueError(f"Iterations must be between 1 and {MAX_ITERATIONS}")

    rng = rng or random.Random()
    deck = _unseen(hero, board)
    missing = TOTAL_COMMUNITY_CARDS - len(board)

    wins = 0
    ties = 0
    for _ in range(iterations):
        drawn = rng.sample(deck, HOLE_CARDS + missing)
        villain = drawn[:HOLE_CARDS]
        full_board = board + drawn[HOLE_CARDS:]

        outcome = compare_results(
            evaluate_hand(hero, full_board),
            evaluate_hand(villain, full_board),
        )
        if outcome > 0:
            wins += 1
        elif outcome == 0:
            ties += 1

    equity = (wins + ties / 2) / iterations * 100
    logger.debug(f"Equity {equity:.1f}% over {iterations} deals (wins={wins}, ties={ties})")
    return EquityResult(equity=equity, wins=wins, ties=ties, iterations=iterations)


def calculate_outs(hero: Sequence[Card], board: Sequence[Card]) -> OutsResult:
    """
    Count the outs of the hero hand.

    Only the flop and turn have outs; before the flop and on the river the
    result is empty. With more than one improvement group the weakest group
    is excluded from the effective outs.
    """
    hero = list(hero)
    board = list(board)
    _validate(hero, board)

    current = evaluate_hand(hero, board)
    result = OutsResult(current_hand=current.name)
    if not FLOP_CARDS <= len(board) < TOTAL_COMMUNITY_CARDS:
        return result

    improvements: Dict[HandRank, List[Card]] = {}
    for card in _unseen(hero, board):
        improved = evaluate_hand(hero, board + [card])
        if improved.rank > current.rank:
            improvements.setdefault(improved.rank, []).append(card)

    result.groups = [
        OutGroup(rank=rank, cards=cards)
        for rank, cards in sorted(improvements.items(), reverse=True)
    ]
    result.total_outs = sum(g.count for g in result.groups)
    result.effective_outs = result.total_outs

    if len(result.groups) > 1:
        weakest = result.groups[-1]
        weakest.is_excluded = True
        result.effective_outs = max(0, result.total_outs - weakest.count)

    outs = result.effective_outs
    if len(board) == FLOP_CARDS:
        equity = outs * 4
        if outs > FLOP_OUTS_CORRECTION:
            equity -= outs - FLOP_OUTS_CORRECTION
    else:
        equity = outs * 2
    result.rule_of_4_and_2 = min(equity, 100)
    return result
