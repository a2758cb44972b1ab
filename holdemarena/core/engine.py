"""
Hold'em Betting Engine - State Machine Implementation.

This module implements the betting state machine for the four-seat table as
pure transition functions. Every function takes a GameState and the list of
Players, works on copies, and returns the new objects, so:

- invalid input raises before anything is mutated,
- callers can snapshot, replay and test hands without a running table.

It handles:
- Hand start (button move, re-buy hook, seeded deal, blinds)
- Player actions (fold, check, call, raise, all-in)
- Street advances and all-in runouts, exposed as discrete steps
- Showdown and pot settlement (single shared pot, floor split)

Stages: IDLE -> PREFLOP -> FLOP -> TURN -> RIVER -> SHOWDOWN -> PREFLOP ...
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field
from functools import cmp_to_key
import copy
import logging
import time

from holdemarena.core.card import Card, Deck
from holdemarena.core.exceptions import InvalidActionError, SettlementError
from holdemarena.core.hand import HandResult, compare_results, evaluate_hand
from holdemarena.core.player import Player, create_players
from holdemarena.core.policies import RebuyHook, house_loan
from holdemarena.core.rules import (
    ActionType, PendingStep, Stage, TableConfig,
    CARDS_FOR_STAGE, DEFAULT_CONFIG, HOLE_CARDS, NEXT_STAGE,
    get_blind_positions, get_first_to_act_preflop, min_raise_to, next_seat,
)
from holdemarena.core.state import GameState


logger = logging.getLogger(__name__)


@dataclass
class TransitionStep:
    """
    One discrete step of an automatic transition.

    A driver can pause between steps (deal flop, pause, deal turn, ...).
    Each step carries its own snapshot of the table.
    """
    event: str  # "deal" or "showdown"
    state: GameState
    players: List[Player]
    deck: Deck
    cards: List[Card] = field(default_factory=list)


def current_time_seed() -> int:
    """Millisecond clock, the default deck seed."""
    return time.time_ns() // 1_000_000


def _copy_table(state: GameState, players: Sequence[Player]) -> Tuple[GameState, List[Player]]:
    return copy.deepcopy(state), copy.deepcopy(list(players))


def _next_eligible(players: List[Player], after_seat: int) -> int:
    """
    First seat clockwise after ``after_seat`` that can act.

    Scans at most one full lap, so an all-folded or all-in table returns -1
    instead of looping.
    """
    seats = len(players)
    seat = after_seat
    for _ in range(seats):
        seat = (seat + 1) % seats
        if players[seat].can_act:
            return seat
    return -1


# ---------------------------------------------------------------- hand start


def start_hand(
    previous_state: Optional[GameState] = None,
    players: Optional[Sequence[Player]] = None,
    seed: Optional[int] = None,
    config: TableConfig = DEFAULT_CONFIG,
    rebuy: RebuyHook = house_loan,
) -> Tuple[GameState, List[Player], Deck]:
    """
    Start a new hand.

    Args:
        previous_state: State of the previous hand (None for a fresh table)
        players: Seats carried over (None for four fresh seats)
        seed: Deck seed (defaults to the millisecond clock)
        config: Table configuration
        rebuy: Hook run on the reset seats before dealing

    Returns:
        Tuple of (GameState, players, Deck) for the new hand
    """
    prev = copy.deepcopy(previous_state) if previous_state is not None else GameState()
    seats = (
        copy.deepcopy(list(players)) if players is not None
        else create_players(config.initial_chips)
    )
    if len(seats) != config.seats:
        raise InvalidActionError(f"Table needs {config.seats} seats, got {len(seats)}")

    if prev.is_hand_running:
        # Abandoned mid-hand: the hand is void, committed chips go back
        logger.warning(f"Abandoning hand #{prev.round_number}, refunding committed chips")
        for player in seats:
            player.chips += player.total_hand_bet

    for player in seats:
        player.reset_for_new_hand()

    rebuy(seats, config)

    # Seats still without chips sit this hand out
    for player in seats:
        if player.chips == 0:
            player.has_folded = True
            player.action_text = "Sitting out"

    seated = [p for p in seats if p.in_hand]
    if len(seated) < 2:
        raise InvalidActionError("Need at least 2 seats with chips to start a hand")

    if seed is None:
        seed = current_time_seed()

    dealer = next_seat(prev.dealer_index, config.seats)
    seats[dealer].is_dealer = True

    deck = Deck.from_seed(seed)
    for player in seated:
        player.cards = deck.deal(HOLE_CARDS)

    sb_seat, bb_seat = get_blind_positions(dealer, config.seats)
    sb_amount = seats[sb_seat].commit(config.small_blind)
    bb_amount = seats[bb_seat].commit(config.big_blind)
    if sb_amount:
        seats[sb_seat].action_text = f"SB {sb_amount}"
    if bb_amount:
        seats[bb_seat].action_text = f"BB {bb_amount}"

    state = GameState(
        stage=Stage.PREFLOP,
        pot=sb_amount + bb_amount,
        community_cards=[],
        current_turn_index=-1,
        dealer_index=dealer,
        highest_bet=config.big_blind,
        min_raise=config.big_blind,
        winners=[],
        winning_hand=None,
        round_number=prev.round_number + 1,
        deck_seed=seed,
        pending=PendingStep.NONE,
    )

    logger.info(
        f"Starting hand #{state.round_number}: dealer={dealer} "
        f"sb={sb_seat}({sb_amount}) bb={bb_seat}({bb_amount}) seed={seed}"
    )

    first = get_first_to_act_preflop(dealer, config.seats)
    if all(p.bet == state.highest_bet or p.chips == 0 for p in seated) and \
            sum(1 for p in seated if p.chips > 0) < 2:
        # Blinds put everyone but one seat all-in
        state.pending = PendingStep.RUNOUT
    else:
        state.current_turn_index = _next_eligible(seats, (first - 1) % config.seats)

    return state, seats, deck


# ------------------------------------------------------------------- actions


def _parse_action(action: Union[ActionType, str]) -> ActionType:
    if isinstance(action, ActionType):
        return action
    try:
        return ActionType(str(action).strip().lower())
    except ValueError:
        raise InvalidActionError(f"Unknown action: {action}")


def _validate_action(
    state: GameState,
    players: Sequence[Player],
    player_id: int,
    action_type: ActionType,
    amount: Optional[int],
) -> None:
    """Reject an action before anything is touched."""
    if state.pending != PendingStep.NONE:
        raise InvalidActionError(f"Transition pending: {state.pending.value}")
    if not state.is_hand_running:
        raise InvalidActionError(f"No betting in stage {state.stage.value}")
    if not isinstance(player_id, int) or not 0 <= player_id < len(players):
        raise InvalidActionError(f"Invalid seat: {player_id}")
    if player_id != state.current_turn_index:
        raise InvalidActionError(
            f"Not seat {player_id}'s turn (current: {state.current_turn_index})"
        )

    player = players[player_id]
    if player.has_folded:
        raise InvalidActionError(f"Seat {player_id} has folded")
    if player.chips == 0:
        raise InvalidActionError(f"Seat {player_id} has no chips to act with")

    if amount is not None and (isinstance(amount, bool) or not isinstance(amount, int)):
        raise InvalidActionError(f"Amount must be an integer, got {amount!r}")
    if amount is not None and amount < 0:
        raise InvalidActionError(f"Amount cannot be negative: {amount}")

    if action_type == ActionType.CHECK and player.bet != state.highest_bet:
        raise InvalidActionError(
            f"Cannot check, must call {state.highest_bet - player.bet}"
        )


def _raise_target(
    state: GameState,
    player: Player,
    action_type: ActionType,
    amount: Optional[int],
    config: TableConfig,
) -> int:
    """Total street bet a raise/all-in aims for, after the table clamps."""
    if amount is None:
        if action_type == ActionType.ALL_IN:
            target = player.chips + player.bet
        else:
            target = min_raise_to(state.highest_bet, state.min_raise)
    else:
        target = amount

    target = min(target, config.max_bet)

    if target < state.highest_bet and player.chips + player.bet > target:
        logger.info(
            f"Seat {player.id} raise to {target} is below the bet of "
            f"{state.highest_bet}, corrected up"
        )
        target = state.highest_bet

    return target


def apply_action(
    state: GameState,
    players: Sequence[Player],
    player_id: int,
    action: Union[ActionType, str],
    amount: Optional[int] = None,
    config: TableConfig = DEFAULT_CONFIG,
) -> Tuple[GameState, List[Player]]:
    """
    Apply a player action.

    Args:
        state: Current table state
        players: Current seats
        player_id: Seat taking the action (must hold the turn)
        action: check, call, raise, fold or allin
        amount: Total street bet for raise/allin (allin defaults to the stack)
        config: Table configuration

    Returns:
        Tuple of (GameState, players) after the action

    Raises:
        InvalidActionError: The action is rejected; nothing changes
    """
    action_type = _parse_action(action)
    _validate_action(state, players, player_id, action_type, amount)

    new_state, seats = _copy_table(state, players)
    player = seats[player_id]
    old_highest = new_state.highest_bet
    paid = 0

    if action_type == ActionType.FOLD:
        player.has_folded = True
        player.action_text = "Fold"

    elif action_type == ActionType.CHECK:
        player.action_text = "Check"

    elif action_type == ActionType.CALL:
        paid = player.commit(new_state.highest_bet - player.bet)
        player.action_text = "All In" if player.chips == 0 else "Call"

    else:
        target = _raise_target(new_state, player, action_type, amount, config)
        paid = player.commit(target - player.bet)
        new_state.highest_bet = max(new_state.highest_bet, player.bet)
        player.action_text = "All In" if player.chips == 0 else f"Raise {player.bet}"

    new_state.pot += paid
    player.has_acted = True
    player.last_action = action_type

    if new_state.highest_bet > old_highest:
        new_state.min_raise = max(new_state.min_raise, new_state.highest_bet - old_highest)
        # Everyone else must respond to the raise
        for other in seats:
            if other.id != player_id and other.can_act:
                other.has_acted = False

    logger.debug(
        f"Hand #{new_state.round_number} {new_state.stage.value}: seat {player_id} "
        f"{action_type.value} paid={paid} pot={new_state.pot} highest={new_state.highest_bet}"
    )

    _resolve_after_action(new_state, seats, player_id, action_type, config)
    return new_state, seats


def _resolve_after_action(
    state: GameState,
    seats: List[Player],
    actor_id: int,
    action_type: ActionType,
    config: TableConfig,
) -> None:
    """Decide what follows an action: award, runout, next street or next turn."""
    remaining = [p for p in seats if p.in_hand]
    if len(remaining) == 1:
        _award(state, seats, [remaining[0].id], None)
        logger.info(
            f"Hand #{state.round_number}: seat {remaining[0].id} wins {state.pot} uncontested"
        )
        return

    with_chips = [p for p in remaining if p.chips > 0]
    all_matched = all(p.bet == state.highest_bet or p.chips == 0 for p in remaining)

    if all_matched and len(with_chips) < 2:
        state.pending = PendingStep.RUNOUT
        state.current_turn_index = -1
        return

    # Pre-flop the big blind keeps its option while only the blind was called
    _, bb_seat = get_blind_positions(state.dealer_index, config.seats)
    big_blind = seats[bb_seat]
    if (
        state.stage == Stage.PREFLOP
        and actor_id != bb_seat
        and state.highest_bet == config.big_blind
        and big_blind.can_act
        and not big_blind.has_acted
    ):
        _pass_turn(state, seats, actor_id)
        return

    # A raise or all-in hands the turn on even when it left every bet matched
    if all_matched and action_type not in (ActionType.RAISE, ActionType.ALL_IN):
        state.pending = PendingStep.NEXT_STAGE
        state.current_turn_index = -1
        return

    _pass_turn(state, seats, actor_id)


def _pass_turn(state: GameState, seats: List[Player], actor_id: int) -> None:
    nxt = _next_eligible(seats, actor_id)
    if nxt == -1:
        state.pending = PendingStep.RUNOUT
        state.current_turn_index = -1
    else:
        state.current_turn_index = nxt


def get_legal_actions(
    state: GameState,
    players: Sequence[Player],
    player_id: int,
    config: TableConfig = DEFAULT_CONFIG,
) -> List[Dict[str, Any]]:
    """
    Get legal actions for a seat.

    Returns:
        List of action dicts with type and constraints (empty when the seat
        may not act)
    """
    if (
        not state.is_hand_running
        or state.pending != PendingStep.NONE
        or player_id != state.current_turn_index
    ):
        return []

    player = players[player_id]
    if not player.can_act:
        return []

    to_call = max(0, state.highest_bet - player.bet)
    max_total = min(player.chips + player.bet, config.max_bet)

    actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]
    if to_call == 0:
        actions.append({"type": ActionType.CHECK.value})
    else:
        actions.append({"type": ActionType.CALL.value, "amount": min(to_call, player.chips)})

    if max_total > state.highest_bet:
        actions.append({
            "type": ActionType.RAISE.value,
            "min": min(min_raise_to(state.highest_bet, state.min_raise), max_total),
            "max": max_total,
        })

    actions.append({"type": ActionType.ALL_IN.value, "amount": max_total})
    return actions


# -------------------------------------------------------- stage transitions


def iter_transition(
    state: GameState,
    players: Sequence[Player],
    deck: Deck,
    config: TableConfig = DEFAULT_CONFIG,
) -> Iterator[TransitionStep]:
    """
    Run the pending transition as discrete steps.

    Raises:
        InvalidActionError: Nothing is pending
    """
    if state.pending == PendingStep.NONE:
        raise InvalidActionError("No transition pending")

    new_state, seats = _copy_table(state, players)
    new_deck = deck.copy()
    pending = new_state.pending
    new_state.pending = PendingStep.NONE

    with_chips = [p for p in seats if p.can_act]
    if pending == PendingStep.NEXT_STAGE and len(with_chips) >= 2:
        return _next_stage_steps(new_state, seats, new_deck, config)
    return _runout_steps(new_state, seats, new_deck)


def advance_stage_or_runout(
    state: GameState,
    players: Sequence[Player],
    deck: Deck,
    config: TableConfig = DEFAULT_CONFIG,
) -> Tuple[GameState, List[Player], Deck]:
    """
    Complete the pending transition (next street, or runout and showdown).

    Returns:
        Tuple of (GameState, players, Deck) after the last step
    """
    last = None
    for last in iter_transition(state, players, deck, config):
        pass
    return last.state, last.players, last.deck


def _snapshot(
    event: str,
    state: GameState,
    seats: List[Player],
    deck: Deck,
    cards: Optional[List[Card]] = None,
) -> TransitionStep:
    return TransitionStep(
        event=event,
        state=copy.deepcopy(state),
        players=copy.deepcopy(seats),
        deck=deck.copy(),
        cards=list(cards or []),
    )


def _reset_street(state: GameState, seats: List[Player]) -> None:
    for player in seats:
        player.reset_for_new_round()
    state.highest_bet = 0


def _next_stage_steps(
    state: GameState,
    seats: List[Player],
    deck: Deck,
    config: TableConfig,
) -> Iterator[TransitionStep]:
    _reset_street(state, seats)
    state.min_raise = config.big_blind

    next_stage = NEXT_STAGE[state.stage]
    if next_stage == Stage.SHOWDOWN:
        _showdown(state, seats)
        yield _snapshot("showdown", state, seats, deck)
        return

    dealt = deck.deal(CARDS_FOR_STAGE[next_stage])
    state.community_cards.extend(dealt)
    state.stage = next_stage
    state.current_turn_index = _next_eligible(seats, state.dealer_index)
    logger.debug(f"Hand #{state.round_number} {next_stage.value}: {' '.join(map(str, dealt))}")
    yield _snapshot("deal", state, seats, deck, dealt)


def _runout_steps(
    state: GameState,
    seats: List[Player],
    deck: Deck,
) -> Iterator[TransitionStep]:
    """Deal every remaining street without betting, then show down."""
    _reset_street(state, seats)
    state.current_turn_index = -1

    while NEXT_STAGE[state.stage] != Stage.SHOWDOWN:
        next_stage = NEXT_STAGE[state.stage]
        dealt = deck.deal(CARDS_FOR_STAGE[next_stage])
        state.community_cards.extend(dealt)
        state.stage = next_stage
        logger.debug(f"Hand #{state.round_number} runout {next_stage.value}: {' '.join(map(str, dealt))}")
        yield _snapshot("deal", state, seats, deck, dealt)

    _showdown(state, seats)
    yield _snapshot("showdown", state, seats, deck)


# ---------------------------------------------------- showdown / settlement


def hand_results(state: GameState, players: Iterable[Player]) -> Dict[int, HandResult]:
    """Evaluate every non-folded seat against the board."""
    return {
        p.id: evaluate_hand(p.cards, state.community_cards)
        for p in players
        if p.in_hand and p.cards
    }


def determine_winners(results: Dict[int, HandResult]) -> Tuple[List[int], Optional[HandResult]]:
    """
    Select every seat tied with the best hand.

    Returns:
        Tuple of (winning seats, best HandResult)
    """
    if not results:
        return [], None
    best = max(results.values(), key=cmp_to_key(compare_results))
    winners = sorted(pid for pid, result in results.items() if result.ties(best))
    return winners, best


def _showdown(state: GameState, seats: List[Player]) -> None:
    results = hand_results(state, seats)
    winners, best = determine_winners(results)
    if not winners:
        raise SettlementError("No eligible players at showdown")
    _award(state, seats, winners, best.description)
    logger.info(
        f"Hand #{state.round_number} showdown: winners={winners} "
        f"hand={best.description} pot={state.pot}"
    )


def _award(
    state: GameState,
    seats: List[Player],
    winner_ids: List[int],
    winning_hand: Optional[str],
) -> None:
    """Split the pot by floor division and close the hand."""
    share = state.pot // len(winner_ids)
    for pid in winner_ids:
        seats[pid].chips += share
    state.winners = sorted(winner_ids)
    state.winning_hand = winning_hand
    state.stage = Stage.SHOWDOWN
    state.current_turn_index = -1
    state.pending = PendingStep.NONE


def _validate_winners(
    state: GameState,
    players: Sequence[Player],
    winner_ids: Iterable[int],
) -> List[int]:
    if state.stage == Stage.IDLE:
        raise SettlementError("No hand to settle")
    if state.winners:
        raise SettlementError("Hand already settled")

    unique: List[int] = []
    for pid in winner_ids:
        if isinstance(pid, bool) or not isinstance(pid, int) or not 0 <= pid < len(players):
            raise SettlementError(f"Invalid winner seat: {pid}")
        if players[pid].has_folded:
            raise SettlementError(f"Seat {pid} has folded and cannot win")
        if pid not in unique:
            unique.append(pid)

    if not unique:
        raise SettlementError("No winners given")
    return unique


def settle(
    state: GameState,
    players: Sequence[Player],
    winner_ids: Iterable[int],
) -> List[Player]:
    """
    Distribute the pot among winners.

    Each winner receives ``pot // len(winners)``; the remainder is dropped.

    Raises:
        SettlementError: No winners, an unknown seat, a folded seat, or a
            hand that was already settled
    """
    ids = _validate_winners(state, players, winner_ids)
    seats = copy.deepcopy(list(players))
    share = state.pot // len(ids)
    for pid in ids:
        seats[pid].chips += share
    return seats


def declare_winners(
    state: GameState,
    players: Sequence[Player],
    winner_ids: Iterable[int],
    winning_hand: Optional[str] = None,
) -> Tuple[GameState, List[Player]]:
    """Settle the pot and record the winners, closing the hand."""
    ids = _validate_winners(state, players, winner_ids)
    new_state, seats = _copy_table(state, players)
    _award(new_state, seats, ids, winning_hand)
    logger.info(f"Hand #{new_state.round_number} settled: winners={new_state.winners}")
    return new_state, seats
