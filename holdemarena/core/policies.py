"""
House policies invoked at hand boundaries.

These are product rules rather than poker rules: the table never lets a seat
leave for good. A re-buy hook runs at every hand start and receives the
freshly reset seats; a recovery code lets a player restore the initial stake
between hands.
"""

import copy
import logging
from typing import Callable, List

from holdemarena.core.exceptions import InvalidActionError
from holdemarena.core.player import Player
from holdemarena.core.rules import TableConfig


logger = logging.getLogger(__name__)

LOAN_TEXT = "Loan"

# Signature of a re-buy hook: mutates the seats in place
RebuyHook = Callable[[List[Player], TableConfig], None]


def house_loan(players: List[Player], config: TableConfig) -> None:
    """Top up every busted seat to the initial stake."""
    for player in players:
        if player.chips == 0:
            player.chips = config.initial_chips
            player.action_text = LOAN_TEXT
            logger.info(f"Seat {player.id} re-bought for {config.initial_chips} (house loan)")


def no_rebuy(players: List[Player], config: TableConfig) -> None:
    """Leave busted seats empty; they sit out until topped up."""
    pass


def recover_chips(
    players: List[Player],
    player_id: int,
    code: str,
    config: TableConfig,
) -> List[Player]:
    """
    Restore a player's stake with the recovery code.

    Returns:
        New list of players with the seat reset to the initial stake

    Raises:
        InvalidActionError: Unknown seat or wrong code
    """
    if not 0 <= player_id < len(players):
        raise InvalidActionError(f"Invalid seat: {player_id}")
    if code.strip().lower() != config.recovery_code.lower():
        raise InvalidActionError("Invalid recovery code")

    updated = copy.deepcopy(list(players))
    updated[player_id].chips = config.initial_chips
    logger.info(f"Seat {player_id} recovered {config.initial_chips} chips")
    return updated
