"""
Command-line simulation: bots play hands at one table.

Usage:
    python -m holdemarena [--hands N] [--seed SEED] [--agent random|call] [--log-level LEVEL]
"""

import argparse
import logging
import random

from holdemarena.agents import CallAgent, RandomBotAgent
from holdemarena.core.rules import DEFAULT_CONFIG
from holdemarena.core.table import HoldemTable


logger = logging.getLogger("holdemarena")


def build_table(agent_kind: str, seed: int) -> HoldemTable:
    """Seat four bots; hand seeds and bot draws both derive from ``seed``."""
    rng = random.Random(seed)
    if agent_kind == "call":
        agents = [CallAgent(i) for i in range(DEFAULT_CONFIG.seats)]
    else:
        agents = [
            RandomBotAgent(i, rng=random.Random(rng.getrandbits(32)))
            for i in range(DEFAULT_CONFIG.seats)
        ]

    seeds = random.Random(rng.getrandbits(32))
    return HoldemTable(
        DEFAULT_CONFIG,
        agents=agents,
        seed_factory=lambda: seeds.randrange(1, 2 ** 31),
        names=[agent.name for agent in agents],
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="HoldemArena bot simulation")
    parser.add_argument("--hands", type=int, default=10, help="Number of hands to play")
    parser.add_argument("--seed", type=int, default=None, help="Seed for decks and bots")
    parser.add_argument("--agent", choices=["random", "call"], default="random",
                        help="Bot policy for every seat")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    seed = args.seed if args.seed is not None else random.randrange(2 ** 31)
    table = build_table(args.agent, seed)
    logger.info(f"Simulating {args.hands} hands with seed {seed}")

    for _ in range(args.hands):
        winners = table.play_hand()
        state = table.state
        board = " ".join(str(c) for c in state.community_cards) or "-"
        summary = ", ".join(
            f"seat {w['player_id']} +{w['amount']} ({w['description']})" for w in winners
        )
        print(f"Hand #{state.round_number} pot={state.pot} board=[{board}] {summary}")

    print("Final stacks: " + ", ".join(f"{p.name}={p.chips}" for p in table.players))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
