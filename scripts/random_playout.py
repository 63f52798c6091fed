"""Play seeded random games through the engine and report how they went.

Every step picks uniformly from the legal actions, so any failed result or
raised ``RulesError`` points at a generator/effect mismatch.
"""
import argparse
import logging
import random
import sys
from collections import Counter

from zeus_rules.config import RulesConfig
from zeus_rules.game_setup import new_game
from zeus_rules.phases import acting_player
from zeus_rules.rules_engine import check_win_condition, do_action, get_available_actions


def playout(seed: int, steps: int, player_count: int) -> Counter:
    rng = random.Random(seed)
    state = new_game(rules=RulesConfig(player_count=player_count), rng=rng)

    tally: Counter = Counter()
    for _ in range(steps):
        actions = get_available_actions(state)
        if not actions:
            raise RuntimeError(f"no legal actions in phase {state.phase.value}")
        action = rng.choice(actions)
        player = acting_player(state)
        result = do_action(state, action, rng)
        if not result.success:
            raise RuntimeError(f"{player.name}: legal action {action.describe()} failed: {result.message}")
        tally[action.sub_type.value] += 1
        if check_win_condition(state) is not None:
            tally["won"] += 1
            break
    tally["rounds"] = state.round
    return tally


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--games", type=int, default=5)
    parser.add_argument("--steps", type=int, default=500)
    parser.add_argument("--players", type=int, default=2)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    for game in range(args.games):
        tally = playout(args.seed + game, args.steps, args.players)
        summary = ", ".join(f"{k}={v}" for k, v in sorted(tally.items()))
        print(f"game {game} (seed {args.seed + game}): {summary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
