from typing import List

from . import advance, free, hexes, move, resource
from .schema import Action, ActionSubType, ActionType

# Category generators offered during the main phase, in presentation order.
MAIN_GENERATORS = (free, resource, advance, hexes, move)


def collect_main(state) -> List[Action]:
    """Union of every category generator for the main phase."""
    actions: List[Action] = []
    for gen in MAIN_GENERATORS:
        actions.extend(gen.generate(state))
    return actions


__all__ = ["Action", "ActionType", "ActionSubType", "MAIN_GENERATORS", "collect_main"]
