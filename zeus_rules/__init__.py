"""Zeus rules: map, game state, action generation and the turn engine."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "CoreColor",
    "Phase",
    "Terrain",
    "HexCoordinates",
    "HexGrid",
    "Resource",
    "Result",
    "RulesError",
    "RulesConfig",
    "load_rules",
    "GameState",
    "Player",
    "Action",
    "ActionType",
    "ActionSubType",
    "new_game",
    "get_available_actions",
    "is_action_legal",
    "do_action",
    "end_turn",
    "select_resource",
    "declare_recoloring",
    "check_win_condition",
    "__version__",
]

_EXPORTS = {
    "CoreColor": ("types", "CoreColor"),
    "Phase": ("types", "Phase"),
    "Terrain": ("types", "Terrain"),
    "HexCoordinates": ("map.coordinates", "HexCoordinates"),
    "HexGrid": ("map.grid", "HexGrid"),
    "Resource": ("resource", "Resource"),
    "Result": ("results", "Result"),
    "RulesError": ("results", "RulesError"),
    "RulesConfig": ("config", "RulesConfig"),
    "load_rules": ("config", "load_rules"),
    "GameState": ("game_models", "GameState"),
    "Player": ("game_models", "Player"),
    "Action": ("action_gen.schema", "Action"),
    "ActionType": ("action_gen.schema", "ActionType"),
    "ActionSubType": ("action_gen.schema", "ActionSubType"),
    "new_game": ("game_setup", "new_game"),
    "get_available_actions": ("rules_engine", "get_available_actions"),
    "is_action_legal": ("rules_engine", "is_action_legal"),
    "do_action": ("rules_engine", "do_action"),
    "end_turn": ("rules_engine", "end_turn"),
    "select_resource": ("rules_engine", "select_resource"),
    "declare_recoloring": ("rules_engine", "declare_recoloring"),
    "check_win_condition": ("rules_engine", "check_win_condition"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
