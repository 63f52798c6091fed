"""In-memory game registry with one lock per game."""
from __future__ import annotations

import logging
import random
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional

from ..config import RulesConfig, config_paths_from_env, load_rules
from ..game_models import GameState
from ..game_setup import new_game

logger = logging.getLogger(__name__)


@dataclass
class GameEntry:
    state: GameState
    rng: random.Random
    lock: threading.Lock = field(default_factory=threading.Lock)


class GameStore:
    """Games keyed by id.

    Every read-validate-mutate sequence on a game must run inside
    :meth:`locked` so two requests never interleave on the same state.
    """

    def __init__(
        self,
        rules: Optional[RulesConfig] = None,
        config_paths: Optional[Iterable[str]] = None,
    ) -> None:
        # Without explicit rules: defaults, config files, then ZEUS_RULES__* overrides.
        if rules is None:
            paths = list(config_paths) if config_paths is not None else config_paths_from_env()
            rules = load_rules(paths)
        self.rules = rules
        self._games: Dict[str, GameEntry] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._games

    def create(self, seed: Optional[int] = None, player_count: Optional[int] = None) -> str:
        rules = RulesConfig.from_dict(self.rules.to_dict())
        if player_count is not None:
            rules.player_count = player_count
        rng = random.Random(seed)
        state = new_game(rules=rules, rng=rng)
        game_id = uuid.uuid4().hex
        with self._registry_lock:
            self._games[game_id] = GameEntry(state, rng)
        logger.info("created game %s with %d players", game_id, rules.player_count)
        return game_id

    def get(self, game_id: str) -> Optional[GameEntry]:
        with self._registry_lock:
            return self._games.get(game_id)

    @contextmanager
    def locked(self, game_id: str) -> Iterator[Optional[GameEntry]]:
        entry = self.get(game_id)
        if entry is None:
            yield None
            return
        with entry.lock:
            yield entry

    def delete(self, game_id: str) -> bool:
        with self._registry_lock:
            return self._games.pop(game_id, None) is not None


__all__ = ["GameEntry", "GameStore"]
