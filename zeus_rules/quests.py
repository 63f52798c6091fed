"""Quest matching shared by hex action generation and effects."""
from __future__ import annotations

from typing import Iterable, List, Optional

from .game_models import Player, Quest
from .types import CoreColor, QuestType


def quest_for_color(quests: Iterable[Quest], color: CoreColor) -> Optional[Quest]:
    """Pick the quest that ``color`` would fulfil, or ``None``.

    An open quest of exactly ``color`` always wins. A wildcard is only a
    fallback, and only while no quest of the same type names ``color``
    already (open or completed): a color claimed by a specific quest can
    never be satisfied a second time through a wildcard.
    """
    quests = list(quests)
    for quest in quests:
        if not quest.completed and quest.color == color:
            return quest
    if any(quest.color == color for quest in quests):
        return None
    for quest in quests:
        if not quest.completed and quest.is_wild:
            return quest
    return None


def will_satisfy_quest(quests: Iterable[Quest], color: CoreColor) -> bool:
    return quest_for_color(quests, color) is not None


def claim_quest(player: Player, quest_type: QuestType, color: CoreColor) -> Optional[Quest]:
    """Give a wildcard quest ``color`` if no quest of that color exists yet."""

    quests = player.quests_of_type(quest_type)
    quest = quest_for_color(quests, color)
    if quest is not None and quest.is_wild:
        quest.color = color
    return quest


def complete_quest(player: Player, quest_type: QuestType, color: Optional[CoreColor] = None) -> Optional[Quest]:
    """Mark the matching quest completed and return it.

    With no ``color`` (shrine quests) the first open quest of the type is used.
    """
    quests: List[Quest] = player.quests_of_type(quest_type)
    if color is None:
        quest = next((q for q in quests if not q.completed), None)
    else:
        quest = quest_for_color(quests, color)
        if quest is not None and quest.is_wild:
            quest.color = color
    if quest is not None:
        quest.completed = True
    return quest


__all__ = ["quest_for_color", "will_satisfy_quest", "claim_quest", "complete_quest"]
