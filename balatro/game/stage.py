"""关卡表 - 每个等级三个关卡及其目标分"""

from enum import Enum
from typing import Optional


class LevelStage(Enum):
    """关卡：(等级, 目标分, 显示名)"""
    SMALL_BLIND = (1, 300, "Small Blind")
    BIG_BLIND = (1, 450, "Big Blind")
    THE_HOOK = (1, 600, "The Hook")

    SMALL_BLIND_L2 = (2, 800, "Small Blind L2")
    BIG_BLIND_L2 = (2, 1200, "Big Blind L2")
    THE_HOOK_L2 = (2, 1600, "The Hook L2")

    SMALL_BLIND_L3 = (3, 2000, "Small Blind L3")
    BIG_BLIND_L3 = (3, 3000, "Big Blind L3")
    THE_HOOK_L3 = (3, 4000, "The Hook L3")

    @property
    def level(self) -> int:
        return self.value[0]

    @property
    def target_score(self) -> int:
        return self.value[1]

    @property
    def display_name(self) -> str:
        return self.value[2]

    @property
    def next_stage(self) -> Optional["LevelStage"]:
        """同一等级内的下一关，等级最后一关返回 None"""
        stages = list(LevelStage)
        idx = stages.index(self)
        if idx + 1 < len(stages) and stages[idx + 1].level == self.level:
            return stages[idx + 1]
        return None

    @property
    def is_final(self) -> bool:
        return self == LevelStage.THE_HOOK_L3


MAX_LEVEL = LevelStage.THE_HOOK_L3.level


def first_stage_for_level(level: int) -> LevelStage:
    """某等级的第一关，超出范围时回到第 1 级"""
    for stage in LevelStage:
        if stage.level == level:
            return stage
    return LevelStage.SMALL_BLIND
