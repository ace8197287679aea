"""玩家模型 - 单人玩家的筹码与累计积分"""

import uuid
from dataclasses import dataclass, field


@dataclass
class Player:
    """一个玩家"""
    name: str                        # 显示名
    chips: int = 0                   # 筹码（付底注、领奖励）
    score: int = 0                   # 所有关卡累计得分
    is_active: bool = True
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def update_score(self, points: int) -> None:
        self.score += points

    def pay(self, amount: int) -> None:
        """扣除筹码（允许变为负数，由上层决定是否结束游戏）"""
        self.chips -= amount

    def award(self, amount: int) -> None:
        self.chips += amount

    def reset_for_new_game(self, chips: int) -> None:
        """新一局重置"""
        self.chips = chips
        self.score = 0
        self.is_active = True
