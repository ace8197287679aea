"""牌型定义 - 9种扑克牌型及其基础分/倍率表"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Tuple


class HandType(str, Enum):
    """牌型枚举（按强度从低到高）"""
    HIGH_CARD = "HIGH_CARD"                 # 高牌
    PAIR = "PAIR"                           # 一对
    TWO_PAIR = "TWO_PAIR"                   # 两对
    THREE_OF_A_KIND = "THREE_OF_A_KIND"     # 三条
    STRAIGHT = "STRAIGHT"                   # 顺子 (≥5张)
    FLUSH = "FLUSH"                         # 同花 (≥5张)
    FULL_HOUSE = "FULL_HOUSE"               # 葫芦
    FOUR_OF_A_KIND = "FOUR_OF_A_KIND"       # 四条
    STRAIGHT_FLUSH = "STRAIGHT_FLUSH"       # 同花顺

    @property
    def base_score(self) -> int:
        return HAND_BASE[self][0]

    @property
    def multiplier(self) -> int:
        return HAND_BASE[self][1]

    @property
    def display_name(self) -> str:
        return HAND_DISPLAY_NAME[self]

    @property
    def strength(self) -> int:
        """强度序号，高牌为 1，同花顺为 9"""
        return list(HandType).index(self) + 1


# 牌型 → (基础分, 倍率)
HAND_BASE: Dict[HandType, Tuple[int, int]] = {
    HandType.STRAIGHT_FLUSH:   (100, 8),
    HandType.FOUR_OF_A_KIND:   (60, 7),
    HandType.FULL_HOUSE:       (40, 4),
    HandType.FLUSH:            (35, 4),
    HandType.STRAIGHT:         (30, 4),
    HandType.THREE_OF_A_KIND:  (30, 3),
    HandType.TWO_PAIR:         (20, 2),
    HandType.PAIR:             (10, 2),
    HandType.HIGH_CARD:        (5, 1),
}

HAND_DISPLAY_NAME: Dict[HandType, str] = {
    HandType.HIGH_CARD: "High Card",
    HandType.PAIR: "Pair",
    HandType.TWO_PAIR: "Two Pair",
    HandType.THREE_OF_A_KIND: "Three of a Kind",
    HandType.STRAIGHT: "Straight",
    HandType.FLUSH: "Flush",
    HandType.FULL_HOUSE: "Full House",
    HandType.FOUR_OF_A_KIND: "Four of a Kind",
    HandType.STRAIGHT_FLUSH: "Straight Flush",
}


@dataclass(frozen=True)
class HandEvaluation:
    """一组牌的牌型识别结果"""
    classification: HandType
    base_score: int
    multiplier: int

    def __repr__(self) -> str:
        return f"[{self.classification.value}] base={self.base_score} ×{self.multiplier}"
