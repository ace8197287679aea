"""牌型检测器 - 识别1~8张牌的最佳扑克牌型"""

from typing import List, Optional
from collections import Counter

from .card import Card
from .hand_type import HandType, HandEvaluation


# 顺子、同花、同花顺至少需要的张数
MIN_PATTERN_CARDS = 5


def detect_hand(cards: List[Card]) -> HandType:
    """
    识别一组牌的牌型。
    按强度从高到低依次检测，返回第一个命中的牌型；都不命中则为高牌。
    """
    n = len(cards)
    rank_counts = Counter(c.rank for c in cards)

    result = (
        _detect_straight_flush(cards, n, rank_counts)
        or _detect_four_of_a_kind(cards, n, rank_counts)
        or _detect_full_house(cards, n, rank_counts)
        or _detect_flush(cards, n, rank_counts)
        or _detect_straight(cards, n, rank_counts)
        or _detect_three_of_a_kind(cards, n, rank_counts)
        or _detect_two_pair(cards, n, rank_counts)
        or _detect_pair(cards, n, rank_counts)
    )
    return result or HandType.HIGH_CARD


def evaluate_cards(cards: List[Card]) -> HandEvaluation:
    """
    识别牌型并查表得到基础分和倍率。

    不足5张的高牌没有牌型基础分，改用其中最大的牌面分值；
    空牌组视为基础分 0 的高牌。
    """
    hand_type = detect_hand(cards)
    if hand_type == HandType.HIGH_CARD and len(cards) < MIN_PATTERN_CARDS:
        base = high_card_score(cards)
    else:
        base = hand_type.base_score
    return HandEvaluation(hand_type, base, hand_type.multiplier)


def high_card_score(cards: List[Card]) -> int:
    """最大的单张牌面分值，空牌组为 0"""
    return max((c.point_value for c in cards), default=0)


# ============================================================
#  辅助函数
# ============================================================

def _groups_by_count(rank_counts: Counter, count: int) -> list:
    """返回出现恰好 count 次的所有点数，按点数排序"""
    return sorted(r for r, c in rank_counts.items() if c == count)


def _is_flush(cards: List[Card], n: int) -> bool:
    """同花：≥5张且花色全部相同"""
    if n < MIN_PATTERN_CARDS:
        return False
    return len({c.suit for c in cards}) == 1


def _is_straight(cards: List[Card], n: int) -> bool:
    """
    顺子：≥5张，按点数排序后严格逐一递增。
    A 只当 14，不支持 A-2-3-4-5。
    """
    if n < MIN_PATTERN_CARDS:
        return False
    ranks = sorted(c.rank for c in cards)
    for i in range(len(ranks) - 1):
        if ranks[i + 1] - ranks[i] != 1:
            return False
    return True


# ============================================================
#  五张类检测（需要≥5张）
# ============================================================

def _detect_straight_flush(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    """同花顺：同花且成顺"""
    if _is_flush(cards, n) and _is_straight(cards, n):
        return HandType.STRAIGHT_FLUSH
    return None


def _detect_flush(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    if _is_flush(cards, n):
        return HandType.FLUSH
    return None


def _detect_straight(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    if _is_straight(cards, n):
        return HandType.STRAIGHT
    return None


# ============================================================
#  同点数类检测（不限张数）
# ============================================================

def _detect_four_of_a_kind(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    """四条：某点数出现4次"""
    if _groups_by_count(rc, 4):
        return HandType.FOUR_OF_A_KIND
    return None


def _detect_full_house(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    """葫芦：一个点数3次 + 另一个点数2次"""
    if _groups_by_count(rc, 3) and _groups_by_count(rc, 2):
        return HandType.FULL_HOUSE
    return None


def _detect_three_of_a_kind(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    if _groups_by_count(rc, 3):
        return HandType.THREE_OF_A_KIND
    return None


def _detect_two_pair(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    """两对：至少两个不同点数各恰好出现2次"""
    if len(_groups_by_count(rc, 2)) >= 2:
        return HandType.TWO_PAIR
    return None


def _detect_pair(cards: List[Card], n: int, rc: Counter) -> Optional[HandType]:
    if _groups_by_count(rc, 2):
        return HandType.PAIR
    return None
