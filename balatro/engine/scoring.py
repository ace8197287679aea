"""计分流水线 - 牌型识别 + 牌面分值 + 小丑牌加成 → 最终得分"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .card import Card, point_value_sum
from .hand import Hand
from .hand_type import HandType
from .joker import Joker, JokerType, ActivationType


# 斐波那契小丑牌认可的数值
FIBONACCI_NUMBERS = frozenset({1, 1, 2, 3, 5, 8, 13, 21})
FIBONACCI_RUN_LENGTH = 5
# 每张人头牌的额外加分
FACE_CARD_BONUS = 30
# 花色小丑需要的最少张数
SUIT_JOKER_MIN_CARDS = 5


@dataclass(frozen=True)
class ScoringResult:
    """一次出牌的计分明细（每次出牌重新生成，不持久化）"""
    classification: HandType
    base_score: int
    card_value_sum: int
    multiplier: int
    pre_modifier: int
    modifier_delta: int
    final_score: int
    selection: Tuple[Card, ...] = ()
    joker: Optional[Joker] = None

    @property
    def combined_base(self) -> int:
        return self.base_score + self.card_value_sum

    def to_dict(self) -> dict:
        """序列化为展示层使用的 dict"""
        return {
            "classification": self.classification.value,
            "display_name": self.classification.display_name,
            "base_score": self.base_score,
            "card_value_sum": self.card_value_sum,
            "multiplier": self.multiplier,
            "modifier_delta": self.modifier_delta,
            "final_score": self.final_score,
            "cards": [c.display for c in self.selection],
            "joker": self.joker.name if self.joker else None,
        }

    def describe(self) -> str:
        """一行计分说明，如 'Flush (Hand: 35 + Cards: 41 = 76) × Mult: 4 = 304'"""
        joker_info = ""
        if self.joker is not None and self.modifier_delta:
            if self.joker.type == JokerType.SCARY_FACE:
                joker_info = f" + Scary Face: {self.modifier_delta} chips"
            else:
                joker_info = f" + Joker: ×{self.joker.multiplier}"
        return (
            f"{self.classification.display_name} "
            f"(Hand: {self.base_score} + Cards: {self.card_value_sum} = {self.combined_base})"
            f" × Mult: {self.multiplier}{joker_info} = {self.final_score}"
        )


class ScoringEngine:
    """计分引擎：持有当前关卡的小丑牌，对一组选中的牌给出 ScoringResult"""

    def __init__(self, joker: Optional[Joker] = None):
        self.active_joker = joker

    def score(self, selection: Sequence[Card]) -> ScoringResult:
        """
        计算一组牌的得分。选牌张数（1~5）由调用方保证。
        (基础分 + 牌面分值和) × 倍率，再交给小丑牌加成。
        """
        cards = list(selection)
        evaluation = Hand(cards).evaluate()
        value_sum = point_value_sum(cards)
        pre_modifier = (evaluation.base_score + value_sum) * evaluation.multiplier
        final = apply_joker(self.active_joker, pre_modifier, cards)
        return ScoringResult(
            classification=evaluation.classification,
            base_score=evaluation.base_score,
            card_value_sum=value_sum,
            multiplier=evaluation.multiplier,
            pre_modifier=pre_modifier,
            modifier_delta=final - pre_modifier,
            final_score=final,
            selection=tuple(cards),
            joker=self.active_joker,
        )

    def apply_joker(self, pre_modifier: int, selection: Sequence[Card]) -> int:
        return apply_joker(self.active_joker, pre_modifier, selection)


# ============================================================
#  小丑牌加成
# ============================================================

def apply_joker(joker: Optional[Joker], pre_modifier: int, selection: Sequence[Card]) -> int:
    """按小丑牌的生效时机与种类修正得分"""
    if joker is None:
        return pre_modifier

    cards = list(selection)

    if joker.activation == ActivationType.INDEPENDENT:
        if joker.type == JokerType.FIBONACCI:
            values = sorted(c.point_value for c in cards)
            if has_consecutive_fibonacci(values, FIBONACCI_RUN_LENGTH):
                return pre_modifier * joker.multiplier
            return pre_modifier
        return pre_modifier * joker.multiplier

    # ON_SCORED
    score = pre_modifier
    suit = joker.active_suit
    if suit is not None:
        if len(cards) >= SUIT_JOKER_MIN_CARDS and all(c.suit == suit for c in cards):
            score *= joker.multiplier
    elif joker.type == JokerType.SCARY_FACE:
        score += FACE_CARD_BONUS * sum(1 for c in cards if c.is_face)
    return score


def has_consecutive_fibonacci(values: List[int], required: int) -> bool:
    """已排序的数值中是否有连续 required 个都属于斐波那契集合"""
    run = 0
    best = 0
    for value in values:
        if value in FIBONACCI_NUMBERS:
            run += 1
            best = max(best, run)
        else:
            run = 0
    return best >= required
