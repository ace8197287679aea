"""手牌模型 - 1~8张牌的可变集合，随时维护自身的牌型与基础分"""

from typing import Iterable, List, Optional, Tuple

from .card import Card, point_value_sum
from .errors import InvalidArgumentError, InvalidStateError
from .hand_detector import evaluate_cards
from .hand_type import HandType, HandEvaluation


# 手牌张数上下限
MIN_CARDS = 1
MAX_CARDS = 8
# 每次出牌 / 弃牌的张数范围
MIN_CARDS_TO_PLAY = 1
MAX_CARDS_TO_PLAY = 5
MIN_CARDS_TO_DISCARD = 1
MAX_CARDS_TO_DISCARD = 5


class Hand:
    """玩家手牌。

    任何增删操作都会在返回前重新计算 classification / base_score /
    multiplier，调用方读到的派生值总与当前牌面一致。
    唯一允许少于 MIN_CARDS 的时刻是刚创建、尚未加牌的空手牌。
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = []
        self._evaluation = evaluate_cards(self._cards)
        if cards is not None:
            self.add_cards(list(cards))

    # ============================================================
    #  只读属性
    # ============================================================

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def card_count(self) -> int:
        return len(self._cards)

    @property
    def classification(self) -> HandType:
        return self._evaluation.classification

    @property
    def base_score(self) -> int:
        return self._evaluation.base_score

    @property
    def multiplier(self) -> int:
        return self._evaluation.multiplier

    @property
    def total_value(self) -> int:
        """所有牌的分值之和"""
        return point_value_sum(self._cards)

    @property
    def remaining_card_slots(self) -> int:
        return MAX_CARDS - len(self._cards)

    def can_get_cards(self) -> bool:
        return len(self._cards) < MAX_CARDS

    def is_valid(self) -> bool:
        return len(self._cards) >= MIN_CARDS

    def contains(self, cards: Iterable[Card]) -> bool:
        """检查手牌中是否包含指定的牌（按多重集合计数）"""
        hand_copy = list(self._cards)
        for card in cards:
            if card in hand_copy:
                hand_copy.remove(card)
            else:
                return False
        return True

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self):
        return iter(tuple(self._cards))

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    # ============================================================
    #  牌型计算
    # ============================================================

    def evaluate(self) -> HandEvaluation:
        """重新计算当前牌面的牌型，纯函数且幂等"""
        self._evaluation = evaluate_cards(self._cards)
        return self._evaluation

    # ============================================================
    #  增删牌
    # ============================================================

    def add_card(self, card: Card) -> None:
        """加入一张牌，超过上限抛 InvalidStateError"""
        self.add_cards([card])

    def add_cards(self, cards: List[Card]) -> None:
        """批量加牌，要么全部加入要么一张不加"""
        for card in cards:
            if not isinstance(card, Card):
                raise InvalidArgumentError(f"不是一张牌: {card!r}")
        if len(self._cards) + len(cards) > MAX_CARDS:
            raise InvalidStateError(f"手牌最多 {MAX_CARDS} 张，无法再加入 {len(cards)} 张")
        self._cards.extend(cards)
        self.evaluate()

    def remove_card(self, card: Card) -> bool:
        """移除一张牌，返回是否移除成功"""
        if card not in self._cards:
            return False
        if len(self._cards) - 1 < MIN_CARDS:
            raise InvalidStateError(f"手牌至少保留 {MIN_CARDS} 张")
        self._cards.remove(card)
        self.evaluate()
        return True

    def discard_cards(self, cards: List[Card]) -> int:
        """
        弃掉 1~5 张手牌，返回弃牌张数。
        所弃的牌必须都在手中；弃后少于最小张数则拒绝。
        """
        if cards is None:
            raise InvalidArgumentError("弃牌列表不能为 None")
        if not MIN_CARDS_TO_DISCARD <= len(cards) <= MAX_CARDS_TO_DISCARD:
            raise InvalidArgumentError(
                f"每次弃牌必须是 {MIN_CARDS_TO_DISCARD}~{MAX_CARDS_TO_DISCARD} 张，实际 {len(cards)} 张"
            )
        if not self.contains(cards):
            raise InvalidArgumentError(f"手牌中不包含要弃的牌: {list(cards)}")
        if len(self._cards) - len(cards) < MIN_CARDS:
            raise InvalidStateError(f"弃牌后手牌少于 {MIN_CARDS} 张")
        for card in cards:
            self._cards.remove(card)
        self.evaluate()
        return len(cards)

    def draw_new_cards(self, cards: List[Card]) -> None:
        """补入 1~5 张新牌"""
        if not MIN_CARDS_TO_DISCARD <= len(cards) <= MAX_CARDS_TO_DISCARD:
            raise InvalidArgumentError(
                f"每次补牌必须是 {MIN_CARDS_TO_DISCARD}~{MAX_CARDS_TO_DISCARD} 张，实际 {len(cards)} 张"
            )
        self.add_cards(cards)

    def take_cards(self, cards: List[Card]) -> None:
        """移出打出的牌，可以把手牌清空（出完最后几张时）"""
        if not self.contains(cards):
            raise InvalidArgumentError(f"手牌中不包含要打出的牌: {list(cards)}")
        for card in cards:
            self._cards.remove(card)
        self.evaluate()

    def __repr__(self) -> str:
        cards_str = " ".join(c.display for c in self._cards)
        return (
            f"{self.classification.display_name}: {cards_str} "
            f"(Base Score: {self.base_score} × {self.multiplier})"
        )
