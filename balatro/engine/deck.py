"""牌堆 - 维护52张牌的生命周期：每回合只洗一次，抽牌后手牌恒为8张"""

import random
from typing import Iterable, List, Optional, Tuple

from .card import Card, create_deck
from .errors import InvalidArgumentError, InvalidStateError
from .hand import Hand, MAX_CARDS, MIN_CARDS_TO_DISCARD, MAX_CARDS_TO_DISCARD


DECK_SIZE = 52
HAND_SIZE = MAX_CARDS


class Deck:
    """
    一副牌。

    is_new_round 是洗牌锁：只有为 True 时才能 shuffle()，洗完立即置为 False，
    直到分数达标后调用 start_new_round() 才重新打开。
    """

    def __init__(
        self,
        cards: Optional[Iterable[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._rng = rng or random.Random()
        self._current_score = 0
        if cards is None:
            # 开局：满牌并洗一次
            self._cards: List[Card] = []
            self.is_new_round = True
            self.reset()
            self.shuffle()
        else:
            cards = list(cards)
            _check_population(cards)
            self._cards = cards
            self.is_new_round = False

    # ============================================================
    #  回合与洗牌
    # ============================================================

    def reset(self) -> None:
        """恢复为按固定顺序生成的52张牌"""
        self._cards = create_deck()

    def shuffle(self) -> None:
        """均匀随机打乱（Fisher–Yates），仅在新回合开始时允许"""
        if not self.is_new_round:
            raise InvalidStateError("回合进行中不能洗牌")
        self._rng.shuffle(self._cards)
        self.is_new_round = False

    def update_score(self, score: int) -> None:
        """更新用于回合准入判断的当前分数"""
        self._current_score = score

    @property
    def current_score(self) -> int:
        return self._current_score

    def can_start_new_round(self, required_score: int) -> bool:
        return self._current_score >= required_score

    def start_new_round(self, required_score: int) -> None:
        """分数达标后开始新回合：重置为满牌并洗牌"""
        if not self.can_start_new_round(required_score):
            raise InvalidStateError(
                f"分数未达标，无法开始新回合: {self._current_score} < {required_score}"
            )
        self.reset()
        self.is_new_round = True
        self.shuffle()

    # ============================================================
    #  抽牌
    # ============================================================

    def draw(self, n: int, kept_cards: Optional[List[Card]]) -> Optional[Hand]:
        """
        弃掉 n 张后补牌：返回 保留的牌 + 新抽的 n 张 组成的8张手牌。
        牌堆剩余不足 n 张时返回 None（牌堆耗尽，不是错误），牌堆保持不变。
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidArgumentError(f"抽牌数必须是整数: {n!r}")
        if not MIN_CARDS_TO_DISCARD <= n <= MAX_CARDS_TO_DISCARD:
            raise InvalidArgumentError(
                f"抽牌数必须在 {MIN_CARDS_TO_DISCARD}~{MAX_CARDS_TO_DISCARD} 之间: {n!r}"
            )
        if kept_cards is None:
            raise InvalidArgumentError("保留牌列表不能为 None")
        if len(kept_cards) + n != HAND_SIZE:
            raise InvalidArgumentError(
                f"保留牌数 + 抽牌数必须等于 {HAND_SIZE}: {len(kept_cards)} + {n}"
            )
        if len(self._cards) < n:
            return None

        drawn = self._cards[-n:]
        # 先组装手牌，失败时牌堆不受影响
        hand = Hand(list(kept_cards) + drawn)
        del self._cards[-n:]
        return hand

    def deal_hand(self, size: int = HAND_SIZE) -> Optional[Hand]:
        """回合开始时发一手初始牌，牌不够时返回 None"""
        if not 1 <= size <= HAND_SIZE:
            raise InvalidArgumentError(f"初始手牌张数必须在 1~{HAND_SIZE} 之间: {size}")
        if len(self._cards) < size:
            return None
        dealt = self._cards[-size:]
        hand = Hand(dealt)
        del self._cards[-size:]
        return hand

    # ============================================================
    #  查询
    # ============================================================

    def card_count(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def cards_snapshot(self) -> Tuple[Card, ...]:
        """当前牌序的只读副本"""
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({len(self._cards)} cards, new_round={self.is_new_round})"


def _check_population(cards: List[Card]) -> None:
    """牌堆不超过52张，且同一 (花色, 点数) 不重复"""
    if len(cards) > DECK_SIZE:
        raise InvalidArgumentError(f"牌堆最多 {DECK_SIZE} 张: {len(cards)}")
    identities = {(c.suit, c.rank) for c in cards}
    if len(identities) != len(cards):
        raise InvalidArgumentError("牌堆中存在重复的牌")
