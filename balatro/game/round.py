"""回合状态机 - 驱动一个关卡内 选牌 → 计分 → 补牌 的循环"""

from typing import Callable, List, Optional, Sequence, Tuple

from balatro.engine.card import Card
from balatro.engine.deck import Deck, HAND_SIZE
from balatro.engine.errors import InvalidArgumentError, InvalidStateError
from balatro.engine.hand import (
    Hand,
    MIN_CARDS,
    MIN_CARDS_TO_PLAY,
    MAX_CARDS_TO_PLAY,
    MIN_CARDS_TO_DISCARD,
    MAX_CARDS_TO_DISCARD,
)
from balatro.engine.joker import Joker
from balatro.engine.scoring import ScoringEngine, ScoringResult
from balatro.game.round_state import (
    RoundState,
    RoundPhase,
    GameEvent,
    DEFAULT_MAX_HANDS,
    DEFAULT_MAX_DISCARDS,
)


EventCallback = Callable[[GameEvent], None]


class RoundStateMachine:
    """
    一个关卡的状态机。

    AWAITING_SELECTION → (play/discard) → AWAITING_DRAW → (draw) → AWAITING_SELECTION，
    累计分数达到目标进入 ROUND_COMPLETE，出牌次数用尽或牌堆耗尽且手牌为空进入 GAME_OVER。
    目标分由外部传入，本类不含任何计分规则。
    """

    def __init__(
        self,
        deck: Deck,
        target_score: int,
        joker: Optional[Joker] = None,
        max_hands: int = DEFAULT_MAX_HANDS,
        max_discards: int = DEFAULT_MAX_DISCARDS,
    ):
        if target_score < 0:
            raise InvalidArgumentError(f"目标分不能为负: {target_score}")
        if max_hands < 1 or max_discards < 0:
            raise InvalidArgumentError(f"非法配额: hands={max_hands}, discards={max_discards}")
        self.deck = deck
        self.engine = ScoringEngine(joker)
        self.hand = Hand()
        self.state = RoundState(
            target_score=target_score,
            joker=joker,
            max_hands=max_hands,
            max_discards=max_discards,
        )
        self._callbacks: List[EventCallback] = []

    # ============================================================
    #  事件
    # ============================================================

    def on_event(self, callback: EventCallback) -> None:
        """注册事件回调"""
        self._callbacks.append(callback)

    def _emit(self, action: str, data=None) -> None:
        event = GameEvent(self.state.phase, action, data)
        self.state.events.append(event)
        for cb in self._callbacks:
            cb(event)

    def _set_phase(self, phase: RoundPhase) -> None:
        self.state.phase = phase
        if phase == RoundPhase.ROUND_COMPLETE:
            self._emit("round_complete", self.state.cumulative_score)
        elif phase == RoundPhase.GAME_OVER:
            self._emit("game_over", self.state.cumulative_score)

    # ============================================================
    #  对外查询
    # ============================================================

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    @property
    def target_score(self) -> int:
        return self.state.target_score

    @property
    def cumulative_score(self) -> int:
        return self.state.cumulative_score

    @property
    def joker(self) -> Optional[Joker]:
        return self.engine.active_joker

    @property
    def discard_pile(self) -> Tuple[Card, ...]:
        return tuple(self.state.discard_pile)

    def hands_remaining(self) -> int:
        return self.state.hands_remaining

    def discards_remaining(self) -> int:
        return self.state.discards_remaining

    # ============================================================
    #  发牌
    # ============================================================

    def start(self) -> Hand:
        """发初始8张手牌"""
        self._require(RoundPhase.WAITING)
        self.deck.update_score(0)
        dealt = self.deck.deal_hand(HAND_SIZE)
        if dealt is None:
            self.state.deck_exhausted = True
            self._set_phase(RoundPhase.GAME_OVER)
            return self.hand
        self.hand = dealt
        self.state.phase = RoundPhase.AWAITING_SELECTION
        self._emit("deal", list(self.hand.cards))
        return self.hand

    # ============================================================
    #  出牌 / 弃牌
    # ============================================================

    def preview(self, selection: Sequence[Card]) -> ScoringResult:
        """只计算得分，不改变任何状态"""
        self._require(RoundPhase.AWAITING_SELECTION)
        cards = self._check_selection(selection, MIN_CARDS_TO_PLAY, MAX_CARDS_TO_PLAY)
        return self.engine.score(cards)

    def play(self, selection: Sequence[Card]) -> ScoringResult:
        """打出 1~5 张牌并计分"""
        self._require(RoundPhase.AWAITING_SELECTION)
        cards = self._check_selection(selection, MIN_CARDS_TO_PLAY, MAX_CARDS_TO_PLAY)
        if self.state.hands_remaining <= 0:
            raise InvalidStateError("本关出牌次数已用完")

        result = self.engine.score(cards)
        self.hand.take_cards(cards)
        self.state.discard_pile.extend(cards)
        self.state.hands_played += 1
        self.state.play_history.append(result)
        self.state.cards_to_draw = len(cards)
        self._emit("play", result)

        self.record_play(result.final_score)
        if not self.state.is_finished:
            self._after_play()
        return result

    def record_play(self, final_score: int) -> int:
        """
        累加一次出牌得分，同步给牌堆的回合准入分数，返回累计分。
        累计分达到目标时进入 ROUND_COMPLETE。
        """
        if self.state.phase == RoundPhase.WAITING or self.state.is_finished:
            raise InvalidStateError(f"当前阶段 {self.state.phase.value} 不能记分")
        if final_score < 0:
            raise InvalidArgumentError(f"得分不能为负: {final_score}")
        self.state.cumulative_score += final_score
        self.deck.update_score(self.state.cumulative_score)
        if self.state.cumulative_score >= self.state.target_score:
            self._set_phase(RoundPhase.ROUND_COMPLETE)
        return self.state.cumulative_score

    def _after_play(self) -> None:
        s = self.state
        if s.hands_remaining <= 0:
            self._set_phase(RoundPhase.GAME_OVER)
        elif s.deck_exhausted and len(self.hand) < MIN_CARDS:
            self._set_phase(RoundPhase.GAME_OVER)
        else:
            s.phase = RoundPhase.AWAITING_DRAW

    def discard(self, selection: Sequence[Card]) -> int:
        """弃掉 1~5 张牌，返回弃牌张数"""
        self._require(RoundPhase.AWAITING_SELECTION)
        if self.state.discards_remaining <= 0:
            raise InvalidStateError("本关弃牌次数已用完")
        cards = self._check_selection(selection, MIN_CARDS_TO_DISCARD, MAX_CARDS_TO_DISCARD)

        discarded = self.hand.discard_cards(cards)
        self.state.discard_pile.extend(cards)
        self.state.discards_used += 1
        self.state.cards_to_draw = discarded
        self._emit("discard", cards)
        self.state.phase = RoundPhase.AWAITING_DRAW
        return discarded

    # ============================================================
    #  补牌
    # ============================================================

    def draw(self) -> List[Card]:
        """把手牌补回8张，返回新抽到的牌；牌堆耗尽时保留现有手牌"""
        self._require(RoundPhase.AWAITING_DRAW)
        s = self.state
        kept = list(self.hand.cards)
        needed = HAND_SIZE - len(kept)
        drawn: List[Card] = []

        if needed > 0 and not s.deck_exhausted:
            new_hand = self.deck.draw(needed, kept)
            if new_hand is None:
                s.deck_exhausted = True
                self._emit("exhausted", self.deck.card_count())
            else:
                drawn = list(new_hand.cards[len(kept):])
                self.hand = new_hand
                self._emit("draw", drawn)

        s.cards_to_draw = 0
        if len(self.hand) < MIN_CARDS:
            self._set_phase(RoundPhase.GAME_OVER)
        else:
            s.phase = RoundPhase.AWAITING_SELECTION
        return drawn

    # ============================================================
    #  校验
    # ============================================================

    def _require(self, phase: RoundPhase) -> None:
        if self.state.phase != phase:
            raise InvalidStateError(
                f"当前阶段 {self.state.phase.value} 不允许该操作（需要 {phase.value}）"
            )

    def _check_selection(self, selection: Sequence[Card], low: int, high: int) -> List[Card]:
        if selection is None:
            raise InvalidArgumentError("选牌不能为 None")
        cards = list(selection)
        if not low <= len(cards) <= high:
            raise InvalidArgumentError(f"必须选择 {low}~{high} 张牌，实际 {len(cards)} 张")
        if not self.hand.contains(cards):
            raise InvalidArgumentError(f"手牌中不包含所选的牌: {cards}")
        return cards
