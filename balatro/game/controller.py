"""游戏控制器 - 串联关卡推进、底注奖励与策略驱动的自动对局"""

import logging
import random
from typing import Callable, List, Optional, Protocol

from balatro.engine.deck import Deck
from balatro.engine.errors import BalatroError, InvalidArgumentError, InvalidStateError
from balatro.engine.hand import Hand, MAX_CARDS_TO_PLAY
from balatro.engine.joker import Joker, random_joker
from balatro.game.player import Player
from balatro.game.round import RoundStateMachine
from balatro.game.round_state import (
    Action,
    ActionKind,
    GameEvent,
    GameOutcome,
    GameSummary,
    RoundPhase,
    RoundState,
    DEFAULT_MAX_HANDS,
    DEFAULT_MAX_DISCARDS,
)
from balatro.game.stage import LevelStage, first_stage_for_level

logger = logging.getLogger(__name__)

STARTING_CHIPS = 100
INITIAL_ANTE = 5
ANTE_STEP = 5
LEVEL_REWARD_FACTOR = 3
ALLOWED_ANTES = (10, 50, 100)


class AIStrategy(Protocol):
    """AI 决策接口（策略模式）"""

    def decide_action(self, hand: Hand, state: RoundState) -> Action:
        """根据手牌与回合状态决定出牌或弃牌"""
        ...


class GameController:
    """游戏控制器：管理关卡推进，为每个关卡创建回合状态机"""

    def __init__(
        self,
        player_name: str = "Player 1",
        strategy: Optional[AIStrategy] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        max_hands: int = DEFAULT_MAX_HANDS,
        max_discards: int = DEFAULT_MAX_DISCARDS,
    ):
        self.rng = rng or random.Random(seed)
        self.player = Player(name=player_name, chips=STARTING_CHIPS)
        self.strategy = strategy
        self.max_hands = max_hands
        self.max_discards = max_discards
        self._callbacks: List[Callable[[GameEvent], None]] = []
        self._reset_progress()

    def _reset_progress(self) -> None:
        self.deck = Deck(rng=self.rng)
        self.level = 1
        self.stage = LevelStage.SMALL_BLIND
        self.round_number = 1
        self.stages_cleared = 0
        self.ante = INITIAL_ANTE
        self.joker: Optional[Joker] = None
        self.round: Optional[RoundStateMachine] = None
        self.outcome = GameOutcome.IN_PROGRESS
        self._ante_due = True

    def on_event(self, callback: Callable[[GameEvent], None]) -> None:
        """注册事件回调，转发给之后创建的每个回合"""
        self._callbacks.append(callback)

    # ============================================================
    #  关卡推进
    # ============================================================

    def start_new_game(self) -> None:
        self.player.reset_for_new_game(STARTING_CHIPS)
        self._reset_progress()

    def start_stage(self, joker: Optional[Joker] = None) -> RoundStateMachine:
        """开始当前关卡：必要时扣底注，换一张新的小丑牌并发牌"""
        if self.outcome != GameOutcome.IN_PROGRESS:
            raise InvalidStateError(f"游戏已结束: {self.outcome.value}")
        if self.round is not None:
            # 进行中、待结算（complete_stage）或失败待重打（retry_stage）
            raise InvalidStateError(f"当前关卡处于 {self.round.phase.value}，不能开始新关卡")

        if self._ante_due:
            self.player.pay(self.ante)
            self._ante_due = False
            logger.info("扣除底注 %d，剩余筹码 %d", self.ante, self.player.chips)

        self.joker = joker or random_joker(self.rng)
        self.round = RoundStateMachine(
            self.deck,
            self.stage.target_score,
            joker=self.joker,
            max_hands=self.max_hands,
            max_discards=self.max_discards,
        )
        for cb in self._callbacks:
            self.round.on_event(cb)
        logger.info(
            "第 %d 回合 - %s，目标 %d，小丑牌 %s",
            self.round_number, self.stage.display_name, self.stage.target_score, self.joker.name,
        )
        self.round.start()
        return self.round

    def complete_stage(self) -> Optional[LevelStage]:
        """
        结算已达标的关卡并进入下一关。
        等级最后一关完成时升级：奖励 3 倍底注，底注 +5。
        返回新关卡；全部通关时返回 None。
        """
        if self.round is None or self.round.phase != RoundPhase.ROUND_COMPLETE:
            raise InvalidStateError("当前关卡尚未达标")

        finished = self.stage
        score = self.round.cumulative_score
        self.player.update_score(score)
        self.stages_cleared += 1
        self.round_number += 1

        if finished.is_final:
            self.outcome = GameOutcome.WON
            logger.info("通关 %s (得分 %d/%d)，游戏胜利", finished.display_name, score, finished.target_score)
            return None

        # 牌堆回合准入以本关目标分为门槛
        self.deck.start_new_round(finished.target_score)
        self.round = None

        next_stage = finished.next_stage
        if next_stage is not None:
            self.stage = next_stage
            logger.info(
                "从 %s 进入 %s (得分 %d/%d)",
                finished.display_name, next_stage.display_name, score, finished.target_score,
            )
        else:
            self.level += 1
            self.stage = first_stage_for_level(self.level)
            reward = self.ante * LEVEL_REWARD_FACTOR
            self.player.award(reward)
            self.ante += ANTE_STEP
            logger.info(
                "升至等级 %d (得分 %d/%d)，奖励 %d 筹码，底注调整为 %d",
                self.level, score, finished.target_score, reward, self.ante,
            )
        return self.stage

    def retry_stage(self) -> RoundStateMachine:
        """失败后重打当前关卡：换一副新牌并重新扣底注"""
        if self.round is None or self.round.phase != RoundPhase.GAME_OVER:
            raise InvalidStateError("只有失败后才能重打关卡")
        self.outcome = GameOutcome.IN_PROGRESS
        self.deck = Deck(rng=self.rng)
        self.round = None
        self._ante_due = True
        logger.info("重打 %s", self.stage.display_name)
        return self.start_stage()

    def set_ante(self, amount: int) -> None:
        if amount not in ALLOWED_ANTES:
            raise InvalidArgumentError(f"底注只能是 {ALLOWED_ANTES} 之一: {amount}")
        self.ante = amount

    # ============================================================
    #  策略驱动的自动对局
    # ============================================================

    def run_stage(self, joker: Optional[Joker] = None) -> RoundPhase:
        """用 strategy 打完当前关卡，返回结束阶段"""
        if self.strategy is None:
            raise InvalidStateError("未设置 AI 策略")
        rnd = self.start_stage(joker)
        while not rnd.state.is_finished:
            if rnd.phase == RoundPhase.AWAITING_DRAW:
                rnd.draw()
                continue
            action = self.strategy.decide_action(rnd.hand, rnd.state)
            self._apply_action(rnd, action)
        return self._finish_stage(rnd)

    async def run_stage_async(self, joker: Optional[Joker] = None) -> RoundPhase:
        """异步版本：策略提供 async_decide_action 时 await 它"""
        if self.strategy is None:
            raise InvalidStateError("未设置 AI 策略")
        decide_async = getattr(self.strategy, "async_decide_action", None)
        rnd = self.start_stage(joker)
        while not rnd.state.is_finished:
            if rnd.phase == RoundPhase.AWAITING_DRAW:
                rnd.draw()
                continue
            if decide_async is not None:
                action = await decide_async(rnd.hand, rnd.state)
            else:
                action = self.strategy.decide_action(rnd.hand, rnd.state)
            self._apply_action(rnd, action)
        return self._finish_stage(rnd)

    def run_game(self, max_stages: Optional[int] = None) -> GameSummary:
        """连续打关直到失败、通关或达到 max_stages"""
        played = 0
        while self.outcome == GameOutcome.IN_PROGRESS:
            if max_stages is not None and played >= max_stages:
                break
            self.run_stage()
            played += 1
            if self.outcome == GameOutcome.IN_PROGRESS:
                self.complete_stage()
        return self.summary()

    async def run_game_async(self, max_stages: Optional[int] = None) -> GameSummary:
        played = 0
        while self.outcome == GameOutcome.IN_PROGRESS:
            if max_stages is not None and played >= max_stages:
                break
            await self.run_stage_async()
            played += 1
            if self.outcome == GameOutcome.IN_PROGRESS:
                self.complete_stage()
        return self.summary()

    def summary(self) -> GameSummary:
        return GameSummary(
            outcome=self.outcome,
            stages_cleared=self.stages_cleared,
            level=self.level,
            stage_name=self.stage.display_name,
            total_score=self.player.score,
            chips=self.player.chips,
        )

    def _finish_stage(self, rnd: RoundStateMachine) -> RoundPhase:
        if rnd.phase == RoundPhase.GAME_OVER:
            self.outcome = GameOutcome.LOST
            logger.info(
                "%s 失败 (得分 %d/%d)", self.stage.display_name, rnd.cumulative_score, rnd.target_score
            )
        return rnd.phase

    def _apply_action(self, rnd: RoundStateMachine, action: Action) -> None:
        """执行策略给出的动作；非法动作记录警告并改为打出前几张牌"""
        try:
            if action.kind == ActionKind.DISCARD:
                rnd.discard(action.cards)
            else:
                rnd.play(action.cards)
            return
        except BalatroError as e:
            logger.warning("策略给出非法动作 %s %s: %s", action.kind.value, action.cards, e)
        rnd.play(list(rnd.hand.cards)[:MAX_CARDS_TO_PLAY])
