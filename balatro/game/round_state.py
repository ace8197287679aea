"""回合状态 - 一个关卡内的分数、配额与阶段"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, List, Optional

from balatro.engine.card import Card
from balatro.engine.joker import Joker
from balatro.engine.scoring import ScoringResult


# 每关默认可出牌 / 弃牌次数
DEFAULT_MAX_HANDS = 4
DEFAULT_MAX_DISCARDS = 4


class RoundPhase(str, Enum):
    """回合阶段"""
    WAITING = "WAITING"                          # 尚未发牌
    AWAITING_SELECTION = "AWAITING_SELECTION"    # 等待玩家选牌
    AWAITING_DRAW = "AWAITING_DRAW"              # 等待补牌
    ROUND_COMPLETE = "ROUND_COMPLETE"            # 达到目标分
    GAME_OVER = "GAME_OVER"                      # 失败


class ActionKind(str, Enum):
    PLAY = "PLAY"
    DISCARD = "DISCARD"


@dataclass
class Action:
    """玩家（或 AI）的一次决策"""
    kind: ActionKind
    cards: List[Card]
    strategy: str = ""               # 决策说明（LLM 给出的一句话）


@dataclass
class GameEvent:
    """游戏事件记录"""
    phase: RoundPhase
    action: str                      # "deal", "play", "discard", "draw", "exhausted", "round_complete", "game_over"
    data: Any = None                 # ScoringResult / 牌列表 / None


@dataclass
class RoundState:
    """一个关卡内的完整状态"""
    target_score: int
    joker: Optional[Joker] = None
    phase: RoundPhase = RoundPhase.WAITING

    cumulative_score: int = 0
    max_hands: int = DEFAULT_MAX_HANDS
    max_discards: int = DEFAULT_MAX_DISCARDS
    hands_played: int = 0
    discards_used: int = 0

    cards_to_draw: int = 0           # 上一次出牌/弃牌后应补的张数
    deck_exhausted: bool = False

    discard_pile: List[Card] = field(default_factory=list)
    play_history: List[ScoringResult] = field(default_factory=list)
    events: List[GameEvent] = field(default_factory=list)

    @property
    def hands_remaining(self) -> int:
        return max(self.max_hands - self.hands_played, 0)

    @property
    def discards_remaining(self) -> int:
        return max(self.max_discards - self.discards_used, 0)

    @property
    def score_needed(self) -> int:
        return max(self.target_score - self.cumulative_score, 0)

    @property
    def is_finished(self) -> bool:
        return self.phase in (RoundPhase.ROUND_COMPLETE, RoundPhase.GAME_OVER)


class GameOutcome(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"


@dataclass
class GameSummary:
    """一局游戏（多个关卡）的结算"""
    outcome: GameOutcome
    stages_cleared: int
    level: int
    stage_name: str
    total_score: int
    chips: int
