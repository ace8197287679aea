# 回合与关卡流程模块
from .player import Player
from .stage import LevelStage, first_stage_for_level
from .round_state import RoundState, RoundPhase, GameEvent, Action, ActionKind, GameOutcome, GameSummary
from .round import RoundStateMachine
from .controller import GameController, AIStrategy
