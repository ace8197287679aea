"""终端可视化渲染器 - 在终端中展示关卡与出牌计分过程"""

import time
from typing import List, Optional

from balatro.engine.card import Card, Suit
from balatro.engine.joker import Joker
from balatro.engine.scoring import ScoringResult
from balatro.game.round_state import GameEvent, GameOutcome, GameSummary
from balatro.game.stage import LevelStage


# 颜色常量 (ANSI)
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
MAGENTA = "\033[95m"
CYAN = "\033[96m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

# 结局展示
OUTCOME_TEXT = {
    GameOutcome.WON: f"{GREEN}{BOLD}全部通关 🏆{RESET}",
    GameOutcome.LOST: f"{RED}{BOLD}挑战失败 💀{RESET}",
    GameOutcome.IN_PROGRESS: f"{YELLOW}未完成{RESET}",
}


class TerminalRenderer:
    """终端可视化渲染器"""

    def __init__(self, delay: float = 0.8):
        self.delay = delay  # 每步之间的延迟（秒）

    def pause(self, seconds: float = 0) -> None:
        if self.delay <= 0:
            return
        time.sleep(seconds or self.delay)

    # ============================================================
    #  牌面渲染
    # ============================================================

    @staticmethod
    def format_cards(cards: List[Card]) -> str:
        """将牌列表格式化为彩色字符串（红桃/方块为红色）"""
        parts = []
        for c in cards:
            if c.suit in (Suit.HEARTS, Suit.DIAMONDS):
                parts.append(f"{RED}{c.display}{RESET}")
            else:
                parts.append(c.display)
        return " ".join(parts)

    @staticmethod
    def format_joker(joker: Optional[Joker]) -> str:
        if joker is None:
            return f"{DIM}无{RESET}"
        return f"{MAGENTA}{BOLD}{joker.name}{RESET} {DIM}({joker.effect}){RESET}"

    # ============================================================
    #  标题
    # ============================================================

    def print_header(self, title: str) -> None:
        """打印带框的标题"""
        print(f"\n{YELLOW}{BOLD}{'═' * 60}{RESET}")
        print(f"{YELLOW}{BOLD}  {title}{RESET}")
        print(f"{YELLOW}{BOLD}{'═' * 60}{RESET}\n")

    # ============================================================
    #  关卡展示
    # ============================================================

    def show_stage(self, stage: LevelStage, joker: Optional[Joker], ante: int, chips: int) -> None:
        """展示关卡开始信息"""
        self.print_header(f"🎯 等级 {stage.level} - {stage.display_name}  目标 {stage.target_score}")
        print(f"  小丑牌: {self.format_joker(joker)}")
        print(f"  底注: {ante}  筹码: {chips}")
        print()

    def show_deal(self, cards: List[Card]) -> None:
        print(f"  🃏 发牌 ({len(cards)}张): {self.format_cards(cards)}")

    # ============================================================
    #  出牌 / 弃牌 / 补牌
    # ============================================================

    def show_play(self, result: ScoringResult) -> None:
        """展示一次出牌与计分明细"""
        print(f"  {CYAN}{BOLD}出牌{RESET}: {self.format_cards(list(result.selection))}")
        print(f"    {result.describe()}")

    def show_discard(self, cards: List[Card]) -> None:
        print(f"  {DIM}弃牌{RESET}: {self.format_cards(cards)}")

    def show_draw(self, cards: List[Card]) -> None:
        print(f"  {BLUE}补牌{RESET}: {self.format_cards(cards)}")

    def show_exhausted(self, remaining: int) -> None:
        print(f"  {YELLOW}牌堆不足（剩余 {remaining} 张），不再补牌{RESET}")

    def show_round_end(self, cleared: bool, score: int) -> None:
        if cleared:
            print(f"\n  ✅ {GREEN}{BOLD}达成目标！累计 {score} 分{RESET}\n")
        else:
            print(f"\n  ❌ {RED}{BOLD}未达目标，累计 {score} 分{RESET}\n")

    # ============================================================
    #  结算展示
    # ============================================================

    def show_summary(self, summary: GameSummary) -> None:
        """展示整局结算"""
        self.print_header("🏁 游戏结束")
        print(f"  结果: {OUTCOME_TEXT[summary.outcome]}")
        print(f"  通过关卡: {summary.stages_cleared}")
        print(f"  最终位置: 等级 {summary.level} - {summary.stage_name}")
        print(f"  总得分: {summary.total_score}")
        print(f"  剩余筹码: {summary.chips}")
        print()

    # ============================================================
    #  事件回调（注册到 GameController）
    # ============================================================

    def make_event_callback(self):
        """创建事件回调函数，供 GameController.on_event() 使用"""
        renderer = self

        def callback(event: GameEvent) -> None:
            if event.action == "deal":
                renderer.show_deal(event.data)
                renderer.pause(0.5)
            elif event.action == "play":
                renderer.show_play(event.data)
                renderer.pause()
            elif event.action == "discard":
                renderer.show_discard(event.data)
                renderer.pause(0.3)
            elif event.action == "draw":
                renderer.show_draw(event.data)
                renderer.pause(0.3)
            elif event.action == "exhausted":
                renderer.show_exhausted(event.data)
            elif event.action == "round_complete":
                renderer.show_round_end(True, event.data)
            elif event.action == "game_over":
                renderer.show_round_end(False, event.data)

        return callback
