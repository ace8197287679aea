"""Balatro 风格扑克计分 AI 对局 - 主入口"""

import asyncio
import argparse
import logging

from balatro.ai.rule_ai import RuleAI
from balatro.ai.llm_ai import create_llm_player
from balatro.engine.joker import random_joker
from balatro.game.controller import GameController
from balatro.game.round_state import GameOutcome, GameSummary
from balatro.ui.renderer import TerminalRenderer

logger = logging.getLogger(__name__)


def create_controller(use_llm: bool, seed=None) -> GameController:
    """创建控制器：默认 RuleAI，--llm 时使用 LLM 玩家"""
    if use_llm:
        return GameController(player_name="赌徒", strategy=create_llm_player("赌徒"), seed=seed)
    return GameController(player_name="会计", strategy=RuleAI(), seed=seed)


async def run_one_game(gc: GameController, renderer: TerminalRenderer, max_stages=None) -> GameSummary:
    """逐关运行一整局，关卡之间展示关卡信息"""
    played = 0
    while gc.outcome == GameOutcome.IN_PROGRESS:
        if max_stages is not None and played >= max_stages:
            break
        joker = random_joker(gc.rng)
        renderer.show_stage(gc.stage, joker, gc.ante, gc.player.chips)
        await gc.run_stage_async(joker)
        played += 1
        if gc.outcome == GameOutcome.IN_PROGRESS:
            gc.complete_stage()
    return gc.summary()


def main():
    """命令行入口"""
    parser = argparse.ArgumentParser(description="Balatro 风格扑克计分 AI 对局")
    parser.add_argument("--games", type=int, default=1, help="对局数 (默认1)")
    parser.add_argument("--stages", type=int, default=None, help="每局最多关卡数 (默认打到结束)")
    parser.add_argument("--seed", type=int, default=None, help="随机种子")
    parser.add_argument("--delay", type=float, default=0.8, help="出牌延迟秒数 (默认0.8)")
    parser.add_argument("--fast", action="store_true", help="快速模式 (无延迟)")
    parser.add_argument("--llm", action="store_true", help="使用 LLM 玩家 (读取 BALATRO_LLM_* 环境变量)")
    parser.add_argument("--log-level", default="WARNING", help="日志级别 (默认WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    delay = 0.0 if args.fast else args.delay
    renderer = TerminalRenderer(delay=delay)

    for i in range(args.games):
        if args.games > 1:
            print(f"\n{'=' * 60}")
            print(f"  第 {i + 1}/{args.games} 局")
            print(f"{'=' * 60}")
        seed = None if args.seed is None else args.seed + i
        gc = create_controller(args.llm, seed=seed)
        gc.on_event(renderer.make_event_callback())
        renderer.print_header("🃏 Balatro 计分挑战开始")
        summary = asyncio.run(run_one_game(gc, renderer, args.stages))
        renderer.show_summary(summary)
        logger.info("第 %d 局结束: %s", i + 1, summary.outcome.value)


if __name__ == "__main__":
    main()
