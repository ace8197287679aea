"""LLM AI - 基于大语言模型的出牌策略"""

import asyncio
import json
import logging
import os
from typing import List, Optional

from openai import AsyncOpenAI

from balatro.engine.card import Card
from balatro.engine.errors import InvalidArgumentError
from balatro.engine.hand import (
    Hand,
    MIN_CARDS,
    MIN_CARDS_TO_PLAY,
    MAX_CARDS_TO_PLAY,
    MIN_CARDS_TO_DISCARD,
    MAX_CARDS_TO_DISCARD,
)
from balatro.engine.hand_type import HAND_BASE
from balatro.game.round_state import Action, ActionKind, RoundState
from balatro.ai.rule_ai import RuleAI

logger = logging.getLogger(__name__)

# 超时上限（秒）
LLM_TIMEOUT = float(os.getenv("BALATRO_LLM_TIMEOUT", "10"))

DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_MODEL = "deepseek-chat"

# 玩家风格 prompt 片段
CHARACTER_PROMPTS = {
    "赌徒": (
        "你是「赌徒」，喜欢冒险，宁可多弃几次牌也要凑出同花、顺子这种大牌型。"
    ),
    "会计": (
        "你是「会计」，精打细算，优先保证每一手都稳定得分，很少浪费弃牌次数。"
    ),
}

# 默认风格（兜底）
DEFAULT_CHARACTER_PROMPT = "你是一个冷静的扑克玩家，风格均衡。"


# ============================================================
#  序列化辅助
# ============================================================

def _hand_str(cards: List[Card]) -> str:
    """手牌列表 → 空格分隔文本（如 ♠A ♥10 ♦K）"""
    return " ".join(c.display for c in cards)


def _hand_table_str() -> str:
    """牌型基础分/倍率表"""
    return "\n".join(
        f"- {t.display_name}: 基础分 {base}, 倍率 {mult}"
        for t, (base, mult) in sorted(HAND_BASE.items(), key=lambda kv: kv[0].strength, reverse=True)
    )


# ============================================================
#  Prompt 构建
# ============================================================

def _build_game_context(hand: Hand, state: RoundState) -> str:
    """构建回合状态上下文文本"""
    lines = [
        f"你的手牌({hand.card_count}张): {_hand_str(list(hand.cards))}",
        f"目标分: {state.target_score}，当前累计: {state.cumulative_score}，还差 {state.score_needed}",
        f"剩余出牌次数: {state.hands_remaining}，剩余弃牌次数: {state.discards_remaining}",
    ]
    if state.joker is not None:
        lines.append(f"本关小丑牌: {state.joker.name} - {state.joker.effect}")
    else:
        lines.append("本关没有小丑牌")
    if state.deck_exhausted:
        lines.append("牌堆已耗尽，弃牌后不会再补牌")
    return "\n".join(lines)


def _build_action_prompt(hand: Hand, state: RoundState, character: str) -> str:
    """构建出牌/弃牌决策 prompt"""
    char_prompt = CHARACTER_PROMPTS.get(character, DEFAULT_CHARACTER_PROMPT)
    context = _build_game_context(hand, state)

    return f"""{char_prompt}

你正在玩一款 Balatro 风格的单人扑克游戏。请根据当前局面决定出牌还是弃牌。

【当前局面】
{context}

【计分规则】
得分 = (牌型基础分 + 所出牌分值之和) × 牌型倍率，再由小丑牌修正。
牌面分值：A=11，J/Q/K=10，其余为数字本身。
{_hand_table_str()}

【规则约束】
出牌：选择 {MIN_CARDS_TO_PLAY}~{MAX_CARDS_TO_PLAY} 张。弃牌：选择 {MIN_CARDS_TO_DISCARD}~{MAX_CARDS_TO_DISCARD} 张，且手里至少留 {MIN_CARDS} 张。
顺子、同花必须 5 张，A 只当最大的牌。

【输出格式】严格返回 JSON，不要输出其他内容：
{{
  "action": "play" 或 "discard",
  "cards": ["♠A", "♥10"],
  "strategy": "一句话解说你的策略（15字以内，符合你的性格）"
}}"""


# ============================================================
#  JSON 响应解析
# ============================================================

def _extract_json(text: str) -> Optional[dict]:
    """从 LLM 返回文本中提取 JSON 对象（兼容 markdown 代码块包裹）"""
    text = text.strip()
    if text.startswith("```"):
        lines = [l for l in text.split("\n") if not l.strip().startswith("```")]
        text = "\n".join(lines).strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


# ============================================================
#  LlmAI 类
# ============================================================

class LlmAI:
    """基于 LLM 的出牌策略。

    提供两套接口：
    - decide_action：同步方法，满足 AIStrategy Protocol，内部 fallback 到 RuleAI
    - async_decide_action：异步方法，供 GameController.run_stage_async 调用
    """

    def __init__(
        self,
        character: str = "",
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
    ):
        self.character = character
        self.model = model
        self._fallback = RuleAI()

        # 若未配置 API key，仅使用 fallback
        self._enabled = bool(api_key)
        if self._enabled:
            self._client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        else:
            self._client = None
            logger.warning("LlmAI(%s): 未配置 API key，将使用 RuleAI fallback", character)

    def decide_action(self, hand: Hand, state: RoundState) -> Action:
        """同步决策 - 直接委托 RuleAI"""
        return self._fallback.decide_action(hand, state)

    # ----------------------------------------------------------
    #  LLM 通用调用（带超时 + 错误处理）
    # ----------------------------------------------------------

    async def _call_llm(self, prompt: str) -> Optional[str]:
        """调用 LLM API，返回文本响应。超时或异常返回 None。"""
        if not self._enabled or self._client is None:
            return None
        try:
            resp = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=0.7,
                    max_tokens=256,
                ),
                timeout=LLM_TIMEOUT,
            )
            content = resp.choices[0].message.content
            logger.info("LlmAI(%s) 响应: %s", self.character, (content or "")[:200])
            return content
        except asyncio.TimeoutError:
            logger.warning("LlmAI(%s): LLM 调用超时(%ss)", self.character, LLM_TIMEOUT)
            return None
        except Exception as e:
            logger.warning("LlmAI(%s): LLM 调用异常: %s", self.character, e)
            return None

    # ----------------------------------------------------------
    #  异步决策
    # ----------------------------------------------------------

    async def async_decide_action(self, hand: Hand, state: RoundState) -> Action:
        """异步决策，失败时 fallback 到 RuleAI"""
        prompt = _build_action_prompt(hand, state, self.character)
        raw = await self._call_llm(prompt)

        if raw is not None:
            action = self._parse_response(raw, hand, state)
            if action is not None:
                return action

        return self._fallback.decide_action(hand, state)

    def _parse_response(self, raw: str, hand: Hand, state: RoundState) -> Optional[Action]:
        """解析 LLM 响应并验证合法性。返回 None 表示需要 fallback。"""
        data = _extract_json(raw)
        if data is None:
            logger.warning("LlmAI(%s): JSON 解析失败", self.character)
            return None

        action = str(data.get("action", "")).lower()
        strategy = str(data.get("strategy", ""))
        if action == "play":
            kind = ActionKind.PLAY
        elif action == "discard":
            kind = ActionKind.DISCARD
        else:
            logger.warning("LlmAI(%s): 未知 action=%s", self.character, action)
            return None

        card_texts = data.get("cards", [])
        if not card_texts or not isinstance(card_texts, list):
            logger.warning("LlmAI(%s): cards 字段为空或非数组", self.character)
            return None

        cards = self._validate_cards(card_texts, kind, hand, state)
        if cards is None:
            return None
        return Action(kind, cards, strategy)

    def _validate_cards(
        self,
        card_texts: List[str],
        kind: ActionKind,
        hand: Hand,
        state: RoundState,
    ) -> Optional[List[Card]]:
        """解析卡牌文本并验证：手牌持有、张数范围、弃牌配额。"""
        # 1. 解析文本 → Card 对象
        parsed: List[Card] = []
        for t in card_texts:
            try:
                parsed.append(Card.parse(str(t)))
            except InvalidArgumentError:
                logger.warning("LlmAI(%s): 无法解析卡牌 '%s'", self.character, t)
                return None

        # 2. 检查是否持有这些牌
        if not hand.contains(parsed):
            logger.warning("LlmAI(%s): 手牌中不包含所选的牌", self.character)
            return None

        # 3. 张数与配额
        if kind == ActionKind.PLAY:
            if not MIN_CARDS_TO_PLAY <= len(parsed) <= MAX_CARDS_TO_PLAY:
                logger.warning("LlmAI(%s): 出牌张数非法 %d", self.character, len(parsed))
                return None
        else:
            if state.discards_remaining <= 0:
                logger.warning("LlmAI(%s): 弃牌次数已用完", self.character)
                return None
            if not MIN_CARDS_TO_DISCARD <= len(parsed) <= MAX_CARDS_TO_DISCARD:
                logger.warning("LlmAI(%s): 弃牌张数非法 %d", self.character, len(parsed))
                return None
            if hand.card_count - len(parsed) < MIN_CARDS:
                logger.warning("LlmAI(%s): 弃牌后手牌不足", self.character)
                return None

        return parsed



# ============================================================
#  工厂函数：从环境变量创建 LLM AI 实例
# ============================================================

def create_llm_player(character: str = "") -> LlmAI:
    """根据环境变量创建 LlmAI。

    环境变量：BALATRO_LLM_API_KEY / BALATRO_LLM_BASE_URL / BALATRO_LLM_MODEL
    未配置 API key 时自动 fallback 到 RuleAI。
    """
    return LlmAI(
        character=character,
        api_key=os.getenv("BALATRO_LLM_API_KEY", ""),
        base_url=os.getenv("BALATRO_LLM_BASE_URL", DEFAULT_BASE_URL),
        model=os.getenv("BALATRO_LLM_MODEL", DEFAULT_MODEL),
    )
