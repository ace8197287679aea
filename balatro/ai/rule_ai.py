"""规则引擎 AI - 穷举出牌组合选最高分，分数不够时弃掉无用的小牌"""

from itertools import combinations
from typing import List, Optional, Tuple

from balatro.engine.card import Card
from balatro.engine.hand import Hand, MAX_CARDS_TO_PLAY, MAX_CARDS_TO_DISCARD
from balatro.engine.scoring import ScoringEngine, ScoringResult
from balatro.game.round_state import Action, ActionKind, RoundState


class RuleAI:
    """基于简单规则的 AI 策略"""

    def decide_action(self, hand: Hand, state: RoundState) -> Action:
        """
        出牌决策。
        先找当前手牌中得分最高的 1~5 张组合；
        能达标、跟得上进度或没有弃牌机会时直接打出，
        否则弃掉不在最佳组合里的低分牌。
        """
        cards = list(hand.cards)
        engine = ScoringEngine(state.joker)
        best_cards, best = self.find_best_play(cards, engine)

        if self._should_play(best, state):
            return Action(ActionKind.PLAY, best_cards, f"{best.classification.display_name} {best.final_score}")

        to_discard = self._pick_discards(cards, best_cards)
        if not to_discard:
            return Action(ActionKind.PLAY, best_cards, f"{best.classification.display_name} {best.final_score}")
        return Action(ActionKind.DISCARD, to_discard, "换掉无用的小牌")

    # ============================================================
    #  最佳出牌搜索
    # ============================================================

    @staticmethod
    def find_best_play(
        cards: List[Card], engine: ScoringEngine
    ) -> Tuple[List[Card], Optional[ScoringResult]]:
        """穷举 1~5 张的所有组合，返回得分最高的一组（同分取张数少的）"""
        best_cards: List[Card] = []
        best: Optional[ScoringResult] = None
        for size in range(1, min(MAX_CARDS_TO_PLAY, len(cards)) + 1):
            for combo in combinations(cards, size):
                result = engine.score(combo)
                if best is None or result.final_score > best.final_score:
                    best_cards, best = list(combo), result
        return best_cards, best

    # ============================================================
    #  出牌 / 弃牌判断
    # ============================================================

    @staticmethod
    def _should_play(best: Optional[ScoringResult], state: RoundState) -> bool:
        if best is None:
            return True
        needed = state.score_needed
        if best.final_score >= needed:
            return True
        if state.discards_remaining <= 0 or state.deck_exhausted:
            return True
        # 按当前得分打完剩余次数也能达标，就不浪费弃牌
        return best.final_score * state.hands_remaining >= needed

    @staticmethod
    def _pick_discards(cards: List[Card], keep: List[Card]) -> List[Card]:
        """从最佳组合以外的牌里挑分值最小的，最多 5 张"""
        rest = list(cards)
        for c in keep:
            rest.remove(c)
        rest.sort(key=lambda c: (c.point_value, c.rank))
        limit = min(MAX_CARDS_TO_DISCARD, len(cards) - 1)
        return rest[:limit]
