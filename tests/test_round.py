"""回合状态机测试：出牌、弃牌、补牌、配额与牌堆耗尽"""

import pytest
from balatro.engine.card import Card
from balatro.engine.deck import Deck, HAND_SIZE
from balatro.engine.errors import InvalidArgumentError, InvalidStateError
from balatro.engine.hand_type import HandType
from balatro.engine.joker import Joker, JokerType
from balatro.game.round import RoundStateMachine
from balatro.game.round_state import RoundPhase


# ============================================================
#  辅助：构造已知牌序的回合
# ============================================================

# 牌堆从末尾发牌：初始手牌就是最后8张
OPENING_HAND = ["A♠", "K♠", "10♠", "7♠", "3♠", "2♥", "4♦", "9♣"]
SPADE_FLUSH = ["A♠", "K♠", "10♠", "7♠", "3♠"]
RESERVE = ["5♥", "6♥", "8♥", "J♦", "Q♦", "2♣", "3♣", "4♣", "5♣", "6♣"]


def c(text: str) -> Card:
    return Card.parse(text)


def cs(texts) -> list:
    return [c(t) for t in texts]


def make_round(target: int = 1000, reserve=None, **kwargs) -> RoundStateMachine:
    reserve = RESERVE if reserve is None else reserve
    deck = Deck(cs(reserve + OPENING_HAND))
    return RoundStateMachine(deck, target, **kwargs)


def started(target: int = 1000, reserve=None, **kwargs):
    rnd = make_round(target, reserve, **kwargs)
    events = []
    rnd.on_event(events.append)
    rnd.start()
    return rnd, events


# ============================================================
#  发牌
# ============================================================

class TestStart:

    def test_deal_opening_hand(self):
        rnd, events = started()
        assert rnd.phase == RoundPhase.AWAITING_SELECTION
        assert list(rnd.hand.cards) == cs(OPENING_HAND)
        assert rnd.deck.card_count() == len(RESERVE)
        assert events[0].action == "deal"

    def test_start_twice(self):
        rnd, _ = started()
        with pytest.raises(InvalidStateError):
            rnd.start()

    def test_play_before_start(self):
        rnd = make_round()
        with pytest.raises(InvalidStateError):
            rnd.play(cs(SPADE_FLUSH))

    def test_negative_target(self):
        with pytest.raises(InvalidArgumentError):
            make_round(target=-1)

    def test_short_deck_cannot_deal(self):
        rnd = RoundStateMachine(Deck(cs(["2♠", "3♠"])), 300)
        rnd.start()
        assert rnd.phase == RoundPhase.GAME_OVER


# ============================================================
#  出牌
# ============================================================

class TestPlay:

    def test_play_scores_and_awaits_draw(self):
        rnd, events = started()
        result = rnd.play(cs(SPADE_FLUSH))
        assert result.classification == HandType.FLUSH
        assert result.final_score == 304
        assert rnd.cumulative_score == 304
        assert rnd.deck.current_score == 304
        assert rnd.phase == RoundPhase.AWAITING_DRAW
        assert rnd.hands_remaining() == 3
        assert rnd.hand.card_count == 3
        assert list(rnd.discard_pile) == cs(SPADE_FLUSH)
        assert rnd.state.cards_to_draw == 5
        assert events[-1].action == "play"

    def test_draw_restores_eight(self):
        rnd, events = started()
        rnd.play(cs(SPADE_FLUSH))
        drawn = rnd.draw()
        assert drawn == cs(RESERVE[-5:])
        assert rnd.hand.card_count == HAND_SIZE
        assert rnd.phase == RoundPhase.AWAITING_SELECTION
        assert events[-1].action == "draw"

    def test_reaching_target_completes_round(self):
        rnd, events = started(target=300)
        rnd.play(cs(SPADE_FLUSH))
        assert rnd.phase == RoundPhase.ROUND_COMPLETE
        assert rnd.state.is_finished
        assert events[-1].action == "round_complete"

    def test_hands_exhausted_is_game_over(self):
        rnd, events = started(max_hands=1)
        rnd.play(cs(SPADE_FLUSH))
        assert rnd.phase == RoundPhase.GAME_OVER
        assert events[-1].action == "game_over"
        with pytest.raises(InvalidStateError):
            rnd.play(cs(["2♥"]))

    def test_play_with_joker(self):
        rnd, _ = started(joker=Joker.from_type(JokerType.WRATHFUL_JOKER))
        assert rnd.play(cs(SPADE_FLUSH)).final_score == 912
        assert rnd.joker.type == JokerType.WRATHFUL_JOKER

    @pytest.mark.parametrize("selection", [
        [],
        OPENING_HAND[:6],
        ["Q♥"],
    ])
    def test_invalid_selection_leaves_state(self, selection):
        rnd, _ = started()
        with pytest.raises(InvalidArgumentError):
            rnd.play(cs(selection))
        assert rnd.phase == RoundPhase.AWAITING_SELECTION
        assert rnd.hand.card_count == HAND_SIZE
        assert rnd.cumulative_score == 0
        assert rnd.hands_remaining() == 4

    def test_preview_has_no_side_effects(self):
        rnd, _ = started()
        assert rnd.preview(cs(SPADE_FLUSH)).final_score == 304
        assert rnd.cumulative_score == 0
        assert rnd.hand.card_count == HAND_SIZE

    def test_preview_rejected_after_round_ends(self):
        rnd, _ = started(max_hands=1)
        rnd.play(cs(SPADE_FLUSH))
        assert rnd.phase == RoundPhase.GAME_OVER
        with pytest.raises(InvalidStateError):
            rnd.preview(cs(["2♥"]))


# ============================================================
#  记分
# ============================================================

class TestRecordPlay:

    def test_reaching_target_completes_round(self):
        rnd, events = started(target=300)
        assert rnd.record_play(500) == 500
        assert rnd.phase == RoundPhase.ROUND_COMPLETE
        assert rnd.deck.current_score == 500
        assert events[-1].action == "round_complete"

    def test_below_target_keeps_phase(self):
        rnd, _ = started(target=300)
        rnd.record_play(120)
        assert rnd.phase == RoundPhase.AWAITING_SELECTION
        assert rnd.state.score_needed == 180

    def test_rejected_before_start_and_after_finish(self):
        rnd = make_round(target=300)
        with pytest.raises(InvalidStateError):
            rnd.record_play(100)
        rnd.start()
        rnd.record_play(300)
        with pytest.raises(InvalidStateError):
            rnd.record_play(100)
        assert rnd.cumulative_score == 300

    def test_negative_score(self):
        rnd, _ = started()
        with pytest.raises(InvalidArgumentError):
            rnd.record_play(-1)
        assert rnd.cumulative_score == 0


# ============================================================
#  弃牌
# ============================================================

class TestDiscard:

    def test_discard_then_draw(self):
        rnd, _ = started()
        assert rnd.discard(cs(["2♥", "4♦"])) == 2
        assert rnd.phase == RoundPhase.AWAITING_DRAW
        assert rnd.discards_remaining() == 3
        assert rnd.hands_remaining() == 4
        rnd.draw()
        assert rnd.hand.card_count == HAND_SIZE

    def test_discard_quota(self):
        rnd, _ = started(max_discards=1)
        rnd.discard(cs(["2♥"]))
        rnd.draw()
        with pytest.raises(InvalidStateError):
            rnd.discard(cs(["4♦"]))

    def test_no_discards_allowed(self):
        rnd, _ = started(max_discards=0)
        with pytest.raises(InvalidStateError):
            rnd.discard(cs(["2♥"]))

    def test_discard_while_awaiting_draw(self):
        rnd, _ = started()
        rnd.discard(cs(["2♥"]))
        with pytest.raises(InvalidStateError):
            rnd.discard(cs(["4♦"]))

    def test_discard_too_many(self):
        rnd, _ = started()
        with pytest.raises(InvalidArgumentError):
            rnd.discard(cs(OPENING_HAND[:6]))
        assert rnd.discards_remaining() == 4


# ============================================================
#  牌堆耗尽
# ============================================================

class TestDeckExhaustion:

    def test_short_draw_keeps_hand(self):
        rnd, events = started(reserve=["5♥", "6♥"])
        rnd.play(cs(SPADE_FLUSH))
        assert rnd.draw() == []
        assert rnd.state.deck_exhausted
        assert rnd.hand.card_count == 3
        assert rnd.phase == RoundPhase.AWAITING_SELECTION
        assert rnd.deck.card_count() == 2
        assert "exhausted" in [e.action for e in events]

    def test_empty_hand_after_exhaustion_is_game_over(self):
        rnd, _ = started(reserve=["5♥", "6♥"])
        rnd.play(cs(SPADE_FLUSH))
        rnd.draw()
        rnd.play(cs(["2♥", "4♦", "9♣"]))
        assert rnd.cumulative_score == 304 + 24
        assert rnd.phase == RoundPhase.GAME_OVER
