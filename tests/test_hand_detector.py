"""牌型检测器单元测试 - 覆盖9种牌型、优先级与不足5张的规则"""

import pytest
from balatro.engine.card import Card, Rank, Suit
from balatro.engine.hand_type import HandType, HAND_BASE
from balatro.engine.hand_detector import detect_hand, evaluate_cards, high_card_score
from balatro.engine.scoring import ScoringEngine


# ============================================================
#  辅助：快速构造牌
# ============================================================

def c(rank: Rank, suit: Suit = Suit.SPADES) -> Card:
    """快捷构造一张牌"""
    return Card(rank=rank, suit=suit)


def cards_of_rank(rank: Rank, count: int) -> list:
    """构造同点数的多张牌（自动分配不同花色）"""
    suits = [Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS]
    return [Card(rank=rank, suit=suits[i]) for i in range(count)]


def parse_all(*texts: str) -> list:
    return [Card.parse(t) for t in texts]


# ============================================================
#  同点数类牌型
# ============================================================

class TestRankGroups:
    """一对、两对、三条、葫芦、四条"""

    def test_pair(self):
        cards = cards_of_rank(Rank.KING, 2) + [c(Rank.FIVE, Suit.CLUBS), c(Rank.NINE)]
        assert detect_hand(cards) == HandType.PAIR

    def test_pair_two_cards(self):
        assert detect_hand(cards_of_rank(Rank.THREE, 2)) == HandType.PAIR

    def test_two_pair(self):
        cards = cards_of_rank(Rank.KING, 2) + cards_of_rank(Rank.FIVE, 2) + [c(Rank.NINE, Suit.CLUBS)]
        assert detect_hand(cards) == HandType.TWO_PAIR

    def test_three_pairs_is_two_pair(self):
        cards = cards_of_rank(Rank.KING, 2) + cards_of_rank(Rank.FIVE, 2) + cards_of_rank(Rank.NINE, 2)
        assert detect_hand(cards) == HandType.TWO_PAIR

    def test_three_of_a_kind(self):
        cards = cards_of_rank(Rank.SEVEN, 3) + [c(Rank.TWO, Suit.HEARTS), c(Rank.KING)]
        assert detect_hand(cards) == HandType.THREE_OF_A_KIND

    def test_two_triples_is_three_of_a_kind(self):
        cards = cards_of_rank(Rank.SEVEN, 3) + cards_of_rank(Rank.KING, 3)
        assert detect_hand(cards) == HandType.THREE_OF_A_KIND

    def test_full_house(self):
        cards = cards_of_rank(Rank.KING, 3) + cards_of_rank(Rank.FIVE, 2)
        assert detect_hand(cards) == HandType.FULL_HOUSE

    def test_four_of_a_kind(self):
        cards = cards_of_rank(Rank.ACE, 4) + [c(Rank.TWO, Suit.HEARTS)]
        assert detect_hand(cards) == HandType.FOUR_OF_A_KIND

    def test_four_of_a_kind_four_cards(self):
        assert detect_hand(cards_of_rank(Rank.NINE, 4)) == HandType.FOUR_OF_A_KIND

    def test_four_beats_full_house(self):
        cards = cards_of_rank(Rank.ACE, 4) + cards_of_rank(Rank.TWO, 2)
        assert detect_hand(cards) == HandType.FOUR_OF_A_KIND


# ============================================================
#  五张类牌型
# ============================================================

class TestFiveCardPatterns:
    """顺子、同花、同花顺"""

    def test_straight(self):
        cards = parse_all("5♠", "6♥", "7♣", "8♦", "9♠")
        assert detect_hand(cards) == HandType.STRAIGHT

    def test_straight_ace_high(self):
        cards = parse_all("10♠", "J♥", "Q♣", "K♦", "A♠")
        assert detect_hand(cards) == HandType.STRAIGHT

    def test_wheel_is_not_straight(self):
        """A 只当最大的牌"""
        cards = parse_all("A♠", "2♥", "3♣", "4♦", "5♠")
        assert detect_hand(cards) == HandType.HIGH_CARD

    def test_eight_card_straight(self):
        cards = parse_all("2♠", "3♥", "4♣", "5♦", "6♠", "7♥", "8♣", "9♦")
        assert detect_hand(cards) == HandType.STRAIGHT

    def test_gap_breaks_straight(self):
        cards = parse_all("5♠", "6♥", "7♣", "8♦", "10♠")
        assert detect_hand(cards) == HandType.HIGH_CARD

    def test_duplicate_rank_breaks_straight(self):
        cards = parse_all("5♠", "6♥", "7♣", "8♦", "8♠")
        assert detect_hand(cards) == HandType.PAIR

    def test_flush(self):
        cards = parse_all("A♠", "K♠", "10♠", "7♠", "3♠")
        assert detect_hand(cards) == HandType.FLUSH

    def test_straight_flush(self):
        cards = parse_all("9♥", "10♥", "J♥", "Q♥", "K♥")
        assert detect_hand(cards) == HandType.STRAIGHT_FLUSH

    def test_four_suited_cards_not_flush(self):
        cards = parse_all("2♥", "3♥", "4♥", "5♥")
        assert detect_hand(cards) == HandType.HIGH_CARD

    def test_order_does_not_matter(self):
        cards = parse_all("K♥", "9♥", "Q♥", "10♥", "J♥")
        assert detect_hand(cards) == HandType.STRAIGHT_FLUSH


# ============================================================
#  高牌与基础分
# ============================================================

class TestHighCard:

    def test_five_card_high_card_uses_table(self):
        ev = evaluate_cards(parse_all("A♠", "3♥", "5♣", "7♦", "9♠"))
        assert ev.classification == HandType.HIGH_CARD
        assert ev.base_score == 5
        assert ev.multiplier == 1

    def test_short_high_card_uses_max_value(self):
        ev = evaluate_cards(parse_all("A♠", "3♥"))
        assert ev.classification == HandType.HIGH_CARD
        assert ev.base_score == 11

    def test_single_face_card(self):
        assert evaluate_cards([c(Rank.KING)]).base_score == 10

    def test_empty_is_zero(self):
        ev = evaluate_cards([])
        assert ev.classification == HandType.HIGH_CARD
        assert ev.base_score == 0
        assert high_card_score([]) == 0

    def test_table_lookup(self):
        for hand_type, (base, mult) in HAND_BASE.items():
            assert hand_type.base_score == base
            assert hand_type.multiplier == mult

    def test_strength_order(self):
        assert HandType.HIGH_CARD.strength == 1
        assert HandType.STRAIGHT_FLUSH.strength == 9


# ============================================================
#  完整计分场景
# ============================================================

class TestLiteralScenarios:

    @pytest.mark.parametrize("texts, hand_type, base, mult, value_sum, final", [
        (("9♥", "10♥", "J♥", "Q♥", "K♥"), HandType.STRAIGHT_FLUSH, 100, 8, 49, 1192),
        (("A♠", "3♥", "5♣", "7♦", "9♠"), HandType.HIGH_CARD, 5, 1, 35, 40),
        (("K♠", "K♥", "5♣", "7♦", "9♠"), HandType.PAIR, 10, 2, 41, 102),
        (("A♠", "K♠", "10♠", "7♠", "3♠"), HandType.FLUSH, 35, 4, 41, 304),
    ])
    def test_scenario(self, texts, hand_type, base, mult, value_sum, final):
        result = ScoringEngine().score(parse_all(*texts))
        assert result.classification == hand_type
        assert result.base_score == base
        assert result.multiplier == mult
        assert result.card_value_sum == value_sum
        assert result.final_score == final

    def test_detection_is_idempotent(self):
        cards = parse_all("K♠", "K♥", "5♣", "7♦", "9♠")
        assert evaluate_cards(cards) == evaluate_cards(cards)
        assert [c.display for c in cards] == ["♠K", "♥K", "♣5", "♦7", "♠9"]
