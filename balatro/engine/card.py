"""牌的定义 - 52张标准扑克牌的数据模型"""

from enum import IntEnum, Enum
from dataclasses import dataclass
from typing import List, Optional, Union

from .errors import InvalidArgumentError


class Rank(IntEnum):
    """点数枚举（数值即顺子比较用的大小，A 固定为 14）"""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def display(self) -> str:
        return RANK_DISPLAY[self]

    @property
    def point_value(self) -> int:
        """计分用的牌面分值：A=11，JQK=10，数字牌为其数字"""
        if self == Rank.ACE:
            return 11
        if self.is_face:
            return 10
        return int(self)

    @property
    def is_face(self) -> bool:
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)


class Suit(str, Enum):
    """花色枚举"""
    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOL[self]

    @property
    def color(self) -> str:
        return "Red" if self in (Suit.HEARTS, Suit.DIAMONDS) else "Black"


# 点数显示映射
RANK_DISPLAY = {
    Rank.TWO: "2", Rank.THREE: "3", Rank.FOUR: "4",
    Rank.FIVE: "5", Rank.SIX: "6", Rank.SEVEN: "7",
    Rank.EIGHT: "8", Rank.NINE: "9", Rank.TEN: "10",
    Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K",
    Rank.ACE: "A",
}

SUIT_SYMBOL = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

# 生成顺序：花色为主序，点数为次序（A 在最前）
SUIT_ORDER = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANK_ORDER = [Rank.ACE] + [r for r in Rank if r != Rank.ACE]

_RANK_BY_TEXT = {v: k for k, v in RANK_DISPLAY.items()}
_SUIT_BY_TEXT = {**{s.value: s for s in Suit}, **{v: k for k, v in SUIT_SYMBOL.items()}}


def _coerce_rank(rank: Union[Rank, str, int]) -> Rank:
    if isinstance(rank, Rank):
        return rank
    if isinstance(rank, str):
        text = rank.strip().upper()
        if text in _RANK_BY_TEXT:
            return _RANK_BY_TEXT[text]
    elif isinstance(rank, int) and not isinstance(rank, bool):
        try:
            return Rank(rank)
        except ValueError:
            pass
    raise InvalidArgumentError(f"非法点数: {rank!r}")


def _coerce_suit(suit: Union[Suit, str]) -> Suit:
    if isinstance(suit, Suit):
        return suit
    if isinstance(suit, str):
        text = suit.strip()
        found = _SUIT_BY_TEXT.get(text) or _SUIT_BY_TEXT.get(text.capitalize())
        if found is not None:
            return found
    raise InvalidArgumentError(f"非法花色: {suit!r}")


@dataclass(frozen=True)
class Card:
    """一张扑克牌（不可变）。

    point_value 省略时按点数推导；花色、点数可以传字符串，
    构造时统一校验并转换为枚举，非法值直接抛 InvalidArgumentError。
    """
    rank: Rank
    suit: Suit
    point_value: Optional[int] = None

    def __post_init__(self) -> None:
        rank = _coerce_rank(self.rank)
        suit = _coerce_suit(self.suit)
        value = rank.point_value if self.point_value is None else self.point_value
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidArgumentError(f"分值必须是整数: {value!r}")
        if value < 0:
            raise InvalidArgumentError(f"分值不能为负: {value}")
        object.__setattr__(self, "rank", rank)
        object.__setattr__(self, "suit", suit)
        object.__setattr__(self, "point_value", value)

    @classmethod
    def parse(cls, text: str) -> "Card":
        """解析文本形式的牌，支持 '♠A'、'A♠'、'10♥'、'K of Spades'"""
        raw = text.strip()
        if " of " in raw:
            rank_text, suit_text = raw.split(" of ", 1)
            return cls(rank=_coerce_rank(rank_text), suit=_coerce_suit(suit_text))
        if len(raw) < 2:
            raise InvalidArgumentError(f"无法解析卡牌: {text!r}")
        if raw[0] in _SUIT_BY_TEXT:
            suit_text, rank_text = raw[0], raw[1:]
        else:
            rank_text, suit_text = raw[:-1], raw[-1]
        return cls(rank=_coerce_rank(rank_text), suit=_coerce_suit(suit_text))

    @property
    def display(self) -> str:
        return f"{self.suit.symbol}{self.rank.display}"

    @property
    def is_face(self) -> bool:
        return self.rank.is_face

    @property
    def color(self) -> str:
        return self.suit.color

    def __repr__(self) -> str:
        return self.display


def create_deck() -> List[Card]:
    """创建一副52张标准扑克牌（花色主序、点数次序）"""
    deck = [Card(rank=rank, suit=suit) for suit in SUIT_ORDER for rank in RANK_ORDER]
    assert len(deck) == 52, f"牌数错误: {len(deck)}"
    return deck


def sort_cards(cards: List[Card]) -> List[Card]:
    """按点数排序（从小到大），同点数按花色生成顺序"""
    return sorted(cards, key=lambda c: (c.rank, SUIT_ORDER.index(c.suit)))


def point_value_sum(cards: List[Card]) -> int:
    """一组牌的分值之和"""
    return sum(c.point_value for c in cards)
