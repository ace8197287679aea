"""小丑牌 - 每个关卡随机生效的被动加成"""

import random
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional

from .card import Suit
from .errors import InvalidArgumentError


class ActivationType(str, Enum):
    """生效时机"""
    INDEPENDENT = "INDEPENDENT"   # 与所出牌无关，直接作用于得分
    ON_SCORED = "ON_SCORED"       # 取决于所出的牌

    @property
    def display_name(self) -> str:
        return "Indep." if self == ActivationType.INDEPENDENT else "On Scored"


class Rarity(str, Enum):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    LEGENDARY = "Legendary"


class JokerType(str, Enum):
    """小丑牌种类（封闭集合，参数见 JOKER_CATALOG）"""
    STANDARD_JOKER = "STANDARD_JOKER"
    GREEDY_JOKER = "GREEDY_JOKER"
    LUSTY_JOKER = "LUSTY_JOKER"
    WRATHFUL_JOKER = "WRATHFUL_JOKER"
    GLUTTONOUS_JOKER = "GLUTTONOUS_JOKER"
    SCARY_FACE = "SCARY_FACE"
    FIBONACCI = "FIBONACCI"
    LUCKY_JOKER = "LUCKY_JOKER"

    @property
    def spec(self) -> "JokerSpec":
        return JOKER_CATALOG[self]


@dataclass(frozen=True)
class JokerSpec:
    """目录中一种小丑牌的静态参数"""
    name: str
    effect: str
    multiplier: int
    cost: int
    rarity: Rarity
    activation: ActivationType
    active_suit: Optional[Suit] = None
    unlock_requirement: str = ""


_UNLOCK_DEFAULT = "Available after first round with sufficient chips."

JOKER_CATALOG: Dict[JokerType, JokerSpec] = {
    JokerType.STANDARD_JOKER: JokerSpec(
        "Joker", "Basic joker that adds +2 multiplier",
        2, 2, Rarity.COMMON, ActivationType.INDEPENDENT, None, _UNLOCK_DEFAULT,
    ),
    JokerType.GREEDY_JOKER: JokerSpec(
        "Greedy Joker", "Played cards with Diamond suit give +3 Mult when scored",
        3, 5, Rarity.COMMON, ActivationType.ON_SCORED, Suit.DIAMONDS, _UNLOCK_DEFAULT,
    ),
    JokerType.LUSTY_JOKER: JokerSpec(
        "Lusty Joker", "Played cards with Heart suit give +3 Mult when scored",
        3, 5, Rarity.COMMON, ActivationType.ON_SCORED, Suit.HEARTS, _UNLOCK_DEFAULT,
    ),
    JokerType.WRATHFUL_JOKER: JokerSpec(
        "Wrathful Joker", "Played cards with Spade suit give +3 Mult when scored",
        3, 5, Rarity.COMMON, ActivationType.ON_SCORED, Suit.SPADES, _UNLOCK_DEFAULT,
    ),
    JokerType.GLUTTONOUS_JOKER: JokerSpec(
        "Gluttonous Joker", "Played cards with Club suit give +3 Mult when scored",
        3, 5, Rarity.COMMON, ActivationType.ON_SCORED, Suit.CLUBS, _UNLOCK_DEFAULT,
    ),
    JokerType.SCARY_FACE: JokerSpec(
        "Scary Face", "Played face cards give +30 Chips when scored",
        0, 4, Rarity.COMMON, ActivationType.ON_SCORED, None, _UNLOCK_DEFAULT,
    ),
    JokerType.FIBONACCI: JokerSpec(
        "Fibonacci", "Adds Fibonacci sequence multiplier (1,1,2,3,5,8,13,21)",
        8, 8, Rarity.RARE, ActivationType.INDEPENDENT, None,
        "Win with a Straight Flush and have sufficient chips.",
    ),
    JokerType.LUCKY_JOKER: JokerSpec(
        "Lucky Joker", "Adds +4 Mult if hand contains at least two 7s",
        4, 6, Rarity.UNCOMMON, ActivationType.ON_SCORED, None,
        "Win with a hand containing at least two 7s.",
    ),
}


@dataclass(frozen=True)
class Joker:
    """一张生效中的小丑牌（不可变，换关时整体替换）"""
    type: JokerType
    multiplier: int
    activation: ActivationType
    rarity: Rarity

    def __post_init__(self) -> None:
        if not isinstance(self.type, JokerType):
            raise InvalidArgumentError(f"非法小丑牌种类: {self.type!r}")
        if not isinstance(self.activation, ActivationType):
            raise InvalidArgumentError(f"非法生效时机: {self.activation!r}")
        if not isinstance(self.rarity, Rarity):
            raise InvalidArgumentError(f"非法稀有度: {self.rarity!r}")
        if self.multiplier < 0:
            raise InvalidArgumentError(f"倍率不能为负: {self.multiplier}")

    @classmethod
    def from_type(cls, joker_type: JokerType) -> "Joker":
        spec = JOKER_CATALOG[joker_type]
        return cls(joker_type, spec.multiplier, spec.activation, spec.rarity)

    @property
    def name(self) -> str:
        return self.type.spec.name

    @property
    def effect(self) -> str:
        return self.type.spec.effect

    @property
    def active_suit(self) -> Optional[Suit]:
        return self.type.spec.active_suit

    def __repr__(self) -> str:
        return (
            f"Joker[{self.name}, ×{self.multiplier}, "
            f"{self.activation.display_name}, {self.rarity.value}]"
        )


def random_joker(rng: Optional[random.Random] = None) -> Joker:
    """从目录中均匀随机选一张小丑牌"""
    rng = rng or random.Random()
    return Joker.from_type(rng.choice(list(JokerType)))
