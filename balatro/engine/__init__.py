# 计分核心模块
from .errors import BalatroError, InvalidArgumentError, InvalidStateError
from .card import Card, Rank, Suit, create_deck, sort_cards, point_value_sum
from .hand_type import HandType, HandEvaluation
from .hand_detector import detect_hand, evaluate_cards
from .hand import Hand
from .deck import Deck
from .joker import Joker, JokerType, ActivationType, Rarity, JOKER_CATALOG, random_joker
from .scoring import ScoringEngine, ScoringResult, apply_joker
