# 自动出牌策略
from .rule_ai import RuleAI
from .llm_ai import LlmAI, create_llm_player
