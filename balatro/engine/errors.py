"""异常定义 - 计分核心对外抛出的错误类型"""


class BalatroError(Exception):
    """所有游戏错误的基类"""


class InvalidArgumentError(BalatroError, ValueError):
    """公开操作收到了非法参数（选牌数量错误、保留牌为 None 等）"""


class InvalidStateError(BalatroError, RuntimeError):
    """在前置条件不满足的状态下调用了操作（非新回合洗牌、手牌已满等）"""
