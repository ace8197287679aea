# 终端展示
from .renderer import TerminalRenderer
