"""Telemetry - 统一日志入口

提供统一的日志工厂和 bashio 风格的控制台输出。

日志格式: [HH:MM:SS] LEVEL: msg
"""

import logging
from datetime import datetime

from rich.console import Console
from rich.text import Text

from .config import LOG_LEVEL, LOG_TIME_FORMAT

# 包级 logger 名，所有模块 logger 都挂在它下面
_ROOT_LOGGER = "ordertracker_addon"

_LEVEL_STYLES = {
    logging.DEBUG: "blue",
    logging.INFO: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "bold red",
}


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger

    Args:
        name: 模块名（通常使用 __name__）

    Returns:
        Logger 实例
    """
    return logging.getLogger(name)


class BashioHandler(logging.Handler):
    """以 bashio::log.* 的格式输出单行日志

    每条记录输出为一行，不做自动换行，便于 Supervisor 日志面板展示。
    """

    def __init__(self, console: Console | None = None, level: int = logging.NOTSET):
        super().__init__(level)
        self.console = console or Console(stderr=True, highlight=False)

    def render(self, record: logging.LogRecord) -> Text:
        """把一条记录渲染为 rich Text"""
        timestamp = datetime.fromtimestamp(record.created).strftime(LOG_TIME_FORMAT)
        line = Text(f"[{timestamp}] ", style="dim")
        line.append(f"{record.levelname}:", style=_LEVEL_STYLES.get(record.levelno, ""))
        line.append(f" {self.format(record)}")
        return line

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.console.print(self.render(record), soft_wrap=True)
        except Exception:
            self.handleError(record)


def setup_logging(level: str | None = None, console: Console | None = None) -> logging.Logger:
    """为包 logger 安装 BashioHandler

    重复调用时替换已安装的 handler，不会重复输出。

    Args:
        level: 日志级别名，默认取 config.LOG_LEVEL；无法识别时回退为 INFO
        console: 可选的 rich Console（测试时注入）

    Returns:
        包级 Logger
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, BashioHandler):
            logger.removeHandler(handler)

    logger.addHandler(BashioHandler(console))

    name = (level or LOG_LEVEL).upper()
    if isinstance(logging.getLevelName(name), int):
        logger.setLevel(name)
    else:
        logger.setLevel(logging.INFO)
        logger.warning(f"Unknown log level {name!r}, using INFO")
    return logger
