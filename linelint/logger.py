"""
LineLint Logger Module - 统一日志记录

所有模块通过 get_logger(__name__) 取得 "linelint" 下的子 logger，
handler 只挂在 "linelint" 上，一次运行写入同一个会话文件：
    ~/.linelint/logs/linelint_YYYYMMDD_HHMMSS.log（可通过 LINELINT_LOG_DIR 覆盖）

设置 LINELINT_VERBOSE 时额外输出 INFO 级别到 stderr。
"""
import logging
import os
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "linelint"

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
LOG_FORMAT_DETAILED = "%(asctime)s [%(levelname)s] [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_session_id: Optional[str] = None


def get_logs_dir() -> Path:
    """日志目录，优先使用 LINELINT_LOG_DIR"""
    override = os.environ.get('LINELINT_LOG_DIR')
    logs_dir = Path(override) if override else Path.home() / ".linelint" / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def session_log_file() -> Path:
    """当前会话的日志文件路径"""
    global _session_id
    if _session_id is None:
        _session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    return get_logs_dir() / f"{ROOT_LOGGER}_{_session_id}.log"


def _configure(root: logging.Logger):
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(session_log_file(), encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT_DETAILED, DATE_FORMAT))
    root.addHandler(file_handler)

    if os.environ.get('LINELINT_VERBOSE'):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(console_handler)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    获取 logger，首次调用时为 "linelint" 配置 handler

    Args:
        name: 模块名（通常传 __name__），不在 linelint 下时自动挂到 linelint.<name>
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        _configure(root)

    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class LogContext:
    """
    记录一段处理的开始、结束和耗时，附带规则 / 文件等字段

        with LogContext(logger, "validate", rule="line_length", file=path):
            ...

    异常会以 ERROR 记录后继续抛出。
    """

    def __init__(self, logger: logging.Logger, context_name: str, **fields):
        self.logger = logger
        self.context_name = context_name
        self.fields = fields
        self.start_time = 0.0

    @property
    def label(self) -> str:
        if not self.fields:
            return f"[{self.context_name}]"
        details = " ".join(f"{key}={value}" for key, value in self.fields.items())
        return f"[{self.context_name}] {details}"

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.debug(f"{self.label} started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.start_time
        if exc_type:
            self.logger.error(
                f"{self.label} failed after {elapsed:.3f}s: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
        else:
            self.logger.debug(f"{self.label} completed in {elapsed:.3f}s")
        return False


def reset_session():
    """关闭并移除 handler，下次 get_logger 时开启新会话文件"""
    global _session_id
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    _session_id = None


def log_lint_start(files_count: int, rules_count: int, fix: bool = False):
    logger = get_logger()
    logger.info(f"{'=' * 20} LineLint Session Start {'=' * 20}")
    logger.info(f"Files: {files_count}, rules: {rules_count}, autocorrect: {fix}")


def log_lint_end(violations_count: int, errors_count: int, warnings_count: int, elapsed: float):
    logger = get_logger()
    logger.info(f"Lint completed in {elapsed:.2f}s")
    logger.info(f"Total violations: {violations_count} (errors: {errors_count}, warnings: {warnings_count})")
    logger.info(f"{'=' * 20} LineLint Session End {'=' * 20}")
