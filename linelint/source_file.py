"""
Source File - 按行拆分的源文件及其分类数据
"""
import os
import tempfile
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Callable, List, Optional

from .logger import get_logger
from .syntax_kinds import KindsByLine


@dataclass(frozen=True)
class Line:
    """
    源文件中的一行

    Attributes:
        index: 行号（从 1 开始）
        content: 行内容（不含换行符）
        range_length: UTF-16 码元长度，始终 >= 字符数，用于快速跳过短行
    """
    index: int
    content: str
    range_length: int

    @classmethod
    def make(cls, index: int, content: str) -> "Line":
        return cls(index, content, len(content.encode("utf-16-le")) // 2)


class Lazy:
    """按需计算、只计算一次的值（每次 validate/correct 调用各自创建）"""

    def __init__(self, computation: Callable[[], KindsByLine]):
        self._computation = computation

    @cached_property
    def value(self) -> KindsByLine:
        return self._computation()


def split_lines(contents: str) -> List[str]:
    """按 \\n 拆分，去掉 \\r，文件末尾换行不产生空行"""
    if not contents:
        return []
    parts = contents.split("\n")
    if contents.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


class SourceFile:
    """
    源文件

    分类数据由外部提供，以零参数 provider 的形式传入，
    只有规则真正需要时才会调用。
    """

    def __init__(self, path: Optional[str], contents: str,
                 syntax_kinds: Optional[Callable[[], KindsByLine]] = None,
                 declaration_kinds: Optional[Callable[[], KindsByLine]] = None):
        self.path = path
        self.contents = contents
        self.lines = [Line.make(i, text) for i, text in enumerate(split_lines(contents), 1)]
        self._syntax_kinds = syntax_kinds
        self._declaration_kinds = declaration_kinds
        self.logger = get_logger(__name__)

    @classmethod
    def from_path(cls, path: str, **providers) -> "SourceFile":
        with open(path, 'r', encoding='utf-8') as f:
            contents = f.read()
        return cls(str(path), contents, **providers)

    def syntax_kinds_by_line(self) -> KindsByLine:
        return self._syntax_kinds() if self._syntax_kinds else {}

    def declaration_kinds_by_line(self) -> KindsByLine:
        return self._declaration_kinds() if self._declaration_kinds else {}

    def write(self, contents: str):
        """
        原子写回整个文件

        先写同目录临时文件再 os.replace，失败时原文件保持不变，OSError 向上抛出。
        """
        if self.path is None:
            raise ValueError("Cannot write a source file without a path")

        target = Path(self.path)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent))
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(contents)
            if target.exists():
                os.chmod(tmp_path, target.stat().st_mode & 0o7777)
            os.replace(tmp_path, target)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

        self.contents = contents
        self.lines = [Line.make(i, text) for i, text in enumerate(split_lines(contents), 1)]
        self.logger.debug(f"Rewrote {self.path} ({len(self.lines)} lines)")
