"""
Rule Utilities - 规则公共工具模块

长度归一化（URL、字面量占位）以及按行分类标签查询。
"""
import re
from collections.abc import Mapping
from typing import AbstractSet

from ..syntax_kinds import KindsByLine


# 字面量占位的分隔符：整段 `delimiter(...)` 计为一个字符
LITERAL_DELIMITERS = ("#colorLiteral", "#imageLiteral")
LITERAL_PLACEHOLDER = "#"

# http://daringfireball.net/2010/07/improved_regex_for_matching_urls
URL_PATTERN = re.compile(
    r"(?i)\b((?:[a-z][\w-]+:(?:/{1,3}|[a-z0-9%])|www\d{0,3}[.]|[a-z0-9.\-]+[.][a-z]{2,4}/)"
    r"(?:[^\s()<>]+|\(([^\s()<>]+|(\([^\s()<>]+\)))*\))+(?:\(([^\s()<>]+|(\([^\s()<>]+\)))*"
    r"\)|[^\s`!()\[\]{};:'\".,<>?«»“”‘’]))"
)


def strip_urls(text: str) -> str:
    """删除所有 URL（直接删除，不做替换）"""
    return URL_PATTERN.sub("", text)


def strip_literals(text: str, delimiter: str) -> str:
    """
    将 `delimiter(` 到其后第一个 `)` 之间的内容替换为单个 `#`

    不处理嵌套括号；找不到闭合括号时停止扫描，返回已处理的结果。

    Args:
        text: 原始行内容
        delimiter: 字面量前缀，如 "#colorLiteral"

    Returns:
        替换后的字符串
    """
    opening = f"{delimiter}("
    while True:
        start = text.find(opening)
        if start == -1:
            break
        end = text.find(")", start)
        if end == -1:
            break
        text = text[:start] + LITERAL_PLACEHOLDER + text[end + 1:]
    return text


def normalized_length(text: str, ignores_urls: bool = False) -> int:
    """计算用于阈值比较的长度（按字符计数）"""
    if ignores_urls:
        text = strip_urls(text)
    for delimiter in LITERAL_DELIMITERS:
        text = strip_literals(text, delimiter)
    return len(text)


def line_has_kinds(index: int, kinds: AbstractSet, kinds_by_line: KindsByLine) -> bool:
    """
    判断某行的分类标签是否与 kinds 有交集

    超出分类数据范围的行视为没有标签。
    """
    if isinstance(kinds_by_line, Mapping):
        line_kinds = kinds_by_line.get(index)
    elif 0 <= index < len(kinds_by_line):
        line_kinds = kinds_by_line[index]
    else:
        line_kinds = None

    if not line_kinds:
        return False
    return not kinds.isdisjoint(line_kinds)
