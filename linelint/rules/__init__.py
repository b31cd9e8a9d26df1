# LineLint Rules Module

from .base_rule import BaseRule, CorrectableRule
from .style_rules import (
    LineLengthRule,
)


def get_all_rules():
    """获取所有内置规则类"""
    return [
        # Style
        LineLengthRule,
    ]


__all__ = [
    'BaseRule',
    'CorrectableRule',
    'get_all_rules',
    # Style
    'LineLengthRule',
]
