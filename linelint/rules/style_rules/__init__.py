# Style Rules Module

from .line_length_rule import LineLengthRule

__all__ = [
    'LineLengthRule',
]
