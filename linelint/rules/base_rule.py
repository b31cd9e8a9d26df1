"""
Base Rule - 规则基类
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..config import RuleConfig
from ..reporter import Correction, Violation, ViolationType
from ..source_file import Line, SourceFile


class BaseRule(ABC):
    """
    规则基类

    所有规则都应该继承此类并实现 validate 方法
    """

    # 子类必须定义的属性
    identifier: str = ""       # 规则唯一标识符，如 "line_length"
    name: str = ""             # 规则名称，如 "Line Length"
    description: str = ""      # 规则描述

    def __init__(self, config: Optional[RuleConfig] = None):
        """
        初始化规则

        Args:
            config: 规则配置，包含 enabled、severity、params
        """
        self.config = config or RuleConfig()

    @property
    def enabled(self) -> bool:
        """规则是否启用"""
        return self.config.enabled if self.config else True

    @abstractmethod
    def validate(self, file: SourceFile) -> List[Violation]:
        """
        执行规则检查

        Args:
            file: 已按行拆分的源文件
        Returns:
            违规列表（按行号顺序）
        """

    def create_violation(self, file: SourceFile, line: Line, violation_type: ViolationType,
                         message_vars: Optional[dict] = None) -> Violation:
        """创建违规记录"""
        message = violation_type.message
        if message_vars:
            message = message.format(**message_vars)

        return Violation(
            file_path=file.path or "",
            line=line.index,
            severity=violation_type.severity,
            message=message,
            rule_id=self.identifier,
            context=line.content.rstrip(),
            sub_type=violation_type.id,
            rule_name=self.name or None
        )

    def __repr__(self):
        return f"<{self.__class__.__name__} identifier={self.identifier} enabled={self.enabled}>"


class CorrectableRule(BaseRule):
    """支持自动修正的规则"""

    @abstractmethod
    def correct(self, file: SourceFile) -> List[Correction]:
        """
        执行自动修正

        Returns:
            修正列表；非空时文件已被整体重写
        """

    def create_correction(self, file: SourceFile, line: Line) -> Correction:
        return Correction(rule_id=self.identifier, file_path=file.path or "", line=line.index,
                          rule_name=self.name or None)
