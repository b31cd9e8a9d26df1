"""
Reporter Module - 输出格式化 (Xcode 兼容)
"""
import hashlib
import json
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional

from .logger import get_logger


class Severity(Enum):
    """严重级别"""
    WARNING = "warning"
    ERROR = "error"


class ViolationType(NamedTuple):
    """
    违规类型定义（sub_type + message + severity 绑定）

    Attributes:
        id: sub_type 标识（稳定，用于系统匹配/去重）
        message: 用户可读描述（可包含 {var} 占位符）
        severity: 违规级别，默认 WARNING
    """
    id: str
    message: str
    severity: Severity = Severity.WARNING


@dataclass
class Violation:
    """违规记录"""
    file_path: str
    line: int
    severity: Severity
    message: str
    rule_id: str
    column: Optional[int] = None
    source: str = "linelint"
    context: Optional[str] = None  # 违规行的代码内容
    sub_type: Optional[str] = None  # 规则子类型
    rule_name: Optional[str] = None
    _violation_id: Optional[str] = field(default=None, repr=False)

    @property
    def violation_id(self) -> str:
        """
        获取违规唯一标识（懒计算，缓存结果）

        组成：hash(file_path + rule_id + sub_type + context)
        """
        if self._violation_id is None:
            sub_type = self.sub_type or "default"
            context = self.context if self.context is not None else str(self.line)
            id_input = f"{self.file_path}:{self.rule_id}:{sub_type}:{context}"
            self._violation_id = hashlib.md5(id_input.encode()).hexdigest()[:16]
        return self._violation_id

    @property
    def location(self) -> str:
        if self.column is None:
            return f"{self.file_path}:{self.line}"
        return f"{self.file_path}:{self.line}:{self.column}"

    def to_xcode_format(self) -> str:
        """
        转换为 Xcode 可识别的格式
        格式: /path/to/file.swift:line: warning: message [rule_id]
        """
        return f"{self.location}: {self.severity.value}: {self.message} [{self.rule_id}]"

    def to_dict(self) -> dict:
        """唯一序列化入口，只包含非空字段"""
        result = {
            "file_path": self.file_path,
            "line": self.line,
            "severity": self.severity.value,
            "message": self.message,
            "rule_id": self.rule_id,
            "source": self.source,
            "violation_id": self.violation_id
        }
        if self.column is not None:
            result["column"] = self.column
        if self.sub_type:
            result["sub_type"] = self.sub_type
        if self.rule_name:
            result["rule_name"] = self.rule_name
        return result


@dataclass(frozen=True)
class Correction:
    """自动修正记录（仅在行内容实际发生变化时产生）"""
    rule_id: str
    file_path: str
    line: int
    rule_name: Optional[str] = None

    @property
    def console_description(self) -> str:
        return f"{self.file_path}:{self.line} Corrected {self.rule_name or self.rule_id}"

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "line": self.line,
            "rule_id": self.rule_id,
        }


class Reporter:
    """报告生成器"""

    def __init__(self, xcode_output: bool = True):
        self.violations: List[Violation] = []
        self.corrections: List[Correction] = []
        self.xcode_output = xcode_output
        self.logger = get_logger(__name__)

    def add_violations(self, violations: List[Violation]):
        """批量添加违规记录"""
        self.violations.extend(violations)

    def add_corrections(self, corrections: List[Correction]):
        """批量添加修正记录"""
        self.corrections.extend(corrections)

    def deduplicate(self):
        """去重：相同位置的违规只保留一个"""
        seen = set()
        unique = []
        for v in self.violations:
            key = (v.file_path, v.line, v.column, v.rule_id)
            if key not in seen:
                seen.add(key)
                unique.append(v)
        if len(unique) != len(self.violations):
            self.logger.debug(f"Deduplicated violations: {len(self.violations)} -> {len(unique)}")
        self.violations = unique

    def sort(self):
        """按文件和行号排序"""
        self.violations.sort(key=lambda v: (v.file_path, v.line, v.column or 0))
        self.corrections.sort(key=lambda c: (c.file_path, c.line))

    def report(self, stream=None) -> int:
        """
        输出报告

        Returns:
            返回码：有 error 返回 1，否则返回 0
        """
        stream = stream or sys.stdout
        self.deduplicate()
        self.sort()

        for c in self.corrections:
            print(c.console_description, file=stream)

        has_error = False
        for v in self.violations:
            if self.xcode_output:
                print(v.to_xcode_format(), file=stream)
            else:
                print(f"[{v.severity.value.upper()}] {v.location} - {v.message} ({v.rule_id})", file=stream)

            if v.severity == Severity.ERROR:
                has_error = True

        return 1 if has_error else 0

    def get_summary(self) -> dict:
        """获取统计摘要"""
        error_count = sum(1 for v in self.violations if v.severity == Severity.ERROR)
        warning_count = sum(1 for v in self.violations if v.severity == Severity.WARNING)

        return {
            "total": len(self.violations),
            "errors": error_count,
            "warnings": warning_count,
            "corrections": len(self.corrections),
            "files_affected": len(set(v.file_path for v in self.violations))
        }

    def to_json(self) -> str:
        """输出 JSON 格式报告"""
        data = {
            "summary": self.get_summary(),
            "violations": [v.to_dict() for v in self.violations],
            "corrections": [c.to_dict() for c in self.corrections],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    def print_summary(self):
        """打印摘要到 stderr（不影响 Xcode 解析）"""
        summary = self.get_summary()
        print(f"\n{'='*50}", file=sys.stderr)
        print("LineLint Summary:", file=sys.stderr)
        print(f"  Total violations: {summary['total']}", file=sys.stderr)
        print(f"  Errors: {summary['errors']}", file=sys.stderr)
        print(f"  Warnings: {summary['warnings']}", file=sys.stderr)
        print(f"  Corrections: {summary['corrections']}", file=sys.stderr)
        print(f"  Files affected: {summary['files_affected']}", file=sys.stderr)
        print(f"{'='*50}\n", file=sys.stderr)
