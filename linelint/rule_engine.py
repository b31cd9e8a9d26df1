"""
Rule Engine Module - 规则引擎

支持:
- 多文件并行检查 / 修正
- 每个文件独立构建 SourceFile 与分类缓存，文件之间不共享可变状态
"""
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from .config import RuleConfig
from .logger import LogContext, get_logger
from .reporter import Correction, Violation
from .rules import BaseRule, CorrectableRule, get_all_rules
from .source_file import SourceFile
from .syntax_kinds import Classifier

T = TypeVar("T")


class RuleEngine:
    """规则引擎 - 管理和执行规则"""

    def __init__(self, classifier: Optional[Classifier] = None, parallel: bool = True, max_workers: int = 0):
        """
        Args:
            classifier: 外部语法分类器，None 表示所有行都没有分类标签
            parallel: 是否启用并行执行
            max_workers: 最大工作线程数（0 表示自动：min(32, cpu_count * 2)）
        """
        self.classifier = classifier or Classifier()
        self.rules: List[BaseRule] = []
        self.parallel = parallel
        self.max_workers = max_workers
        self.logger = get_logger(__name__)
        self.logger.debug(f"RuleEngine initialized: parallel={parallel}, max_workers={max_workers}")

    def load_builtin_rules(self, rules_config: Dict[str, RuleConfig]):
        """加载内置规则"""
        loaded_count = 0
        for rule_class in get_all_rules():
            rule_id = rule_class.identifier
            config = rules_config.get(rule_id, RuleConfig())

            if config.enabled:
                self.rules.append(rule_class(config))
                loaded_count += 1
                self.logger.debug(f"Loaded rule: {rule_id}")
            else:
                self.logger.debug(f"Skipped disabled rule: {rule_id}")

        self.logger.info(f"Loaded {loaded_count} builtin rules")

    def load_source_file(self, file_path: str) -> SourceFile:
        """读取文件，分类数据延迟到规则需要时才计算"""
        with open(file_path, 'r', encoding='utf-8') as f:
            contents = f.read()

        classifier = self.classifier
        return SourceFile(
            file_path,
            contents,
            syntax_kinds=lambda: classifier.syntax_kinds_by_line(file_path, contents),
            declaration_kinds=lambda: classifier.declaration_kinds_by_line(file_path, contents),
        )

    def check_file(self, file_path: str) -> List[Violation]:
        """
        对单个文件执行所有规则检查

        单条规则失败只记录日志，不影响其他规则。
        """
        try:
            source_file = self.load_source_file(file_path)
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(f"Failed to read {file_path}: {e}")
            return []

        violations = []
        for rule in self.rules:
            if not rule.enabled:
                continue
            try:
                with LogContext(self.logger, "validate", rule=rule.identifier, file=file_path):
                    violations.extend(rule.validate(source_file))
            except Exception as e:
                self.logger.warning(f"Rule {rule.identifier} failed on {file_path}: {e}")
                print(f"Warning: Rule {rule.identifier} failed on {file_path}: {e}", file=sys.stderr)

        return violations

    def correct_file(self, file_path: str) -> List[Correction]:
        """
        对单个文件执行所有可修正规则

        每条规则重新读取文件，写回失败（OSError）直接抛出。
        """
        corrections = []
        for rule in self.rules:
            if not rule.enabled or not isinstance(rule, CorrectableRule):
                continue
            with LogContext(self.logger, "correct", rule=rule.identifier, file=file_path):
                source_file = self.load_source_file(file_path)
                corrections.extend(rule.correct(source_file))
        return corrections

    def check_files(self, files: List[str]) -> List[Violation]:
        """对多个文件执行检查（支持并行），结果按文件顺序返回"""
        self.logger.info(f"Checking {len(files)} files with {len(self.rules)} rules (parallel={self.parallel})")
        violations = self._run(self.check_file, files)
        self.logger.info(f"Total violations found: {len(violations)}")
        return violations

    def correct_files(self, files: List[str]) -> List[Correction]:
        """对多个文件执行修正（支持并行），结果按文件顺序返回"""
        self.logger.info(f"Correcting {len(files)} files with {len(self.rules)} rules (parallel={self.parallel})")
        corrections = self._run(self.correct_file, files)
        self.logger.info(f"Total corrections made: {len(corrections)}")
        return corrections

    def _run(self, task: Callable[[str], List[T]], files: List[str]) -> List[T]:
        if not self.parallel or len(files) <= 1:
            results = [task(f) for f in files]
        else:
            with ThreadPoolExecutor(max_workers=self._worker_count(len(files))) as executor:
                results = list(executor.map(task, files))

        merged = []
        for file_path, items in zip(files, results):
            if items:
                self.logger.debug(f"{Path(file_path).name}: {len(items)} results")
            merged.extend(items)
        return merged

    def _worker_count(self, files_count: int) -> int:
        workers = self.max_workers
        if workers <= 0:
            workers = min(32, (os.cpu_count() or 1) * 2)
        return min(workers, files_count)
