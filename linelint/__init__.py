"""
LineLint - 可配置的行长度检查与函数声明自动拆行

Usage:
    from linelint import LineLengthRule, SourceFile

    rule = LineLengthRule()
    violations = rule.validate(SourceFile.from_path("Sources/App.swift"))
"""
from .config import ConfigLoader, LineLengthConfiguration, LintConfig, RuleConfig, ThresholdTier
from .reporter import Correction, Reporter, Severity, Violation
from .rule_engine import RuleEngine
from .rules import LineLengthRule, get_all_rules
from .source_file import Line, SourceFile
from .syntax_kinds import Classifier, DeclarationKind, SyntaxKind

__version__ = "1.0.0"

__all__ = [
    'ConfigLoader',
    'LineLengthConfiguration',
    'LintConfig',
    'RuleConfig',
    'ThresholdTier',
    'Correction',
    'Reporter',
    'Severity',
    'Violation',
    'RuleEngine',
    'LineLengthRule',
    'get_all_rules',
    'Line',
    'SourceFile',
    'Classifier',
    'DeclarationKind',
    'SyntaxKind',
]
