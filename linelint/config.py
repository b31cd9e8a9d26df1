"""
Configuration Module - 配置文件解析和管理
"""
import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .logger import get_logger
from .reporter import Severity


DEFAULT_WARNING_THRESHOLD = 120
DEFAULT_ERROR_THRESHOLD = 200

_IGNORE_FLAGS = (
    "ignores_function_declarations",
    "ignores_comments",
    "ignores_urls",
    "ignores_interpolated_strings",
)


@dataclass
class RuleConfig:
    """规则配置"""
    enabled: bool = True
    severity: Optional[str] = None  # None 表示使用规则的 default_severity
    params: Any = field(default_factory=dict)


@dataclass(frozen=True)
class ThresholdTier:
    """阈值档位：长度达到 value 时以 severity 报告"""
    value: int
    severity: Severity


@dataclass(frozen=True)
class LineLengthConfiguration:
    """
    行长度规则配置

    tiers 按配置顺序保存，不做排序：评估时命中第一个达到的档位，
    因此默认顺序为 error 在前、warning 在后。
    """
    tiers: Tuple[ThresholdTier, ...] = (
        ThresholdTier(DEFAULT_ERROR_THRESHOLD, Severity.ERROR),
        ThresholdTier(DEFAULT_WARNING_THRESHOLD, Severity.WARNING),
    )
    ignores_function_declarations: bool = False
    ignores_comments: bool = False
    ignores_urls: bool = False
    ignores_interpolated_strings: bool = False

    def __post_init__(self):
        if not self.tiers:
            raise ValueError("line_length requires at least one threshold tier")
        object.__setattr__(self, "tiers", tuple(self.tiers))

    @property
    def min_threshold(self) -> int:
        """所有档位中的最小阈值，用于快速跳过短行"""
        return min(tier.value for tier in self.tiers)

    @property
    def warning_threshold(self) -> int:
        """警告阈值（没有 warning 档位时取第一个档位）"""
        for tier in self.tiers:
            if tier.severity == Severity.WARNING:
                return tier.value
        return self.tiers[0].value

    @classmethod
    def from_params(cls, params: Any) -> "LineLengthConfiguration":
        """
        从规则 params 构建配置

        支持三种写法：
            line_length: 120
            line_length: [120, 200]
            line_length: {warning: 120, error: 200, ignores_urls: true}
        """
        logger = get_logger(__name__)

        # 简写形式（int / [warning]）只配置 warning 档位
        shorthand = False
        if params is None:
            params = {}
        elif isinstance(params, bool):
            raise ValueError(f"Invalid line_length params: {params!r}")
        elif isinstance(params, int):
            params = {"warning": params}
            shorthand = True
        elif isinstance(params, (list, tuple)):
            if not 1 <= len(params) <= 2:
                raise ValueError(f"line_length expects [warning] or [warning, error], got {params!r}")
            params = dict(zip(("warning", "error"), params))
            shorthand = True
        elif not isinstance(params, dict):
            raise ValueError(f"Invalid line_length params: {params!r}")

        warning = _positive_int(params.get("warning", DEFAULT_WARNING_THRESHOLD), "warning")
        tiers = (ThresholdTier(warning, Severity.WARNING),)
        if not shorthand or "error" in params:
            error = _positive_int(params.get("error", DEFAULT_ERROR_THRESHOLD), "error")
            if error < warning:
                logger.warning(f"line_length error threshold {error} is below warning threshold {warning}")
            tiers = (ThresholdTier(error, Severity.ERROR),) + tiers

        flags = {}
        for key in _IGNORE_FLAGS:
            value = params.get(key, False)
            if not isinstance(value, bool):
                raise ValueError(f"line_length.{key} must be a boolean, got {value!r}")
            flags[key] = value

        unknown = set(params) - {"warning", "error", *_IGNORE_FLAGS}
        if unknown:
            logger.warning(f"Ignoring unknown line_length params: {sorted(unknown)}")

        return cls(tiers=tiers, **flags)


def _positive_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"line_length.{key} must be a positive integer, got {value!r}")
    return value


@dataclass
class LintConfig:
    """完整的 Lint 配置"""
    # 文件过滤
    included: List[str] = field(default_factory=lambda: ["**/*.swift"])
    excluded: List[str] = field(default_factory=list)

    # 规则配置
    rules: Dict[str, RuleConfig] = field(default_factory=dict)

    # 并行配置（0 表示自动：min(32, cpu_count * 2)）
    parallel: bool = True
    max_workers: int = 0


class ConfigLoader:
    """配置加载器"""

    DEFAULT_CONFIG = {
        "included": ["**/*.swift"],
        "excluded": ["Pods/**", "Carthage/**", ".build/**"],
        "rules": {
            "line_length": {
                "enabled": True,
                "params": {
                    "warning": DEFAULT_WARNING_THRESHOLD,
                    "error": DEFAULT_ERROR_THRESHOLD,
                    "ignores_function_declarations": False,
                    "ignores_comments": False,
                    "ignores_urls": False,
                    "ignores_interpolated_strings": False
                }
            }
        },
        "performance": {
            "parallel": True,
            "max_workers": 0
        }
    }

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else None
        self._config: Dict[str, Any] = {}
        self.logger = get_logger(__name__)

    def load(self) -> LintConfig:
        """加载配置文件"""
        self.logger.debug(f"Loading config from: {self.config_path}")

        # 从默认配置开始（深拷贝）
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = yaml.safe_load(f) or {}
            if not isinstance(user_config, dict):
                raise ValueError(f"Config file {self.config_path} must contain a mapping")
            self._merge_config(self._config, user_config)
            self.logger.debug(f"Merged {len(user_config)} user config keys")
        else:
            self.logger.debug("No config file found, using defaults only")

        config = self._build_lint_config()
        self.logger.debug(f"Config built: {len(config.rules)} rules configured")
        return config

    def _merge_config(self, base: Dict, override: Dict):
        """递归合并配置"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _build_lint_config(self) -> LintConfig:
        """构建 LintConfig 对象"""
        rules = {}
        for rule_name, rule_cfg in self._config.get("rules", {}).items():
            if isinstance(rule_cfg, dict):
                rules[rule_name] = RuleConfig(
                    enabled=rule_cfg.get("enabled", True),
                    severity=rule_cfg.get("severity"),
                    params=rule_cfg.get("params", {})
                )
            else:
                # 简写：line_length: 120 或 line_length: [120, 200]
                rules[rule_name] = RuleConfig(params=rule_cfg)

        performance_cfg = self._config.get("performance", {})
        return LintConfig(
            included=self._config.get("included", ["**/*.swift"]),
            excluded=self._config.get("excluded", []),
            rules=rules,
            parallel=performance_cfg.get("parallel", True),
            max_workers=performance_cfg.get("max_workers", 0)
        )

    def get_raw_config(self) -> Dict[str, Any]:
        """获取原始配置字典"""
        return self._config
