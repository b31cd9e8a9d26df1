#!/usr/bin/env python3
"""
LineLint - 行长度检查工具

Usage:
    linelint [options] [FILE ...]

Options:
    --config PATH          配置文件路径 (默认: .linelint.yml)
    --fix                  自动拆分过长的函数声明行
    --json-output          输出 JSON 格式
    --plain-output         输出纯文本格式（[WARNING] file:line - message）
    --verbose              详细输出
    --help                 显示帮助
"""
import argparse
import fnmatch
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

from .config import ConfigLoader, LintConfig
from .logger import LogContext, get_logger, log_lint_end, log_lint_start
from .reporter import Reporter
from .rule_engine import RuleEngine


DEFAULT_CONFIG_FILE = ".linelint.yml"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        prog="linelint",
        description="LineLint - 行长度检查与函数声明自动拆行",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("files", nargs="*", help="要检查的文件（默认按配置的 included 扫描当前目录）")
    parser.add_argument("--config", "-c", help="配置文件路径", default=None)
    parser.add_argument("--fix", action="store_true", help="自动修正后再检查")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json-output", action="store_true", help="输出 JSON 格式")
    output.add_argument("--plain-output", action="store_true", help="输出纯文本格式，而不是 Xcode 格式")
    parser.add_argument("--verbose", "-v", action="store_true", help="详细输出")
    return parser.parse_args(argv)


def discover_files(config: LintConfig, root: Path) -> List[str]:
    """按 included / excluded 规则收集文件"""
    files = set()
    for pattern in config.included:
        for path in root.glob(pattern):
            if not path.is_file():
                continue
            rel = path.relative_to(root).as_posix()
            if any(fnmatch.fnmatch(rel, excluded) for excluded in config.excluded):
                continue
            files.add(str(path))
    return sorted(files)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        os.environ['LINELINT_VERBOSE'] = '1'

    logger = get_logger(__name__)

    config_path = args.config
    if config_path is None and Path(DEFAULT_CONFIG_FILE).exists():
        config_path = DEFAULT_CONFIG_FILE

    with LogContext(logger, "config_loading"):
        try:
            config = ConfigLoader(config_path).load()
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    engine = RuleEngine(parallel=config.parallel, max_workers=config.max_workers)
    try:
        engine.load_builtin_rules(config.rules)
    except ValueError as e:
        print(f"Error: invalid rule configuration: {e}", file=sys.stderr)
        return 2

    files = args.files or discover_files(config, Path.cwd())
    log_lint_start(len(files), len(engine.rules), fix=args.fix)
    start = time.time()

    reporter = Reporter(xcode_output=not args.plain_output)
    if args.fix:
        reporter.add_corrections(engine.correct_files(files))
    reporter.add_violations(engine.check_files(files))

    if args.json_output:
        reporter.deduplicate()
        reporter.sort()
        print(reporter.to_json())
        exit_code = 1 if reporter.get_summary()["errors"] else 0
    else:
        exit_code = reporter.report()
        if args.verbose:
            reporter.print_summary()

    summary = reporter.get_summary()
    log_lint_end(summary["total"], summary["errors"], summary["warnings"], time.time() - start)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
