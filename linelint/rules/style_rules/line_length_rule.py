"""
Line Length Rule - 行长度检查与函数声明拆行修正
"""
import re
from typing import List, Optional

from ..base_rule import CorrectableRule
from ..rule_utils import line_has_kinds, normalized_length
from ...config import LineLengthConfiguration, RuleConfig, ThresholdTier
from ...logger import get_logger
from ...reporter import Correction, Severity, Violation, ViolationType
from ...source_file import Lazy, Line, SourceFile
from ...syntax_kinds import COMMENT_KINDS, FUNCTION_KINDS, NON_COMMENT_KINDS, SyntaxKind


REASON = "Line should be {warning} characters or less: currently {length} characters"


# SubType 定义
class SubType:
    """line_length 规则的子类型"""
    TOO_LONG_WARNING = ViolationType("too_long", REASON, Severity.WARNING)
    TOO_LONG_ERROR = ViolationType("too_long", REASON, Severity.ERROR)


_SUBTYPE_BY_SEVERITY = {
    Severity.WARNING: SubType.TOO_LONG_WARNING,
    Severity.ERROR: SubType.TOO_LONG_ERROR,
}

# 函数声明拆分模式，按优先级依次匹配：
#   1. 函数名及左括号       func foo(
#   2. 3 个以上字母加左括号  init(
#   3. 带标签的参数         label name: Type, / ...) { / ...) -> T
# 模块导入时编译，模式错误会在处理任何文件之前失败
SPLIT_PATTERN = re.compile(
    r"(.*[a-zA-Z\.]+\("
    r"|[a-zA-Z ]{3,}\("
    r"|([\S]+ ?[\S]+: ([A-Za-z]+|\({1,2}[^\(^\)]+\){1,2}|\[{1,2}[^\[^\]]+\]{1,2})"
    r"(, |\) \{.*|\) \-\>.*|\).*)))"
)


class LineLengthRule(CorrectableRule):
    """行长度检查"""

    identifier = "line_length"
    name = "Line Length"
    description = "Lines should not span too many characters."

    non_triggering_examples = [
        "/" * 119 + "\n",
        "#colorLiteral(red: 0.9607843161, green: 0.7058823705, blue: 0.200000003, alpha: 1)" * 119 + "\n",
        "#imageLiteral(resourceName: \"image.jpg\")" * 119 + "\n",
    ]
    triggering_examples = [
        "/" * 120 + "\n",
        "#colorLiteral(red: 0.9607843161, green: 0.7058823705, blue: 0.200000003, alpha: 1)" * 120 + "\n",
        "#imageLiteral(resourceName: \"image.jpg\")" * 120 + "\n",
    ]
    corrections = {
        "func thisIsAVeryStrangeFuncThatHasAReallySeriouslyStupidlyLongNameSoThatNowYaKnow"
        "(val1: String, val2: Bool, val3: (String, Bool)) {\n":
        "func thisIsAVeryStrangeFuncThatHasAReallySeriouslyStupidlyLongNameSoThatNowYaKnow(\n"
        "val1: String,\nval2: Bool,\nval3: (String, Bool)) {\n",
        "func externalAndInternalNamingParametersBoiiiiiiiiiiii"
        "(_ val1: String, leValue val2: Bool, perperper val3: (String, Bool)) {\n":
        "func externalAndInternalNamingParametersBoiiiiiiiiiiii(\n"
        "_ val1: String,\nleValue val2: Bool,\nperperper val3: (String, Bool)) {\n",
    }

    def __init__(self, config: Optional[RuleConfig] = None,
                 configuration: Optional[LineLengthConfiguration] = None):
        super().__init__(config)
        if configuration is None:
            configuration = LineLengthConfiguration.from_params(self.config.params)
        self.configuration = configuration
        self.logger = get_logger(__name__)

    def validate(self, file: SourceFile) -> List[Violation]:
        config = self.configuration
        min_value = config.min_threshold
        declaration_kinds = Lazy(file.declaration_kinds_by_line)
        syntax_kinds = Lazy(file.syntax_kinds_by_line)

        violations = []
        for line in file.lines:
            # range_length >= 字符数，先用它排除短行，避免计算精确长度
            if line.range_length < min_value:
                continue

            if self._is_ignored(line, declaration_kinds, syntax_kinds):
                continue

            length = normalized_length(line.content, ignores_urls=config.ignores_urls)
            tier = self._evaluate(length)
            if tier is None:
                continue

            violations.append(self.create_violation(
                file=file,
                line=line,
                violation_type=_SUBTYPE_BY_SEVERITY[tier.severity],
                message_vars={"warning": config.warning_threshold, "length": length}
            ))

        return violations

    def correct(self, file: SourceFile) -> List[Correction]:
        config = self.configuration
        min_value = config.min_threshold
        declaration_kinds = Lazy(file.declaration_kinds_by_line)

        corrected_lines = []
        corrections = []

        for line in file.lines:
            if line.range_length < min_value or config.ignores_function_declarations:
                corrected_lines.append(line.content)
                continue

            corrected = line.content
            if line_has_kinds(line.index, FUNCTION_KINDS, declaration_kinds.value):
                corrected = split_declaration(line.content)

            if corrected != line.content:
                corrections.append(self.create_correction(file, line))
            corrected_lines.append(corrected)

        if not corrections:
            return []

        # 整体写回并补回末尾换行
        file.write("\n".join(corrected_lines) + "\n")
        self.logger.info(f"Corrected {len(corrections)} line(s) in {file.path}")
        return corrections

    def _is_ignored(self, line: Line, declaration_kinds: Lazy, syntax_kinds: Lazy) -> bool:
        """根据外部分类判断该行是否豁免检查"""
        config = self.configuration

        if config.ignores_function_declarations and \
                line_has_kinds(line.index, FUNCTION_KINDS, declaration_kinds.value):
            return True

        if config.ignores_comments and \
                line_has_kinds(line.index, COMMENT_KINDS, syntax_kinds.value) and \
                not line_has_kinds(line.index, NON_COMMENT_KINDS, syntax_kinds.value):
            return True

        if config.ignores_interpolated_strings and \
                line_has_kinds(line.index, {SyntaxKind.STRING_INTERPOLATION_ANCHOR}, syntax_kinds.value):
            return True

        return False

    def _evaluate(self, length: int) -> Optional[ThresholdTier]:
        """按配置顺序返回第一个达到的档位（不是最严格的档位）"""
        for tier in self.configuration.tiers:
            if length >= tier.value:
                return tier
        return None


def split_declaration(content: str) -> str:
    """
    按参数拆分函数声明行

    只做模式匹配，不解析语法；少于 3 段（0 或 1 个参数）时原样返回。
    """
    components = [match.group(0).strip() for match in SPLIT_PATTERN.finditer(content)]
    if len(components) < 3:
        return content
    return "\n".join(components)
