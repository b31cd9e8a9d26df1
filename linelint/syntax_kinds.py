"""
Syntax Kinds - 外部语法分类标签

标签值与 SourceKit 输出的标识符一致，分类结果由外部分类器提供，
本模块只定义标签集合和分类器接口。
"""
from enum import Enum
from typing import Iterable, Mapping, Sequence, Union


class SyntaxKind(Enum):
    """语法类型标签"""
    ARGUMENT = "source.lang.swift.syntaxtype.argument"
    ATTRIBUTE_BUILTIN = "source.lang.swift.syntaxtype.attribute.builtin"
    ATTRIBUTE_ID = "source.lang.swift.syntaxtype.attribute.id"
    BUILDCONFIG_ID = "source.lang.swift.syntaxtype.buildconfig.id"
    BUILDCONFIG_KEYWORD = "source.lang.swift.syntaxtype.buildconfig.keyword"
    COMMENT = "source.lang.swift.syntaxtype.comment"
    COMMENT_MARK = "source.lang.swift.syntaxtype.comment.mark"
    COMMENT_URL = "source.lang.swift.syntaxtype.comment.url"
    DOC_COMMENT = "source.lang.swift.syntaxtype.doccomment"
    DOC_COMMENT_FIELD = "source.lang.swift.syntaxtype.doccomment.field"
    IDENTIFIER = "source.lang.swift.syntaxtype.identifier"
    KEYWORD = "source.lang.swift.syntaxtype.keyword"
    NUMBER = "source.lang.swift.syntaxtype.number"
    OBJECT_LITERAL = "source.lang.swift.syntaxtype.objectliteral"
    PARAMETER = "source.lang.swift.syntaxtype.parameter"
    PLACEHOLDER = "source.lang.swift.syntaxtype.placeholder"
    STRING = "source.lang.swift.syntaxtype.string"
    STRING_INTERPOLATION_ANCHOR = "source.lang.swift.syntaxtype.string_interpolation_anchor"
    TYPEIDENTIFIER = "source.lang.swift.syntaxtype.typeidentifier"


class DeclarationKind(Enum):
    """声明类型标签（仅列出规则关心的部分以及常见类型声明）"""
    CLASS = "source.lang.swift.decl.class"
    ENUM = "source.lang.swift.decl.enum"
    EXTENSION = "source.lang.swift.decl.extension"
    PROTOCOL = "source.lang.swift.decl.protocol"
    STRUCT = "source.lang.swift.decl.struct"
    VAR_INSTANCE = "source.lang.swift.decl.var.instance"
    VAR_LOCAL = "source.lang.swift.decl.var.local"
    FUNCTION_ACCESSOR_ADDRESS = "source.lang.swift.decl.function.accessor.address"
    FUNCTION_ACCESSOR_DIDSET = "source.lang.swift.decl.function.accessor.didset"
    FUNCTION_ACCESSOR_GETTER = "source.lang.swift.decl.function.accessor.getter"
    FUNCTION_ACCESSOR_MUTABLEADDRESS = "source.lang.swift.decl.function.accessor.mutableaddress"
    FUNCTION_ACCESSOR_SETTER = "source.lang.swift.decl.function.accessor.setter"
    FUNCTION_ACCESSOR_WILLSET = "source.lang.swift.decl.function.accessor.willset"
    FUNCTION_CONSTRUCTOR = "source.lang.swift.decl.function.constructor"
    FUNCTION_DESTRUCTOR = "source.lang.swift.decl.function.destructor"
    FUNCTION_FREE = "source.lang.swift.decl.function.free"
    FUNCTION_METHOD_CLASS = "source.lang.swift.decl.function.method.class"
    FUNCTION_METHOD_INSTANCE = "source.lang.swift.decl.function.method.instance"
    FUNCTION_METHOD_STATIC = "source.lang.swift.decl.function.method.static"
    FUNCTION_OPERATOR = "source.lang.swift.decl.function.operator"
    FUNCTION_OPERATOR_INFIX = "source.lang.swift.decl.function.operator.infix"
    FUNCTION_OPERATOR_POSTFIX = "source.lang.swift.decl.function.operator.postfix"
    FUNCTION_OPERATOR_PREFIX = "source.lang.swift.decl.function.operator.prefix"
    FUNCTION_SUBSCRIPT = "source.lang.swift.decl.function.subscript"


COMMENT_KINDS = frozenset({
    SyntaxKind.COMMENT,
    SyntaxKind.COMMENT_MARK,
    SyntaxKind.COMMENT_URL,
    SyntaxKind.DOC_COMMENT,
    SyntaxKind.DOC_COMMENT_FIELD,
})

NON_COMMENT_KINDS = frozenset(SyntaxKind) - COMMENT_KINDS

FUNCTION_KINDS = frozenset(
    kind for kind in DeclarationKind if kind.name.startswith("FUNCTION_")
)

# 行号 -> 标签集合；可以是 dict，也可以是按行号下标访问的序列（下标 0 占位）
KindsByLine = Union[Mapping[int, Iterable[Enum]], Sequence[Iterable[Enum]]]


class Classifier:
    """
    外部分类器接口

    默认实现不返回任何标签，所有行都不会因分类被忽略。
    """

    def syntax_kinds_by_line(self, file_path: str, contents: str) -> KindsByLine:
        return {}

    def declaration_kinds_by_line(self, file_path: str, contents: str) -> KindsByLine:
        return {}
