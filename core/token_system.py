"""core/token_system.py"""
from enum import Enum


class TokenKind(Enum):
    NUMBER = "number"          # 数字 (float)
    VARIABLE = "variable"      # 变量引用，源文本带前缀
    IDENTIFIER = "identifier"  # 命名常数
    FUNCTION = "function"      # 函数调用
    PAREN_OPEN = "paren_open"
    PAREN_CLOSE = "paren_close"
    COMMA = "comma"
    PLUS = "plus"
    MINUS = "minus"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    POWER = "power"
    UNARY_PLUS = "unary_plus"    # 正号
    UNARY_MINUS = "unary_minus"  # 负号
    NOT = "not"


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


class ParserState(Enum):
    EXPECT_OPERAND = 1   # 等待操作数、一元符号、函数或左括号
    EXPECT_OPERATOR = 2  # 等待二元操作符、右括号或逗号


class OperatorInfo:
    def __init__(self, precedence, associativity):
        self.precedence = precedence
        self.associativity = associativity

    @property
    def is_left_assoc(self):
        return self.associativity is Associativity.LEFT

    def __repr__(self):
        return f"OperatorInfo(precedence={self.precedence}, associativity={self.associativity.value})"


class Token:
    """
    表达式中的一个token

    kind 和 value 创建后只读；arg_count 只对 FUNCTION 有意义，由转换器在解析时累加。
    需要改变类型时（标识符->函数，加减->正负号）用 reclassify 生成新token替换原位置。
    """

    def __init__(self, kind, value=None, arg_count=0):
        self._kind = kind
        self._value = value
        self.arg_count = arg_count

    @property
    def kind(self):
        return self._kind

    @property
    def value(self):
        return self._value

    @property
    def name(self):
        """兼容名称访问：类型的可打印名"""
        return TOKEN_KIND_NAMES.get(self._kind, str(self._kind))

    def reclassify(self, kind):
        """返回同值、不同类型的新token"""
        return Token(kind, self._value, self.arg_count)

    def is_paren(self):
        return self._kind in (TokenKind.PAREN_OPEN, TokenKind.PAREN_CLOSE)

    def __repr__(self):
        if self._kind is TokenKind.FUNCTION:
            return f"Token({self.name}, {self._value!r}, argc={self.arg_count})"
        return f"Token({self.name}, {self._value!r})"


# 单字符符号 -> token类型
SYMBOL_TO_KIND = {
    '!': TokenKind.NOT,
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '*': TokenKind.MULTIPLY,
    '/': TokenKind.DIVIDE,
    '%': TokenKind.MODULO,
    '^': TokenKind.POWER,
    '(': TokenKind.PAREN_OPEN,
    ')': TokenKind.PAREN_CLOSE,
    ',': TokenKind.COMMA,
}

# 操作符的优先级和结合性
OPERATOR_DEFINITIONS = {
    TokenKind.PLUS: OperatorInfo(1, Associativity.LEFT),
    TokenKind.MINUS: OperatorInfo(1, Associativity.LEFT),
    TokenKind.MULTIPLY: OperatorInfo(2, Associativity.LEFT),
    TokenKind.DIVIDE: OperatorInfo(2, Associativity.LEFT),
    TokenKind.MODULO: OperatorInfo(2, Associativity.LEFT),
    TokenKind.POWER: OperatorInfo(3, Associativity.RIGHT),
    TokenKind.UNARY_PLUS: OperatorInfo(4, Associativity.RIGHT),
    TokenKind.UNARY_MINUS: OperatorInfo(4, Associativity.RIGHT),
    TokenKind.NOT: OperatorInfo(4, Associativity.RIGHT),
}

# 加减号 -> 对应的一元符号
UNARY_VARIANTS = {
    TokenKind.PLUS: TokenKind.UNARY_PLUS,
    TokenKind.MINUS: TokenKind.UNARY_MINUS,
}

OPERAND_KINDS = frozenset({TokenKind.NUMBER, TokenKind.VARIABLE, TokenKind.IDENTIFIER})

TOKEN_KIND_NAMES = {
    TokenKind.NUMBER: 'T_NUMBER',
    TokenKind.VARIABLE: 'T_DEF',
    TokenKind.IDENTIFIER: 'T_IDENT',
    TokenKind.FUNCTION: 'T_FUNC',
    TokenKind.PAREN_OPEN: 'T_POPEN',
    TokenKind.PAREN_CLOSE: 'T_PCLOSE',
    TokenKind.COMMA: 'T_COMMA',
    TokenKind.PLUS: 'T_PLUS',
    TokenKind.MINUS: 'T_MINUS',
    TokenKind.MULTIPLY: 'T_MUL',
    TokenKind.DIVIDE: 'T_DIV',
    TokenKind.MODULO: 'T_MOD',
    TokenKind.POWER: 'T_POW',
    TokenKind.UNARY_PLUS: 'T_UNARY_PLUS',
    TokenKind.UNARY_MINUS: 'T_UNARY_MINUS',
    TokenKind.NOT: 'T_NOT',
}

# 反向映射，用于紧凑的后缀表达式输出
KIND_TO_SYMBOL = {kind: symbol for symbol, kind in SYMBOL_TO_KIND.items()}
KIND_TO_SYMBOL[TokenKind.UNARY_PLUS] = 'u+'
KIND_TO_SYMBOL[TokenKind.UNARY_MINUS] = 'u-'
