"""core/errors.py - 解析与求值的异常类型"""


class ExpressionError(Exception):
    """所有表达式错误的基类"""


class ExpressionSyntaxError(ExpressionError):
    """没有任何词法规则能匹配剩余输入"""

    def __init__(self, near):
        self.near = near
        super().__init__(f"syntax error near: `{near}`")


class MalformedExpressionError(ExpressionError):
    """词法匹配结果为空"""

    def __init__(self, near):
        self.near = near
        super().__init__(f"invalid expression: `{near}`")


class TokenError(ExpressionError):
    """与某个具体token相关的解析错误"""

    message = "invalid token `{value}`"

    def __init__(self, token):
        self.token = token
        value = getattr(token, 'value', token)
        super().__init__(self.message.format(value=value))


class MisplacedCommaError(TokenError):
    message = "commas are only allowed inside a function call"


class UnbalancedParenError(TokenError):
    message = "missing or misplaced opening parenthesis"


class UnmatchedParenError(TokenError):
    message = "unmatched parenthesis `{value}` found"


class MalformedFunctionCallError(TokenError):
    message = "function `{value}` must be followed by an opening parenthesis"


class UnknownTokenError(TokenError):

    def __init__(self, token):
        self.token = token
        kind = getattr(token, 'kind', None)
        value = getattr(token, 'value', token)
        ExpressionError.__init__(self, f"unknown type {kind} for value `{value}`")


# 求值错误====================

class EvaluationError(ExpressionError):
    """后缀序列无法求值"""


class UndefinedSymbolError(EvaluationError):

    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"undefined symbol: `{symbol}`")


class ArityError(EvaluationError):

    def __init__(self, function, arg_count):
        self.function = function
        self.arg_count = arg_count
        super().__init__(f"function `{function}` does not accept {arg_count} argument(s)")


class StackUnderflowError(EvaluationError):

    def __init__(self, token, required, available):
        self.token = token
        self.required = required
        self.available = available
        super().__init__(
            f"insufficient operands for `{getattr(token, 'value', token)}`: "
            f"need {required}, have {available}"
        )


class InvalidArgumentError(EvaluationError):
    """函数参数的类型或取值无法处理"""

    def __init__(self, function, reason):
        self.function = function
        self.reason = reason
        super().__init__(f"invalid argument for `{function}`: {reason}")
