"""RPN表达式求值器 - 调用统一的Operators类"""
import logging

from config.config import EVALUATOR_CONFIG
from core.errors import (
    ArityError, EvaluationError, InvalidArgumentError, StackUnderflowError, UndefinedSymbolError
)
from core.operators import Operators, FUNCTIONS
from core.token_system import TokenKind

logger = logging.getLogger(__name__)

BINARY_OPERATORS = {
    TokenKind.PLUS: Operators.add,
    TokenKind.MINUS: Operators.sub,
    TokenKind.MULTIPLY: Operators.mul,
    TokenKind.DIVIDE: Operators.div,
    TokenKind.MODULO: Operators.mod,
    TokenKind.POWER: Operators.pow,
}

UNARY_OPERATORS = {
    TokenKind.UNARY_PLUS: Operators.pos,
    TokenKind.UNARY_MINUS: Operators.neg,
    TokenKind.NOT: Operators.logical_not,
}


class RPNEvaluator:
    """评估后缀(RPN)序列的值"""

    @staticmethod
    def evaluate(postfix, variables=None, constants=None, functions=None):
        """
        评估后缀序列，只通过游标接口(first/next)读取，不修改token
        Args:
            postfix: ShuntingYard 或任何提供 first()/next() 的后缀序列
            variables: 变量名 -> 值（标量、ndarray 或 Series）
            constants: 标识符 -> 值，默认 EVALUATOR_CONFIG['constants']
            functions: 函数名 -> (实现, 最少参数, 最多参数)，默认 FUNCTIONS
        Returns:
            标量结果为 float，向量结果为 ndarray 或 Series
        """
        variables = variables or {}
        constants = EVALUATOR_CONFIG['constants'] if constants is None else constants
        functions = FUNCTIONS if functions is None else functions
        stack = []

        token = postfix.first()
        while token is not None:
            kind = token.kind

            if kind is TokenKind.NUMBER:
                stack.append(token.value)
            elif kind is TokenKind.VARIABLE:
                if token.value not in variables:
                    raise UndefinedSymbolError(token.value)
                stack.append(variables[token.value])
            elif kind is TokenKind.IDENTIFIER:
                if token.value not in constants:
                    raise UndefinedSymbolError(token.value)
                stack.append(constants[token.value])
            elif kind in BINARY_OPERATORS:
                RPNEvaluator._require(stack, token, 2)
                operand2 = stack.pop()
                operand1 = stack.pop()
                stack.append(BINARY_OPERATORS[kind](operand1, operand2))
            elif kind in UNARY_OPERATORS:
                RPNEvaluator._require(stack, token, 1)
                stack.append(UNARY_OPERATORS[kind](stack.pop()))
            elif kind is TokenKind.FUNCTION:
                stack.append(RPNEvaluator._call(token, stack, functions))
            else:
                raise EvaluationError(f"token `{token.value}` cannot appear in postfix output")

            token = postfix.next()

        postfix.reset()

        if len(stack) != 1:
            logger.debug(f"Stack has {len(stack)} elements after evaluation, expected 1")
            raise EvaluationError(f"stack has {len(stack)} elements after evaluation, expected 1")
        return stack[0]

    @staticmethod
    def _require(stack, token, required):
        if len(stack) < required:
            raise StackUnderflowError(token, required, len(stack))

    @staticmethod
    def _call(token, stack, functions):
        if token.value not in functions:
            raise UndefinedSymbolError(token.value)
        func, min_args, max_args = functions[token.value]
        argc = token.arg_count
        if argc < min_args or (max_args is not None and argc > max_args):
            raise ArityError(token.value, argc)

        RPNEvaluator._require(stack, token, argc)
        args = stack[len(stack) - argc:]
        del stack[len(stack) - argc:]
        try:
            return func(*args)
        except (TypeError, ValueError, OverflowError) as e:
            # 如 round(2, inf)：位数参数无法转换为整数
            raise InvalidArgumentError(token.value, e) from e
