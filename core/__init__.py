"""核心模块 - Token系统、词法扫描、调度场转换、RPN求值器和操作符"""
from .token_system import (
    TokenKind, Token, Associativity, ParserState, OperatorInfo,
    SYMBOL_TO_KIND, OPERATOR_DEFINITIONS, TOKEN_KIND_NAMES
)
from .errors import (
    ExpressionError, ExpressionSyntaxError, MalformedExpressionError,
    MisplacedCommaError, UnbalancedParenError, UnmatchedParenError,
    UnknownTokenError, MalformedFunctionCallError, EvaluationError,
    UndefinedSymbolError, ArityError, StackUnderflowError, InvalidArgumentError
)
from .sequence import RepositionableSequence
from .tokenizer import Tokenizer
from .shunting_yard import ShuntingYard
from .rpn_evaluator import RPNEvaluator
from .operators import Operators, FUNCTIONS

__all__ = [
    'TokenKind', 'Token', 'Associativity', 'ParserState', 'OperatorInfo',
    'SYMBOL_TO_KIND', 'OPERATOR_DEFINITIONS', 'TOKEN_KIND_NAMES',
    'ExpressionError', 'ExpressionSyntaxError', 'MalformedExpressionError',
    'MisplacedCommaError', 'UnbalancedParenError', 'UnmatchedParenError',
    'UnknownTokenError', 'MalformedFunctionCallError', 'EvaluationError',
    'UndefinedSymbolError', 'ArityError', 'StackUnderflowError', 'InvalidArgumentError',
    'RepositionableSequence', 'Tokenizer', 'ShuntingYard',
    'RPNEvaluator', 'Operators', 'FUNCTIONS'
]
