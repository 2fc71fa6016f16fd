"""core/operators.py"""
from functools import reduce

import numpy as np
import pandas as pd
from scipy import stats


def _finalize(result):
    """0维结果转成Python float，Series/ndarray原样返回"""
    if isinstance(result, pd.Series):
        return result
    if np.ndim(result) == 0:
        return float(result)
    return result


class Operators:
    """所有操作符和内置函数的静态方法集合，支持标量、ndarray 和 Series"""

    # 二元操作符========================================

    @staticmethod
    def add(operand1, operand2):
        return _finalize(np.add(operand1, operand2))

    @staticmethod
    def sub(operand1, operand2):
        return _finalize(np.subtract(operand1, operand2))

    @staticmethod
    def mul(operand1, operand2):
        with np.errstate(over='ignore', invalid='ignore'):
            return _finalize(np.multiply(operand1, operand2))

    @staticmethod
    def div(operand1, operand2):
        """除法，除零按IEEE得到 inf/nan"""
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            return _finalize(np.true_divide(operand1, operand2))

    @staticmethod
    def mod(operand1, operand2):
        """取模，结果符号与除数相同"""
        with np.errstate(divide='ignore', invalid='ignore'):
            return _finalize(np.mod(operand1, operand2))

    @staticmethod
    def pow(operand1, operand2):
        with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
            return _finalize(np.float_power(operand1, operand2))

    # 一元操作符====================

    @staticmethod
    def pos(operand):
        return _finalize(np.positive(operand))

    @staticmethod
    def neg(operand):
        return _finalize(np.negative(operand))

    @staticmethod
    def logical_not(operand):
        """逻辑非：0 返回1，否则返回0"""
        if isinstance(operand, (pd.Series, np.ndarray)):
            return (operand == 0).astype(float)
        return float(operand == 0)

    # 内置函数====================

    @staticmethod
    def abs(operand):
        return _finalize(np.abs(operand))

    @staticmethod
    def sign(operand):
        return _finalize(np.sign(operand))

    @staticmethod
    def sqrt(operand):
        with np.errstate(invalid='ignore'):
            return _finalize(np.sqrt(operand))

    @staticmethod
    def exp(operand):
        with np.errstate(over='ignore'):
            return _finalize(np.exp(operand))

    @staticmethod
    def log(operand, base=None):
        """自然对数；给出 base 时为 log_base(x)"""
        with np.errstate(divide='ignore', invalid='ignore'):
            result = np.log(operand)
            if base is not None:
                result = np.true_divide(result, np.log(base))
        return _finalize(result)

    @staticmethod
    def floor(operand):
        return _finalize(np.floor(operand))

    @staticmethod
    def ceil(operand):
        return _finalize(np.ceil(operand))

    @staticmethod
    def round(operand, digits=0):
        return _finalize(np.round(operand, int(digits)))

    @staticmethod
    def sin(operand):
        return _finalize(np.sin(operand))

    @staticmethod
    def cos(operand):
        return _finalize(np.cos(operand))

    @staticmethod
    def tan(operand):
        return _finalize(np.tan(operand))

    @staticmethod
    def min(*operands):
        return _finalize(reduce(np.minimum, operands))

    @staticmethod
    def max(*operands):
        return _finalize(reduce(np.maximum, operands))

    @staticmethod
    def sum(*operands):
        return _finalize(reduce(np.add, operands))

    @staticmethod
    def mean(*operands):
        return _finalize(np.true_divide(reduce(np.add, operands), len(operands)))

    @staticmethod
    def hypot(operand1, operand2):
        return _finalize(np.hypot(operand1, operand2))

    @staticmethod
    def clip(operand, lower, upper):
        return _finalize(np.clip(operand, lower, upper))

    @staticmethod
    def csrank(operand):
        """横截面排名（百分位）"""
        if isinstance(operand, pd.Series):
            if isinstance(operand.index, pd.MultiIndex):
                return operand.groupby(level=1).rank(pct=True)
            return operand.rank(pct=True)
        if isinstance(operand, np.ndarray) and operand.ndim > 0:
            return stats.rankdata(operand, method='average') / len(operand)
        return 1.0


# 函数名 -> (实现, 最少参数, 最多参数；None表示不限)
FUNCTIONS = {
    'abs': (Operators.abs, 1, 1),
    'sign': (Operators.sign, 1, 1),
    'sqrt': (Operators.sqrt, 1, 1),
    'exp': (Operators.exp, 1, 1),
    'log': (Operators.log, 1, 2),
    'floor': (Operators.floor, 1, 1),
    'ceil': (Operators.ceil, 1, 1),
    'round': (Operators.round, 1, 2),
    'sin': (Operators.sin, 1, 1),
    'cos': (Operators.cos, 1, 1),
    'tan': (Operators.tan, 1, 1),
    'min': (Operators.min, 1, None),
    'max': (Operators.max, 1, None),
    'sum': (Operators.sum, 1, None),
    'mean': (Operators.mean, 1, None),
    'pow': (Operators.pow, 2, 2),
    'hypot': (Operators.hypot, 2, 2),
    'clip': (Operators.clip, 3, 3),
    'csrank': (Operators.csrank, 1, 1),
}
