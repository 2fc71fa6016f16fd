"""公式模块 - 中缀公式编译缓存与求值"""
from .evaluator import FormulaEvaluator

__all__ = ['FormulaEvaluator']
