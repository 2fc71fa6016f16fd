import logging
from collections import OrderedDict
from typing import Union, Dict, Optional, Any, List

import numpy as np
import pandas as pd

from config.config import EVALUATOR_CONFIG, TOKENIZER_CONFIG, is_valid_sigil
from core import RPNEvaluator, ShuntingYard, TokenKind

logger = logging.getLogger(__name__)


class FormulaEvaluator:
    """中缀公式的编译缓存与求值入口"""

    def __init__(self, cache_size=None, sigil=None):
        self.rpn_evaluator = RPNEvaluator
        self.cache_size = cache_size or EVALUATOR_CONFIG['cache_size']
        self.sigil = sigil or TOKENIZER_CONFIG['variable_sigil']
        if not is_valid_sigil(self.sigil):
            raise ValueError(f"Invalid variable sigil: {self.sigil!r}")
        # 使用有限大小的OrderedDict实现LRU缓存
        self._compiled_cache = OrderedDict()
        self._cache_hits = 0
        self._cache_misses = 0

    def _manage_cache(self):
        """管理缓存大小"""
        while len(self._compiled_cache) > self.cache_size:
            # 删除最久未使用的条目
            self._compiled_cache.popitem(last=False)

    def clear_cache(self):
        """清空缓存（供外部调用）"""
        self._compiled_cache.clear()
        logger.info(f"Cache cleared. Hits: {self._cache_hits}, Misses: {self._cache_misses}")
        self._cache_hits = 0
        self._cache_misses = 0

    @property
    def cache_info(self) -> Dict[str, int]:
        return {
            'hits': self._cache_hits,
            'misses': self._cache_misses,
            'size': len(self._compiled_cache),
        }

    def compile(self, expression: str) -> ShuntingYard:
        """解析表达式为后缀序列；解析错误直接抛出，不会进入缓存"""
        if expression in self._compiled_cache:
            # 移到末尾（最近使用）
            self._compiled_cache.move_to_end(expression)
            self._cache_hits += 1
            logger.debug(f"Cache hit for expression: {expression[:50]}")
            return self._compiled_cache[expression]

        self._cache_misses += 1
        postfix = ShuntingYard(expression, sigil=self.sigil)
        self._compiled_cache[expression] = postfix
        self._manage_cache()
        return postfix

    def variables(self, expression: str) -> List[str]:
        """表达式引用的变量名（去重、排序）"""
        postfix = self.compile(expression)
        names = set()
        token = postfix.first()
        while token is not None:
            if token.kind is TokenKind.VARIABLE:
                names.add(token.value)
            token = postfix.next()
        postfix.reset()
        return sorted(names)

    def evaluate(self, expression: str, data: Union[pd.DataFrame, Dict, None] = None,
                 constants: Optional[Dict[str, Any]] = None):
        """
        Args:
            expression: 中缀表达式字符串
            data: 变量数据（DataFrame的列或字典）
            constants: 额外的命名常数，覆盖默认常数
        Returns:
            标量结果为 float，向量结果为与数据索引对齐的 Series
        """
        postfix = self.compile(expression)
        variables = self._prepare_data(data)

        merged_constants = dict(EVALUATOR_CONFIG['constants'])
        if constants:
            merged_constants.update(constants)

        result = self.rpn_evaluator.evaluate(postfix, variables, merged_constants)
        return self._convert_result(result, data)

    def _prepare_data(self, data: Union[pd.DataFrame, Dict, None]) -> Dict[str, Any]:
        """
        准备数据为字典格式 - 保持Series引用不变，避免重复创建
        """
        if data is None:
            return {}
        if isinstance(data, pd.DataFrame):
            return {col: data[col] for col in data.columns}
        if isinstance(data, dict):
            ref_index = self._reference_index(data)
            prepared = {}
            for key, value in data.items():
                if isinstance(value, (list, tuple)):
                    value = np.asarray(value, dtype=float)
                if isinstance(value, np.ndarray) and ref_index is not None and len(value) == len(ref_index):
                    prepared[key] = pd.Series(value, index=ref_index)
                else:
                    prepared[key] = value  # 直接引用，不复制
            return prepared
        raise TypeError(f"Unsupported data type: {type(data)}")

    @staticmethod
    def _reference_index(data: Dict) -> Optional[pd.Index]:
        for value in data.values():
            if isinstance(value, pd.Series):
                return value.index
        return None

    def _convert_result(self, result: Any, original_data: Union[pd.DataFrame, Dict, None]):
        """
        将评估结果转换为float或Series
        """
        if isinstance(result, pd.Series):
            return result
        if isinstance(result, np.ndarray) and result.ndim > 0:
            if isinstance(original_data, pd.DataFrame):
                index = original_data.index
            elif isinstance(original_data, dict):
                index = self._reference_index(original_data)
            else:
                index = None
            if index is not None and len(index) != len(result):
                index = None
            return pd.Series(result, index=index)
        return float(result)
