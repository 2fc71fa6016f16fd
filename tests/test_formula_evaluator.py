"""Tests for the compile-and-evaluate facade."""

import numpy as np
import pandas as pd
import pytest

from core import ExpressionSyntaxError, UnmatchedParenError
from formula import FormulaEvaluator


def test_scalar_expression():
    assert FormulaEvaluator().evaluate("2 + 3 * 4") == pytest.approx(14.0)


def test_dataframe_columns_become_variables():
    frame = pd.DataFrame({"close": [10.0, 11.0], "open": [9.0, 12.0]}, index=["d1", "d2"])
    result = FormulaEvaluator().evaluate("($close - $open) / $open", frame)
    assert isinstance(result, pd.Series)
    assert list(result.index) == ["d1", "d2"]
    np.testing.assert_allclose(result.values, [1 / 9, -1 / 12])


def test_dict_arrays_align_to_series_index():
    data = {"a": pd.Series([1.0, 2.0], index=[5, 6]), "b": np.array([10.0, 20.0])}
    result = FormulaEvaluator().evaluate("$a + $b", data)
    assert list(result.index) == [5, 6]
    np.testing.assert_allclose(result.values, [11.0, 22.0])


def test_dict_lists_return_series():
    result = FormulaEvaluator().evaluate("$x ^ 2", {"x": [1, 2, 3]})
    assert isinstance(result, pd.Series)
    np.testing.assert_allclose(result.values, [1.0, 4.0, 9.0])


def test_extra_constants_override_defaults():
    evaluator = FormulaEvaluator()
    assert evaluator.evaluate("rate * 100", constants={"rate": 0.05}) == pytest.approx(5.0)
    assert evaluator.evaluate("pi", constants={"pi": 3}) == pytest.approx(3.0)


def test_compile_cache_hits_and_eviction():
    evaluator = FormulaEvaluator(cache_size=2)
    first = evaluator.compile("1 + 1")
    assert evaluator.compile("1 + 1") is first
    evaluator.compile("2 + 2")
    evaluator.compile("3 + 3")
    assert evaluator.cache_info == {"hits": 1, "misses": 3, "size": 2}
    assert evaluator.compile("1 + 1") is not first

    evaluator.clear_cache()
    assert evaluator.cache_info == {"hits": 0, "misses": 0, "size": 0}


def test_parse_errors_propagate_and_are_not_cached():
    evaluator = FormulaEvaluator()
    with pytest.raises(UnmatchedParenError):
        evaluator.evaluate("(1 + 2")
    with pytest.raises(ExpressionSyntaxError):
        evaluator.evaluate("1 # 2")
    assert evaluator.cache_info["size"] == 0


def test_variables_lists_referenced_names():
    assert FormulaEvaluator().variables("$b * max($a, $b) + pi") == ["a", "b"]


def test_variables_leaves_cached_postfix_at_first_token():
    evaluator = FormulaEvaluator()
    postfix = evaluator.compile("$a + $b")
    postfix.next()
    assert evaluator.variables("$a + $b") == ["a", "b"]
    assert postfix.key() == 0


def test_custom_sigil():
    assert FormulaEvaluator(sigil="@").evaluate("@x + 1", {"x": 1}) == pytest.approx(2.0)


@pytest.mark.parametrize("sigil", ["x", "+", "@@"])
def test_invalid_sigil_is_rejected(sigil):
    with pytest.raises(ValueError):
        FormulaEvaluator(sigil=sigil)


def test_unsupported_data_type():
    with pytest.raises(TypeError):
        FormulaEvaluator().evaluate("1", data=[1, 2])
