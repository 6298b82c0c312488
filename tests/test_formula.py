import pandas as pd
import pytest

from bootfit.models.formula import Formula


def test_parse_basic():
    f = Formula.parse("year ~ funny + celebrity")
    assert f.response == "year"
    assert f.predictors == ("funny", "celebrity")
    assert str(f) == "year ~ funny + celebrity"


@pytest.mark.parametrize("text", ["year", "~ x", "y ~", "y ~ x ~ z", "y ~ . + x"])
def test_parse_invalid(text: str):
    with pytest.raises(ValueError):
        Formula.parse(text)


def test_resolve_dot():
    frame = pd.DataFrame({"a": [1], "y": [2], "b": [3]})
    f = Formula.parse("y ~ .").resolve(frame)
    assert f.predictors == ("a", "b")


def test_resolve_missing():
    frame = pd.DataFrame({"x": [1], "y": [2]})
    with pytest.raises(KeyError):
        Formula.parse("y ~ z").resolve(frame)
    with pytest.raises(KeyError):
        Formula.parse("w ~ x").resolve(frame)


def test_to_patsy_quotes_non_identifiers():
    f = Formula("y", ("x", "show product"))
    assert f.to_patsy() == 'y ~ x + Q("show product")'
