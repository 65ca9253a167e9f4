import pytest

from fuzzycolor.fuzzy.core.types import ConfigurationError
from fuzzycolor.fuzzy.io.fz_parser import parse_fz_string
from fuzzycolor.fuzzy.model.engine import MamdaniEngine
from fuzzycolor.fuzzy.model.presets import load_result_kb

SINGLE = """\
defuzz {method}
var input a 0 1
mf a lo tri 0 0 1
mf a hi tri 0 1 1
var output out 0 1
mf out no tri 0 0 1
mf out yes tri 0 1 1
rule IF a is hi THEN out is yes
"""


def _single(method="centroid"):
    return MamdaniEngine(parse_fz_string(SINGLE.format(method=method)))


@pytest.mark.parametrize("x, y, expected", [
    (1700, 50, 50.0),
    (0, 0, 0.0),
    (3400, 100, 100.0),
    (850, 25, 25.0),
])
def test_result_preset(x, y, expected):
    eng = MamdaniEngine(load_result_kb())
    assert eng.predict({"x": x, "y": y})["result"] == pytest.approx(expected)


def test_result_preset_clamps_inputs():
    eng = MamdaniEngine(load_result_kb())
    assert eng.predict({"x": 5000, "y": 150})["result"] == pytest.approx(100.0)
    assert eng.predict({"x": -1, "y": -1})["result"] == pytest.approx(0.0)


def test_centroid_of_single_shoulder():
    assert _single().predict({"a": 1.0})["out"] == pytest.approx(0.67, abs=1e-3)


def test_nothing_fired_gives_domain_midpoint():
    assert _single().predict({"a": 0.0})["out"] == pytest.approx(0.5)
    assert _single("weighted_average").predict({"a": 0.0})["out"] == pytest.approx(0.5)


def test_mom_and_bisector():
    assert _single("mom").predict({"a": 1.0})["out"] == pytest.approx(1.0)
    # połowa pola trójkąta tri(0, 1, 1) leży na prawo od 1/sqrt(2)
    assert _single("bisector").predict({"a": 1.0})["out"] == pytest.approx(0.71, abs=0.02)


def test_method_override_and_unknown_method():
    eng = _single()
    assert eng.predict({"a": 1.0}, method="weighted_average")["out"] == pytest.approx(1.0)
    with pytest.raises(ConfigurationError):
        eng.predict({"a": 1.0}, method="median")


def test_evaluate_returns_values_and_labels():
    values, labels = _single().evaluate({"a": 0.5})
    assert 0.0 < values["out"] < 1.0
    assert labels["out"]["chosen"] == "yes"
    assert labels["out"]["strength"] == pytest.approx(0.5)
