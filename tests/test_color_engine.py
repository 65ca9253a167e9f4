import pytest

from fuzzycolor.fuzzy.core.types import ConfigurationError, InputError
from fuzzycolor.fuzzy.io.fz_parser import parse_fz_string
from fuzzycolor.fuzzy.model.color import ColorEngine
from fuzzycolor.fuzzy.model.presets import color_source, load_color_kb, load_result_kb

BRIGHTNESS_ORDER = ["dark", "dim", "medium", "bright", "brilliant"]


@pytest.fixture(scope="module")
def engine():
    return ColorEngine(0)


def test_black(engine):
    engine.set_color(0, 0, 0)
    assert engine.color_label == "black"
    assert engine.color_strength == pytest.approx(1.0)
    assert engine.luminosity_label == "dark"
    assert engine.luminosity_strength == pytest.approx(1.0)
    assert engine.color_degree < 8


def test_white(engine):
    engine.set_color(15, 15, 15)
    assert engine.color_label == "white"
    assert engine.luminosity_label == "brilliant"
    assert engine.color_degree > 4085


def test_pure_red(engine):
    engine.set_color(15, 0, 0)
    assert engine.color_label == "red"
    assert engine.color_strength == pytest.approx(1.0)
    assert engine.luminosity_label == "medium"
    assert engine.labels()["color"] == "red 1.000"


def test_orange(engine):
    engine.set_color(15, 7.5, 0)
    assert engine.color_label == "orange"
    assert engine.color_strength == pytest.approx(1.0)


def test_uncovered_combination_falls_back_to_default(engine):
    engine.set_color(7.5, 0, 0)
    assert engine.color_label == "unknown"
    assert engine.color_strength == 0.0
    assert engine.color_degree == pytest.approx(2047.5)
    assert engine.luminosity_label == "dim"


def test_out_of_range_channels_are_clamped(engine):
    engine.set_inputs(-5, 20, 7)
    assert engine.inputs == (0.0, 15.0, 7.0)
    clamped = (engine.color_label, engine.luminosity_label, engine.color_degree)
    engine.set_inputs(0, 15, 7)
    assert (engine.color_label, engine.luminosity_label, engine.color_degree) == clamped


def test_outputs_depend_only_on_latest_inputs(engine):
    engine.set_color(15, 15, 15)
    engine.set_color(0, 0, 0)
    assert engine.color_label == "black"


@pytest.mark.parametrize("values", [(1, 2), (1, 2, 3, 4), ("a", 0, 0), (None, 0, 0), (True, 0, 0)])
def test_invalid_inputs(values):
    eng = ColorEngine(0)
    with pytest.raises(InputError):
        eng.set_inputs(*values)


def test_outputs_before_any_input():
    eng = ColorEngine(0)
    assert eng.inputs is None
    with pytest.raises(InputError):
        eng.color_label
    with pytest.raises(InputError):
        eng.explain()


def test_unsupported_mode():
    with pytest.raises(ConfigurationError):
        ColorEngine(2)


def test_gaussian_mode_pure_colors():
    eng = ColorEngine(1)
    eng.set_color(15, 0, 0)
    assert eng.color_label == "red"
    assert eng.color_strength == pytest.approx(1.0)
    eng.set_color(0, 0, 0)
    assert eng.color_label == "black"
    assert eng.luminosity_label == "dark"


@pytest.mark.parametrize("mode", [0, 1])
def test_luminosity_monotonic_on_grey_diagonal(mode):
    eng = ColorEngine(mode)
    ranks = []
    for k in range(61):
        t = k * 0.25
        eng.set_color(t, t, t)
        ranks.append(BRIGHTNESS_ORDER.index(eng.luminosity_label))
    assert ranks == sorted(ranks)
    assert ranks[0] == 0 and ranks[-1] == len(BRIGHTNESS_ORDER) - 1


@pytest.mark.parametrize("x, y, expected", [
    (1700, 50, 50.0),
    (0, 0, 0.0),
    (3400, 100, 100.0),
])
def test_evaluate(engine, x, y, expected):
    assert engine.evaluate(x, y) == pytest.approx(expected)


def test_evaluate_does_not_touch_color_snapshot(engine):
    engine.set_color(15, 0, 0)
    engine.evaluate(1700, 50)
    assert engine.inputs == (15.0, 0.0, 0.0)
    assert engine.color_label == "red"


def test_evaluate_rejects_non_numeric(engine):
    with pytest.raises(InputError):
        engine.evaluate("a", 1)


def test_configure_custom_color_base():
    eng = ColorEngine(0)
    eng.set_color(15, 7, 0)
    assert eng.color_label == "orange"
    assert eng.color_strength == pytest.approx(0.9)

    eng.configure(parse_fz_string(color_source(0).replace("tri 2.5 7.5 12.5", "tri 2.5 7 12.5")))
    assert eng.inputs is None
    eng.set_color(15, 7, 0)
    assert eng.color_label == "orange"
    assert eng.color_strength == pytest.approx(1.0)
    # baza numeryczna zostaje bez zmian
    assert eng.evaluate(1700, 50) == pytest.approx(50.0)


def test_configure_rejects_wrong_bases():
    eng = ColorEngine(0)
    with pytest.raises(ConfigurationError):
        eng.configure(load_result_kb())

    three_inputs = load_result_kb()
    three_inputs.add_input(load_color_kb(0).inputs["red"])
    with pytest.raises(ConfigurationError):
        eng.configure(load_color_kb(0), three_inputs)


def test_explain_lists_fired_rules(engine):
    engine.set_color(15, 0, 0)
    res = engine.explain(threshold=0.5)
    assert [r["consequent"]["label"] for r in res["ledColor"]] == ["red"]
    assert [r["consequent"]["label"] for r in res["luminosity"]] == ["medium"]


@pytest.mark.parametrize("mode", [0, 1])
def test_repeated_identical_calls_give_identical_results(mode):
    eng = ColorEngine(mode)
    samples = [(15, 7.5, 0), (3.75, 3.75, 3.75), (7.5, 0, 0), (10, 12.5, 5)]
    for rgb in samples:
        eng.set_inputs(*rgb)
        first = (eng.labels(), eng.color_degree, eng.luminosity)
        for _ in range(3):
            eng.set_color(15, 15, 15)
            eng.set_inputs(*rgb)
            assert (eng.labels(), eng.color_degree, eng.luminosity) == first
    values = {eng.evaluate(850, 25) for _ in range(5)}
    assert len(values) == 1


def test_tie_on_grey_diagonal_is_stable():
    # t = 3.75 leży w połowie między low i mid: dark, dim i medium mają tę samą siłę
    eng = ColorEngine(0)
    eng.set_inputs(3.75, 3.75, 3.75)
    strengths = eng._labels["luminosity"]["strengths"]
    assert strengths["dark"] == pytest.approx(strengths["medium"])
    for _ in range(5):
        eng.set_inputs(3.75, 3.75, 3.75)
        assert eng.luminosity_label == "dark"
