import pytest

from fuzzycolor.fuzzy.core.mfs import Gaussian, Triangular
from fuzzycolor.fuzzy.core.rule import Proposition, Rule
from fuzzycolor.fuzzy.core.types import ConfigurationError
from fuzzycolor.fuzzy.io.fz_parser import parse_fz_string
from fuzzycolor.fuzzy.model.knowledge import KnowledgeBase, find_dead_zones, validate_kb
from fuzzycolor.fuzzy.model.presets import PRESETS
from fuzzycolor.fuzzy.model.variable import InputVariable, OutputVariable


def _small_kb() -> KnowledgeBase:
    kb = KnowledgeBase(name="small")
    x = InputVariable("x", 0.0, 10.0)
    x.add_term("lo", Triangular(0.0, 0.0, 10.0))
    x.add_term("hi", Triangular(0.0, 10.0, 10.0))
    out = OutputVariable("out", 0.0, 1.0)
    out.add_term("no", Triangular(0.0, 0.0, 1.0))
    out.add_term("yes", Triangular(0.0, 1.0, 1.0))
    kb.add_input(x)
    kb.add_output(out)
    kb.add_rule(Rule([Proposition("x", "hi")], ("out", "yes")))
    return kb


def test_valid_kb_passes():
    kb = _small_kb()
    assert kb.validate() is kb


def test_dead_zone_between_terms():
    var = InputVariable("x", 0.0, 10.0)
    var.add_term("lo", Triangular(0.0, 0.0, 4.0))
    var.add_term("hi", Triangular(6.0, 10.0, 10.0))
    assert find_dead_zones(var) == [4.0, 5.0, 6.0]


def test_single_point_gap_is_detected():
    var = InputVariable("x", 0.0, 10.0)
    var.add_term("lo", Triangular(0.0, 0.0, 5.0))
    var.add_term("hi", Triangular(5.0, 10.0, 10.0))
    assert find_dead_zones(var) == [5.0]


def test_gap_between_gaussians_is_detected():
    var = InputVariable("a", 0.0, 200.0)
    for label, mean in (("lo", 0.0), ("mid", 100.0), ("hi", 200.0)):
        var.add_term(label, Gaussian(mean, 1.0))
    dead = find_dead_zones(var)
    assert any(45.0 < x < 55.0 for x in dead)
    assert any(145.0 < x < 155.0 for x in dead)
    assert all(mf.mu(50.0) == 0.0 for mf in var.terms.values())


def test_gaussian_gap_fails_at_setup():
    src = """
var input a 0 200
mf a lo gauss 0 1
mf a mid gauss 100 1
mf a hi gauss 200 1
var output out 0 1
mf out yes tri 0 1 1
mf out no tri 0 0 1
rule IF a is mid THEN out is yes
"""
    with pytest.raises(ConfigurationError, match="luka"):
        parse_fz_string(src)


def test_overlapping_gaussians_pass():
    var = InputVariable("a", 0.0, 15.0)
    for label, mean in (("low", 0.0), ("mid", 7.5), ("high", 15.0)):
        var.add_term(label, Gaussian(mean, 2.25))
    assert find_dead_zones(var) == []


def test_gap_fails_at_setup():
    src = """
var input x 0 10
mf x lo tri 0 0 4
mf x hi tri 6 10 10
var output out 0 1
mf out yes tri 0 1 1
rule IF x is lo THEN out is yes
"""
    with pytest.raises(ConfigurationError, match="luka"):
        parse_fz_string(src)


def test_output_gap_fails_at_setup():
    kb = _small_kb()
    kb.outputs["out"].terms = {"yes": Triangular(0.5, 1.0, 1.0)}
    with pytest.raises(ConfigurationError):
        validate_kb(kb)


def test_rule_with_undeclared_variable():
    kb = _small_kb()
    kb.add_rule(Rule([Proposition("z", "lo")], ("out", "yes")))
    with pytest.raises(ConfigurationError, match="nieznana zmienna 'z'"):
        validate_kb(kb)


def test_rule_with_undeclared_term():
    kb = _small_kb()
    kb.add_rule(Rule([Proposition("x", "medium")], ("out", "yes")))
    with pytest.raises(ConfigurationError):
        validate_kb(kb)


def test_rule_with_unknown_hedge():
    kb = _small_kb()
    kb.add_rule(Rule([Proposition("x", "lo", ("kinda",))], ("out", "yes")))
    with pytest.raises(ConfigurationError):
        validate_kb(kb)


def test_unknown_priority_label():
    kb = _small_kb()
    kb.outputs["out"].priority = ["maybe"]
    with pytest.raises(ConfigurationError):
        validate_kb(kb)


def test_unknown_norm():
    kb = _small_kb()
    kb.tnorm = "avg"
    with pytest.raises(ConfigurationError):
        validate_kb(kb)


@pytest.mark.parametrize("name", sorted(PRESETS))
def test_presets_cover_their_domains(name):
    kb = parse_fz_string(PRESETS[name])
    for var in list(kb.inputs.values()) + list(kb.outputs.values()):
        assert find_dead_zones(var) == []
        step = (var.vmax - var.vmin) / 300.0
        for k in range(301):
            x = var.vmin + k * step
            assert any(mf.mu(x) > 0.0 for mf in var.terms.values()), (var.name, x)
