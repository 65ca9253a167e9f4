import pytest

from fuzzycolor.fuzzy.core import norms
from fuzzycolor.fuzzy.core.hedges import apply_hedges
from fuzzycolor.fuzzy.core.types import ConfigurationError


def test_tnorms():
    assert norms.t_min([0.3, 0.7]) == pytest.approx(0.3)
    assert norms.t_prod([0.3, 0.7]) == pytest.approx(0.21)
    assert norms.t_lukasiewicz([0.3, 0.7]) == pytest.approx(0.0)
    assert norms.t_einstein([1.0, 0.5]) == pytest.approx(0.5)
    assert norms.t_hamacher([0.0, 0.0]) == 0.0
    # element neutralny dla pustej listy
    assert norms.t_min([]) == 1.0
    assert norms.t_prod([]) == 1.0


def test_snorms():
    assert norms.s_max([0.2, 0.6]) == pytest.approx(0.6)
    assert norms.SNORMS["sum"]([0.5, 0.5]) == pytest.approx(0.75)
    assert norms.s_bsum([0.7, 0.6]) == pytest.approx(1.0)
    assert norms.s_drastic([0.0, 0.4]) == pytest.approx(0.4)
    assert norms.s_drastic([0.2, 0.4]) == 1.0
    assert norms.s_max([]) == 0.0


def test_hedges_apply_right_to_left():
    assert apply_hedges(("very",), 0.5) == pytest.approx(0.25)
    assert apply_hedges(("not", "very"), 0.5) == pytest.approx(0.75)
    assert apply_hedges(("extremely",), 0.25) == pytest.approx(0.125)
    assert apply_hedges(("seldom",), 0.5) == pytest.approx(0.5)
    assert apply_hedges(("any",), 0.0) == 1.0
    assert apply_hedges((), 0.4) == 0.4


def test_unknown_hedge():
    with pytest.raises(ConfigurationError):
        apply_hedges(("kinda",), 0.5)
