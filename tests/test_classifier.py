import math

import pytest

from fuzzycolor.fuzzy.core.types import ConfigurationError, InputError
from fuzzycolor.fuzzy.io.fz_parser import parse_fz_string
from fuzzycolor.fuzzy.model.classifier import Classifier

TWO_INPUTS = """\
snorm {snorm}
mode {mode}
var input a 0 1
mf a lo tri 0 0 1
mf a hi tri 0 1 1
var input b 0 1
mf b lo tri 0 0 1
mf b hi tri 0 1 1
var output out 0 1
mf out no tri 0 0 1
mf out yes tri 0 1 1
rule IF a is hi THEN out is yes
rule IF b is hi THEN out is yes
rule IF a is not hi AND b is lo THEN out is no weight 0.4
"""


def _two(snorm="max", mode="FIT"):
    return Classifier(parse_fz_string(TWO_INPUTS.format(snorm=snorm, mode=mode)))


def test_tie_resolved_by_declaration_order(tie_kb):
    res = Classifier(tie_kb).classify({"a": 5})
    assert res["out"]["strengths"] == {"no": pytest.approx(0.5), "yes": pytest.approx(0.5)}
    assert res["out"]["chosen"] == "yes"
    assert res["out"]["strength"] == pytest.approx(0.5)


def test_tie_resolved_by_explicit_priority(make_tie_kb):
    clf = Classifier(make_tie_kb("priority out no yes"))
    assert clf.classify({"a": 5})["out"]["chosen"] == "no"
    clf = Classifier(make_tie_kb("priority out yes no"))
    assert clf.classify({"a": 5})["out"]["chosen"] == "yes"


def test_clear_winner_ignores_priority(make_tie_kb):
    clf = Classifier(make_tie_kb("priority out no yes"))
    res = clf.classify({"a": 8})
    assert res["out"]["chosen"] == "yes"
    assert res["out"]["strength"] == pytest.approx(0.8)


def test_nothing_fired_returns_default(make_tie_kb):
    kb = make_tie_kb("default out no")
    for rule in kb.rules:
        rule.active = False
    res = Classifier(kb).classify({"a": 5})
    assert res["out"]["chosen"] == "no"
    assert res["out"]["strength"] == 0.0
    assert res["out"]["strengths"] == {}


def test_fit_vs_fati_aggregation():
    fit = _two(snorm="sum", mode="FIT").classify({"a": 0.5, "b": 0.5})
    fati = _two(snorm="sum", mode="FATI").classify({"a": 0.5, "b": 0.5})
    assert fit["out"]["strengths"]["yes"] == pytest.approx(0.5)
    assert fati["out"]["strengths"]["yes"] == pytest.approx(0.75)


def test_weight_and_hedge_not():
    res = _two().classify({"a": 0.0, "b": 0.0})
    # not hi(0) = 1, lo(0) = 1, weight 0.4
    assert res["out"]["strengths"] == {"no": pytest.approx(0.4)}
    assert res["out"]["chosen"] == "no"


def test_out_of_range_inputs_are_clamped(tie_kb):
    clf = Classifier(tie_kb)
    assert clf.crisp_inputs({"a": -3}) == {"a": 0.0}
    assert clf.crisp_inputs({"a": 42}) == {"a": 10.0}
    assert clf.classify({"a": 42})["out"]["chosen"] == "yes"


@pytest.mark.parametrize("bad", [{}, {"a": "5"}, {"a": None}, {"a": True}, {"a": math.nan}])
def test_invalid_inputs_rejected(tie_kb, bad):
    with pytest.raises(InputError):
        Classifier(tie_kb).classify(bad)


def test_explain_threshold_and_structure():
    clf = _two()
    res = clf.explain({"a": 0.2, "b": 0.9})
    assert [r["rule_index"] for r in res["out"]] == [0, 1, 2]
    r0 = res["out"][0]
    assert r0["alpha"] == pytest.approx(0.2)
    assert r0["antecedent"][0] == {"var": "a", "label": "hi", "hedges": [], "value": 0.2, "mu": pytest.approx(0.2)}
    assert res["out"][2]["antecedent"][0]["hedges"] == ["not"]

    res = clf.explain({"a": 0.2, "b": 0.9}, threshold=0.5)
    assert [r["rule_index"] for r in res["out"]] == [1]


def test_explain_fati_meta():
    res = _two(snorm="sum").explain({"a": 0.5, "b": 0.5}, mode="FATI")
    meta = res["out"][0]["_fati_label_strengths"]
    assert meta["yes"] == pytest.approx(0.75)


@pytest.mark.parametrize("mode", [1, "MAX", ""])
def test_unknown_inference_mode(tie_kb, mode):
    clf = Classifier(tie_kb)
    with pytest.raises(ConfigurationError):
        clf.explain({"a": 5}, mode=mode)
    with pytest.raises(ConfigurationError):
        clf.classify({"a": 5}, mode=mode)


def test_repeated_calls_are_identical(make_tie_kb):
    clf = Classifier(make_tie_kb("priority out no yes"))
    first = clf.classify({"a": 5})
    for _ in range(5):
        assert clf.classify({"a": 5}) == first
    assert first["out"]["chosen"] == "no"
