import pytest

from fuzzycolor.fuzzy.io.fz_parser import parse_fz_string

TIE_FZ = """\
name tie
var input a 0 10
mf a lo tri 0 0 10
mf a hi tri 0 10 10

var output out 0 1
mf out yes tri 0 1 1
mf out no tri 0 0 1
{extra}
rule IF a is lo THEN out is no
rule IF a is hi THEN out is yes
"""


@pytest.fixture
def tie_kb():
    """Dwie reguły z równą siłą dla a=5 (lo=hi=0.5); remis rozstrzyga kolejność deklaracji."""
    return parse_fz_string(TIE_FZ.format(extra=""))


@pytest.fixture
def make_tie_kb():
    def _make(extra: str = ""):
        return parse_fz_string(TIE_FZ.format(extra=extra))
    return _make
