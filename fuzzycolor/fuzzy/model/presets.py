"""
Wbudowane bazy wiedzy w formacie .fz.

Tryb (selektor z konstruktora ColorEngine) wybiera kształt etykiet wejść RGB:
  0 – trójkąty:  low (0 0 5), mid (2.5 7.5 12.5), high (10 15 15)
  1 – gaussy:    low/mid/high o średnich 0 / 7.5 / 15, sigma 2.25
Inne tryby nie są zaimplementowane (ConfigurationError).

Wyjście `ledColor` to 12-bitowy kod RGB (0x000..0xFFF = 0..4095) z 15 nazwanymi
kolorami; `luminosity` (0..100) wynika z sumy poziomów kanałów (low=0, mid=1, high=2).
"""
from __future__ import annotations
from itertools import product
from typing import Dict, List, Tuple

from ..core.types import ConfigurationError
from ..io.fz_parser import parse_fz_string
from .knowledge import KnowledgeBase

CHANNELS = ("red", "green", "blue")
LEVELS = ("low", "mid", "high")
SIGMA = 2.25

_INPUT_TERMS = {
    0: [("low", "tri 0 0 5"), ("mid", "tri 2.5 7.5 12.5"), ("high", "tri 10 15 15")],
    1: [("low", f"gauss 0 {SIGMA}"), ("mid", f"gauss 7.5 {SIGMA}"), ("high", f"gauss 15 {SIGMA}")],
}

# (etykieta, a, b, c) – wierzchołek b to kod koloru w 0x000..0xFFF
COLOR_TERMS: List[Tuple[str, int, int, int]] = [
    ("black", 0, 0, 8),
    ("blue", 7, 15, 119),
    ("ocean", 112, 127, 198),
    ("green", 168, 240, 244),
    ("turquoise", 243, 247, 251),
    ("cyan", 250, 255, 1225),
    ("purple", 837, 1807, 1872),
    ("grey", 1846, 1911, 1987),
    ("lime", 1956, 2032, 3162),
    ("red", 2710, 3840, 3844),
    ("raspberry", 3843, 3847, 3851),
    ("magenta", 3850, 3855, 3916),
    ("orange", 3891, 3952, 4032),
    ("yellow", 4000, 4080, 4089),
    ("white", 4085, 4095, 4095),
]

# (red, green, blue) -> kolor
COLOR_RULES: List[Tuple[str, str, str, str]] = [
    ("high", "low", "low", "red"),
    ("high", "mid", "low", "orange"),
    ("high", "high", "low", "yellow"),
    ("mid", "high", "low", "lime"),
    ("low", "high", "low", "green"),
    ("low", "high", "mid", "turquoise"),
    ("low", "high", "high", "cyan"),
    ("low", "mid", "high", "ocean"),
    ("low", "low", "high", "blue"),
    ("mid", "low", "high", "purple"),
    ("high", "low", "high", "magenta"),
    ("high", "low", "mid", "raspberry"),
    ("high", "high", "high", "white"),
    ("mid", "mid", "mid", "grey"),
    ("low", "low", "low", "black"),
]

LUMINOSITY_TERMS = [
    ("dark", "tri 0 0 25"),
    ("dim", "tri 0 25 50"),
    ("medium", "tri 25 50 75"),
    ("bright", "tri 50 75 100"),
    ("brilliant", "tri 75 100 100"),
]
# suma poziomów 0..6 -> etykieta jasności
_LUMINOSITY_BY_SUM = ["dark", "dim", "medium", "medium", "bright", "bright", "brilliant"]

UNKNOWN_COLOR = "unknown"


def color_source(mode: int = 0) -> str:
    """Źródło .fz bazy RGB -> (ledColor, luminosity) dla danego trybu."""
    if mode not in _INPUT_TERMS:
        raise ConfigurationError(f"Tryb {mode} nie jest zaimplementowany (dostępne: {sorted(_INPUT_TERMS)})")
    lines = [f"name RGB mode {mode}", "tnorm prod", "snorm max", "mode FIT", "defuzz centroid", ""]
    for ch in CHANNELS:
        lines.append(f"var input {ch} 0 15")
        lines.extend(f"mf {ch} {lab} {shape}" for lab, shape in _INPUT_TERMS[mode])
    lines.append("")
    lines.append("var output ledColor 0 4095")
    lines.extend(f"mf ledColor {lab} tri {a} {b} {c}" for lab, a, b, c in COLOR_TERMS)
    lines.append("defuzz bisector grid 0 4095 4096 on ledColor")
    lines.append(f"default ledColor {UNKNOWN_COLOR}")
    lines.append("")
    lines.append("var output luminosity 0 100")
    lines.extend(f"mf luminosity {lab} {shape}" for lab, shape in LUMINOSITY_TERMS)
    lines.append("priority luminosity " + " ".join(lab for lab, _ in LUMINOSITY_TERMS))
    lines.append("default luminosity dark")
    lines.append("")
    for r, g, b, color in COLOR_RULES:
        lines.append(f"rule IF red is {r} AND green is {g} AND blue is {b} THEN ledColor is {color}")
    for levels in product(range(len(LEVELS)), repeat=len(CHANNELS)):
        ants = " AND ".join(f"{ch} is {LEVELS[lv]}" for ch, lv in zip(CHANNELS, levels))
        lines.append(f"rule IF {ants} THEN luminosity is {_LUMINOSITY_BY_SUM[sum(levels)]}")
    return "\n".join(lines) + "\n"


RESULT_SOURCE = """\
name result
tnorm prod
snorm max
mode FIT
defuzz weighted_average

var input x 0 3400
mf x low tri 0 0 1700
mf x mid tri 0 1700 3400
mf x high tri 1700 3400 3400

var input y 0 100
mf y low tri 0 0 50
mf y mid tri 0 50 100
mf y high tri 50 100 100

var output result 0 100
mf result low tri 0 0 50
mf result mid tri 0 50 100
mf result high tri 50 100 100

rule IF x is low AND y is low THEN result is low
rule IF x is low AND y is mid THEN result is low
rule IF x is low AND y is high THEN result is mid
rule IF x is mid AND y is low THEN result is low
rule IF x is mid AND y is mid THEN result is mid
rule IF x is mid AND y is high THEN result is high
rule IF x is high AND y is low THEN result is mid
rule IF x is high AND y is mid THEN result is high
rule IF x is high AND y is high THEN result is high
"""


def load_color_kb(mode: int = 0) -> KnowledgeBase:
    return parse_fz_string(color_source(mode))


def load_result_kb() -> KnowledgeBase:
    return parse_fz_string(RESULT_SOURCE)


PRESETS: Dict[str, str] = {
    "rgb": color_source(0),
    "rgb-gauss": color_source(1),
    "result": RESULT_SOURCE,
}
