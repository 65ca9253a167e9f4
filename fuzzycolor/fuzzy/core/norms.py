"""
T-normy (koniunkcja w antecedencie) i S-normy (agregacja alf).

Każda norma przyjmuje iterowalną listę stopni i zwija ją parami;
dla pustej listy zwraca element neutralny (1 dla T-normy, 0 dla S-normy).
"""
from functools import reduce
from typing import Callable, Dict, Iterable
from .types import Float

Pair = Callable[[Float, Float], Float]
Norm = Callable[[Iterable[Float]], Float]


def _fold(op: Pair, neutral: Float) -> Norm:
    def norm(vals: Iterable[Float]) -> Float:
        return reduce(op, (float(v) for v in vals), neutral)
    return norm


# --- T-normy (pary) ---

def _t_lukasiewicz(a: Float, b: Float) -> Float:
    return max(0.0, a + b - 1.0)

def _t_hamacher(a: Float, b: Float) -> Float:
    denom = a + b - a * b
    return 0.0 if denom == 0.0 else (a * b) / denom

def _t_einstein(a: Float, b: Float) -> Float:
    return (a * b) / (2.0 - (a + b - a * b))


# --- S-normy (pary) ---

def _s_prob(a: Float, b: Float) -> Float:
    return a + b - a * b  # algebraic sum

def _s_bsum(a: Float, b: Float) -> Float:
    return min(1.0, a + b)

def _s_hamacher(a: Float, b: Float) -> Float:
    denom = 1.0 - a * b
    return 1.0 if denom == 0.0 else (a + b - 2.0 * a * b) / denom

def _s_drastic(a: Float, b: Float) -> Float:
    return max(a, b) if min(a, b) == 0.0 else 1.0


t_min = _fold(min, 1.0)
t_prod = _fold(lambda a, b: a * b, 1.0)
t_lukasiewicz = _fold(_t_lukasiewicz, 1.0)
t_hamacher = _fold(_t_hamacher, 1.0)
t_einstein = _fold(_t_einstein, 1.0)

s_max = _fold(max, 0.0)
s_prob = _fold(_s_prob, 0.0)
s_bsum = _fold(_s_bsum, 0.0)
s_lukasiewicz = s_bsum  # min(1, Σ)
s_hamacher = _fold(_s_hamacher, 0.0)
s_drastic = _fold(_s_drastic, 0.0)

TNORMS: Dict[str, Norm] = {
    "min": t_min,
    "prod": t_prod,
    "lukasiewicz": t_lukasiewicz,
    "hamacher": t_hamacher,
    "einstein": t_einstein,
}
SNORMS: Dict[str, Norm] = {
    "max": s_max,
    "sum": s_prob,
    "prob": s_prob,
    "bsum": s_bsum,
    "lukasiewicz": s_lukasiewicz,
    "hamacher": s_hamacher,
    "drastic": s_drastic,
}
