"""
Defuzyfikacja zagregowanego zbioru wyjściowego μ(y).

Metody siatkowe próbkują μ na [ymin, ymax] w n punktach; weighted_average
pracuje na parach (wartość reprezentatywna etykiety, stopień). Każda metoda
zwraca środek dziedziny, gdy zbiór jest pusty (Σμ = 0).
"""
from typing import Callable, Iterable, List, Tuple
from .types import Float

MuFn = Callable[[Float], Float]


def _midpoint(ymin: Float, ymax: Float) -> Float:
    return (ymin + ymax) / 2.0


def _linspace(ymin: Float, ymax: Float, n: int) -> List[Float]:
    if n <= 1:
        return [_midpoint(ymin, ymax)]
    step = (ymax - ymin) / (n - 1)
    return [ymin + i * step for i in range(n)]


def _sample(ymin: Float, ymax: Float, n: int, mu: MuFn) -> Tuple[List[Float], List[Float]]:
    ys = _linspace(ymin, ymax, int(n))
    return ys, [mu(y) for y in ys]


def _weighted_mean(ys: Iterable[Float], ws: Iterable[Float], fallback: Float) -> Float:
    num = den = 0.0
    for y, w in zip(ys, ws):
        num += y * w
        den += w
    return num / den if den > 0.0 else fallback


def centroid_on_grid(ymin: Float, ymax: Float, n: int, mu: MuFn) -> Float:
    """Środek ciężkości: Σ y·μ(y) / Σ μ(y)."""
    if n <= 1:
        return _midpoint(ymin, ymax)
    ys, ws = _sample(ymin, ymax, n, mu)
    return _weighted_mean(ys, ws, _midpoint(ymin, ymax))


def centroid_adaptive(ymin: Float, ymax: Float, mu: MuFn,
                      n_base: int = 201, refine_per_peak: int = 5, window_frac: Float = 0.1) -> Float:
    """Centroid z dogęszczeniem siatki wokół lokalnych maksimów μ (wąskie etykiety)."""
    ys, ws = _sample(ymin, ymax, n_base, mu)
    if not any(w > 0.0 for w in ws):
        return _midpoint(ymin, ymax)

    win = max(1e-9, window_frac * (ymax - ymin))
    extra: List[Float] = []
    for i in range(1, len(ws) - 1):
        if ws[i] > 0.0 and ws[i] >= ws[i - 1] and ws[i] >= ws[i + 1]:
            lo, hi = max(ymin, ys[i] - win), min(ymax, ys[i] + win)
            extra.extend(_linspace(lo, hi, max(3, refine_per_peak * 10)))

    ys_all = ys + extra
    ws_all = ws + [mu(y) for y in extra]
    return _weighted_mean(ys_all, ws_all, _midpoint(ymin, ymax))


def mom_on_grid(ymin: Float, ymax: Float, n: int, mu: MuFn) -> Float:
    """Średnia z punktów siatki, w których μ osiąga maksimum."""
    ys, ws = _sample(ymin, ymax, n, mu)
    top = max(ws, default=0.0)
    if top <= 0.0:
        return _midpoint(ymin, ymax)
    tol = max(1e-12, 1e-6 * top)
    tops = [y for y, w in zip(ys, ws) if top - w <= tol]
    return sum(tops) / len(tops)


def bisector_on_grid(ymin: Float, ymax: Float, n: int, mu: MuFn) -> Float:
    """Pierwszy punkt siatki, w którym skumulowane pole pod μ osiąga połowę całości."""
    if n <= 1:
        return _midpoint(ymin, ymax)
    ys, ws = _sample(ymin, ymax, n, mu)
    total = sum(ws)
    if total <= 0.0:
        return _midpoint(ymin, ymax)
    acc = 0.0
    for y, w in zip(ys, ws):
        acc += w
        if acc >= total / 2.0:
            return y
    return ys[-1]


def weighted_average(ymin: Float, ymax: Float, weighted: Iterable[Tuple[Float, Float]]) -> Float:
    """
    Σ w·z / Σ w po parach (z = wartość reprezentatywna etykiety, w = jej zagregowany stopień).
    Bez aktywnych etykiet -> środek dziedziny wyjścia.
    """
    pairs = list(weighted)
    return _weighted_mean((z for z, _w in pairs), (w for _z, w in pairs), _midpoint(ymin, ymax))


GRID_METHODS = {"centroid", "mom", "bisector", "centroid_adaptive"}
METHODS = GRID_METHODS | {"weighted_average"}
