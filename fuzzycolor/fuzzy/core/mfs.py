from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple
from .types import Float, ConfigurationError

def _clamp01(x: Float) -> Float:
    if x <= 0.0:
        return 0.0
    elif x >= 1.0:
        return 1.0
    else:
        return x

class MembershipFunction:
    def mu(self, x: Float) -> Float:
        raise NotImplementedError
    def support(self) -> tuple[Float, Float]:
        raise NotImplementedError
    def peak(self) -> Float:
        """Wartość reprezentatywna (środek obszaru μ=1) – dla weighted_average."""
        raise NotImplementedError
    def breakpoints(self) -> Tuple[Float, ...]:
        """Punkty załamania kształtu; puste dla kształtów gładkich."""
        return ()
    def fz_params(self) -> Tuple[str, Tuple[Float, ...]]:
        raise NotImplementedError

@dataclass(frozen=True)
class Triangular(MembershipFunction):
    a: Float; b: Float; c: Float
    def __post_init__(self) -> None:
        if not (self.a <= self.b <= self.c):
            raise ConfigurationError(f"tri: wymagane a <= b <= c (dostałem {self.a}, {self.b}, {self.c})")
        if self.a == self.c:
            raise ConfigurationError(f"tri: pusty nośnik ({self.a}, {self.b}, {self.c})")
    def mu(self, x: Float) -> Float:
        # ramiona (a == b lub b == c) dają 1.0 dokładnie w b
        if x < self.a or x > self.c: return 0.0
        if x == self.b: return 1.0
        if x < self.b:  return _clamp01((x - self.a) / (self.b - self.a))
        return _clamp01((self.c - x) / (self.c - self.b))
    def support(self) -> tuple[Float, Float]:
        return (self.a, self.c)
    def peak(self) -> Float:
        return self.b
    def breakpoints(self) -> Tuple[Float, ...]:
        return (self.a, self.b, self.c)
    def fz_params(self) -> Tuple[str, Tuple[Float, ...]]:
        return ("tri", (self.a, self.b, self.c))

@dataclass(frozen=True)
class Trapezoidal(MembershipFunction):
    a: Float; b: Float; c: Float; d: Float
    def __post_init__(self) -> None:
        if not (self.a <= self.b <= self.c <= self.d):
            raise ConfigurationError(
                f"trap: wymagane a <= b <= c <= d (dostałem {self.a}, {self.b}, {self.c}, {self.d})")
    def mu(self, x: Float) -> Float:
        if x < self.a or x > self.d: return 0.0
        if self.b <= x <= self.c: return 1.0
        if x < self.b: return _clamp01((x - self.a) / (self.b - self.a))
        return _clamp01((self.d - x) / (self.d - self.c))
    def support(self) -> tuple[Float, Float]:
        return (self.a, self.d)
    def peak(self) -> Float:
        return (self.b + self.c) / 2.0
    def breakpoints(self) -> Tuple[Float, ...]:
        return (self.a, self.b, self.c, self.d)
    def fz_params(self) -> Tuple[str, Tuple[Float, ...]]:
        return ("trap", (self.a, self.b, self.c, self.d))

@dataclass(frozen=True)
class Gaussian(MembershipFunction):
    mu0: Float; sigma: Float
    # |z| powyżej tej wartości: exp(-z²/2) schodzi do 0.0 w arytmetyce double
    UNDERFLOW_Z = math.sqrt(2.0 * 745.0)
    def __post_init__(self) -> None:
        if self.sigma <= 0:
            raise ConfigurationError(f"gauss: sigma > 0 wymagane (dostałem {self.sigma})")
    def mu(self, x: Float) -> Float:
        z = (x - self.mu0) / self.sigma
        return float(math.exp(-0.5 * z * z))
    def support(self) -> tuple[Float, Float]:
        s = 4.0 * self.sigma
        return (self.mu0 - s, self.mu0 + s)
    def peak(self) -> Float:
        return self.mu0
    def breakpoints(self) -> Tuple[Float, ...]:
        w = self.UNDERFLOW_Z * self.sigma
        return (self.mu0 - w, self.mu0, self.mu0 + w)
    def fz_params(self) -> Tuple[str, Tuple[Float, ...]]:
        return ("gauss", (self.mu0, self.sigma))

@dataclass(frozen=True)
class Ramp(MembershipFunction):
    """Rampa: 0 w `start`, 1 w `end` (malejąca gdy start > end)."""
    start: Float; end: Float
    def __post_init__(self) -> None:
        if self.start == self.end:
            raise ConfigurationError(f"ramp: start != end wymagane (dostałem {self.start})")
    def mu(self, x: Float) -> Float:
        if self.start < self.end:
            if x <= self.start: return 0.0
            if x >= self.end: return 1.0
            return (x - self.start) / (self.end - self.start)
        if x >= self.start: return 0.0
        if x <= self.end: return 1.0
        return (self.start - x) / (self.start - self.end)
    def support(self) -> tuple[Float, Float]:
        return (min(self.start, self.end), max(self.start, self.end))
    def peak(self) -> Float:
        return self.end
    def breakpoints(self) -> Tuple[Float, ...]:
        return (self.start, self.end)
    def fz_params(self) -> Tuple[str, Tuple[Float, ...]]:
        return ("ramp", (self.start, self.end))

SHAPES = {
    "tri": (Triangular, 3),
    "trap": (Trapezoidal, 4),
    "gauss": (Gaussian, 2),
    "ramp": (Ramp, 2),
}

def make_mf(shape: str, params) -> MembershipFunction:
    """Fabryka MF po nazwie kształtu z .fz (tri|trap|gauss|ramp)."""
    try:
        cls, arity = SHAPES[shape.lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown MF shape: {shape}") from None
    params = [float(p) for p in params]
    if len(params) != arity:
        raise ConfigurationError(f"{shape}: oczekiwano {arity} parametrów, dostałem {len(params)}")
    return cls(*params)
