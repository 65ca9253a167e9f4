import math
from typing import Callable, Dict, Iterable
from .types import Float, ConfigurationError

# Modyfikatory lingwistyczne: "red is very high", "blue is not low"

def _extremely(x: Float) -> Float:
    return 2.0 * x * x if x <= 0.5 else 1.0 - 2.0 * (1.0 - x) * (1.0 - x)

def _seldom(x: Float) -> Float:
    return math.sqrt(0.5 * x) if x <= 0.5 else 1.0 - math.sqrt(0.5 * (1.0 - x))

HEDGES: Dict[str, Callable[[Float], Float]] = {
    "not": lambda x: 1.0 - x,
    "very": lambda x: x * x,
    "somewhat": math.sqrt,
    "extremely": _extremely,
    "seldom": _seldom,
    "any": lambda x: 1.0,
}

def apply_hedges(hedges: Iterable[str], mu: Float) -> Float:
    """Nakłada hedge od prawej: 'not very high' = not(very(μ_high))."""
    for h in reversed(tuple(hedges)):
        try:
            mu = HEDGES[h](mu)
        except KeyError:
            raise ConfigurationError(f"Unknown hedge: {h}") from None
    return mu
