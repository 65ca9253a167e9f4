# InputVariable/OutputVariable, zakresy, siatki

from __future__ import annotations
import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from ..core.mfs import MembershipFunction
from ..core.types import Float, InputError

@dataclass
class InputVariable:
    name: str
    vmin: Float
    vmax: Float
    terms: Dict[str, MembershipFunction] = field(default_factory=dict)

    def add_term(self, label: str, mf: MembershipFunction) -> None:
        self.terms[label] = mf

    def clamp(self, x: Float) -> Float:
        return max(self.vmin, min(self.vmax, x))

    def fuzzify(self, x: Float) -> Dict[str, Float]:
        """{etykieta: μ} dla wartości przyciętej do [vmin, vmax]."""
        x = self.clamp(float(x))
        return {label: mf.mu(x) for label, mf in self.terms.items()}

@dataclass
class OutputVariable:
    name: str
    vmin: Float
    vmax: Float
    terms: Dict[str, MembershipFunction] = field(default_factory=dict)
    grid: Tuple[Float, Float, int] = (0.0, 1.0, 101)  # ymin, ymax, n
    # kolejność rozstrzygania remisów w klasyfikacji (pusta = kolejność deklaracji)
    priority: List[str] = field(default_factory=list)
    # etykieta zwracana gdy żadna reguła nie odpaliła
    default: Optional[str] = None
    # metoda defuzyfikacji tylko dla tego wyjścia (None = KnowledgeBase.defuzz)
    defuzz: Optional[str] = None

    def add_term(self, label: str, mf: MembershipFunction) -> None:
        self.terms[label] = mf

    def clamp(self, y: Float) -> Float:
        return max(self.vmin, min(self.vmax, y))

    def ranked_labels(self) -> List[str]:
        """Etykiety wg priorytetu; niewymienione w `priority` idą na koniec w kolejności deklaracji."""
        head = [lab for lab in self.priority if lab in self.terms]
        return head + [lab for lab in self.terms if lab not in head]


def to_float(name: str, value) -> Float:
    """Wartość wejściowa jako float; bool/NaN/nie-liczby -> InputError."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InputError(f"{name}: oczekiwano liczby, dostałem {type(value).__name__} ({value!r})")
    x = float(value)
    if math.isnan(x):
        raise InputError(f"{name}: NaN nie jest poprawnym wejściem")
    return x
