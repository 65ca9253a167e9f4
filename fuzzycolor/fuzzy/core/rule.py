from dataclasses import dataclass
from typing import List, NamedTuple, Tuple
from ..core.types import Float

class Proposition(NamedTuple):
    var: str
    label: str
    hedges: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return " ".join((self.var, "is") + tuple(self.hedges) + (self.label,))

Antecedent = List[Proposition]

@dataclass
class Rule:
    antecedent: Antecedent
    consequent: Tuple[str, str]  # (output_var, label)
    weight: Float = 1.0
    active: bool = True

    def __str__(self) -> str:
        ants = " AND ".join(str(p) for p in self.antecedent)
        return f"IF {ants} THEN {self.consequent[0]} is {self.consequent[1]}"
