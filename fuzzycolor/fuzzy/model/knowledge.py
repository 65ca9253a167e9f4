from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Union

from .variable import InputVariable, OutputVariable
from ..core import norms
from ..core.defuzz import METHODS as DEFUZZ_METHODS
from ..core.hedges import HEDGES
from ..core.rule import Rule
from ..core.types import ConfigurationError, Float

logger = logging.getLogger(__name__)

Variable = Union[InputVariable, OutputVariable]


@dataclass
class KnowledgeBase:
    # --- zmienne i reguły ---
    inputs: Dict[str, InputVariable] = field(default_factory=dict)
    outputs: Dict[str, OutputVariable] = field(default_factory=dict)
    rules: List[Rule] = field(default_factory=list)

    # --- ustawienia silnika ---
    tnorm: str = "min"
    snorm: str = "max"
    mode: str = "FIT"             # lub 'FATI'
    defuzz: str = "centroid"      # 'centroid' | 'mom' | 'bisector' | 'centroid_adaptive' | 'weighted_average'
    name: str = ""

    # ---------- metody pomocnicze (KB) ----------
    def add_input(self, var: InputVariable) -> None:
        self.inputs[var.name] = var

    def add_output(self, var: OutputVariable) -> None:
        self.outputs[var.name] = var

    def add_rule(self, rule: Rule) -> None:
        self.rules.append(rule)

    def validate(self) -> "KnowledgeBase":
        validate_kb(self)
        return self


# ---------- walidacja ----------

def _probe_points(var: Variable) -> List[Float]:
    """
    Punkty krytyczne (granice dziedziny, załamania MF) + środki między nimi.
    Dla kształtów odcinkowo-liniowych max μ jest na każdym otwartym przedziale
    między kolejnymi punktami albo wszędzie > 0, albo wszędzie = 0 – więc to
    sprawdzenie jest dokładne. Gauss podaje jako załamania granice, za którymi
    μ schodzi do 0.0 (underflow), więc luki między gaussami też są wykrywane.
    """
    pts = {float(var.vmin), float(var.vmax)}
    for mf in var.terms.values():
        for p in mf.breakpoints():
            if var.vmin <= p <= var.vmax:
                pts.add(float(p))
    crit = sorted(pts)
    mids = [(a + b) / 2.0 for a, b in zip(crit, crit[1:])]
    return sorted(crit + mids)


def find_dead_zones(var: Variable) -> List[Float]:
    """Zwraca punkty dziedziny, w których żadna etykieta nie ma μ > 0."""
    return [x for x in _probe_points(var)
            if not any(mf.mu(x) > 0.0 for mf in var.terms.values())]


def _check_variable(kind: str, var: Variable) -> None:
    if not var.vmin < var.vmax:
        raise ConfigurationError(f"{kind} '{var.name}': vmin < vmax wymagane (dostałem {var.vmin} >= {var.vmax})")
    if not var.terms:
        raise ConfigurationError(f"{kind} '{var.name}': brak etykiet (mf)")
    dead = find_dead_zones(var)
    if dead:
        raise ConfigurationError(
            f"{kind} '{var.name}': luka w pokryciu dziedziny w punktach {dead[:5]}")
    if not any(mf.mu(var.clamp(mf.peak())) >= 1.0 for mf in var.terms.values()):
        raise ConfigurationError(f"{kind} '{var.name}': żadna etykieta nie osiąga μ=1 w dziedzinie")


def validate_kb(kb: KnowledgeBase) -> None:
    """
    Fail-fast walidacja bazy wiedzy (przed pierwszym użyciem):
      - zmienne: niepusta dziedzina, etykiety, brak luk w pokryciu, μ=1 gdzieś w dziedzinie
      - reguły: tylko zadeklarowane zmienne/etykiety/hedge, antecedent tylko na wejściach
      - priority wyjścia odwołuje się do istniejących etykiet; default może być
        etykietą spoza zbioru termów (np. "unknown" dla ledColor)
      - nazwy T/S-normy, trybu i defuzyfikacji
    """
    if not kb.outputs:
        raise ConfigurationError("Brak zmiennych wyjściowych (var output ...)")
    for name in kb.inputs:
        if name in kb.outputs:
            raise ConfigurationError(f"Duplikat zmiennej: {name}")
    for var in kb.inputs.values():
        _check_variable("input", var)
    for var in kb.outputs.values():
        _check_variable("output", var)
        for lab in var.priority:
            if lab not in var.terms:
                raise ConfigurationError(f"priority: nieznana etykieta '{var.name}.{lab}'")
        if len(set(var.priority)) != len(var.priority):
            raise ConfigurationError(f"priority: powtórzona etykieta w '{var.name}'")
        if var.defuzz is not None and var.defuzz not in DEFUZZ_METHODS:
            raise ConfigurationError(f"defuzz: nieobsługiwane '{var.defuzz}' dla '{var.name}'")

    for i, rule in enumerate(kb.rules, 1):
        oname, olabel = rule.consequent
        if oname not in kb.outputs:
            raise ConfigurationError(f"R{i}: nieznana zmienna wyjściowa '{oname}'")
        if olabel not in kb.outputs[oname].terms:
            raise ConfigurationError(f"R{i}: nieznana etykieta wyjścia '{oname}.{olabel}'")
        if not rule.antecedent:
            raise ConfigurationError(f"R{i}: pusty antecedent")
        if not 0.0 <= float(rule.weight) <= 1.0:
            raise ConfigurationError(f"R{i}: weight poza [0, 1] ({rule.weight})")
        for prop in rule.antecedent:
            vobj = kb.inputs.get(prop.var)
            if vobj is None:
                if prop.var in kb.outputs:
                    raise ConfigurationError(f"R{i}: antecedent na wyjściu '{prop.var}' nie jest dozwolony")
                raise ConfigurationError(f"R{i}: nieznana zmienna '{prop.var}'")
            if prop.label not in vobj.terms:
                raise ConfigurationError(f"R{i}: nieznana etykieta '{prop.var}.{prop.label}'")
            for h in prop.hedges:
                if h not in HEDGES:
                    raise ConfigurationError(f"R{i}: nieznany hedge '{h}'")

    if kb.tnorm not in norms.TNORMS:
        raise ConfigurationError(f"tnorm: nieobsługiwane '{kb.tnorm}'")
    if kb.snorm not in norms.SNORMS:
        raise ConfigurationError(f"snorm: nieobsługiwane '{kb.snorm}'")
    if kb.mode not in ("FIT", "FATI"):
        raise ConfigurationError(f"mode: dozwolone FIT|FATI (dostałem '{kb.mode}')")
    if kb.defuzz not in DEFUZZ_METHODS:
        raise ConfigurationError(f"defuzz: nieobsługiwane '{kb.defuzz}'")

    logger.debug("KB '%s' OK: inputs=%d outputs=%d rules=%d",
                 kb.name, len(kb.inputs), len(kb.outputs), len(kb.rules))
