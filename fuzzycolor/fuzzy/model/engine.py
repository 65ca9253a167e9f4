from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Mapping, Tuple
from ..core.defuzz import (centroid_on_grid, centroid_adaptive, mom_on_grid, bisector_on_grid,
                           weighted_average)
from ..core.types import ConfigurationError, Float
from .classifier import Classifier, Firing
from .knowledge import KnowledgeBase
from .variable import OutputVariable

logger = logging.getLogger(__name__)


class MamdaniEngine:
    """
    Mamdani: FIT (agregacja reguł S-normą), FATI (najpierw S-norma po etykietach, potem implikacja).
    Defuzyfikacja: centroid | mom | bisector | centroid_adaptive | weighted_average.
    Gdy żadna reguła nie odpaliła – środek dziedziny wyjścia.
    """
    def __init__(self, kb: KnowledgeBase, validate: bool = True) -> None:
        self.kb = kb
        self.classifier = Classifier(kb, validate=validate)

    # ---------- helpers ----------

    def _snorm_pair(self, a: float, b: float) -> float:
        # inkrementalne łączenie S-normą (norms.SNORMS oczekują listy)
        return float(self.classifier.snorm_fn([float(a), float(b)]))

    def _auto_grid(self, ovar: OutputVariable) -> tuple[Float, Float, int]:
        ymin, ymax, n = ovar.grid
        if ymin >= ymax or (ymin, ymax) == (0.0, 1.0):
            ymin, ymax = ovar.vmin, ovar.vmax
        if n is None or int(n) < 3:
            n = 201
        return float(ymin), float(ymax), int(n)

    def fuzzy_output(self, oname: str, firings: List[Firing]) -> Callable[[Float], Float]:
        """Zagregowana μ(y) wyjścia: implikacja min(α, μ_etykiety(y)), agregacja S-normą."""
        ovar = self.kb.outputs[oname]
        if self.kb.mode.upper() == "FATI":
            # najpierw S-norma alf per etykieta
            pairs = list(self.classifier.label_strengths(firings, "FATI").items())
        else:
            # FIT: każda reguła osobno -> klip -> agregacja S-normą
            pairs = [(rule.consequent[1], a) for _i, rule, a in firings if a > 0.0]

        def agg_mu(y: Float) -> Float:
            acc = 0.0
            for lab, a in pairs:
                mu_val = min(a, ovar.terms[lab].mu(float(y)))  # mamdani-implication
                acc = self._snorm_pair(acc, mu_val)             # agregacja S-normą
            return acc

        return agg_mu

    def defuzzify(self, oname: str, firings: List[Firing], method: str | None = None) -> Float:
        ovar = self.kb.outputs[oname]
        method = (method or ovar.defuzz or self.kb.defuzz or "centroid").lower()

        if not any(a > 0.0 for _i, _r, a in firings):
            logger.debug("%s: żadna reguła nie odpaliła -> środek dziedziny", oname)
            return (ovar.vmin + ovar.vmax) / 2.0

        if method == "weighted_average":
            strengths = self.classifier.label_strengths(firings)
            ystar = weighted_average(
                ovar.vmin, ovar.vmax,
                ((ovar.terms[lab].peak(), w) for lab, w in strengths.items()))
        else:
            agg_mu = self.fuzzy_output(oname, firings)
            ymin, ymax, n = self._auto_grid(ovar)
            if method == "centroid":
                ystar = centroid_on_grid(ymin, ymax, n, agg_mu)
            elif method == "mom":
                ystar = mom_on_grid(ymin, ymax, n, agg_mu)
            elif method == "bisector":
                ystar = bisector_on_grid(ymin, ymax, n, agg_mu)
            elif method == "centroid_adaptive":
                ystar = centroid_adaptive(ymin, ymax, agg_mu, n_base=max(101, n))
            else:
                raise ConfigurationError(f"Unknown defuzz method: {method}")

        # clamp do zakresu wyjścia
        return ovar.clamp(float(ystar))

    # ---------- API ----------

    def predict(self, inputs: Mapping[str, Any], method: str | None = None) -> Dict[str, Float]:
        """
        Pełny pipeline: fuzzyfikacja -> α = T-norm(μ_i)*w -> agregacja -> defuzyfikacja.
        Zwraca ostrą wartość dla każdego wyjścia, obciętą do [vmin, vmax].
        """
        fired = self.classifier.fire(inputs)
        return {oname: self.defuzzify(oname, fired[oname], method) for oname in self.kb.outputs}

    def evaluate(self, inputs: Mapping[str, Any], method: str | None = None) -> Tuple[Dict[str, Float], Dict[str, Dict[str, Any]]]:
        """Jedno przejście: wartości ostre + klasyfikacja (dla wyjść etykietowych)."""
        fired = self.classifier.fire(inputs)
        values: Dict[str, Float] = {}
        labels: Dict[str, Dict[str, Any]] = {}
        for oname, firings in fired.items():
            values[oname] = self.defuzzify(oname, firings, method)
            strengths = self.classifier.label_strengths(firings)
            chosen, strength = self.classifier.choose(oname, strengths)
            labels[oname] = {"chosen": chosen, "strength": strength, "strengths": strengths}
        return values, labels
