# fuzzycolor/fuzzy/model/classifier.py
from __future__ import annotations
import logging
from typing import Dict, List, Any, Tuple, Iterable, Mapping

from ..core import norms
from ..core.hedges import apply_hedges
from ..core.rule import Rule
from ..core.types import ConfigurationError, InputError
from .knowledge import KnowledgeBase, validate_kb
from .variable import to_float

logger = logging.getLogger(__name__)

# (indeks reguły, reguła, alpha)
Firing = Tuple[int, Rule, float]


def _clip01(x: float) -> float:
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


class Classifier:
    """
    Regułowo-rozmyty klasyfikator (Mamdani, inference-only).
    - FIT: siła etykiety = max(alpha) po regułach z tą etykietą.
    - FATI: agregacja sił etykiet przez S-normę z KB (domyślnie max lub algebraic sum).
    Wybór: argmax siły; remis rozstrzyga `OutputVariable.priority` (wcześniejsza wygrywa).
    Gdy nic nie odpaliło: `OutputVariable.default` z siłą 0.
    API:
      - fire(inputs)                        -> alfy reguł per wyjście
      - explain(inputs, mode=None, threshold=0.0)
      - classify(inputs, mode=None)
    """

    def __init__(self, kb: KnowledgeBase, validate: bool = True):
        if validate:
            validate_kb(kb)
        self.kb = kb
        self.tnorm_fn = norms.TNORMS[kb.tnorm]
        self.snorm_fn = norms.SNORMS[kb.snorm]
        # Indeks reguł per wyjście – przyspiesza wnioskowanie
        self._rules_by_output: Dict[str, List[Tuple[int, Rule]]] = {}
        for i, rule in enumerate(kb.rules):
            if not rule.active:
                continue
            self._rules_by_output.setdefault(rule.consequent[0], []).append((i, rule))

    # ---------- helpers ----------

    def _resolve_mode(self, mode: Any) -> str:
        mode = self.kb.mode if mode is None else mode
        if not isinstance(mode, str) or mode.upper() not in ("FIT", "FATI"):
            raise ConfigurationError(f"mode: dozwolone FIT|FATI (dostałem {mode!r})")
        return mode.upper()

    def _tnorm(self, values: Iterable[float]) -> float:
        vals = [float(v) for v in values]
        if not vals:
            return 1.0
        return float(self.tnorm_fn(vals))

    def _snorm(self, values: Iterable[float]) -> float:
        vals = [float(v) for v in values]
        if not vals:
            return 0.0
        return float(self.snorm_fn(vals))

    def crisp_inputs(self, inputs: Mapping[str, Any]) -> Dict[str, float]:
        """Walidacja typu + przycięcie do dziedziny dla każdego wejścia KB."""
        out: Dict[str, float] = {}
        for vname, var in self.kb.inputs.items():
            if vname not in inputs:
                raise InputError(f"Brak wartości wejścia '{vname}'")
            x = to_float(vname, inputs[vname])
            cx = var.clamp(x)
            if cx != x:
                logger.debug("%s=%g poza [%g, %g] -> przycięte do %g", vname, x, var.vmin, var.vmax, cx)
            out[vname] = cx
        extra = set(inputs) - set(self.kb.inputs)
        if extra:
            logger.debug("Pominięte nieznane wejścia: %s", sorted(extra))
        return out

    def fuzzify(self, inputs: Mapping[str, Any]) -> Dict[str, Dict[str, float]]:
        """{zmienna: {etykieta: μ}} po przycięciu wejść."""
        crisp = self.crisp_inputs(inputs)
        return {vname: var.fuzzify(crisp[vname]) for vname, var in self.kb.inputs.items()}

    def _alpha(self, rule: Rule, mus: Dict[str, Dict[str, float]]) -> Tuple[float, List[float]]:
        acts = [apply_hedges(p.hedges, mus[p.var][p.label]) for p in rule.antecedent]
        return _clip01(self._tnorm(acts) * float(rule.weight)), acts

    def fire(self, inputs: Mapping[str, Any]) -> Dict[str, List[Firing]]:
        """Alfy wszystkich aktywnych reguł, pogrupowane per wyjście (także alpha == 0)."""
        mus = self.fuzzify(inputs)
        fired: Dict[str, List[Firing]] = {}
        for oname in self.kb.outputs:
            fired[oname] = [(i, rule, self._alpha(rule, mus)[0])
                            for i, rule in self._rules_by_output.get(oname, [])]
        return fired

    def label_strengths(self, firings: Iterable[Firing], mode: str | None = None) -> Dict[str, float]:
        """
        FIT: max(alpha) per etykieta; FATI: S-norma z KB po alfach etykiety.
        Reguły z alpha == 0 nic nie wnoszą.
        """
        mode = self._resolve_mode(mode)
        buckets: Dict[str, List[float]] = {}
        for _i, rule, a in firings:
            if a > 0.0:
                buckets.setdefault(rule.consequent[1], []).append(a)
        if mode == "FATI":
            return {lab: _clip01(self._snorm(vals)) for lab, vals in buckets.items()}
        return {lab: max(vals) for lab, vals in buckets.items()}

    def choose(self, oname: str, strengths: Mapping[str, float]) -> Tuple[Any, float]:
        """argmax siły z deterministycznym remisem wg priorytetu wyjścia."""
        ovar = self.kb.outputs[oname]
        best_label, best = ovar.default, 0.0
        for lab in ovar.ranked_labels():
            s = strengths.get(lab, 0.0)
            if s > best:
                best_label, best = lab, s
        if best == 0.0:
            logger.debug("%s: żadna reguła nie odpaliła -> %r", oname, ovar.default)
        return best_label, best

    # ---------- API ----------

    def explain(
        self,
        inputs: Mapping[str, Any],
        mode: str | None = None,
        threshold: float = 0.0,
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        Zwraca szczegóły aktywacji reguł (bez defuzyfikacji).
        Struktura:
          {
            <output_name>: [
              (opcjonalnie) {"_fati_label_strengths": {label: strength, ...}},
              {
                "rule_index": int,
                "antecedent": [{"var": str, "label": str, "hedges": [...], "value": float, "mu": float}, ...],
                "alpha": float,
                "weight": float,
                "consequent": {"var": str, "label": str}
              }, ...
            ],
            ...
          }
        """
        mode = self._resolve_mode(mode)
        crisp = self.crisp_inputs(inputs)
        mus = {vname: var.fuzzify(crisp[vname]) for vname, var in self.kb.inputs.items()}
        results: Dict[str, List[Dict[str, Any]]] = {}

        for oname in self.kb.outputs:
            infos: List[Dict[str, Any]] = []
            firings: List[Firing] = []
            for i, rule in self._rules_by_output.get(oname, []):
                alpha, acts = self._alpha(rule, mus)
                firings.append((i, rule, alpha))
                if alpha < threshold:
                    continue
                infos.append({
                    "rule_index": i,
                    "antecedent": [
                        {"var": p.var, "label": p.label, "hedges": list(p.hedges),
                         "value": crisp[p.var], "mu": float(mu)}
                        for p, mu in zip(rule.antecedent, acts)
                    ],
                    "alpha": float(alpha),
                    "weight": float(rule.weight),
                    "consequent": {"var": rule.consequent[0], "label": rule.consequent[1]},
                })

            # Meta dla FATI: agregacja etykiet S-normą z KB
            if mode == "FATI":
                meta = {"_fati_label_strengths": self.label_strengths(firings, mode)}
                results[oname] = [meta] + infos
            else:
                results[oname] = infos

        return results

    def classify(self, inputs: Mapping[str, Any], mode: str | None = None) -> Dict[str, Dict[str, Any]]:
        """
        Zwraca dla każdego outputu:
          {"chosen": <label|default>, "strength": float, "strengths": {label: strength, ...}}
        """
        out: Dict[str, Dict[str, Any]] = {}
        for oname, firings in self.fire(inputs).items():
            strengths = self.label_strengths(firings, mode)
            chosen, strength = self.choose(oname, strengths)
            out[oname] = {"chosen": chosen, "strength": strength, "strengths": strengths}
        return out
