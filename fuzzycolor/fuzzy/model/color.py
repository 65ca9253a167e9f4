from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..core.types import ConfigurationError, Float, InputError
from .engine import MamdaniEngine
from .knowledge import KnowledgeBase, validate_kb
from .presets import CHANNELS, load_color_kb, load_result_kb
from .variable import to_float

logger = logging.getLogger(__name__)

COLOR_OUTPUT = "ledColor"
LUMINOSITY_OUTPUT = "luminosity"


class ColorEngine:
    """
    Silnik RGB -> (nazwa koloru, jasność) + ogólne evaluate(x, y).

    Jawnie konstruowany obiekt: `ColorEngine(mode)` ładuje bazę wbudowaną
    (tryb 0 – trójkąty, 1 – gaussy), `configure()` podmienia bazy na własne.
    Wyjścia są liczone od razu w `set_inputs` i zależą wyłącznie od ostatnich
    wejść (brak historii).

    Brak wewnętrznych blokad: przy współdzieleniu między wątkami para
    `set_inputs` + odczyt musi być serializowana po stronie wołającego.
    """

    def __init__(self, mode: int = 0) -> None:
        self.mode = mode
        self._color: Optional[MamdaniEngine] = None
        self._result: Optional[MamdaniEngine] = None
        self._inputs: Optional[Tuple[Float, ...]] = None
        self._values: Dict[str, Float] = {}
        self._labels: Dict[str, Dict[str, Any]] = {}
        self.configure(load_color_kb(mode), load_result_kb())

    # ---------- konfiguracja ----------

    def configure(self, color_kb: KnowledgeBase, result_kb: Optional[KnowledgeBase] = None) -> None:
        """
        Jednorazowe ustawienie baz wiedzy; fail-fast (ConfigurationError) gdy:
          - baza kolorów nie ma wejść red/green/blue lub wyjść ledColor/luminosity,
          - baza numeryczna nie ma dokładnie dwóch wejść,
          - którakolwiek baza ma luki w pokryciu dziedzin lub reguły z nieznanymi etykietami.
        Poprzedni snapshot wejść jest kasowany.
        """
        validate_kb(color_kb)
        if tuple(color_kb.inputs) != CHANNELS:
            raise ConfigurationError(f"Baza kolorów: oczekiwano wejść {CHANNELS}, dostałem {tuple(color_kb.inputs)}")
        for oname in (COLOR_OUTPUT, LUMINOSITY_OUTPUT):
            if oname not in color_kb.outputs:
                raise ConfigurationError(f"Baza kolorów: brak wyjścia '{oname}'")
        color = MamdaniEngine(color_kb, validate=False)

        result = self._result
        if result_kb is not None:
            validate_kb(result_kb)
            if len(result_kb.inputs) != 2:
                raise ConfigurationError(f"Baza evaluate(): oczekiwano 2 wejść, dostałem {len(result_kb.inputs)}")
            result = MamdaniEngine(result_kb, validate=False)
        if result is None:
            raise ConfigurationError("Brak bazy dla evaluate()")

        self._color, self._result = color, result
        self._inputs = None
        self._values, self._labels = {}, {}
        logger.debug("ColorEngine: kolory='%s', evaluate='%s'", color_kb.name, result.kb.name)

    @property
    def color_kb(self) -> KnowledgeBase:
        return self._color.kb

    @property
    def result_kb(self) -> KnowledgeBase:
        return self._result.kb

    # ---------- wejścia ----------

    def set_inputs(self, *values: Any) -> None:
        """(red, green, blue); wartości spoza dziedziny są przycinane, nie są błędem."""
        if len(values) != len(CHANNELS):
            raise InputError(f"Oczekiwano {len(CHANNELS)} wartości (red, green, blue), dostałem {len(values)}")
        crisp = {}
        for ch, v in zip(CHANNELS, values):
            crisp[ch] = self._color.kb.inputs[ch].clamp(to_float(ch, v))
        self._values, self._labels = self._color.evaluate(crisp)
        self._inputs = tuple(crisp[ch] for ch in CHANNELS)

    def set_color(self, red: Any, green: Any, blue: Any) -> None:
        self.set_inputs(red, green, blue)

    @property
    def inputs(self) -> Optional[Tuple[Float, ...]]:
        """Ostatnie (przycięte) wejścia lub None przed pierwszym set_inputs."""
        return self._inputs

    # ---------- wyjścia ----------

    def _label(self, oname: str) -> Dict[str, Any]:
        if self._inputs is None:
            raise InputError("Brak wejść – wywołaj najpierw set_inputs()/set_color()")
        return self._labels[oname]

    @property
    def color_label(self) -> str:
        return self._label(COLOR_OUTPUT)["chosen"]

    @property
    def color_strength(self) -> Float:
        return self._label(COLOR_OUTPUT)["strength"]

    @property
    def luminosity_label(self) -> str:
        return self._label(LUMINOSITY_OUTPUT)["chosen"]

    @property
    def luminosity_strength(self) -> Float:
        return self._label(LUMINOSITY_OUTPUT)["strength"]

    @property
    def color_degree(self) -> Float:
        """Ostra wartość ledColor (bisektor po 0..4095)."""
        self._label(COLOR_OUTPUT)
        return self._values[COLOR_OUTPUT]

    @property
    def luminosity(self) -> Float:
        """Ostra jasność 0..100 (centroid)."""
        self._label(LUMINOSITY_OUTPUT)
        return self._values[LUMINOSITY_OUTPUT]

    def labels(self) -> Dict[str, str]:
        """Teksty etykiet jak na ekranie: 'red 1.000', 'bright 0.500', stopień '3840.00'."""
        return {
            "color": f"{self.color_label} {self.color_strength:.3f}",
            "luminosity": f"{self.luminosity_label} {self.luminosity_strength:.3f}",
            "degree": f"{self.color_degree:.2f}",
            "lux": f"{self.luminosity:.1f}",
        }

    def explain(self, threshold: float = 0.0) -> Dict[str, List[Dict[str, Any]]]:
        if self._inputs is None:
            raise InputError("Brak wejść – wywołaj najpierw set_inputs()/set_color()")
        return self._color.classifier.explain(dict(zip(CHANNELS, self._inputs)), threshold=threshold)

    # ---------- tryb numeryczny ----------

    def evaluate(self, x: Any, y: Any) -> Float:
        """Bezstanowe wnioskowanie numeryczne; niezależne od snapshotu kolorów."""
        kb = self._result.kb
        names = list(kb.inputs)
        values = {names[0]: to_float(names[0], x), names[1]: to_float(names[1], y)}
        out = self._result.predict(values)
        return next(iter(out.values()))
