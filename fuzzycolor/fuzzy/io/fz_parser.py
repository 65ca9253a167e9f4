"""
Gramatyka (skrót):
  name <tekst>                                  # opcjonalna nazwa bazy
  var (input|output) <name> <vmin> <vmax>
  mf  <var> <label> (tri a b c | trap a b c d | gauss mu sigma | ramp start end)
  rule IF <v> is [hedge...] <L> (AND <v> is [hedge...] <L>)* THEN <ovar> is <OL> [weight w] [inactive]
  tnorm <min|prod|lukasiewicz|hamacher|einstein>
  snorm <max|sum|bsum|prob|lukasiewicz|hamacher|drastic>
  mode  <FIT|FATI>
  defuzz <method> [grid ymin ymax n | n N] [on <ovar>]
  priority <ovar> <label> <label> ...           # kolejność rozstrzygania remisów
  default <ovar> <label>                        # etykieta gdy nic nie odpaliło

Uwagi:
- Słowa kluczowe bezwzględnie case-insensitive; nazwy zmiennych i etykiet MF – case-sensitive.
- Hedge: not | very | somewhat | extremely | seldom | any (nakładane od prawej).
- Reguły walidowane PO wczytaniu całej KB (sprawdzamy istnienie zmiennych i etykiet).
- Defuzz grid/n stosowane po wczytaniu wszystkich outputs (niezależnie od kolejności dyrektyw).
- Na końcu pełna walidacja KB (luki w pokryciu dziedzin itd.) – patrz knowledge.validate_kb.
"""

from __future__ import annotations
from typing import List, Tuple, Dict, Optional
import logging
import shlex

from ..core.defuzz import METHODS as _ALLOWED_DEFUZZ
from ..core.hedges import HEDGES
from ..core.mfs import SHAPES, make_mf
from ..core.norms import TNORMS, SNORMS
from ..core.rule import Proposition, Rule
from ..core.types import ConfigurationError
from ..model.variable import InputVariable, OutputVariable
from ..model.knowledge import KnowledgeBase, validate_kb

logger = logging.getLogger(__name__)


class FZParseError(ConfigurationError):
    def __init__(self, msg: str, line: int, content: str):
        super().__init__(f"[.fz:{line}] {msg}\n  >> {content}")
        self.line = line


def _lex_line(raw: str) -> List[str]:
    """Tokenizuj linię: wspiera komentarze '#' i cudzysłowy."""
    lx = shlex.shlex(raw, posix=True)
    lx.whitespace_split = True
    lx.commenters = "#"
    try:
        return list(lx)
    except ValueError:
        # np. niezamknięty cudzysłów – oddamy puste, wyłapie to logika wyżej
        return []


def _parse_antecedent(cond: List[str], lineno: int, raw: str) -> List[Proposition]:
    """<v> is [hedge...] <L> [AND ...]*"""
    ante: List[Proposition] = []
    i = 0
    while i < len(cond):
        if i + 2 >= len(cond):
            raise FZParseError("Antecedent: oczekiwano '<var> is <label>'", lineno, raw)
        vname = cond[i]
        if cond[i + 1].lower() != "is":
            raise FZParseError("Antecedent: spodziewano 'is'", lineno, raw)
        i += 2
        hedges: List[str] = []
        while i < len(cond) - 1 and cond[i].lower() in HEDGES and cond[i + 1].lower() != "and":
            hedges.append(cond[i].lower())
            i += 1
        ante.append(Proposition(vname, cond[i], tuple(hedges)))
        i += 1
        if i < len(cond):
            if cond[i].lower() == "and":
                i += 1
                if i >= len(cond):
                    raise FZParseError("Antecedent: 'AND' bez warunku", lineno, raw)
            else:
                raise FZParseError("Antecedent: spodziewano 'AND' lub koniec", lineno, raw)
    return ante


def parse_fz(path: str) -> KnowledgeBase:
    with open(path, "r", encoding="utf-8") as f:
        src = f.read()
    logger.debug("Wczytuję model %s", path)
    return parse_fz_string(src)


def parse_fz_string(source: str) -> KnowledgeBase:
    kb = KnowledgeBase()
    lines = source.splitlines()

    # do walidacji po wszystkim
    pending_rules: List[Tuple[int, str, List[Proposition], Tuple[str, str], float, bool]] = []
    pending_priority: List[Tuple[int, str, str, List[str]]] = []
    pending_default: List[Tuple[int, str, str, str]] = []
    # defuzz config (stosujemy na końcu); klucz None = wszystkie wyjścia
    defuzz_cfg: List[Tuple[int, str, Optional[str], str, Optional[tuple]]] = []

    for lineno, raw in enumerate(lines, 1):
        tokens = _lex_line(raw)
        if not tokens:
            continue
        head = tokens[0].lower()

        try:
            if head == "name":
                kb.name = " ".join(tokens[1:])

            elif head == "var":
                # var input|output name vmin vmax
                if len(tokens) < 5:
                    raise FZParseError("var: oczekiwano: var (input|output) <name> <vmin> <vmax>", lineno, raw)
                kind = tokens[1].lower()
                name = tokens[2]
                vmin = float(tokens[3]); vmax = float(tokens[4])
                if vmin >= vmax:
                    raise FZParseError(f"var: vmin < vmax wymagane (dostałem {vmin} >= {vmax})", lineno, raw)
                if name in kb.inputs or name in kb.outputs:
                    raise FZParseError(f"Duplikat zmiennej: {name}", lineno, raw)
                if kind == "input":
                    kb.add_input(InputVariable(name, vmin, vmax))
                elif kind == "output":
                    kb.add_output(OutputVariable(name, vmin, vmax))
                else:
                    raise FZParseError(f"Unknown var kind: {kind}", lineno, raw)

            elif head == "mf":
                # mf vname label shape ...
                if len(tokens) < 5:
                    raise FZParseError("mf: oczekiwano: mf <var> <label> <shape> [params...]", lineno, raw)
                vname, label, shape = tokens[1], tokens[2], tokens[3].lower()
                target = kb.inputs.get(vname) or kb.outputs.get(vname)
                if target is None:
                    raise FZParseError(f"MF dla nieznanej zmiennej: {vname}", lineno, raw)
                if label in target.terms:
                    raise FZParseError(f"Duplikat etykiety MF '{label}' w zmiennej '{vname}'", lineno, raw)
                if shape not in SHAPES:
                    raise FZParseError(f"Unknown MF shape: {shape}", lineno, raw)
                target.add_term(label, make_mf(shape, tokens[4:]))

            elif head == "rule":
                # rule IF ... THEN ...
                words = tokens[1:]
                if not words or words[0].lower() != "if":
                    raise FZParseError("Rule must start with IF", lineno, raw)
                # znajdź THEN (case-insensitive)
                try:
                    then_idx = next(i for i, t in enumerate(words) if t.lower() == "then")
                except StopIteration:
                    raise FZParseError("Rule missing THEN", lineno, raw)

                ante = _parse_antecedent(words[1:then_idx], lineno, raw)
                cons = words[then_idx + 1:]

                # consequent: <ovar> is <olabel> [weight w] [inactive]
                if len(cons) < 3 or cons[1].lower() != 'is':
                    raise FZParseError("Consequent: oczekiwano '<ovar> is <label>'", lineno, raw)
                oname, olabel = cons[0], cons[2]
                weight = 1.0
                inactive = False
                i = 3
                while i < len(cons):
                    tok = cons[i].lower()
                    if tok == 'weight':
                        if i + 1 >= len(cons):
                            raise FZParseError("Consequent: oczekiwano 'weight <w>'", lineno, raw)
                        weight = float(cons[i+1]); i += 2
                    elif tok == 'inactive':
                        inactive = True; i += 1
                    else:
                        raise FZParseError(f"Consequent: nieznana opcja '{cons[i]}'", lineno, raw)

                pending_rules.append((lineno, raw, ante, (oname, olabel), weight, not inactive))

            elif head == "tnorm":
                if len(tokens) < 2:
                    raise FZParseError("tnorm: podaj nazwę (np. min|prod)", lineno, raw)
                name = tokens[1].lower()
                if name not in TNORMS:
                    raise FZParseError(f"tnorm: nieobsługiwane '{name}'", lineno, raw)
                kb.tnorm = name

            elif head == "snorm":
                if len(tokens) < 2:
                    raise FZParseError("snorm: podaj nazwę (np. max|sum|bsum)", lineno, raw)
                name = tokens[1].lower()
                if name not in SNORMS:
                    raise FZParseError(f"snorm: nieobsługiwane '{name}'", lineno, raw)
                kb.snorm = name

            elif head == "mode":
                if len(tokens) < 2:
                    raise FZParseError("mode: FIT|FATI", lineno, raw)
                kb.mode = tokens[1].upper()
                if kb.mode not in ("FIT", "FATI"):
                    raise FZParseError("mode: dozwolone FIT|FATI", lineno, raw)

            elif head == "defuzz":
                if len(tokens) < 2:
                    raise FZParseError("defuzz: podaj metodę (centroid|mom|bisector|centroid_adaptive|weighted_average)", lineno, raw)
                method = tokens[1].lower()
                if method not in _ALLOWED_DEFUZZ:
                    raise FZParseError("Supported defuzz: centroid | mom | bisector | centroid_adaptive | weighted_average", lineno, raw)
                rest = tokens[2:]
                on_var: Optional[str] = None
                if len(rest) >= 2 and rest[-2].lower() == "on":
                    on_var = rest[-1]
                    rest = rest[:-2]
                grid = None
                # dodatkowe opcje
                if rest and rest[0].lower() == "grid":
                    if len(rest) < 4:
                        raise FZParseError("defuzz grid: oczekiwano 'grid ymin ymax n'", lineno, raw)
                    ymin = float(rest[1]); ymax = float(rest[2]); n = int(rest[3])
                    if ymax <= ymin or n <= 1:
                        raise FZParseError("defuzz grid: wymagane ymin<ymax, n>1", lineno, raw)
                    grid = (ymin, ymax, n)
                elif rest and rest[0].lower() == "n":
                    if len(rest) < 2:
                        raise FZParseError("defuzz n: oczekiwano 'n N'", lineno, raw)
                    n = int(rest[1])
                    if n <= 1:
                        raise FZParseError("defuzz n: N>1 wymagane", lineno, raw)
                    grid = ("KEEP", "KEEP", n)  # sygnał: zmień tylko n
                elif rest:
                    raise FZParseError(f"defuzz: nieznana opcja '{rest[0]}'", lineno, raw)
                defuzz_cfg.append((lineno, raw, on_var, method, grid))

            elif head == "priority":
                if len(tokens) < 3:
                    raise FZParseError("priority: oczekiwano 'priority <ovar> <label> ...'", lineno, raw)
                pending_priority.append((lineno, raw, tokens[1], tokens[2:]))

            elif head == "default":
                if len(tokens) != 3:
                    raise FZParseError("default: oczekiwano 'default <ovar> <label>'", lineno, raw)
                pending_default.append((lineno, raw, tokens[1], tokens[2]))

            else:
                raise FZParseError(f"Unknown directive: {tokens[0]}", lineno, raw)

        except FZParseError:
            raise
        except (ValueError, IndexError, ConfigurationError) as e:
            # opakuj błąd w FZParseError z kontekstem
            raise FZParseError(str(e), lineno, raw) from e

    if not kb.outputs:
        raise FZParseError("Brak zmiennych wyjściowych (var output ...)", line=len(lines), content="<eof>")

    # Zastosuj defuzz (globalnie lub 'on <ovar>') w kolejności wystąpienia
    for (dlineno, draw, target, method, grid) in defuzz_cfg:
        if target is None:
            kb.defuzz = method
            targets = list(kb.outputs.values())
        else:
            if target not in kb.outputs:
                raise FZParseError(f"defuzz: nieznana zmienna wyjściowa '{target}'", dlineno, draw)
            kb.outputs[target].defuzz = method
            targets = [kb.outputs[target]]
        if grid is not None:
            for ov in targets:
                if grid[0] == "KEEP":
                    # zmień tylko n, zachowując dotychczasowy zakres
                    ymin, ymax, _n = ov.grid
                    ov.grid = (ymin, ymax, int(grid[2]))
                else:
                    ov.grid = (float(grid[0]), float(grid[1]), int(grid[2]))

    for (plineno, praw, oname, labels) in pending_priority:
        ov = kb.outputs.get(oname)
        if ov is None:
            raise FZParseError(f"priority: nieznana zmienna wyjściowa '{oname}'", plineno, praw)
        for lab in labels:
            if lab not in ov.terms:
                raise FZParseError(f"priority: nieznana etykieta '{oname}.{lab}'", plineno, praw)
        ov.priority = list(labels)

    for (dlineno, draw, oname, label) in pending_default:
        if oname not in kb.outputs:
            raise FZParseError(f"default: nieznana zmienna wyjściowa '{oname}'", dlineno, draw)
        kb.outputs[oname].default = label

    # Walidacja reguł i dopisanie do KB
    for (rlineno, rraw, ante, (oname, olabel), w, active) in pending_rules:
        if oname not in kb.outputs:
            raise FZParseError(f"Rule: nieznana zmienna wyjściowa '{oname}'", rlineno, rraw)
        if olabel not in kb.outputs[oname].terms:
            raise FZParseError(f"Rule: nieznana etykieta wyjścia '{oname}.{olabel}'", rlineno, rraw)
        for p in ante:
            vobj = kb.inputs.get(p.var) or kb.outputs.get(p.var)
            if vobj is None:
                raise FZParseError(f"Rule: nieznana zmienna '{p.var}'", rlineno, rraw)
            if p.var in kb.outputs:
                raise FZParseError(f"Rule: antecedent na wyjściu '{p.var}' nie jest dozwolony", rlineno, rraw)
            if p.label not in vobj.terms:
                raise FZParseError(f"Rule: nieznana etykieta '{p.var}.{p.label}'", rlineno, rraw)

        kb.add_rule(Rule(antecedent=ante, consequent=(oname, olabel), weight=w, active=active))

    validate_kb(kb)
    return kb
