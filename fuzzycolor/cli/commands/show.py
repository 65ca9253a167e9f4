import sys
from typing import List

from ..argtypes import load_model, parse_at
from ...fuzzy.model.classifier import Classifier


# ========= utils: ANSI / pretty =========

_RESET = "\x1b[0m"

def _use_ansi() -> bool:
    return sys.stdout.isatty()

def _ansi_color(mu: float) -> str:
    """
    Kolor wg przynależności (μ):
      ≥ 0.50 → zielony
      ≥ 0.20 → żółty
      < 0.20 → szary
    """
    if not _use_ansi():
        return ""
    if mu >= 0.50:
        return "\x1b[32m"  # green
    if mu >= 0.20:
        return "\x1b[33m"  # yellow
    return "\x1b[90m"      # grey


def _mf_desc(mf) -> str:
    shape, params = mf.fz_params()
    return f"{shape}({', '.join(f'{p:g}' for p in params)})"


# ========= main =========

def cmd_show(args) -> None:
    """
    Flagi wspierane przez parser (subkomenda 'show'):
      --model PATH | --preset NAME : baza wiedzy
      --at x=1 y=2 / --at "x=1,y=2": punkt do policzenia μ/α (opcjonalnie; wszystkie wejścia)
      --include-inactive           : pokaż również reguły inactive (domyślnie: ukryte)
      --fired-only                 : pokaż tylko reguły, które się „odpaliły” dla --at
      --min-alpha FLOAT            : próg α dla --fired-only (domyślnie 0.0)
    """
    kb = load_model(args)
    clf = Classifier(kb)

    xdict = parse_at(getattr(args, "at", None))
    include_inactive = bool(getattr(args, "include_inactive", False))
    fired_only = bool(getattr(args, "fired_only", False))
    min_alpha = float(getattr(args, "min_alpha", 0.0))

    mus = clf.fuzzify(xdict) if xdict else {}
    alphas = {}
    if xdict:
        for firings in clf.fire(xdict).values():
            alphas.update({i: a for i, _r, a in firings})

    # --- Inputs ---
    print(f"Model: {kb.name or '-'}")
    print("Inputs:")
    for name, var in kb.inputs.items():
        if mus:
            parts: List[str] = []
            for lbl, mu in mus[name].items():
                color = _ansi_color(mu)
                reset = _RESET if color else ""
                parts.append(f"{color}{lbl}({mu:.2f}){reset}")
            print(f"  {name} [{var.vmin:g},{var.vmax:g}] = {var.clamp(xdict[name]):g} -> " + ", ".join(parts))
        else:
            terms = ", ".join(f"{lbl}={_mf_desc(mf)}" for lbl, mf in var.terms.items())
            print(f"  {name} [{var.vmin:g},{var.vmax:g}] -> {terms}")

    # --- Outputs ---
    print("Outputs:")
    for name, var in kb.outputs.items():
        terms = ", ".join(var.terms)
        print(f"  {name} [{var.vmin:g},{var.vmax:g}] grid={var.grid} defuzz={var.defuzz or kb.defuzz} -> terms: {terms}")
        if var.priority:
            print(f"    priority: {' > '.join(var.priority)}")
        if var.default is not None:
            print(f"    default: {var.default}")

    # --- Rules ---
    print("Rules:")
    print(f"Engine: tnorm={kb.tnorm}, snorm={kb.snorm}, mode={kb.mode}, defuzz={kb.defuzz}")

    shown = 0
    for i, r in enumerate(kb.rules):
        # filtr aktywności
        if not include_inactive and not r.active:
            continue

        # filtr fired-only (wymaga --at; jeśli brak --at, nie filtrujemy po α)
        alpha_val = alphas.get(i) if xdict else None
        if fired_only and alpha_val is not None and (alpha_val <= 0.0 or alpha_val < min_alpha):
            continue

        suffix = ""
        if not r.active:
            suffix += " [inactive]"
        if alpha_val is not None:
            suffix += f"  α={alpha_val:.4f}"

        print(f"  R{i}: {r} (w={r.weight}){suffix}")
        shown += 1

    if shown == 0:
        print("  (brak reguł do wyświetlenia z tymi filtrami)")
