from __future__ import annotations
from typing import List

from ..model.knowledge import KnowledgeBase


def _num(x: float) -> str:
    return f"{float(x):.12g}"


def dump_fz(kb: KnowledgeBase) -> str:
    """Serializuje KB do formatu .fz (wynik jest czytelny dla parse_fz_string)."""
    out: List[str] = []
    if kb.name:
        out.append(f"name {kb.name}")
    out.append(f"tnorm {kb.tnorm}")
    out.append(f"snorm {kb.snorm}")
    out.append(f"mode {kb.mode}")
    out.append(f"defuzz {kb.defuzz}")
    out.append("")

    for kind, variables in (("input", kb.inputs), ("output", kb.outputs)):
        for var in variables.values():
            out.append(f"var {kind} {var.name} {_num(var.vmin)} {_num(var.vmax)}")
            for label, mf in var.terms.items():
                shape, params = mf.fz_params()
                out.append(f"mf {var.name} {label} {shape} " + " ".join(_num(p) for p in params))
            out.append("")

    for ov in kb.outputs.values():
        extra = []
        if ov.defuzz is not None or tuple(ov.grid) != (0.0, 1.0, 101):
            ymin, ymax, n = ov.grid
            method = ov.defuzz or kb.defuzz
            extra.append(f"defuzz {method} grid {_num(ymin)} {_num(ymax)} {int(n)} on {ov.name}")
        if ov.priority:
            extra.append(f"priority {ov.name} " + " ".join(ov.priority))
        if ov.default is not None:
            extra.append(f"default {ov.name} {ov.default}")
        out.extend(extra)
    out.append("")

    for rule in kb.rules:
        line = f"rule {rule}"
        if float(rule.weight) != 1.0:
            line += f" weight {_num(rule.weight)}"
        if not rule.active:
            line += " inactive"
        out.append(line)

    return "\n".join(out) + "\n"
