import argparse
from typing import Dict, List

from ..fuzzy.io.fz_parser import parse_fz, parse_fz_string
from ..fuzzy.model.presets import PRESETS

MODE_CHOICES = ["FIT", "FATI"]
ENGINE_MODES = [0, 1]
PRESET_CHOICES = sorted(PRESETS)
DEFUZZ_CHOICES = ["centroid", "mom", "bisector", "centroid_adaptive", "weighted_average"]

def parse_kv(s: str):
    """'red=3' -> ('red', 3.0)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"Niepoprawny element: '{s}' (oczekiwano 'var=wartość').")
    k, v = (t.strip() for t in s.split("=", 1))
    if not k:
        raise argparse.ArgumentTypeError(f"Pusty klucz w: '{s}'.")
    try:
        return k, float(v)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{v}' nie jest liczbą (w '{s}').") from None

def parse_at(items) -> Dict[str, float]:
    """
    Akceptuje:
      - None
      - ["x=1","y=2"] lub ["x=1, y=2"]
    """
    if not items:
        return {}
    pairs: List[str] = []
    for elem in items:
        for tok in str(elem).split(","):
            tok = tok.strip()
            if tok:
                pairs.append(tok)
    return dict(parse_kv(p) for p in pairs)

def add_model_args(sp: argparse.ArgumentParser, default_preset: str = "rgb") -> None:
    g = sp.add_mutually_exclusive_group()
    g.add_argument("--model", help="plik .fz")
    g.add_argument("--preset", choices=PRESET_CHOICES, default=default_preset,
                   help="wbudowana baza wiedzy (gdy brak --model)")

def load_model(args):
    """KB z --model (plik .fz) albo z --preset."""
    path = getattr(args, "model", None)
    if path:
        return parse_fz(path)
    return parse_fz_string(PRESETS[getattr(args, "preset", None) or "rgb"])
