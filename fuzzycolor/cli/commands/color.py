import json

from ...fuzzy.io.fz_parser import parse_fz
from ...fuzzy.model.color import ColorEngine

def cmd_color(args):
    engine = ColorEngine(getattr(args, "mode", 0) or 0)
    if getattr(args, "model", None):
        engine.configure(parse_fz(args.model))
    engine.set_color(args.red, args.green, args.blue)

    if getattr(args, "json", False):
        print(json.dumps({
            "inputs": dict(zip(("red", "green", "blue"), engine.inputs)),
            "color": engine.color_label,
            "color_strength": engine.color_strength,
            "color_degree": engine.color_degree,
            "luminosity": engine.luminosity_label,
            "luminosity_strength": engine.luminosity_strength,
            "lux": engine.luminosity,
        }, indent=2))
        return

    r, g, b = engine.inputs
    lbl = engine.labels()
    print(f"RGB({r:g}, {g:g}, {b:g})  #{int(round(r)):X}{int(round(g)):X}{int(round(b)):X}")
    print(f"  color:      {lbl['color']}  (degree={lbl['degree']})")
    print(f"  luminosity: {lbl['luminosity']}  (lux={lbl['lux']})")
