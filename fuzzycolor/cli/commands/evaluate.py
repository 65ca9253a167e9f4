from ...fuzzy.io.fz_parser import parse_fz
from ...fuzzy.model.color import ColorEngine
from ...fuzzy.model.presets import load_color_kb

def cmd_evaluate(args):
    engine = ColorEngine(0)
    if getattr(args, "model", None):
        engine.configure(load_color_kb(0), parse_fz(args.model))
    print(f"{engine.evaluate(args.x, args.y):.3f}")
