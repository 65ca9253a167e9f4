from ..argtypes import load_model
from ...fuzzy.model.engine import MamdaniEngine

def cmd_predict(args):
    kb = load_model(args)
    eng = MamdaniEngine(kb)
    values, labels = eng.evaluate(dict(args.kv), method=getattr(args, "defuzz", None))
    for oname, val in values.items():
        lab = labels[oname]
        print(f"{oname}: {val:.6g}  [{lab['chosen']} {lab['strength']:.3f}]")
