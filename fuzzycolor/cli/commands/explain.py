import json
from ..argtypes import load_model
from ...fuzzy.model.classifier import Classifier

def _fmt_prop(a) -> str:
    hedges = "".join(f"{h} " for h in a.get("hedges", []))
    return f"{a['var']} is {hedges}{a['label']} (μ={a['mu']:.3f})"

def cmd_explain(args):
    kb = load_model(args)
    clf = Classifier(kb)
    data = dict(args.kv)
    res = clf.explain(data, mode=getattr(args, "mode", None),
                      threshold=getattr(args, "threshold", 0.0))
    if getattr(args, "json", False):
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    for oname, rules in res.items():
        print(f"Output: {oname}")
        if rules and "_fati_label_strengths" in rules[0]:
            meta = rules[0]["_fati_label_strengths"]
            print("  FATI label strengths:", meta)
            rules = rules[1:]
        for r in rules:
            ants = " AND ".join(_fmt_prop(a) for a in r["antecedent"])
            print(f"  R{r['rule_index']}: IF {ants} THEN {r['consequent']['var']} is {r['consequent']['label']}  alpha={r['alpha']:.4f} weight={r['weight']}")
