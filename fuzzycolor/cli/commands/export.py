from ..argtypes import load_model
from ...fuzzy.io.fz_writer import dump_fz

def cmd_export(args):
    kb = load_model(args)
    text = dump_fz(kb)
    out = getattr(args, "out", None)
    if not out:
        print(text, end="")
        return
    with open(out, "w", encoding="utf-8") as f:
        f.write(text)
    print(f"Zapisano {out} (rules={len(kb.rules)})")
