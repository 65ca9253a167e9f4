import json
import logging
from argparse import Namespace

import yaml

from ..argtypes import parse_kv
from ...fuzzy.core.types import ConfigurationError
from .validate import cmd_validate
from .show import cmd_show
from .color import cmd_color
from .evaluate import cmd_evaluate
from .explain import cmd_explain
from .predict import cmd_predict
from .export import cmd_export

logger = logging.getLogger(__name__)

COMMANDS = {
    "validate": cmd_validate,
    "show": cmd_show,
    "color": cmd_color,
    "evaluate": cmd_evaluate,
    "explain": cmd_explain,
    "predict": cmd_predict,
    "export": cmd_export,
}

# klucze z project.engine przyjmowane przez komendę; "mode" to 0|1 dla color, FIT|FATI dla explain
ENGINE_KEYS = {
    "validate": ("preset", "model"),
    "show": ("preset", "model"),
    "export": ("preset", "model"),
    "predict": ("preset", "model", "defuzz"),
    "explain": ("preset", "model", "mode"),
    "color": ("model", "mode"),
    "evaluate": (),
}

def _engine_defaults(section: str, engine: dict) -> dict:
    params = {k: v for k, v in engine.items() if k in ENGINE_KEYS[section]}
    mode = params.get("mode")
    if mode is not None:
        wanted = int if section == "color" else str
        if isinstance(mode, bool) or not isinstance(mode, wanted):
            del params["mode"]
    return params

def _ns(d: dict) -> Namespace:
    d = dict(d or {})
    kv = d.get("kv")
    # kv: {red: 15, ...} | ["red=15", ...]
    if isinstance(kv, dict):
        d["kv"] = [(k, float(v)) for k, v in kv.items()]
    elif isinstance(kv, list):
        d["kv"] = [parse_kv(s) if isinstance(s, str) else tuple(s) for s in kv]
    return Namespace(**d)

def _load_cfg(path: str):
    with open(path, encoding="utf-8") as f:
        if path.lower().endswith((".yml", ".yaml")):
            return yaml.safe_load(f) or {}
        return json.load(f)

def cmd_run(args):
    """
    Config: mapa <komenda>: {argumenty} lub <komenda>: [{...}, {...}].
    Sekcja 'project.engine' (mode/preset/model/defuzz) uzupełnia brakujące argumenty,
    ale tylko te, które dana komenda przyjmuje (patrz ENGINE_KEYS).
    Komendy wykonywane w kolejności wystąpienia w pliku.
    """
    cfg = _load_cfg(args.config)
    defaults = (cfg.get("project") or {}).get("engine") or {}

    for section, body in cfg.items():
        if section == "project":
            continue
        fn = COMMANDS.get(section)
        if fn is None:
            raise ConfigurationError(f"Nieznana sekcja w configu: '{section}'")
        for item in (body if isinstance(body, list) else [body]):
            params = _engine_defaults(section, defaults)
            params.update(item or {})
            print(f"[run] {section}")
            logger.info("run %s %s", section, params)
            fn(_ns(params))
