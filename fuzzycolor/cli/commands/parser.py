import argparse
from ..argtypes import (
    parse_kv, add_model_args,
    MODE_CHOICES, ENGINE_MODES, DEFUZZ_CHOICES,
)
# importy komend:
from .validate import cmd_validate
from .show import cmd_show
from .color import cmd_color
from .evaluate import cmd_evaluate
from .explain import cmd_explain
from .predict import cmd_predict
from .export import cmd_export
from .run import cmd_run

def build_parser():
    fmt = argparse.ArgumentDefaultsHelpFormatter
    ap = argparse.ArgumentParser(
        prog="fuzzycolor",
        description=("Rozmyty klasyfikator koloru RGB (0..15 na kanał) – nazwa koloru, jasność "
                     "oraz ogólne wnioskowanie numeryczne evaluate(x, y)"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Przykłady:\n"
            "  fuzzycolor color 15 7 0\n"
            "  fuzzycolor color 7 7 7 --mode 1 --json\n"
            "  fuzzycolor evaluate 1700 50\n"
            "  fuzzycolor validate --model rgb.fz\n"
            "  fuzzycolor show --preset rgb --at red=15 green=0 blue=0 --fired-only\n"
            "  fuzzycolor explain --preset rgb red=15 green=7 blue=0 --json\n"
            "  fuzzycolor predict --preset result x=1700 y=50\n"
            "  fuzzycolor export --preset rgb-gauss --out rgb_gauss.fz\n"
            "  fuzzycolor run --config pipeline.yaml\n"
        )
    )
    ap.add_argument("-v", "--verbose", action="count", default=0, help="więcej logów (-vv = debug)")

    sub = ap.add_subparsers(dest="cmd", required=True)

    # color
    sp_c = sub.add_parser("color", help="Nazwa koloru i jasność dla (red, green, blue)", formatter_class=fmt)
    sp_c.add_argument("red", type=float)
    sp_c.add_argument("green", type=float)
    sp_c.add_argument("blue", type=float)
    sp_c.add_argument("--mode", type=int, choices=ENGINE_MODES, default=0,
                      help="0 – etykiety trójkątne, 1 – gaussowskie")
    sp_c.add_argument("--model", help="własna baza kolorów .fz (zamiast trybu wbudowanego)")
    sp_c.add_argument("--json", action="store_true")
    sp_c.set_defaults(func=cmd_color)

    # evaluate
    sp_ev = sub.add_parser("evaluate", help="Wnioskowanie numeryczne evaluate(x, y)", formatter_class=fmt)
    sp_ev.add_argument("x", type=float)
    sp_ev.add_argument("y", type=float)
    sp_ev.add_argument("--model", help="własna baza .fz z dwoma wejściami")
    sp_ev.set_defaults(func=cmd_evaluate)

    # validate
    sp_v = sub.add_parser("validate", help="Walidacja spójności modelu", formatter_class=fmt)
    add_model_args(sp_v)
    sp_v.set_defaults(func=cmd_validate)

    # show
    sp_s = sub.add_parser("show", help="Pokaż model/MF/reguły; opcj. wartości w punkcie", formatter_class=fmt)
    add_model_args(sp_s)
    sp_s.add_argument("--at", nargs="*")
    sp_s.add_argument("--include-inactive", action="store_true", help="Pokaż również reguły inactive")
    sp_s.add_argument("--fired-only", action="store_true", help="Pokaż tylko reguły, które się odpaliły dla --at")
    sp_s.add_argument("--min-alpha", type=float, default=0.0, help="Próg α dla --fired-only")
    sp_s.set_defaults(func=cmd_show)

    # explain
    sp_e = sub.add_parser("explain", help="Wyjaśnij klasyfikację dla próbki", formatter_class=fmt)
    add_model_args(sp_e)
    sp_e.add_argument("kv", nargs="+", type=parse_kv, help="pary var=wartość")
    sp_e.add_argument("--json", action="store_true")
    sp_e.add_argument("--threshold", type=float, default=0.0)
    sp_e.add_argument("--mode", choices=MODE_CHOICES, help="FIT|FATI; gdy brak, używa trybu z modelu")
    sp_e.set_defaults(func=cmd_explain)

    # predict
    sp_p = sub.add_parser("predict", help="Wartości ostre i etykiety dla pojedynczej próbki", formatter_class=fmt)
    add_model_args(sp_p)
    sp_p.add_argument("kv", nargs="+", type=parse_kv, help="pary var=wartość")
    sp_p.add_argument("--defuzz", choices=DEFUZZ_CHOICES, help="nadpisz metodę defuzyfikacji")
    sp_p.set_defaults(func=cmd_predict)

    # export
    sp_x = sub.add_parser("export", help="Zapisz model (np. wbudowany) w formacie .fz", formatter_class=fmt)
    add_model_args(sp_x)
    sp_x.add_argument("--out", help="plik wyjściowy (jeśli brak -> stdout)")
    sp_x.set_defaults(func=cmd_export)

    #run
    sp_run = sub.add_parser("run", help="Uruchom sekwencję komend z pliku konfiguracyjnego")
    sp_run.add_argument("--config", required=True, help="Ścieżka do pliku config.json / config.yaml")
    sp_run.set_defaults(func=cmd_run)

    return ap
