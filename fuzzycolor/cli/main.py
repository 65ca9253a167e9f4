import logging
import sys

from ..fuzzy.core.types import FuzzyError
from .commands.parser import build_parser

def _setup_logging(verbose: int) -> None:
    level = logging.DEBUG if verbose > 1 else (logging.INFO if verbose else logging.WARNING)
    logger = logging.getLogger("fuzzycolor")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
        logger.addHandler(handler)

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(getattr(args, "verbose", 0))
    try:
        return args.func(args)
    except (FuzzyError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

if __name__ == "__main__":
    sys.exit(main())
