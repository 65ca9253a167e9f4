class FuzzyError(Exception):
    """Domain error for fuzzy framework."""

class ConfigurationError(FuzzyError):
    """Niespójna baza wiedzy: luki w dziedzinie, nieznane zmienne/etykiety, złe parametry MF."""

class InputError(FuzzyError, ValueError):
    """Złe wejście w czasie działania (arność, typ nieliczbowy)."""

Float = float
