from __future__ import annotations


class HiddenLineError(Exception):
    """Base class for every error raised by hiddenline."""


class DegenerateConstructionError(HiddenLineError, ValueError):
    """Too few points to build a ring, face or edge."""


class UndefinedOperationError(HiddenLineError, ArithmeticError):
    """Operation has no defined result (zero vector, parallel edges, zero divisor)."""


class ConfigError(HiddenLineError, ValueError):
    pass


class SceneFormatError(HiddenLineError, ValueError):
    pass


class OcclusionCancelled(HiddenLineError):
    pass
