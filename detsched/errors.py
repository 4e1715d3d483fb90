# detsched/errors.py

"""Error types raised by the kernel builders."""


class InvalidParameterError(ValueError):
    """Raised when theta / feature count / point-set size are inconsistent.

    Always raised before any tensor computation starts, so callers never
    observe a partially built kernel.
    """
