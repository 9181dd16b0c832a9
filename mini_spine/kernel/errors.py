# mini_spine/kernel/errors.py
"""
Error kinds raised while generating, realizing and running a spine.

Construction errors all derive from SpineBuildError so callers can treat a
failed build as one outcome and retry with corrected parameters. Runtime
errors (lookup misses, bad time steps) keep the builtin base class that
best describes them.
"""


class SpineBuildError(RuntimeError):
    """Raised when a structure cannot be generated or realized."""
    pass


class InvalidParameter(SpineBuildError, ValueError):
    """Raised for a non-positive geometric parameter or malformed input."""
    pass


class InsufficientModules(SpineBuildError):
    """Raised when connector synthesis gets fewer than two modules."""
    pass


class DanglingReference(SpineBuildError):
    """Raised when an edge references a node that is not in the graph."""
    pass


class UnregisteredTag(SpineBuildError):
    """Raised when an edge tag has no registered builder."""

    def __init__(self, tags):
        self.tags = tuple(tags)
        super().__init__(
            f"No builder registered for tag(s): {', '.join(repr(t) for t in self.tags)}"
        )


class AmbiguousTag(SpineBuildError):
    """Raised when more than one registered builder matches an edge tag."""
    pass


class KeyNotFound(KeyError):
    """Raised when a symbolic key was never registered in the index."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key '{key}' not found in actuator index")

    def __str__(self) -> str:
        return self.args[0]


class InvalidTimeStep(ValueError):
    """Raised when a model is advanced by a non-positive time delta."""
    pass


class SpineNotBuiltError(RuntimeError):
    """Raised when a model is used before setup() has completed."""
    pass
