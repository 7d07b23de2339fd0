"""Shared error types for disloc2d."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when a lattice, palette or sampling configuration is invalid."""


class SamplingExhaustedError(RuntimeError):
    """Raised when a rejection loop runs out of its attempt budget."""

    def __init__(self, loop: str, attempts: int, detail: str = "") -> None:
        self.loop = loop
        self.attempts = int(attempts)
        message = f"{loop} exhausted after {self.attempts} attempts."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class CapabilityNotImplementedError(NotImplementedError):
    """Raised when a policy variant lacks a capability the sampler needs."""

    def __init__(self, obj: object, missing: tuple[str, ...]) -> None:
        self.type_name = type(obj).__name__
        self.missing = tuple(missing)
        joined = ", ".join(self.missing)
        super().__init__(f"No implementation of {joined} defined for {self.type_name}.")


def require_capabilities(obj: object, capabilities: tuple[str, ...]) -> None:
    """Raise unless ``obj`` provides every named callable capability."""
    missing = tuple(name for name in capabilities if not callable(getattr(obj, name, None)))
    if missing:
        raise CapabilityNotImplementedError(obj, missing)
