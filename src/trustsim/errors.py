"""Error types for trustsim.

Two families of failure are reported by the simulation core:

- ConfigurationError: the caller supplied a value the core cannot work with
  (unknown strategy kind, noise outside [0, 1], an elimination count that
  cannot restore the population). Raised at the point of configuration.
- InvariantViolation: the core was driven in a way that should never happen
  under correct use (self-pairing, negative turn count, reentrant step).

Neither is retryable. The host layer decides how to present them.
"""


class TrustSimError(Exception):
    """Base class for all trustsim errors."""


class ConfigurationError(TrustSimError, ValueError):
    """Invalid configuration supplied by the caller."""


class InvariantViolation(TrustSimError, RuntimeError):
    """Internal invariant broken by caller misuse."""


__all__ = [
    "TrustSimError",
    "ConfigurationError",
    "InvariantViolation",
]
