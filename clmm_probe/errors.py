"""Probe error classes.

Fatal errors abort a run before the size loop starts. QuoteLegError and its
subclasses are scoped to a single size: the runner records a NaN row and
moves on to the next size.
"""


class ProbeError(Exception):
    """Base error for probe operations."""

    pass


class ConfigError(ProbeError):
    """Bad or missing required input."""

    pass


class PoolNotFoundError(ProbeError):
    """Pool account does not exist or could not be fetched."""

    pass


class UnsupportedPoolTypeError(ProbeError):
    """Account exists but is not a pool this venue can quote."""

    pass


class UnitResolutionError(ProbeError):
    """Stable-currency units requested but no conversion path exists."""

    pass


class MalformedPoolStateError(ProbeError):
    """Pool state violates an input invariant (e.g. zero mid price)."""

    pass


class QuoteLegError(ProbeError):
    """A single quote leg failed for one size."""

    pass


class ZeroOutputError(QuoteLegError):
    """A leg returned a non-positive base amount."""

    pass


class InsufficientLiquidityError(QuoteLegError):
    """The loaded curve ran out of liquidity before the swap completed."""

    pass


class QuoteUnavailableError(QuoteLegError):
    """The quote provider could not produce a quote."""

    pass


__all__ = [
    "ProbeError",
    "ConfigError",
    "PoolNotFoundError",
    "UnsupportedPoolTypeError",
    "UnitResolutionError",
    "MalformedPoolStateError",
    "QuoteLegError",
    "ZeroOutputError",
    "InsufficientLiquidityError",
    "QuoteUnavailableError",
]
