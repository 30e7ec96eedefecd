"""Round-trip execution metrics engine."""

from clmm_probe.engine.metrics import MetricsCalculator, RoundTripMetrics, require_valid_mid
from clmm_probe.engine.quote_engine import QuoteEngine, RoundTripLegs
from clmm_probe.engine.runner import (
    ProbeContext,
    ProbeRun,
    ProbeRunner,
    ProbeSink,
    SizeFailed,
    SizeOutcome,
    SizeSucceeded,
)

__all__ = [
    "MetricsCalculator",
    "RoundTripMetrics",
    "require_valid_mid",
    "QuoteEngine",
    "RoundTripLegs",
    "ProbeContext",
    "ProbeRun",
    "ProbeRunner",
    "ProbeSink",
    "SizeFailed",
    "SizeOutcome",
    "SizeSucceeded",
]
