"""Probe orchestration: one pool fetch, unit resolution, then the size loop."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

import structlog

from clmm_probe.engine.metrics import MetricsCalculator, RoundTripMetrics, require_valid_mid
from clmm_probe.engine.quote_engine import QuoteEngine, RoundTripLegs
from clmm_probe.errors import QuoteLegError
from clmm_probe.models.config import ProbeConfig
from clmm_probe.models.types import PoolState, UnitConfig
from clmm_probe.units import UnitResolver
from clmm_probe.venues.base import VenueAdapter
from clmm_probe.venues.quoter import DepthLevel

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProbeContext:
    """Per-run values every row repeats."""

    dex: str
    pool: PoolState
    units: UnitConfig


@dataclass(frozen=True)
class SizeSucceeded:
    """Both legs quoted and metrics computed."""

    size: float
    legs: RoundTripLegs
    metrics: RoundTripMetrics


@dataclass(frozen=True)
class SizeFailed:
    """A leg failed for this size; the run continues."""

    size: float
    error: str
    error_type: str


SizeOutcome = SizeSucceeded | SizeFailed


@dataclass
class ProbeRun:
    """Everything a run produced."""

    context: ProbeContext
    outcomes: list[SizeOutcome] = field(default_factory=list)
    depth: list[DepthLevel] = field(default_factory=list)

    @property
    def succeeded(self) -> list[SizeSucceeded]:
        return [o for o in self.outcomes if isinstance(o, SizeSucceeded)]

    @property
    def failed(self) -> list[SizeFailed]:
        return [o for o in self.outcomes if isinstance(o, SizeFailed)]


class ProbeSink(Protocol):
    """Receives run events (console reporter, CSV appender)."""

    def start(self, context: ProbeContext, depth: list[DepthLevel]) -> None: ...

    def record(self, context: ProbeContext, outcome: SizeOutcome) -> None: ...

    def finish(self, run: ProbeRun) -> None: ...

    def close(self) -> None: ...


class ProbeRunner:
    """Runs a round-trip probe over a list of sizes.

    Fatal errors (pool fetch, unit resolution, bad mid price) propagate
    before any sink sees a row. Per-size QuoteLegErrors become SizeFailed
    outcomes and the loop moves on; sizes are never retried. Once started,
    every sink is closed however the run ends.
    """

    def __init__(
        self,
        adapter: VenueAdapter,
        resolver: UnitResolver | None = None,
        sinks: Sequence[ProbeSink] = (),
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize runner.

        Args:
            adapter: Venue adapter for the probed pool
            resolver: Unit resolver; defaults to one without oracle access
            sinks: Reporters notified of each outcome, in order
            sleep: Sleep function used for the inter-size delay
        """
        self.adapter = adapter
        self.resolver = resolver if resolver is not None else UnitResolver()
        self.sinks = list(sinks)
        self.sleep = sleep

    def run(self, config: ProbeConfig) -> ProbeRun:
        """Probe every size in config.sizes, in order.

        Raises:
            ProbeError: Any fatal error, before the size loop starts
        """
        pool = self.adapter.fetch_pool_state(config.pool)
        units = self.resolver.resolve(pool, config)
        require_valid_mid(units.mid_price)

        context = ProbeContext(dex=self.adapter.dex, pool=pool, units=units)
        run = ProbeRun(context=context)
        if config.depth_dump:
            run.depth = self._depth(pool, config.depth_dump)

        engine = QuoteEngine(self.adapter)
        calculator = MetricsCalculator(pool.fee_rate_ppm)
        delay_s = config.delay_ms / 1000

        try:
            for sink in self.sinks:
                sink.start(context, run.depth)

            for i, size in enumerate(config.sizes):
                outcome = self.probe_size(engine, calculator, context, size)
                run.outcomes.append(outcome)
                for sink in self.sinks:
                    sink.record(context, outcome)
                if delay_s > 0 and i < len(config.sizes) - 1:
                    self.sleep(delay_s)

            logger.info(
                "probe_complete",
                dex=context.dex,
                pool=pool.address,
                sizes=len(run.outcomes),
                succeeded=len(run.succeeded),
                failed=len(run.failed),
            )
            for sink in self.sinks:
                sink.finish(run)
        finally:
            # close() is idempotent; finish() may already have released the sink
            for sink in self.sinks:
                sink.close()
        return run

    def probe_size(
        self,
        engine: QuoteEngine,
        calculator: MetricsCalculator,
        context: ProbeContext,
        size: float,
    ) -> SizeOutcome:
        """Quote and measure one size."""
        try:
            legs = engine.quote_round_trip(context.pool, context.units, size)
        except QuoteLegError as e:
            logger.warning(
                "probe_size_failed",
                size=size,
                error=str(e),
                error_type=type(e).__name__,
            )
            return SizeFailed(size=size, error=str(e), error_type=type(e).__name__)

        metrics = calculator.compute(context.units, legs)
        logger.debug(
            "probe_size_succeeded",
            size=size,
            buy=metrics.buy_price,
            sell=metrics.sell_price,
            roundtrip_bps=metrics.roundtrip_bps,
            impact_bps=metrics.impact_bps,
        )
        return SizeSucceeded(size=size, legs=legs, metrics=metrics)

    def _depth(self, pool: PoolState, arrays_each_side: int) -> list[DepthLevel]:
        try:
            return self.adapter.depth_profile(pool, arrays_each_side)
        except Exception as e:
            # Depth dump is diagnostic; quoting does not use it
            logger.warning("depth_dump_failed", pool=pool.address, error=str(e))
            return []


__all__ = [
    "ProbeContext",
    "ProbeRun",
    "ProbeRunner",
    "ProbeSink",
    "SizeFailed",
    "SizeOutcome",
    "SizeSucceeded",
]
