"""Time scale conversion graph.

The six time scales are not all directly convertible. A table of one-hop
offset models links adjacent scales (TT-TAI, TT-TDB, TAI-UTC, TT-TCG,
TDB-TCB), and a second table lists the intermediate hops for every pair
without a direct link. :class:`ConversionGraph` holds both tables as
read-only mappings and provides:

- :meth:`ConversionGraph.path`: the ordered list of scales to walk.
- :meth:`ConversionGraph.apply_offsets`: apply every hop's offset to a split
  Julian Date.

``DEFAULT_GRAPH`` is the process-wide graph used by
:class:`~astroepochs.epoch.Time`. It is never mutated; substituting an
offset model (for example a higher-fidelity TDB model) produces a new graph
via :meth:`ConversionGraph.with_offset`, which can then be passed to
:meth:`Time.to_scale <astroepochs.epoch.Time.to_scale>`.

Typical usage::

    from astroepochs.conversions import get_conversion_path
    get_conversion_path("tai", "tcb")  # [TAI, TT, TDB, TCB]
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from jax.typing import ArrayLike

from . import offsets
from .constants import JD_J2000, SECONDS_PER_DAY
from .exceptions import ConversionError
from .scales import TimeScale, as_scale
from .utils import cast_like, promote, rebalance

logger = logging.getLogger(__name__)

OffsetFunction = Callable[[ArrayLike], ArrayLike]
"""Offset model: seconds since J2000.0 in the source scale -> dst - src seconds."""

ScalePair = tuple[TimeScale, TimeScale]

TAI, TT, TDB, UTC, TCB, TCG = (
    TimeScale.TAI,
    TimeScale.TT,
    TimeScale.TDB,
    TimeScale.UTC,
    TimeScale.TCB,
    TimeScale.TCG,
)

OFFSET_TABLE: Mapping[ScalePair, OffsetFunction] = MappingProxyType({
    (TT, TAI): offsets.offset_tt2tai,
    (TAI, TT): offsets.offset_tai2tt,
    (TT, TDB): offsets.offset_tt2tdb,
    (TDB, TT): offsets.offset_tdb2tt,
    (TAI, UTC): offsets.offset_tai2utc,
    (UTC, TAI): offsets.offset_utc2tai,
    (TCG, TT): offsets.offset_tcg2tt,
    (TT, TCG): offsets.offset_tt2tcg,
    (TCB, TDB): offsets.offset_tcb2tdb,
    (TDB, TCB): offsets.offset_tdb2tcb,
})

# Intermediate hops for pairs without a direct offset model. The reverse
# direction of each entry walks the same hops backwards.
MULTI_HOPS: Mapping[ScalePair, tuple[TimeScale, ...]] = MappingProxyType({
    (TAI, TCB): (TT, TDB),
    (TAI, TCG): (TT,),
    (TAI, TDB): (TT,),
    (TCB, TCG): (TDB, TT),
    (TCB, TT): (TDB,),
    (TCB, UTC): (TDB, TT, TAI),
    (TCG, TDB): (TT,),
    (TCG, UTC): (TT, TAI),
    (TDB, UTC): (TT, TAI),
    (TT, UTC): (TAI,),
})


@dataclass(frozen=True, eq=False)
class ConversionGraph:
    """Immutable pair of one-hop offset and multi-hop path tables.

    Args:
        offsets: Maps ``(src, dst)`` adjacent scale pairs to their offset
            model.
        multi_hops: Maps ``(src, dst)`` pairs without a direct offset model
            to the intermediate scales between them.

    Examples:
        ```python
        from astroepochs.conversions import DEFAULT_GRAPH
        DEFAULT_GRAPH.path("tt", "utc")  # [TT, TAI, UTC]
        ```
    """

    offsets: Mapping[ScalePair, OffsetFunction] = field(default_factory=lambda: OFFSET_TABLE)
    multi_hops: Mapping[ScalePair, tuple[TimeScale, ...]] = field(default_factory=lambda: MULTI_HOPS)

    def __post_init__(self):
        object.__setattr__(self, "offsets", MappingProxyType(dict(self.offsets)))
        object.__setattr__(self, "multi_hops", MappingProxyType(dict(self.multi_hops)))

    def path(self, from_scale: TimeScale | str, to_scale: TimeScale | str) -> list[TimeScale]:
        """Return the ordered scales visited when converting *from_scale* to *to_scale*.

        Lookup order: identity, forward multi-hop entry, reversed multi-hop
        entry, direct offset model in either direction.

        Args:
            from_scale: Source time scale.
            to_scale: Target time scale.

        Returns:
            list[TimeScale]: ``[from_scale, ...hops..., to_scale]``, or
                ``[from_scale]`` when both scales are equal.

        Raises:
            ConversionError: If no path is known between the scales.
        """
        src = as_scale(from_scale)
        dst = as_scale(to_scale)

        if src == dst:
            return [src]
        if (src, dst) in self.multi_hops:
            return [src, *self.multi_hops[(src, dst)], dst]
        if (dst, src) in self.multi_hops:
            return [src, *reversed(self.multi_hops[(dst, src)]), dst]
        if (src, dst) in self.offsets or (dst, src) in self.offsets:
            return [src, dst]
        raise ConversionError(f"No known time scale conversion path from {src} to {dst}")

    def apply_offsets(self, jd1, jd2, from_scale: TimeScale | str, to_scale: TimeScale | str):
        """Convert a split Julian Date from *from_scale* to *to_scale*.

        Each hop's offset is evaluated at the current seconds since J2000.0,
        cast to the working numeric type and accumulated into ``jd2``. The
        pair is rebalanced once after the last hop.

        Args:
            jd1: First component of the Julian Date.
            jd2: Second component of the Julian Date.
            from_scale: Scale the date is expressed in.
            to_scale: Target scale.

        Returns:
            tuple: Rebalanced ``(jd1, jd2)`` in the target scale.

        Raises:
            ConversionError: If there is no path, or a hop along the path has
                no registered offset model.
        """
        src = as_scale(from_scale)
        dst = as_scale(to_scale)
        if src == dst:
            return rebalance(jd1, jd2)

        path = self.path(src, dst)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Converting %s -> %s via %s", src, dst, " -> ".join(map(str, path)))

        jd1, jd2 = promote(jd1, jd2)
        j2000 = cast_like(jd1, JD_J2000)
        seconds_per_day = cast_like(jd2, SECONDS_PER_DAY)
        for hop_src, hop_dst in zip(path[:-1], path[1:]):
            offset_fn = self.offsets.get((hop_src, hop_dst))
            if offset_fn is None:
                raise ConversionError(
                    f"No offset model registered for time scale hop {hop_src} -> {hop_dst}"
                )
            # Seconds and offsets stay in the working type of the epoch
            seconds_since_j2000 = ((jd1 - j2000) + jd2) * seconds_per_day
            offset = cast_like(jd2, offset_fn(seconds_since_j2000))
            jd2 = jd2 + offset / seconds_per_day

        return rebalance(jd1, jd2)

    def with_offset(
        self, from_scale: TimeScale | str, to_scale: TimeScale | str, offset_fn: OffsetFunction
    ) -> ConversionGraph:
        """Return a copy of this graph with the offset model for one hop replaced.

        Args:
            from_scale: Source scale of the hop.
            to_scale: Target scale of the hop.
            offset_fn: Function of source-scale seconds since J2000.0
                returning ``to - from`` in seconds.

        Returns:
            ConversionGraph: New graph; this graph is unchanged.
        """
        key = (as_scale(from_scale), as_scale(to_scale))
        if key in self.offsets:
            logger.info("Replacing %s -> %s offset model with %r", key[0], key[1], offset_fn)
        table = dict(self.offsets)
        table[key] = offset_fn
        return ConversionGraph(offsets=table, multi_hops=self.multi_hops)

    def without_offset(self, from_scale: TimeScale | str, to_scale: TimeScale | str) -> ConversionGraph:
        """Return a copy of this graph with the offset model for one hop removed.

        Args:
            from_scale: Source scale of the hop.
            to_scale: Target scale of the hop.

        Returns:
            ConversionGraph: New graph; this graph is unchanged.
        """
        key = (as_scale(from_scale), as_scale(to_scale))
        table = {k: v for k, v in self.offsets.items() if k != key}
        return ConversionGraph(offsets=table, multi_hops=self.multi_hops)


DEFAULT_GRAPH = ConversionGraph()


def get_conversion_path(
    from_scale: TimeScale | str, to_scale: TimeScale | str, graph: ConversionGraph | None = None
) -> list[TimeScale]:
    """Return the conversion path between two scales in *graph* (default graph if ``None``).

    See :meth:`ConversionGraph.path`.
    """
    graph = DEFAULT_GRAPH if graph is None else graph
    return graph.path(from_scale, to_scale)


def apply_offsets(
    jd1,
    jd2,
    from_scale: TimeScale | str,
    to_scale: TimeScale | str,
    graph: ConversionGraph | None = None,
):
    """Convert a split Julian Date between scales using *graph* (default graph if ``None``).

    See :meth:`ConversionGraph.apply_offsets`.
    """
    graph = DEFAULT_GRAPH if graph is None else graph
    return graph.apply_offsets(jd1, jd2, from_scale, to_scale)
