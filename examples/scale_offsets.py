# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "astroepochs"]
#
# [tool.uv.sources]
# astroepochs = { path = ".." }
# ///
"""Tabulate time scale offsets over a span of days.

Builds a batch of epochs starting at an ISO 8601 date, converts them to every
supported time scale with a single JIT-compiled vmap, and prints the offset
of each scale from the input scale in seconds.

Requires astroepochs to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/scale_offsets.py [OPTIONS]

Examples:
    # One year of daily TDB, TCB and TCG offsets from TT
    uv run examples/scale_offsets.py --start 2024-01-01T00:00:00 --days 365 --step 1

    # Leap second at the end of 2016, seen from UTC
    uv run examples/scale_offsets.py --start 2016-12-30T00:00:00 --scale utc --days 4 --step 0.5
"""

import time
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from astroepochs import ISOT, JD, SECONDS_PER_DAY, Time, TimeScale, set_dtype

set_dtype(jnp.float64)  # Must be before any JIT compilation


def _offsets_from(scale: TimeScale):
    targets = [s for s in TimeScale if s is not scale]

    def offsets(t0: Time, days: jax.Array) -> jax.Array:
        t = t0 + days
        rows = []
        for s in targets:
            converted = t.to_scale(s)
            rows.append(((converted.jd1 - t.jd1) + (converted.jd2 - t.jd2)) * SECONDS_PER_DAY)
        return jnp.stack(rows)

    return targets, jax.jit(jax.vmap(offsets, in_axes=(None, 0)))


def main(
    start: Annotated[str, typer.Option(help="First epoch, YYYY-MM-DDTHH:MM:SS")] = "2024-01-01T00:00:00",
    scale: Annotated[str, typer.Option(help="Scale the start epoch is given in")] = "tt",
    days: Annotated[float, typer.Option(help="Span to tabulate in days")] = 365.0,
    step: Annotated[float, typer.Option(help="Spacing between epochs in days")] = 30.0,
) -> None:
    """Print offsets of every time scale from the input scale."""
    t0 = Time(start, scale, ISOT)
    steps = jnp.arange(0.0, days + step / 2, step)

    targets, offsets_fn = _offsets_from(t0.scale)

    t_start = time.perf_counter()
    table = offsets_fn(Time(t0.jd1, t0.jd2, t0.scale, JD), steps)
    table.block_until_ready()
    print(f"Converted {steps.shape[0]} epochs in {time.perf_counter() - t_start:.3f}s\n")

    header = "".join(f"{f'{s} - {t0.scale} [s]':>22}" for s in targets)
    print(f"{'epoch':<26}{header}")
    for i, d in enumerate(steps.tolist()):
        row = "".join(f"{float(v):>22.9f}" for v in table[i])
        print(f"{(t0 + d).isot:<26}{row}")


if __name__ == "__main__":
    typer.run(main)
