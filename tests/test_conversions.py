import itertools
import logging
from fractions import Fraction

import jax
import jax.numpy as jnp
import pytest

from astroepochs import JD, MJD, ISOT, TAI, TCB, TCG, TDB, TT, UTC
from astroepochs.conversions import (
    DEFAULT_GRAPH,
    MULTI_HOPS,
    OFFSET_TABLE,
    ConversionGraph,
    apply_offsets,
    get_conversion_path,
)
from astroepochs.epoch import Time
from astroepochs.exceptions import ConversionError, InvalidArgumentError
from astroepochs.scales import TIME_SCALES, TimeScale

# 2017-09-21T12:23:12 TAI expressed in every scale. jd1 is 2458018.0 throughout.
_JD1 = 2458018.0
_JD2 = {
    TAI: 0.016111111111111076,
    UTC: 0.015682870370370305,
    TT: 0.016483611111111077,
    TDB: 0.016483592271460668,
    TCB: 0.016714209840637442,
    TCG: 0.01649397689602741,
}

_SCALE_PAIRS = list(itertools.product(TimeScale, TimeScale))


# ──────────────────────────────────────────────
# Conversion paths
# ──────────────────────────────────────────────


class TestConversionPath:
    def test_identity(self):
        assert get_conversion_path(TT, TT) == [TT]

    def test_direct(self):
        assert get_conversion_path(TT, TAI) == [TT, TAI]
        assert get_conversion_path(TAI, TT) == [TAI, TT]

    def test_forward_multi_hop(self):
        assert get_conversion_path(TAI, TCB) == [TAI, TT, TDB, TCB]

    def test_reversed_multi_hop(self):
        assert get_conversion_path(TCB, TAI) == [TCB, TDB, TT, TAI]

    def test_reversed_multi_hop_utc(self):
        assert get_conversion_path(UTC, TCG) == [UTC, TAI, TT, TCG]

    def test_string_tags(self):
        assert get_conversion_path("tt", "UTC") == [TT, TAI, UTC]

    def test_invalid_scale(self):
        with pytest.raises(InvalidArgumentError, match="invalid time scale 'gps'"):
            get_conversion_path("gps", TT)

    @pytest.mark.parametrize("src, dst", _SCALE_PAIRS)
    def test_path_symmetry(self, src, dst):
        forward = get_conversion_path(src, dst)
        backward = get_conversion_path(dst, src)
        assert backward == forward[::-1]

    @pytest.mark.parametrize("src, dst", _SCALE_PAIRS)
    def test_path_endpoints(self, src, dst):
        path = get_conversion_path(src, dst)
        assert path[0] is src
        assert path[-1] is dst
        assert len(path) == len(set(path))

    @pytest.mark.parametrize("src, dst", _SCALE_PAIRS)
    def test_every_hop_has_offset_model(self, src, dst):
        path = get_conversion_path(src, dst)
        for hop in zip(path[:-1], path[1:]):
            assert hop in OFFSET_TABLE


# ──────────────────────────────────────────────
# Conversion tables
# ──────────────────────────────────────────────


class TestConversionTables:
    def test_tables_read_only(self):
        with pytest.raises(TypeError):
            OFFSET_TABLE[(TT, UTC)] = lambda s: s
        with pytest.raises(TypeError):
            MULTI_HOPS[(TT, TCB)] = (TDB,)

    def test_all_scales_reachable(self):
        assert TIME_SCALES == set(TimeScale)
        for src, dst in _SCALE_PAIRS:
            get_conversion_path(src, dst)

    def test_graph_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_GRAPH.offsets = {}


# ──────────────────────────────────────────────
# Scale conversion values
# ──────────────────────────────────────────────


class TestScaleConversions:
    @pytest.mark.parametrize("src, dst", _SCALE_PAIRS)
    def test_truth_table(self, src, dst):
        t = Time(_JD1, _JD2[src], src, JD)
        converted = t.to_scale(dst)
        assert converted.scale is dst
        assert converted.format is JD
        assert converted.jd1 == pytest.approx(_JD1, abs=1e-9)
        assert converted.jd2 == pytest.approx(_JD2[dst], abs=1e-9)

    def test_from_isot(self):
        t = Time("2017-09-21T12:23:12", TAI, ISOT)
        assert t.utc.isot == "2017-09-21T12:22:35.000"
        assert t.tt.isot == "2017-09-21T12:23:44.184"
        assert t.tdb.jd2 == pytest.approx(_JD2[TDB], abs=1e-9)
        assert t.tcb.jd2 == pytest.approx(_JD2[TCB], abs=1e-9)
        assert t.tcg.jd2 == pytest.approx(_JD2[TCG], abs=1e-9)

    def test_scale_accessors_keep_format(self):
        t = Time(58017.51611111111, TAI, MJD)
        for converted in (t.tai, t.tt, t.tdb, t.utc, t.tcb, t.tcg):
            assert converted.format is MJD

    def test_scale_accessor_does_not_mutate(self):
        t = Time(_JD1, _JD2[TAI], TAI, JD)
        _ = t.tcb
        assert t.scale is TAI
        assert t.jd2 == _JD2[TAI]

    def test_identity_conversion(self):
        t = Time(_JD1, _JD2[TT], TT, JD)
        same = t.tt
        assert same.jd1 == t.jd1
        assert same.jd2 == t.jd2
        assert same == t

    def test_to_scale_string(self):
        t = Time(_JD1, _JD2[TAI], TAI, JD)
        assert t.to_scale("tt") == t.tt

    def test_roundtrip_through_all_scales(self):
        t = Time(_JD1, _JD2[UTC], UTC, JD)
        back = t.tai.tt.tcg.tt.tdb.tcb.tdb.tt.tai.utc
        assert abs(back - t) < 1e-12

    def test_tt_tai_offset(self):
        t = Time(2451545.0, 0.0, TT, JD)
        tai = t.tai
        assert tai.jd1 == t.jd1
        assert (t.jd2 - tai.jd2) * 86400.0 == pytest.approx(32.184, abs=1e-9)

    def test_conversion_stays_balanced(self):
        t = Time(2451545.0, -0.5, TAI, JD)
        utc = t.utc
        assert -0.5 <= utc.jd2 < 0.5
        assert utc.jd1 == 2451544.0

    def test_fraction_conversion(self):
        t = Time(Fraction(2451545), Fraction(0), TAI, JD)
        tt = t.tt
        assert isinstance(tt.jd2, Fraction)
        assert float(tt.jd2) * 86400.0 == pytest.approx(32.184, abs=1e-9)

    def test_conversion_logs_path(self, caplog):
        t = Time(_JD1, _JD2[TAI], TAI, JD)
        with caplog.at_level(logging.DEBUG, logger="astroepochs.conversions"):
            t.tcb
        assert "TAI -> TT -> TDB -> TCB" in caplog.text

    def test_conversion_path_not_logged_above_debug(self, caplog):
        t = Time(_JD1, _JD2[TAI], TAI, JD)
        with caplog.at_level(logging.INFO, logger="astroepochs.conversions"):
            t.tcb
        assert "Converting" not in caplog.text


# ──────────────────────────────────────────────
# apply_offsets
# ──────────────────────────────────────────────


class TestApplyOffsets:
    def test_identity_rebalances(self):
        assert apply_offsets(2451545.0, 0.75, TT, TT) == (2451546.0, -0.25)

    def test_tt_to_tai(self):
        jd1, jd2 = apply_offsets(2451545.0, 0.0, TT, TAI)
        assert jd1 == 2451545.0
        assert jd2 == pytest.approx(-32.184 / 86400.0, abs=1e-15)

    def test_array_input(self):
        jd1 = jnp.array([2451545.0, 2458018.0])
        jd2 = jnp.array([0.0, _JD2[TAI]])
        out1, out2 = apply_offsets(jd1, jd2, TAI, TT)
        assert out1.shape == (2,)
        assert jnp.allclose(out2 - jd2, 32.184 / 86400.0, atol=1e-12)


# ──────────────────────────────────────────────
# Replaceable offset models
# ──────────────────────────────────────────────


class TestConversionGraph:
    def test_without_offset_keeps_path(self):
        graph = DEFAULT_GRAPH.without_offset(TT, TAI)
        # TAI -> TT remains, so the pair is still linked
        assert graph.path(TT, TAI) == [TT, TAI]

    def test_without_offset_fails_on_conversion(self):
        graph = DEFAULT_GRAPH.without_offset(TT, TAI)
        t = Time(2451545.0, 0.0, TT, JD)
        with pytest.raises(ConversionError, match="No offset model registered for time scale hop TT -> TAI"):
            t.to_scale(TAI, graph=graph)

    def test_without_offset_leaves_default_graph(self):
        DEFAULT_GRAPH.without_offset(TT, TAI)
        assert (TT, TAI) in DEFAULT_GRAPH.offsets
        t = Time(2451545.0, 0.0, TT, JD)
        assert t.tai.scale is TAI

    def test_without_offset_both_directions(self):
        graph = DEFAULT_GRAPH.without_offset(TT, TAI).without_offset(TAI, TT)
        # UTC -> TT is listed as a multi-hop, so the path is still found
        assert graph.path(UTC, TT) == [UTC, TAI, TT]
        with pytest.raises(ConversionError, match="No known time scale conversion path from TT to TAI"):
            graph.path(TT, TAI)

    def test_empty_graph(self):
        graph = ConversionGraph(offsets={}, multi_hops={})
        with pytest.raises(ConversionError, match="No known time scale conversion path"):
            graph.path(TT, TDB)
        assert graph.path(TT, TT) == [TT]

    def test_with_offset_replaces_model(self):
        graph = DEFAULT_GRAPH.with_offset(TT, TDB, jnp.zeros_like)
        t = Time(_JD1, _JD2[TT], TT, JD)
        tdb = t.to_scale(TDB, graph=graph)
        assert tdb.jd1 == t.jd1
        assert tdb.jd2 == t.jd2
        assert DEFAULT_GRAPH.offsets[(TT, TDB)] is OFFSET_TABLE[(TT, TDB)]

    def test_with_offset_logs_replacement(self, caplog):
        with caplog.at_level(logging.INFO, logger="astroepochs.conversions"):
            DEFAULT_GRAPH.with_offset("tt", "tdb", jnp.zeros_like)
        assert "Replacing TT -> TDB offset model" in caplog.text

    def test_with_offset_new_hop(self):
        graph = DEFAULT_GRAPH.with_offset(TT, UTC, lambda s: jnp.full_like(s, -69.184))
        # The multi-hop table still routes TT -> UTC through TAI
        assert graph.path(TT, UTC) == [TT, TAI, UTC]
        assert graph.offsets[(TT, UTC)] is not None

    def test_graph_copy_is_independent(self):
        table = dict(OFFSET_TABLE)
        graph = ConversionGraph(offsets=table)
        del table[(TT, TAI)]
        assert (TT, TAI) in graph.offsets

    def test_module_apply_offsets_with_graph(self):
        graph = DEFAULT_GRAPH.with_offset(TAI, TT, lambda s: jnp.full_like(s, 32.0))
        jd1, jd2 = apply_offsets(2451545.0, 0.0, TAI, TT, graph=graph)
        assert jd2 * 86400.0 == pytest.approx(32.0, abs=1e-9)


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestConversionJAX:
    def test_jit_conversion(self):
        t = Time(_JD1, _JD2[TAI], TAI, JD)
        tcb = jax.jit(lambda t: t.tcb)(t)
        assert tcb.scale is TCB
        assert float(tcb.jd2) == pytest.approx(_JD2[TCB], abs=1e-9)

    def test_vmap_conversion(self):
        jd2 = jnp.linspace(-0.4, 0.4, 9)
        result = jax.vmap(lambda d: Time(_JD1, d, TT, JD).tai.jd2)(jd2)
        assert jnp.allclose(result, jd2 - 32.184 / 86400.0, atol=1e-12)

    def test_grad_of_tdb_jd_wrt_seconds(self):
        t = Time(_JD1, _JD2[TT], TT, JD)

        def tdb_jd(seconds):
            return (t + seconds / 86400.0).tdb.jd

        g = jax.grad(tdb_jd)(0.0)
        assert float(g) == pytest.approx(1.0 / 86400.0, rel=1e-6)

    def test_grad_of_tt_jd_wrt_seconds_added_in_tdb(self):
        t = Time(_JD1, _JD2[TDB], TDB, JD)

        def tt_jd2(seconds):
            return (t + seconds / 86400.0).tt.jd2

        g = jax.grad(tt_jd2)(10.0)
        assert float(g) == pytest.approx(1.0 / 86400.0, rel=1e-6)
