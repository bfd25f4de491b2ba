import pytest

from obxf.pulse import SAMPLES, PulseOsc, SampleDelay


def drain(osc, count):
    return [osc.next_blep() for _ in range(count)]


def test_sample_delay_delays_by_length():
    delay = SampleDelay(3)
    outs = [delay.feed_return(v) for v in [1.0, 2.0, 3.0, 4.0, 5.0]]
    assert outs == [0.0, 0.0, 0.0, 1.0, 2.0]


def test_sample_delay_fill_zeroes_clears():
    delay = SampleDelay(3)
    for _ in range(5):
        delay.feed_return(1.0)
    delay.fill_zeroes()
    assert [delay.feed_return(7.0) for _ in range(4)] == [0.0, 0.0, 0.0, 7.0]


def test_sample_delay_rejects_zero_length():
    with pytest.raises(ValueError):
        SampleDelay(0)


@pytest.mark.parametrize("pw", [0.3, 0.5, 0.9])
def test_value_fast_levels(pw):
    osc = PulseOsc()
    high = osc.value_fast(pw, pw)
    low = osc.value_fast(pw - 0.1, pw)
    assert high == pytest.approx(pw)
    assert high - low == pytest.approx(1.0)


def test_value_is_delayed_by_samples():
    osc = PulseOsc()
    outs = [osc.value(0.9, 0.5) for _ in range(SAMPLES + 1)]
    assert outs[:SAMPLES] == [0.0] * SAMPLES
    assert outs[SAMPLES] == pytest.approx(osc.value_fast(0.9, 0.5))


def test_alias_reduction_silent_without_edges():
    osc = PulseOsc()
    assert [osc.alias_reduction() for _ in range(3 * SAMPLES)] == [0.0] * (3 * SAMPLES)


def test_impulse_scales_linearly():
    a, b = PulseOsc(), PulseOsc()
    a.mix_in_impulse_center(0.3, 1.0)
    b.mix_in_impulse_center(0.3, 2.0)
    for va, vb in zip(drain(a, 2 * SAMPLES), drain(b, 2 * SAMPLES)):
        assert vb == pytest.approx(2.0 * va)


def test_impulse_is_consumed():
    osc = PulseOsc()
    osc.mix_in_impulse_center(0.25, 1.0)
    drain(osc, 2 * SAMPLES)
    assert drain(osc, 2 * SAMPLES) == [0.0] * (2 * SAMPLES)


def test_impulse_residual_is_antisymmetric_about_the_step():
    osc = PulseOsc()
    osc.mix_in_impulse_center(0.0, 1.0)
    vals = drain(osc, 2 * SAMPLES)
    centre = SAMPLES - 1
    assert vals[centre] == pytest.approx(-0.5, abs=1e-6)
    for k in range(1, SAMPLES - 1):
        assert vals[centre - k] == pytest.approx(-vals[centre + k], abs=1e-9)


def test_leader_edge_produces_correction():
    osc = PulseOsc()
    osc.process_leader(0.55, 0.1, 0.5, 0.5)
    assert any(abs(osc.alias_reduction()) > 0.0 for _ in range(2 * SAMPLES))


def test_leader_without_edge_produces_nothing():
    osc = PulseOsc()
    osc.process_leader(0.3, 0.1, 0.5, 0.5)
    assert all(osc.alias_reduction() == 0.0 for _ in range(2 * SAMPLES))


def test_leader_running_output_is_bounded_and_centred():
    osc = PulseOsc()
    x, delta, pw = 0.0, 0.01, 0.5
    outs = []
    for _ in range(4000):
        x += delta
        osc.process_leader(x, delta, pw, pw)
        if x >= 1.0:
            x -= 1.0
        outs.append(osc.value(x, pw) + osc.alias_reduction())
    steady = outs[100:]
    assert max(abs(v) for v in steady) < 1.5
    assert sum(steady) / len(steady) == pytest.approx(0.0, abs=0.05)


def test_follower_hard_sync_without_high_state_adds_nothing():
    osc = PulseOsc()
    osc.process_follower(0.2, 0.1, True, 0.5, 0.5, 0.5)
    assert all(osc.alias_reduction() == 0.0 for _ in range(2 * SAMPLES))


def test_follower_hard_sync_after_edge_adds_reset_step():
    synced, free = PulseOsc(), PulseOsc()
    for osc in (synced, free):
        osc.process_follower(0.55, 0.1, False, 0.0, 0.5, 0.5)
    synced.process_follower(0.6, 0.1, True, 0.3, 0.5, 0.5)
    free.process_follower(0.6, 0.1, False, 0.3, 0.5, 0.5)
    assert drain(synced, 2 * SAMPLES) != drain(free, 2 * SAMPLES)


def test_decimation_changes_and_restores_table():
    normal, decimated, restored = PulseOsc(), PulseOsc(), PulseOsc()
    decimated.set_decimation()
    restored.set_decimation()
    restored.remove_decimation()
    for osc in (normal, decimated, restored):
        osc.mix_in_impulse_center(0.4, 1.0)
    base = drain(normal, 2 * SAMPLES)
    assert drain(decimated, 2 * SAMPLES) != base
    assert drain(restored, 2 * SAMPLES) == base