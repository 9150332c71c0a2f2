"""Replay tests: load/store/modify probe counts, the trace driver and the
Simulation wrapper built from a SimulationConfig.
"""
import pytest
from csim.core.cache import Cache
from csim.core.decoder import decode_line
from csim.core.errors import AddressTooShort, ConfigurationError, MalformedLine, SourceNotFound
from csim.core.simulator import CacheSimulator, describe
from csim.simulation import Simulation, SimulationConfig


def _sim(e=1, s=4, b=4):
    return CacheSimulator(Cache(associativity=e), s=s, b=b)


@pytest.mark.parametrize('code', ['L', 'S'])
def test_load_and_store_probe_once(code):
    sim = _sim()
    results = sim.process(decode_line(f' {code} 10,1', 4, 4))
    assert len(results) == 1
    assert (sim.stats.hits, sim.stats.misses, sim.stats.evictions) == (0, 1, 0)


def test_modify_on_empty_cache_is_miss_then_hit():
    sim = _sim()
    results = sim.process(decode_line(' M 20,1', 4, 4))
    assert [r.hit for r in results] == [False, True]
    assert (sim.stats.hits, sim.stats.misses, sim.stats.evictions) == (1, 1, 0)


def test_modify_evicts_at_most_once():
    # Input: E=1, set 1 holds tag 0 (address 0x10), then M 0x110 (set 1, tag 1).
    # Expected: first probe misses and evicts, second probe hits without eviction.
    sim = _sim()
    sim.step(' L 10,1')
    results = sim.process(decode_line(' M 110,1', 4, 4))
    assert [(r.hit, r.eviction) for r in results] == [(False, True), (True, False)]
    assert sim.stats.evictions == 1


def test_modify_of_resident_tag_is_two_hits():
    sim = _sim()
    sim.step(' L 10,1')
    results = sim.process(decode_line(' M 18,4', 4, 4))
    assert [r.hit for r in results] == [True, True]


def test_padded_address_hits_same_block():
    sim = _sim()
    sim.step(' L 10,1')
    info = sim.step(' L 0010,1')
    assert [r.hit for r in info['results']] == [True]


def test_run_all_yi_trace(yi_trace):
    # csim-ref -s 4 -E 1 -b 4 -t yi.trace -> hits:4 misses:5 evictions:3
    sim = _sim()
    with open(yi_trace) as fh:
        stats = sim.run_all(line.rstrip('\n') for line in fh)
    assert stats.summary() == 'hits:4 misses:5 evictions:3'
    assert sim.lines_read == 7


def test_instruction_lines_do_not_touch_the_cache():
    sim = _sim()
    assert sim.step('I 0400d7d4,8') is None
    assert sim.stats.accesses == 0
    assert sim.cache.contents() == {}


def test_malformed_line_reports_line_number():
    sim = _sim()
    with pytest.raises(MalformedLine) as exc:
        sim.run_all([' L 10,1', 'I 0400d7d4,8', ' Q 10,1'])
    assert exc.value.line_number == 3
    assert 'line 3' in str(exc.value)


def test_callback_and_describe():
    seen = []
    sim = _sim()
    sim.run_all([' L 10,1', 'I 0400d7d4,8', ' M 110,1'], callback=lambda info: seen.append(describe(info)))
    assert seen == ['L 10,1 miss', 'M 110,1 miss eviction hit']


def test_reset():
    sim = _sim()
    sim.step(' L 10,1')
    sim.reset()
    assert sim.stats.accesses == 0
    assert sim.lines_read == 0
    assert sim.cache.contents() == {}


# --- Simulation / configuration --------------------------------------------

@pytest.mark.parametrize('s,b,e,name', [
    (0, 4, 1, 's'),
    (4, 0, 1, 'b'),
    (4, 4, 0, 'E'),
])
def test_zero_parameters_are_rejected(s, b, e, name):
    with pytest.raises(ConfigurationError) as exc:
        SimulationConfig(s=s, b=b, e=e, trace_path='unused')
    assert f'argument {name} cannot be 0' in str(exc.value)


def test_negative_parameters_are_rejected():
    with pytest.raises(ConfigurationError):
        SimulationConfig(s=-1, b=4, e=1, trace_path='unused')


def test_config_geometry():
    cfg = SimulationConfig(s=4, b=5, e=2, trace_path='unused')
    assert cfg.num_sets == 16
    assert cfg.block_size == 32
    assert cfg.cache_size == 16 * 2 * 32


def test_missing_trace_is_reported_before_replay(tmp_path):
    sim = Simulation(SimulationConfig(s=4, b=4, e=1, trace_path=str(tmp_path / 'nope.trace')))
    with pytest.raises(SourceNotFound):
        sim.run_simulation()
    assert sim.stats.accesses == 0


def test_address_too_short_aborts_replay(write_trace):
    path = write_trace([' L 10,1', ' L 1,1'])
    sim = Simulation(SimulationConfig(s=2, b=4, e=1, trace_path=path))
    with pytest.raises(AddressTooShort):
        sim.run_simulation()


def test_replay_is_deterministic(yi_trace):
    cfg = SimulationConfig(s=4, b=4, e=1, trace_path=yi_trace)
    first = Simulation(cfg).run_simulation()
    second = Simulation(cfg).run_simulation()
    assert (first.hits, first.misses, first.evictions) == (second.hits, second.misses, second.evictions)


def test_rerun_starts_from_empty_cache(yi_trace):
    # Input: one Simulation instance, run_simulation() called twice on yi.trace.
    # Expected: both runs report hits:4 misses:5 evictions:3; nothing carries over.
    sim = Simulation(SimulationConfig(s=4, b=4, e=1, trace_path=yi_trace), track_history=True)
    assert sim.run_simulation().summary() == 'hits:4 misses:5 evictions:3'
    stats = sim.run_simulation()
    assert stats.summary() == 'hits:4 misses:5 evictions:3'
    assert len(stats.hit_rate_history) == 9
    assert sim.sim.lines_read == 7


def test_undecodable_line_is_malformed(tmp_path):
    path = tmp_path / 'binary.trace'
    path.write_bytes(b' L 10,1\n \xff L 20,1\n')
    sim = Simulation(SimulationConfig(s=4, b=4, e=1, trace_path=str(path)))
    with pytest.raises(MalformedLine) as exc:
        sim.run_simulation()
    assert exc.value.line_number == 2
    assert '\\xff' in exc.value.line


def test_history_tracking(yi_trace):
    sim = Simulation(SimulationConfig(s=4, b=4, e=1, trace_path=yi_trace), track_history=True)
    stats = sim.run_simulation()
    assert len(stats.hit_rate_history) == stats.accesses == 9
    assert stats.hit_rate_history[-1] == pytest.approx(4 / 9)
