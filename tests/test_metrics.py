from campus_graph.metrics import PerformanceMetrics


def test_counters_default_to_zero_and_accumulate():
    m = PerformanceMetrics()
    assert m.get_counter("visits") == 0
    m.increment("visits")
    m.increment("visits")
    m.add("edges", 5)
    assert m.get_counter("visits") == 2
    assert m.counters() == {"visits": 2, "edges": 5}
    assert m.total_operations() == 7


def test_counters_copy_is_independent():
    m = PerformanceMetrics()
    m.increment("a")
    snapshot = m.counters()
    snapshot["a"] = 100
    assert m.get_counter("a") == 1


def test_timer_is_monotonic_and_freezes_on_stop():
    m = PerformanceMetrics()
    assert m.elapsed_ns() == 0
    m.start_timer()
    assert m.running
    sum(range(10000))
    m.stop_timer()
    assert not m.running
    first = m.elapsed_ns()
    assert first >= 0
    assert m.elapsed_ns() == first
    assert m.elapsed_ms() == first / 1_000_000.0


def test_reset_clears_everything():
    m = PerformanceMetrics()
    m.start_timer()
    m.increment("x")
    m.stop_timer()
    m.reset()
    assert m.counters() == {}
    assert m.elapsed_ns() == 0


def test_series_and_summary():
    m = PerformanceMetrics()
    m.add("b", 2)
    m.add("a", 1)
    s = m.as_series()
    assert list(s.index) == ["a", "b"]
    assert s["b"] == 2
    assert m.summary().endswith("| Ops: 3")
    assert "Total Operations: 3" in str(m)
