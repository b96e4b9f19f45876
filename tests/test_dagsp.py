import pytest

from campus_graph.dagsp import UNREACHABLE, CriticalPath, DAGPathSolver
from campus_graph.errors import IllegalState, OutOfRange
from campus_graph.metrics import PerformanceMetrics
from campus_graph.samples import complex_dag, simple_dag

from conftest import make_graph, random_dag


def test_shortest_distances(weighted_dag):
    solver = DAGPathSolver(weighted_dag)
    assert solver.compute_shortest_paths(0)
    assert solver.distances() == [0, 2, 3, 5]
    assert solver.get_path(3) == [0, 1, 2, 3]


def test_longest_distances(weighted_dag):
    solver = DAGPathSolver(weighted_dag)
    assert solver.compute_longest_paths(0)
    assert solver.distances() == [0, 2, 4, 6]


def test_unit_chain():
    g = make_graph(5, [(i, i + 1) for i in range(4)])
    solver = DAGPathSolver(g)
    solver.compute_shortest_paths(0)
    assert [solver.get_distance(i) for i in range(5)] == [0, 1, 2, 3, 4]
    assert solver.get_path(4) == [0, 1, 2, 3, 4]


def test_diamond_prefers_cheaper_branch():
    g = make_graph(4, [(0, 1, 1), (0, 2, 2), (1, 3, 2), (2, 3, 1)])
    solver = DAGPathSolver(g)
    solver.compute_shortest_paths(0)
    assert solver.get_distance(3) == 3
    # both branches cost 3; strict relaxation keeps whichever the order reached first
    assert solver.get_path(3) in ([0, 1, 3], [0, 2, 3])


def test_cycle_reports_false_and_leaves_nothing_queryable(three_cycle):
    solver = DAGPathSolver(three_cycle)
    assert solver.compute_shortest_paths(0) is False
    assert solver.compute_longest_paths(0) is False
    with pytest.raises(IllegalState):
        solver.get_distance(1)
    with pytest.raises(IllegalState):
        solver.get_path(1)
    assert solver.find_critical_path() == CriticalPath()


def test_queries_before_compute_are_illegal():
    solver = DAGPathSolver(simple_dag())
    with pytest.raises(IllegalState):
        solver.get_distance(0)
    with pytest.raises(IllegalState):
        solver.distances()


def test_out_of_range_vertices():
    solver = DAGPathSolver(simple_dag())
    with pytest.raises(OutOfRange):
        solver.compute_shortest_paths(6)
    solver.compute_shortest_paths(0)
    with pytest.raises(OutOfRange):
        solver.get_distance(-1)


def test_unreachable_vertices_use_public_sentinel():
    g = make_graph(4, [(1, 2, 3), (2, 3, 1)])
    solver = DAGPathSolver(g)
    solver.compute_shortest_paths(1)
    assert solver.get_distance(0) is UNREACHABLE
    assert solver.get_path(0) == []
    solver.compute_longest_paths(1)
    assert solver.get_distance(0) is UNREACHABLE
    assert solver.get_distance(3) == 4


def test_negative_weights_are_ordinary_distances():
    g = make_graph(3, [(0, 1, -3), (1, 2, -2)])
    solver = DAGPathSolver(g)
    solver.compute_shortest_paths(0)
    assert solver.get_distance(2) == -5
    assert solver.get_path(2) == [0, 1, 2]


def test_parallel_edges_relaxed_independently():
    g = make_graph(2, [(0, 1, 5), (0, 1, 2)])
    solver = DAGPathSolver(g)
    solver.compute_shortest_paths(0)
    assert solver.get_distance(1) == 2
    solver.compute_longest_paths(0)
    assert solver.get_distance(1) == 5
    assert solver.metrics.get_counter("relaxations") == 4


@pytest.mark.parametrize("seed", range(5))
def test_shortest_distances_satisfy_edge_inequality(seed):
    g = random_dag(20, 50, seed)
    solver = DAGPathSolver(g)
    for source in range(0, 20, 4):
        assert solver.compute_shortest_paths(source)
        for u in range(20):
            du = solver.get_distance(u)
            if du is UNREACHABLE:
                continue
            for e in g.edges_from(u):
                dv = solver.get_distance(e.destination)
                assert dv is not UNREACHABLE
                assert dv <= du + e.weight


@pytest.mark.parametrize("seed", range(5))
def test_reconstructed_paths_follow_edges(seed):
    g = random_dag(20, 50, seed)
    solver = DAGPathSolver(g)
    solver.compute_longest_paths(3)
    for v in range(20):
        path = solver.get_path(v)
        if solver.get_distance(v) is UNREACHABLE:
            assert path == []
            continue
        assert path[0] == 3
        assert path[-1] == v
        total = 0
        for a, b in zip(path, path[1:]):
            assert g.has_edge(a, b)
            total += max(e.weight for e in g.edges_from(a) if e.destination == b)
        assert total == solver.get_distance(v)


def _converging_chains():
    # 0 -> 1 -> 4 and 2 -> 3 -> 4 share the tail 4 -> 5
    return make_graph(6, [(0, 1, 3), (1, 4, 2), (2, 3, 1), (3, 4, 1), (4, 5, 4)])


def test_critical_path_on_converging_chains():
    g = _converging_chains()
    solver = DAGPathSolver(g)
    critical = solver.find_critical_path()
    assert critical.path == [0, 1, 4, 5]
    assert critical.length == 9

    best = 0
    for s in range(g.vertex_count()):
        solver.compute_longest_paths(s)
        best = max([best] + [d for d in solver.distances() if d is not UNREACHABLE])
    assert critical.length == best > 0


def test_critical_path_on_samples():
    critical = DAGPathSolver(complex_dag()).find_critical_path()
    assert critical.path == [0, 1, 4, 7, 9]
    assert critical.length == 17
    critical = DAGPathSolver(simple_dag()).find_critical_path()
    assert critical.path == [0, 1, 3, 4, 5]
    assert critical.length == 11
    assert (critical.source, critical.destination) == (0, 5)


def test_critical_path_ties_keep_first_pair():
    g = make_graph(4, [(0, 1, 5), (2, 3, 5)])
    critical = DAGPathSolver(g).find_critical_path()
    assert critical.path == [0, 1]
    assert critical.length == 5


def test_critical_path_without_edges_is_empty():
    critical = DAGPathSolver(make_graph(1, [])).find_critical_path()
    assert critical.path == []
    assert critical.length == 0
    assert critical.source is None


def test_path_labels():
    solver = DAGPathSolver(simple_dag())
    solver.compute_longest_paths(0)
    assert solver.path_labels(5) == ["Start", "Task1", "Task3", "Task4", "End"]


def test_fractional_source_rejected():
    solver = DAGPathSolver(simple_dag())
    with pytest.raises(OutOfRange):
        solver.compute_shortest_paths(0.5)
    solver.compute_shortest_paths(0)
    with pytest.raises(OutOfRange):
        solver.get_distance(1.5)


class _CountingMetrics(PerformanceMetrics):
    def __init__(self):
        super().__init__()
        self.starts = 0

    def start_timer(self):
        self.starts += 1
        super().start_timer()


def test_critical_path_timer_spans_whole_search():
    metrics = _CountingMetrics()
    critical = DAGPathSolver(complex_dag(), metrics).find_critical_path(progress=False)
    assert critical.length == 17
    assert metrics.starts == 1
    assert not metrics.running
