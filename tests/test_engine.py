import pytest

from core.descriptor import ProcessDescriptor
from core.engine import EngineState, SchedulerEngine
from core.errors import InvalidLevelAssignment
from core.event import EventType


def run(*rows, verbose=False):
    descriptors = [ProcessDescriptor(*row) for row in rows]
    engine = SchedulerEngine(descriptors, verbose=verbose)
    return engine, engine.run()


def by_label(result):
    return {p.label: p for p in result.processes}


def test_two_levels_lower_level_waits_for_empty_higher_queue():
    _, result = run(('A', 5, 0, 1, 1), ('B', 4, 1, 2, 1))
    procs = by_label(result)
    a, b = procs['A'], procs['B']
    assert (a.completion_time, a.turnaround_time, a.waiting_time, a.response_time) == (5, 5, 0, 0)
    # B runs a 3-unit slice at t=5, then its last unit at t=8
    assert (b.completion_time, b.turnaround_time, b.waiting_time, b.response_time) == (9, 8, 4, 4)
    assert [(ev.time, ev.payload['slice']) for ev in result.slices('A')] == [(t, 1) for t in range(5)]
    assert [(ev.time, ev.payload['slice']) for ev in result.slices('B')] == [(5, 3), (8, 1)]
    assert result.makespan == 9


def test_idle_gap_before_first_arrival():
    _, result = run(('P', 2, 5, 1, 1))
    idle = result.idle_intervals()
    assert len(idle) == 1
    assert (idle[0].payload['start'], idle[0].payload['end'], idle[0].payload['duration']) == (0, 5, 5)
    assert idle[0].label == 'P'
    assert result.slices('P')[0].time == 5
    p = result.processes[0]
    assert p.completion_time == 7
    assert p.response_time == 0
    assert result.makespan == 7
    assert result.cpu_busy_time == 2
    assert result.cpu_utilisation == 28


def test_idle_gap_between_bursts():
    _, result = run(('X', 1, 0, 2, 1), ('Y', 1, 4, 3, 1))
    idle = result.idle_intervals()
    assert [(ev.payload['start'], ev.payload['end']) for ev in idle] == [(1, 4)]
    assert by_label(result)['Y'].completion_time == 5


def test_mixed_workload_metrics():
    _, result = run(
        ('A', 3, 0, 1, 5),
        ('B', 4, 0, 2, 3),
        ('C', 2, 1, 3, 1),
        ('D', 1, 2, 1, 2),
    )
    got = {p.label: (p.completion_time, p.turnaround_time, p.waiting_time, p.response_time)
           for p in result.processes}
    assert got == {
        'A': (4, 4, 1, 0),
        'B': (8, 8, 4, 4),
        'C': (10, 9, 7, 7),
        'D': (3, 1, 0, 0),
    }
    assert [p.label for p in result.processes] == ['A', 'B', 'C', 'D']
    assert result.makespan == 10
    assert result.cpu_utilisation == 100


def test_arrival_during_slice_does_not_preempt():
    _, result = run(('LOW', 3, 0, 2, 1), ('HIGH', 1, 1, 1, 1))
    procs = by_label(result)
    assert procs['LOW'].completion_time == 3
    assert procs['HIGH'].response_time == 2
    assert procs['HIGH'].completion_time == 4


def test_arrival_during_slice_is_queued_ahead_of_requeued_process():
    _, result = run(('X', 2, 0, 1, 1), ('Y', 1, 1, 1, 1))
    order = [ev.label for ev in result.slices()]
    assert order == ['X', 'Y', 'X']
    assert by_label(result)['Y'].completion_time == 2
    assert by_label(result)['X'].completion_time == 3


def test_equal_arrivals_keep_input_order():
    _, result = run(('second', 2, 0, 3, 1), ('first', 2, 0, 3, 1))
    assert [p.label for p in result.processes] == ['second', 'first']
    assert [ev.label for ev in result.slices()] == ['second', 'first']


def test_duplicate_labels_are_independent():
    _, result = run(('P', 1, 0, 1, 1), ('P', 1, 0, 1, 1))
    assert [p.completion_time for p in result.processes] == [1, 2]


def test_process_never_changes_level():
    _, result = run(('Q3', 5, 0, 3, 1))
    assert {ev.payload['level'] for ev in result.slices()} == {3}
    assert [ev.payload['slice'] for ev in result.slices()] == [2, 2, 1]


def test_empty_workload_terminates_immediately():
    engine, result = run()
    assert result.makespan == 0
    assert result.processes == []
    assert result.trace == []
    assert engine.state == EngineState.TERMINATED


def test_invalid_level_is_rejected_before_simulation():
    with pytest.raises(InvalidLevelAssignment):
        SchedulerEngine([ProcessDescriptor('bad', 1, 0, 4, 1)])


def test_verbose_trace_output(capsys):
    run(('P', 2, 3, 2, 1), verbose=True)
    out = capsys.readouterr().out
    assert "[t=0] IDLE 0->3 waiting for P" in out
    assert "[t=3] DISPATCH P (Q2, q=3) for 2u, remaining 0" in out
    assert "[t=5] COMPLETE P" in out


WORKLOADS = [
    [('A', 5, 0, 1, 1), ('B', 4, 1, 2, 1)],
    [('A', 3, 0, 1, 5), ('B', 4, 0, 2, 3), ('C', 2, 1, 3, 1), ('D', 1, 2, 1, 2)],
    [('x', 7, 3, 3, 1), ('y', 1, 3, 1, 1), ('z', 6, 10, 2, 1), ('w', 2, 30, 1, 1)],
    [('a', 4, 2, 2, 1), ('b', 4, 2, 2, 1), ('c', 5, 0, 3, 1), ('d', 3, 6, 1, 1), ('e', 1, 7, 3, 1)],
]


@pytest.mark.parametrize('rows', WORKLOADS)
def test_metric_invariants(rows):
    _, result = run(*rows)
    assert len(result.processes) == len(rows)
    for p in result.processes:
        assert p.burst_remaining == 0
        assert p.completion_time >= p.arrival_time
        assert p.turnaround_time == p.completion_time - p.arrival_time
        assert p.waiting_time == p.turnaround_time - p.burst_original
        slices = [ev for ev in result.trace if ev.type == EventType.DISPATCH and ev.label == p.label]
        assert sum(ev.payload['slice'] for ev in slices) == p.burst_original
        assert all(ev.time >= p.arrival_time for ev in slices)
        assert p.response_time == slices[0].time - p.arrival_time
        assert p.first_dispatch_time() == slices[0].time
    assert result.makespan == max(p.completion_time for p in result.processes)


@pytest.mark.parametrize('rows', WORKLOADS)
def test_trace_is_time_ordered_and_slices_do_not_overlap(rows):
    _, result = run(*rows)
    clock = 0
    for ev in result.slices():
        assert ev.time >= clock
        clock = ev.time + ev.payload['slice']
    busy = sum(ev.payload['slice'] for ev in result.slices())
    idle = sum(ev.payload['duration'] for ev in result.idle_intervals())
    assert busy == result.cpu_busy_time
    assert busy + idle == result.makespan


def test_zero_burst_completes_at_its_dispatch_time():
    _, result = run(('A', 2, 0, 1, 1), ('Z', 0, 0, 1, 1))
    z = by_label(result)['Z']
    dispatch = result.slices('Z')
    assert [(ev.time, ev.payload['slice']) for ev in dispatch] == [(1, 0)]
    assert z.completion_time == 1
    assert z.response_time == 1
    assert z.waiting_time == z.turnaround_time == 1
    assert by_label(result)['A'].completion_time == 2
    assert result.makespan == 2


def test_negative_burst_finishes_on_first_dispatch():
    _, result = run(('N', -3, 4, 2, 1))
    n = result.processes[0]
    assert n.completion_time == 4
    assert n.turnaround_time == 0
    assert n.waiting_time == 3
    assert result.cpu_busy_time == 0
