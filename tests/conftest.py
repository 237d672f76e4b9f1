import pytest

from sched_sim.models import Process


@pytest.fixture
def procs():
    return [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=1),
        Process(3, arrival_time=2, burst_time=1, priority=3),
    ]


@pytest.fixture
def idle_procs():
    return [
        Process(1, arrival_time=0, burst_time=2, priority=1),
        Process(2, arrival_time=5, burst_time=3, priority=0),
        Process(3, arrival_time=6, burst_time=1, priority=2),
    ]
