import io

from rich.console import Console

from sched_sim.console_input import collect_processes, collect_quantum, prompt_int


def _feeder(answers):
    it = iter(answers)
    prompts = []

    def fake_input(message):
        prompts.append(message)
        return next(it)

    return fake_input, prompts


def _console():
    return Console(file=io.StringIO(), width=120)


def test_prompt_int_retries_until_valid():
    fake_input, prompts = _feeder(["abc", "-3", "", " 4 "])
    console = _console()
    assert prompt_int("n: ", input_fn=fake_input, console=console) == 4
    assert len(prompts) == 4
    assert console.file.getvalue().count("Invalid input!") == 3


def test_prompt_int_minimum():
    fake_input, _ = _feeder(["0", "1"])
    assert prompt_int("q: ", minimum=1, input_fn=fake_input, console=_console()) == 1


def test_collect_processes_numbers_in_entry_order():
    fake_input, prompts = _feeder(["2", "0", "5", "2", "x", "1", "3", "1"])
    procs = collect_processes(input_fn=fake_input, console=_console())
    assert [(p.pid, p.arrival_time, p.burst_time, p.priority) for p in procs] == [(1, 0, 5, 2), (2, 1, 3, 1)]
    assert prompts[0] == "Enter number of processes: "
    assert "process 2" in prompts[-1]


def test_collect_processes_rejects_zero_burst():
    fake_input, _ = _feeder(["1", "0", "0", "2", "0"])
    procs = collect_processes(input_fn=fake_input, console=_console())
    assert procs[0].burst_time == 2


def test_collect_quantum_rejects_zero():
    fake_input, _ = _feeder(["0", "-2", "3"])
    assert collect_quantum(input_fn=fake_input, console=_console()) == 3
