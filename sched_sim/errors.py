from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for errors that stop a simulation from running."""


class InvalidQuantum(SchedulerError):
    def __init__(self, quantum) -> None:
        super().__init__(f"Round Robin requires a positive quantum, got {quantum!r}")
        self.quantum = quantum


class EmptyProcessSet(SchedulerError):
    def __init__(self) -> None:
        super().__init__("Cannot schedule an empty process set")


class InvalidProcess(SchedulerError):
    pass


class UnknownAlgorithm(SchedulerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown or unimplemented algorithm '{name}'")
        self.name = name


class WorkloadError(SchedulerError):
    pass
