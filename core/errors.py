# Error taxonomy shared by the loader, the engine and the CLI


class SchedulerError(Exception):
    pass


class InvalidLevelAssignment(SchedulerError, ValueError):
    def __init__(self, label: str, level):
        super().__init__(f"process {label!r} has queue level {level}, expected 1, 2 or 3")
        self.label = label
        self.level = level


class NoProcessesLoaded(SchedulerError):
    pass


class OutputWriteFailure(SchedulerError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot write output file {path}: {reason}")
        self.path = path
        self.reason = reason
