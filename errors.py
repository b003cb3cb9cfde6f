# errors.py

class SimulationError(ValueError):
    """Base class for input rejected by the simulation engine."""


class InvalidFrameCount(SimulationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Frame count must be a positive integer, got {value!r}")


class InvalidReference(SimulationError):
    """A reference that is not an integer page id."""

    def __init__(self, index, value):
        self.index = index
        self.value = value
        super().__init__(
            f"Reference #{index + 1} is not a valid page number: {value!r}"
        )


class PolicyNotRecognized(SimulationError):
    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Unknown replacement policy: {tag!r}")
