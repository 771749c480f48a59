class Budget:
    """Elapsed-time account shared by every target of one run."""

    def __init__(self, total_seconds: float = 0.0):
        self.total_seconds = total_seconds
        self.elapsed_seconds = 0.0

    @property
    def bounded(self) -> bool:
        return self.total_seconds > 0

    def exhausted(self) -> bool:
        return self.bounded and self.elapsed_seconds > self.total_seconds

    def consume(self, seconds: float) -> None:
        self.elapsed_seconds += seconds
