"""Exception hierarchy for the builder and analyzer."""


class ClusteringError(Exception):
    pass


class FormatError(ClusteringError):
    """A transaction record that cannot be parsed."""

    def __init__(self, path: str, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{path}:{line_number}: {reason}")


class CorruptionError(ClusteringError):
    """A graph file whose header does not agree with its body."""

    def __init__(self, path: str, offset: int, reason: str):
        self.path = path
        self.offset = offset
        self.reason = reason
        super().__init__(f"{path} (byte offset {offset}): {reason}")


class GraphCapacityError(ClusteringError):
    pass
