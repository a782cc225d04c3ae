"""Exceptions raised by the maze engine."""


class GenerationFailure(Exception):
    """
    A single generation attempt did not produce an acceptable maze.

    Always recoverable: retry the whole generation with fresh randomness.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
