"""
Exceptions raised by the AniType engine
"""


class AniTypeError(ValueError):
    """Base class for configuration problems reported by the engine"""


class StaggerOverflowError(AniTypeError):
    """A line holds more letters than the stagger index can order"""

    def __init__(self, line_index: int, length: int, limit: int):
        self.line_index = line_index
        self.length = length
        self.limit = limit
        super().__init__(
            f"Line {line_index + 1} has {length} letters; stagger timing "
            f"supports at most {limit} letters per line"
        )
