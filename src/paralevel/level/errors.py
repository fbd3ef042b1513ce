class ParseError(ValueError):
    """Raised when level text cannot be parsed. Carries the 1-based line number."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"Line {line}: {message}")
        self.message = message
        self.line = line


class LevelFileError(RuntimeError):
    """Raised when a level file cannot be read or written."""
