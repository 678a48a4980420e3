"""Script parsing exception definitions.

Every error is fatal for the whole load: the bundle loader never
recovers from one and never returns a partial bundle.
"""


class ScriptParseError(ValueError):
    """Base exception for Duke Script parsing.

    Attributes:
        command: The command token (or end marker) the error relates to.
        line_number: 1-based source line, None if not tied to a line.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        line_number: int | None = None,
    ) -> None:
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.command = command
        self.line_number = line_number


class MalformedArgumentError(ScriptParseError):
    """A numeric or string argument violates its constraint."""

    pass


class CorruptPayloadError(ScriptParseError):
    """A required inline text payload is empty or too short."""

    pass


class DisallowedCommandInContextError(ScriptParseError):
    """A command appeared somewhere it is not allowed."""

    def __init__(self, command: str, line_number: int | None = None) -> None:
        super().__init__(
            f"The command {command} is not allowed in this context",
            command=command,
            line_number=line_number,
        )


class UnterminatedConstructError(ScriptParseError):
    """Input ended before the expected end marker."""

    def __init__(self, end_marker: str) -> None:
        super().__init__(
            f"Missing end marker '{end_marker}' in Duke Script file",
            command=end_marker,
        )
