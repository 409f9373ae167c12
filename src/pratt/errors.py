"""Error types raised by the engine and its clients, and their rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pratt.tokens import Token, TokenType, type_name


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass
class Diagnostic:
    """A single diagnostic message with optional notes."""

    severity: Severity
    code: str
    message: str
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics as `error[P001]: message` headers with notes."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )
        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


# ── Exceptions ───────────────────────────────────────────────────


class PrattError(Exception):
    """Base class for every error raised by the package."""

    code = "P000"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def notes(self) -> list[str]:
        return []

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=self.message,
            notes=self.notes(),
        )


class GrammarError(PrattError):
    """A parselet registration was rejected."""

    code = "P100"


class LexError(PrattError):
    """The Bantam lexer met text it cannot tokenize."""

    code = "P200"

    def __init__(self, message: str, offset: int) -> None:
        self.offset = offset
        super().__init__(message)

    def notes(self) -> list[str]:
        return [f"at character offset {self.offset}"]


class ParseError(PrattError):
    """A parse failed at `token`, or at end of input when `token` is None."""

    code = "P300"

    def __init__(self, message: str, token: Token | None = None) -> None:
        self.token = token
        super().__init__(message)

    def notes(self) -> list[str]:
        if self.token is None:
            return []
        return [f"offending token: {self.token}"]


class NoPrefixRule(ParseError):
    code = "P301"

    def __init__(self, token: Token) -> None:
        super().__init__(f"no prefix rule for token {token}", token)


class NoXfixRule(ParseError):
    """Raised if the precedence lookup and the xfix table ever disagree."""

    code = "P302"

    def __init__(self, token: Token) -> None:
        super().__init__(f"no infix or postfix rule for token {token}", token)


class UnexpectedEndOfInput(ParseError):
    code = "P303"

    def __init__(self, expected: TokenType | None = None) -> None:
        self.expected = expected
        if expected is None:
            message = "unexpected end of input"
        else:
            message = f"unexpected end of input; expected {type_name(expected)}"
        super().__init__(message)


class UnexpectedTokenType(ParseError):
    code = "P304"

    def __init__(self, token: Token, expected: TokenType) -> None:
        self.expected = expected
        super().__init__(
            f"unexpected {token} token; expected {type_name(expected)}", token,
        )


class ExcessToken(ParseError):
    """Raised when a parse completes but tokens remain and the caller asked to exhaust them."""

    code = "P305"

    def __init__(self, token: Token) -> None:
        super().__init__(f"excess token after expression: {token}", token)
