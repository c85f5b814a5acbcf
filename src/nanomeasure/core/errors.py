"""
Error taxonomy for measurement arithmetic and duration parsing.

Every recoverable failure raised by nanomeasure is a MeasureError:

    MeasureError
     ├── MeasureOverflow       (also OverflowError)
     ├── MeasureUnderflow      (also ArithmeticError)
     ├── ParseIntError         (also ValueError), carries an IntErrorKind
     └── DurationSyntaxError   (also ValueError)

Callers decide retry/fatal handling by catching the exact subclass,
and for ParseIntError by inspecting its ``kind``.
"""

import enum

from .duration import I64_MAX, I64_MIN


class IntErrorKind(enum.Enum):
    """Why a numeric token failed to parse. Values are the canonical messages."""

    EMPTY = "cannot parse integer from empty string"
    INVALID_DIGIT = "invalid digit found in string"
    OVERFLOW = "number too large to fit in target type"
    UNDERFLOW = "number too small to fit in target type"
    UNKNOWN = "unknown integer parse failure"


class MeasureError(Exception):
    """Base class for all nanomeasure failures."""


class MeasureOverflow(MeasureError, OverflowError):
    """A sum or range conversion exceeded the maximum representable span."""

    def __init__(self, message: str = "measurement overflow"):
        super().__init__(message)


class MeasureUnderflow(MeasureError, ArithmeticError):
    """A difference or range conversion fell below the minimum representable span."""

    def __init__(self, message: str = "measurement underflow"):
        super().__init__(message)


class ParseIntError(MeasureError, ValueError):
    """
    A numeric token could not be parsed.

    Attributes:
        kind: The IntErrorKind classifying the failure
        message: Diagnostic text; for UNKNOWN this is the verbatim
            text of the underlying failure
        token: The offending token
    """

    def __init__(self, kind: IntErrorKind, token: str, message: str = ""):
        self.kind = kind
        self.token = token
        self.message = message or kind.value
        super().__init__(f"{self.message}: {token!r}")


class DurationSyntaxError(MeasureError, ValueError):
    """A duration string does not follow the P<date>T<time> grammar."""

    def __init__(self, message: str, text: str):
        self.text = text
        super().__init__(f"{message} in {text!r}")


def parse_i64(token: str) -> int:
    """
    Parse a decimal token as a signed 64-bit integer.

    An optional leading sign is accepted. Failures are classified
    structurally: empty token, then non-digit characters, then the
    64-bit range. Any other failure from int() is kept verbatim
    under IntErrorKind.UNKNOWN.

    Raises:
        ParseIntError: If the token is not a representable integer
    """
    sign = token[:1] if token[:1] in ("+", "-") else ""
    digits = token[len(sign):]
    if not digits:
        raise ParseIntError(IntErrorKind.EMPTY, token)
    if not (digits.isascii() and digits.isdigit()):
        raise ParseIntError(IntErrorKind.INVALID_DIGIT, token)

    # Leading zeros carry no magnitude; anything past 19 significant
    # digits cannot fit 64 bits and never reaches int().
    significant = digits.lstrip("0") or "0"
    if len(significant) > len(str(I64_MAX)):
        kind = IntErrorKind.UNDERFLOW if sign == "-" else IntErrorKind.OVERFLOW
        raise ParseIntError(kind, token)

    try:
        value = int(sign + significant, 10)
    except ValueError as exc:
        raise ParseIntError(IntErrorKind.UNKNOWN, token, str(exc)) from exc

    if value > I64_MAX:
        raise ParseIntError(IntErrorKind.OVERFLOW, token)
    if value < I64_MIN:
        raise ParseIntError(IntErrorKind.UNDERFLOW, token)
    return value
