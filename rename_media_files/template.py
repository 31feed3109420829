"""Name templates: strftime-style directives plus the `%f` sub-second token.

A format string is split into literal text, calendar directives and the
sub-second token. Calendar directives are expanded with `datetime.strftime`
one at a time, so the sub-second token never reaches strftime (which has its
own, microsecond-based, meaning for `%f`).

Only the first `%f` is a sub-second token. Later occurrences are kept as the
literal text `%f`. `%%` is an escaped percent sign, so `%%f` renders as `%f`.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

import click

from .types import CaptureTimestamp

PRESETS: Final = (
    "%Y%m%d%H%M%S%f",
    "%Y%m%d_%H%M%S_%f",
    "%Y%m%d-%H%M%S-%f",
    "%Y-%m-%d_%H-%M-%S_%f",
    "%Y_%m_%d-%H_%M_%S-%f",
)
DEFAULT_PRESET: Final = 0

# Longest custom format accepted on the command line
MAX_FORMAT_LENGTH: Final = 255

SUBSECOND_TOKEN: Final = "%f"

# glibc-style flags, field width and E/O modifiers are kept with their conversion
DIRECTIVE_PATTERN: Final = re.compile(r"%(?P<spec>[-_0^#]*\d*[EO]?)(?P<conv>.)", re.DOTALL)


class TokenKind(Enum):
    LITERAL = "literal"
    DIRECTIVE = "directive"
    SUBSECOND = "subsecond"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""


def tokenize(name_format: str) -> list[Token]:
    """Split a name format into literal, directive and sub-second tokens.

    Adjacent literal text is merged into a single token.
    """
    tokens: list[Token] = []
    literal: list[str] = []
    seen_subsecond = False

    def flush() -> None:
        text = "".join(literal)
        literal.clear()
        if text:
            tokens.append(Token(TokenKind.LITERAL, text))

    pos = 0
    for match in DIRECTIVE_PATTERN.finditer(name_format):
        literal.append(name_format[pos : match.start()])
        pos = match.end()
        directive = match.group(0)
        if directive == "%%":
            literal.append("%")
        elif directive == SUBSECOND_TOKEN:
            if seen_subsecond:
                literal.append(SUBSECOND_TOKEN)
            else:
                flush()
                tokens.append(Token(TokenKind.SUBSECOND))
                seen_subsecond = True
        else:
            flush()
            tokens.append(Token(TokenKind.DIRECTIVE, directive))
    # Anything left over, including a trailing lone "%", is literal
    literal.append(name_format[pos:])
    flush()
    return tokens


def render_name(name_format: str, timestamp: CaptureTimestamp) -> str:
    """Expand a name format against a capture timestamp."""
    parts = []
    for token in tokenize(name_format):
        match token.kind:
            case TokenKind.LITERAL:
                parts.append(token.text)
            case TokenKind.SUBSECOND:
                parts.append(timestamp.subsecond)
            case TokenKind.DIRECTIVE:
                parts.append(timestamp.moment.strftime(token.text))
    return "".join(parts)


def select_name_format(preset: int = DEFAULT_PRESET, custom_format: str | None = None) -> str:
    """Return the name format for a run.

    A non-empty custom format always wins over the preset.

    Raises:
        click.BadParameter: for an unknown preset or an overlong custom format
    """
    if custom_format:
        if len(custom_format) > MAX_FORMAT_LENGTH:
            raise click.BadParameter(
                f"format string is longer than {MAX_FORMAT_LENGTH} characters",
                param_hint="'-f' / '--format'",
            )
        return custom_format
    if not 0 <= preset < len(PRESETS):
        raise click.BadParameter(f"invalid preset number {preset}", param_hint="'-p' / '--preset'")
    return PRESETS[preset]
