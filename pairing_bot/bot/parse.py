# raw text -> (verb, args), anything odd falls back to help

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from pairing_bot.db.models import WEEKDAYS
from pairing_bot.errors import InputValidationError

VERBS = (
    "subscribe",
    "unsubscribe",
    "help",
    "schedule",
    "streams",
    "skip",
    "unskip",
    "status",
)
NO_ARG_VERBS = {"subscribe", "unsubscribe", "help", "status"}
SKIP_VERBS = {"skip", "unskip"}

_SPACE = re.compile(r"\s+")
_COUNT = re.compile(r"[+-]?[0-9]+")
# counts must fit a signed 64-bit integer
COUNT_MIN, COUNT_MAX = -(2**63), 2**63 - 1


@dataclass(frozen=True)
class ParsedCommand:
    verb: str
    args: Tuple[str, ...] = ()
    error: Optional[InputValidationError] = None


def tokenize(raw: str) -> list[str]:
    text = _SPACE.sub(" ", raw or "").strip().lower()
    if not text:
        return []
    return text.split(" ")


def _to_int(token: str) -> int:
    # leading zeros stripped: int() refuses very long digit strings
    sign = "-" if token.startswith("-") else ""
    return int(sign + (token.lstrip("+-").lstrip("0") or "0"))


def _is_count(token: str) -> bool:
    if not _COUNT.fullmatch(token):
        return False
    if len(token.lstrip("+-").lstrip("0")) > 19:
        return False
    return COUNT_MIN <= _to_int(token) <= COUNT_MAX


def _validate(tokens: list[str]) -> None:
    if not tokens:
        raise InputValidationError("blank command")

    verb, args = tokens[0], tokens[1:]
    if verb not in VERBS:
        raise InputValidationError(f"unknown command {verb!r}")

    if verb in NO_ARG_VERBS:
        if args:
            raise InputValidationError(f"unexpected arguments for {verb}: {args}")
    elif verb in SKIP_VERBS:
        if args != ["tomorrow"]:
            raise InputValidationError(f"malformed arguments for {verb}: {args}")
    elif verb == "schedule":
        if not args or any(day not in WEEKDAYS for day in args):
            raise InputValidationError(f"malformed arguments for schedule: {args}")
    elif verb == "streams":
        # topic count [topic count ...]
        if not args or len(args) % 2 == 1:
            raise InputValidationError(f"malformed arguments for streams: {args}")
        counts = args[1::2]
        if any(not _is_count(c) for c in counts):
            raise InputValidationError(f"malformed arguments for streams: {args}")


def parse_command(raw: str) -> ParsedCommand:
    """Tokenize and validate one message.

    Never raises. A rejected message comes back as ``help`` with no args and
    the reason in ``error``; the reason is meant for logs, not for the user.
    """
    tokens = tokenize(raw)
    try:
        _validate(tokens)
    except InputValidationError as e:
        return ParsedCommand(verb="help", args=(), error=e)
    return ParsedCommand(verb=tokens[0], args=tuple(tokens[1:]))


def stream_pairs(args: Tuple[str, ...]) -> dict[str, int]:
    # later repeats of a topic win, first position is kept
    streams: dict[str, int] = {}
    for i in range(0, len(args) - 1, 2):
        streams[args[i]] = _to_int(args[i + 1])
    return streams
