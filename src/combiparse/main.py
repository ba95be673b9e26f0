"""
The implementations of the result types, the primitive parsers and the combinators.
"""

from __future__ import annotations
from typing import Any, Callable, Final, Generic, Literal, Protocol, Sequence, TypeAlias, TypeGuard, TypeVar

import logging
import re

import combiparse.const as const


log = logging.getLogger("combiparse")

debug: bool = False
"""When `True`, parsers wrapped with `named()` log every attempt at the DEBUG level."""


_T = TypeVar("_T")
_A = TypeVar("_A")
_B = TypeVar("_B")
_CT = TypeVar("_CT", covariant=True)



class Success(Generic[_CT]):
    """
    Returned from a parser when it has matched.

    ```
    r = parser(src)
    if r:
        ... # `r` is a `Success` object
    else:
        ... # `r` is a `Failure` object
    ```

    When used for typing: `Success[ValueType]`
    """
    __match_args__ = ("value", "rest")

    def __init__(self, value: _CT, rest: str) -> None:
        self.value: Final[_CT] = value
        """The parsed value."""
        self.rest: Final[str] = rest
        """The unconsumed part of the input. Always a suffix of the input."""

    def __bool__(self) -> Literal[True]:
        return True

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self.value == other.value and self.rest == other.rest
        return NotImplemented

    def __repr__(self) -> str:
        return f"<Success {self.value!r} rest={self.rest!r}>"

class Failure:
    """
    Returned from a parser when it didn't match. Can be converted into a `ParseError`.

    `rest` is the input the parser was given. Failures never consume.
    """
    __match_args__ = ("error", "rest")

    def __init__(self, error: str, rest: str) -> None:
        self.error: Final[str] = error
        """The reason for the failure."""
        self.rest: Final[str] = rest

    def position(self, src: str) -> int:
        """The position of the failure within `src`, the string the parse was started on."""
        return max(len(src) - len(self.rest), 0)

    def to_exception(self, src: str) -> ParseError:
        """Converts this to a `ParseError`. `src` is the string the parse was started on."""
        return ParseError(src, self.position(src), self.error)

    def __bool__(self) -> Literal[False]:
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self.error == other.error and self.rest == other.rest
        return NotImplemented

    def __repr__(self) -> str:
        return f"<Failure {self.error!r} rest={self.rest!r}>"

ParseResult: TypeAlias = Success[_T] | Failure


def is_success(result: ParseResult[_T]) -> TypeGuard[Success[_T]]:
    """Whether the result is a `Success`. Narrows the type for type checkers."""
    return isinstance(result, Success)


class ParseError(Exception):
    """
    Raised when a whole input couldn't be parsed.

    Parsers themselves never raise it. It's created from a `Failure` at the top level,
    by `Failure.to_exception()` or `parse_all()`.
    """

    def __init__(self, src: str, pos: int, msg: str | None = None) -> None:
        """
        `src`: The string that was being parsed.
        `pos`: The position of the error.
        `msg`: The reason for the error.
        """
        if msg is None:
            super().__init__()
        else:
            super().__init__(msg)
        self.src: str = src
        self.pos: int = min(pos, len(src))
        self.add_note(_describe_position(src, self.pos))

    def line_column(self) -> tuple[int, int]:
        """1-based line and column of the error."""
        return _line_column(self.src, self.pos)

def _line_column(src: str, pos: int) -> tuple[int, int]:
    line = src.count("\n", 0, pos) + 1
    column = pos - src.rfind("\n", 0, pos) # rfind returns -1 on the first line
    return line, column

def _describe_position(src: str, pos: int) -> str:
    line, column = _line_column(src, pos)
    note = [f"At position {pos} (line {line}, column {column})"]
    lines = src.split("\n")
    if line-1 < len(lines):
        line_str = lines[line-1]
        if column <= 20:
            note.append(f"{line_str[:40]}\n{' '*(column-1)}^")
        else:
            note.append(f"{line_str[(column-20):(column+20)]}\n{' '*19}^")
    return "\n".join(note)


class Parser(Protocol[_CT]):
    """
    A function from the input string to a `ParseResult`.

    Any plain function with this signature is a parser, so recursive grammars can be
    written as module level functions referring to each other by name.
    """
    def __call__(self, src: str, /) -> ParseResult[_CT]: ...


def parse_all(parser: Parser[_T], src: str) -> _T:
    """
    Runs the parser over the whole input and returns the parsed value.

    Raises a `ParseError` if the parser fails or leaves some of the input unconsumed.
    """
    result = parser(src)
    if not is_success(result):
        raise result.to_exception(src)
    if result.rest:
        raise ParseError(src, len(src) - len(result.rest), "Unexpected trailing input.")
    return result.value


def named(name: str, parser: Parser[_T]) -> Parser[_T]:
    """
    Labels the parser for the debug log.

    The log is only written while `combiparse.main.debug` is `True`:
    ```
    import logging
    logging.basicConfig(level=logging.DEBUG)
    import combiparse.main
    combiparse.main.debug = True
    ```
    """
    def inner(src: str) -> ParseResult[_T]:
        if not debug:
            return parser(src)
        log.debug("trying %s", name)
        result = parser(src)
        if is_success(result):
            log.debug("matched %s, %d characters left", name, len(result.rest))
        else:
            log.debug("failed %s: %s", name, result.error)
        return result
    inner.__name__ = name
    return inner



def constant(value: _T) -> Parser[_T]:
    """Always succeeds without consuming anything. The value is `value`."""
    return lambda src: Success(value, src)

def tag(value: str) -> Parser[str]:
    """
    Matches the given string at the start of the input. Case sensitive.

    The value is the matched string.
    """
    if not value:
        raise ValueError("The tag must not be empty.")
    def inner(src: str) -> ParseResult[str]:
        if src.startswith(value):
            return Success(value, src[len(value):])
        return Failure(f"Expected {value!r}", src)
    return inner

def regex(pattern: str | re.Pattern[str], flags: int | re.RegexFlag = 0) -> Parser[str]:
    """
    Matches the regex at the start of the input. (Anchored, like `re.match()`.)

    The value is the matched text.
    """
    compiled = re.compile(pattern, flags)
    def inner(src: str) -> ParseResult[str]:
        m = compiled.match(src)
        if m is None:
            return Failure(f"Failed to match regex: {compiled.pattern!r}", src)
        return Success(m.group(), src[m.end():])
    return inner

_unsigned_digits = regex(const.UNSIGNED_NUMBER)

def unumber(src: str) -> ParseResult[int]:
    """An unsigned decimal integer. The value is an `int`."""
    result = _unsigned_digits(src)
    if is_success(result):
        return Success(int(result.value), result.rest)
    return Failure("No unsigned number", src)

def newline(src: str) -> ParseResult[str]:
    """
    A single `\\n`.

    `\\r\\n` and `\\r` are not recognized.
    """
    if src.startswith(const.NEWLINE):
        return Success(const.NEWLINE, src[1:])
    return Failure("no newline", src)

def _run_length(pred: Callable[[str], bool], src: str) -> int:
    for i, c in enumerate(src):
        if not pred(c):
            return i
    return len(src)

def take_while(pred: Callable[[str], bool]) -> Parser[str]:
    """
    Takes characters while `pred` returns `True` for them. Always succeeds.

    The value is the taken characters, which may be an empty string.
    """
    def inner(src: str) -> ParseResult[str]:
        n = _run_length(pred, src)
        return Success(src[:n], src[n:])
    return inner

def take_while1(pred: Callable[[str], bool]) -> Parser[str]:
    """
    Takes characters while `pred` returns `True` for them.

    Succeeds only if **at least two** characters were taken. A run of a single
    character fails.
    """
    def inner(src: str) -> ParseResult[str]:
        n = _run_length(pred, src)
        if n > 1:
            return Success(src[:n], src[n:])
        return Failure("no take while", src)
    return inner

def take_until(marker: str) -> Parser[str]:
    """
    Takes characters until the rest of the input starts with `marker`. The marker isn't consumed.

    Always succeeds. If the marker never appears, takes the whole input.
    """
    def inner(src: str) -> ParseResult[str]:
        end = src.find(marker)
        if end < 0:
            end = len(src)
        return Success(src[:end], src[end:])
    return inner



def tuple_(parsers: Sequence[Parser[Any]]) -> Parser[list[Any]]:
    """
    All the given parsers must match in sequence for the parser to succeed.

    The value is a list of the values of the parsers, in order. On failure none of
    the input is consumed, and the reason of the inner failure is not kept.
    """
    parsers = tuple(parsers)
    def inner(src: str) -> ParseResult[list[Any]]:
        values: list[Any] = []
        rest = src
        for parser in parsers:
            result = parser(rest)
            if not is_success(result):
                return Failure("not a tuple", src)
            values.append(result.value)
            rest = result.rest
        return Success(values, rest)
    return inner

seq = tuple_

def _repeat(parser: Parser[_T], src: str) -> tuple[list[_T], str]:
    values: list[_T] = []
    rest = src
    while rest:
        result = parser(rest)
        # a match that consumes nothing would repeat forever
        if not is_success(result) or len(result.rest) == len(rest):
            break
        values.append(result.value)
        rest = result.rest
    return values, rest

def many0(parser: Parser[_T]) -> Parser[list[_T]]:
    """
    Repeatedly matches the parser until it fails or the input runs out. Always succeeds.

    Also stops if the parser matches without consuming anything. That match isn't included.
    """
    def inner(src: str) -> ParseResult[list[_T]]:
        values, rest = _repeat(parser, src)
        return Success(values, rest)
    return inner

def many1(parser: Parser[_T]) -> Parser[list[_T]]:
    """
    Repeatedly matches the parser until it fails or the input runs out.

    Succeeds only if it matched **at least two** times. A single match fails.
    """
    def inner(src: str) -> ParseResult[list[_T]]:
        values, rest = _repeat(parser, src)
        if len(values) > 1:
            return Success(values, rest)
        return Failure("no many 1", src)
    return inner

def alt(a: Parser[_A], b: Parser[_B]) -> Parser[_A | _B]:
    """
    Attempts `a`, then `b` if `a` fails. The first one that matches wins.

    If neither matches, fails without keeping the reasons of the inner failures.
    """
    def inner(src: str) -> ParseResult[_A | _B]:
        a_result = a(src)
        if is_success(a_result):
            return a_result
        b_result = b(src)
        if is_success(b_result):
            return b_result
        return Failure("no alt match", src)
    return inner

def lazy(factory: Callable[[], Parser[_T]]) -> Parser[_T]:
    """
    Builds the parser on first use. For recursive grammars defined as parser values.

    ```
    value = alt(unumber, lazy(lambda: group))
    group = tuple_([tag("("), value, tag(")")])
    ```
    """
    parser: Parser[_T] | None = None
    def inner(src: str) -> ParseResult[_T]:
        nonlocal parser
        if parser is None:
            parser = factory()
        return parser(src)
    return inner
