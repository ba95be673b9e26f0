
from __future__ import annotations
from typing import TypeVar

from combiparse import *

_T = TypeVar("_T")

# lines

line_text = take_while(lambda c: c != const.NEWLINE)
"""The rest of the current line, without the line ending. May be empty."""

def comment(src: str) -> ParseResult[str]:
    """A `#` comment up to and including the line ending. The value is the text after the `#`."""
    r = tuple_([tag("#"), take_until(const.NEWLINE), newline])(src)
    if is_success(r):
        return Success(r.value[1], r.rest)
    return r

def ignored(src: str) -> ParseResult[str]:
    """A comment line or an empty line."""
    return alt(comment, newline)(src)

def keyword_line(keyword: str, body: Parser[_T]) -> Parser[_T]:
    """
    `keyword`, a single space, then `body`. The value is the value of `body`.

    Doesn't consume the line ending.
    """
    parser = tuple_([tag(keyword + " "), body])
    def inner(src: str) -> ParseResult[_T]:
        r = parser(src)
        if is_success(r):
            return Success(r.value[1], r.rest)
        return r
    return named(keyword, inner)
