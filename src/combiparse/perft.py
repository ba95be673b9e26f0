"""
Grammar for perft fixture files.

A perft ("performance test") fixture lists chess positions together with the number
of leaf nodes of the move generation tree at each depth:
```
# comment

id 0
epd bqnb1rkr/pp3ppp/3ppn2/2p5/5P2/P2P4/NPP1P1PP/BQ1BNRKR w HFhf - 2 9
perft 1 21
perft 2 528
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from combiparse import *
from combiparse.general import ignored, keyword_line, line_text

log = logging.getLogger(__name__)


@dataclass
class Perft:
    """
    A single position of a perft fixture.

    `id`: Identifier of the position, as written after `id`.
    `epd`: The position in EPD notation.
    `cases`: `(depth, node count)` pairs, in file order.
    """

    id: str
    epd: str
    cases: list[tuple[int, int]] = field(default_factory=list)


parse_id = keyword_line("id", line_text)

parse_epd = keyword_line("epd", take_while1(lambda c: c != const.NEWLINE))

def parse_case(src: str) -> ParseResult[tuple[int, int]]:
    """`perft <depth> <nodes>` and the line ending."""
    r = tuple_([tag("perft "), unumber, tag(" "), unumber, newline])(src)
    if is_success(r):
        _, depth, _, nodes, _ = r.value
        return Success((depth, nodes), r.rest)
    return r

def parse_perft(src: str) -> ParseResult[Perft]:
    """One record, followed by any comment or empty lines."""
    r = tuple_([
        parse_id,
        newline,
        parse_epd,
        newline,
        many1(parse_case),
        many0(ignored),
    ])(src)
    if is_success(r):
        id_, _, epd, _, cases, _ = r.value
        return Success(Perft(id_, epd, cases), r.rest)
    return r

def parse_perfts(src: str) -> ParseResult[list[Perft]]:
    """
    A whole fixture: leading comment or empty lines, then the records.

    Like `many1()`, needs at least two records.
    """
    r = tuple_([many0(ignored), many1(named("perft", parse_perft))])(src)
    if is_success(r):
        return Success(r.value[1], r.rest)
    return r


def read_perfts(source: Path | str) -> list[Perft]:
    """
    Reads and parses a perft fixture file. Returns the records, in file order.

    `source`: Path to the fixture file. Read as UTF-8.

    Raises a `ParseError` if the file isn't a valid fixture. Errors from reading the
    file propagate as-is: `OSError` (e.g. `FileNotFoundError`) if it can't be opened,
    `UnicodeDecodeError` if it isn't valid UTF-8.
    """
    path = Path(source)
    log.debug("Reading perft fixture %s", path)
    src = path.read_text(encoding="utf-8")
    perfts = parse_all(parse_perfts, src)
    log.info("Parsed %d perft records from %s", len(perfts), path)
    return perfts
