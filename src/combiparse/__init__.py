"""
Library of small parser combinators for writing recursive descent parsers.

See the objects for more explanations.

See the `combiparse.general` module for general purpose parsers you can use as examples,
and `combiparse.perft` for a complete grammar.

A parser is any function from the input string to a `Success` or a `Failure`:
```
def foo(src: str) -> ParseResult[int]:
    r = tuple_([tag("foo "), unumber])(src)
    if is_success(r):
        return Success(r.value[1], r.rest)      # success
    return r                                    # fail
```

Using parsers:
```
result = foo("foo 10 bar")
if result:
    ... # `result` is a `Success` object, `result.value == 10`, `result.rest == " bar"`
else:
    ... # `result` is a `Failure` object, `result.error` says why
```

Failures never consume input and are never raised. Use `parse_all()` or
`Failure.to_exception()` to get a `ParseError`.
"""

import combiparse.const as const
import combiparse.main
from combiparse.main import (
    Success,
    Failure,
    ParseResult,
    ParseError,
    Parser,
    is_success,
    parse_all,
    named,
    constant,
    tag,
    regex,
    unumber,
    newline,
    take_while,
    take_while1,
    take_until,
    tuple_,
    seq,
    many0,
    many1,
    alt,
    lazy,
)
import combiparse.general as general
