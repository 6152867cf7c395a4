from cardfetcher.parsers.query import (
    encode_continuation,
    fold_quotes,
    normalize,
    parse_page,
)

__all__ = [
    "encode_continuation",
    "fold_quotes",
    "normalize",
    "parse_page",
]
