"""
Authorization tokens.

A completed transaction is identified to later capture, refund and void
calls by ``"<trnId>;<trnAmount>;<trnType>"``. The token is the only state
carried between calls, so it has to hold enough to rebuild the follow-up
request: the reference id, the original amount (voids resend it verbatim)
and the original wire type (which decides the refund and void types).

Fields containing ``;`` cannot be represented; there is no escaping.
"""

from typing import NamedTuple, Optional

SEPARATOR = ";"


class Authorization(NamedTuple):
    transaction_id: Optional[str]
    amount: Optional[str]
    transaction_type: Optional[str]


def encode(
    transaction_id: Optional[str],
    amount: Optional[str],
    transaction_type: Optional[str],
) -> str:
    """Join the three fields, rendering missing ones as empty segments."""
    return SEPARATOR.join(
        "" if field is None else str(field)
        for field in (transaction_id, amount, transaction_type)
    )


def decode(token: str) -> Authorization:
    """Split a token back into its fields.

    Segments missing from a short token decode to None; segments past the
    third are ignored.
    """
    parts = token.split(SEPARATOR)[:3]
    parts += [None] * (3 - len(parts))
    return Authorization(*parts)
