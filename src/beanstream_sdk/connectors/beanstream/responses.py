"""Decoding Beanstream response bodies.

Transaction and secure profile requests answer in query-string form
(``trnApproved=1&trnId=10000001&...``). Recurring billing requests answer in
XML rooted at ``<response>``. Both decode to a flat ``dict`` of optional
strings.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, Mapping, Optional, Union
from urllib.parse import unquote_plus

from ...exceptions import ResponseParseError

logger = logging.getLogger(__name__)

ParsedResponse = Dict[str, Optional[str]]

_LIST_ITEM = re.compile(r"<LI>")
_LINE_BREAK = re.compile(r"(\.)?<br>")


def clean_message_text(text: str) -> str:
    """Flatten the light HTML Beanstream puts in error messages into prose."""
    text = _LIST_ITEM.sub("", text)
    text = _LINE_BREAK.sub(". ", text)
    return text.strip()


def parse_flat(body: Union[str, Mapping[str, Optional[str]], None]) -> ParsedResponse:
    """Parse a query-string response body. Never raises.

    An already-parsed mapping is copied and only has its message text
    cleaned again, which leaves it unchanged.
    """
    if isinstance(body, Mapping):
        results: ParsedResponse = dict(body)
    else:
        results = {}
        for pair in (body or "").split("&"):
            if not pair:
                continue
            key, _, value = pair.partition("=")
            results[key] = unquote_plus(value) if value else None

    if results.get("messageText"):
        results["messageText"] = clean_message_text(results["messageText"])

    return results


_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a tag name to lower snake case: ``accountId`` -> ``account_id``."""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def parse_tree(body: Optional[str]) -> ParsedResponse:
    """Parse a recurring billing XML response.

    Only leaf elements are kept, keyed by their snake-cased tag. Nesting is
    discarded, so when two leaves share a tag the later one wins.
    """
    if not body:
        return {}
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise ResponseParseError(f"Malformed recurring billing response: {e}") from e
    if root.tag != "response":
        raise ResponseParseError(
            f"Recurring billing response is rooted at <{root.tag}>, expected <response>"
        )

    response: ParsedResponse = {}
    for node in root:
        _parse_element(response, node)
    return response


def _parse_element(response: ParsedResponse, node: ET.Element) -> None:
    if len(node):
        for child in node:
            _parse_element(response, child)
    else:
        key = underscore(node.tag)
        if key in response:
            logger.debug(f"Recurring response leaf {key!r} overwrites an earlier value")
        response[key] = node.text
