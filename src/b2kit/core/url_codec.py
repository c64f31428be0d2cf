from __future__ import annotations
from urllib.parse import quote, unquote

# B2 file names: escape everything except unreserved chars, but keep "/" readable.


def b2_url_encode(value: str) -> str:
    if value == "/":
        return value
    return quote(value, safe="").replace("%2F", "/")


def b2_url_decode(value: str) -> str:
    if value == "+":
        return " "
    return unquote(value)
