"""Parsing of command-line values: line lists, delimiters, fill characters."""
import codecs
from typing import List


def parse_line_numbers(value: str) -> List[int]:
    """
    Parses a comma separated list of 0-based line numbers, e.g. " 1 , 3,5 ".
    An empty string gives an empty list.
    """
    value = (value or "").strip()
    if not value:
        return []
    numbers = []
    for token in value.split(','):
        token = token.strip()
        if not token:
            continue
        try:
            numbers.append(int(token))
        except ValueError:
            raise ValueError(f"invalid line number '{token}' in '{value}'") from None
    return numbers


def decode_escapes(value: str) -> str:
    """Turns escape sequences such as '\\t' into the characters they stand for."""
    if '\\' in value:
        # backslashreplace keeps non-latin characters intact through the round trip
        value = codecs.decode(value.encode('latin-1', 'backslashreplace'), 'unicode_escape')
    return value


def decode_delimiter(value: str) -> str:
    value = decode_escapes(value)
    if not value:
        raise ValueError("delimiter must not be empty")
    return value


def decode_output_delimiter(value: str) -> str:
    """Like decode_delimiter, but an empty value means 'reuse the input delimiter'."""
    return decode_escapes(value)


def decode_fill_char(value: str) -> str:
    value = decode_escapes(value)
    if len(value) != 1:
        raise ValueError(f"separator character must be a single character, got '{value}'")
    return value
