"""
Column alignment for delimiter-separated text.

Each line is split into cells with a quote-aware scanner, the widest cell of
every column is measured, and cells are padded on the right so the output
delimiter lines up down the whole block. One renderer handles every variant;
the public ``align_*`` functions only differ in the RenderPolicy they build.
"""
from typing import FrozenSet, Iterable, List, NamedTuple, Optional

import pandas as pd

_QUOTES = ('"', "'")


class EmptyInputError(ValueError):
    """Raised when the input holds nothing but whitespace."""


class RenderPolicy(NamedTuple):
    """Which lines stay out of the table, and where a separator line goes."""
    excluded: FrozenSet[int] = frozenset()
    separator_after: Optional[int] = None
    separator_fill: str = "-"

    @classmethod
    def header(cls, count: int) -> "RenderPolicy":
        return cls(excluded=frozenset(range(max(count, 0))))

    @classmethod
    def skipping(cls, lines: Iterable[int]) -> "RenderPolicy":
        return cls(excluded=frozenset(lines))

    @classmethod
    def with_separator(cls, after_line: int, fill: str = "-") -> "RenderPolicy":
        return cls(separator_after=after_line, separator_fill=fill)


# --------------------------
# Row Parser
# --------------------------
def parse_line(line: str, delimiter: str, strict_quotes: bool = False) -> List[str]:
    """
    Splits a line into trimmed cells. A delimiter between quote marks is kept
    as text, and the quote marks themselves stay part of the cell.

    By default any quote character toggles the quoted state, so a ' inside a
    "..." span ends it early. With strict_quotes a span only closes on the
    quote character that opened it.
    """
    line = line.strip()
    cells: List[str] = []
    current: List[str] = []
    open_quote = None

    i = 0
    while i < len(line):
        char = line[i]

        if char in _QUOTES:
            if open_quote is None:
                open_quote = char
            elif not strict_quotes or char == open_quote:
                open_quote = None
            current.append(char)
            i += 1
            continue

        if open_quote is None and delimiter and line.startswith(delimiter, i):
            cells.append("".join(current).strip())
            current = []
            i += len(delimiter)
            continue

        current.append(char)
        i += 1

    if current:
        cells.append("".join(current).strip())
    return cells


# --------------------------
# Width Calculator
# --------------------------
def compute_column_widths(rows: List[List[str]]) -> List[int]:
    """Returns the longest cell length per column index over the given rows."""
    if not rows:
        return []
    # Short rows are padded with None, which .str.len() skips.
    frame = pd.DataFrame(rows, dtype=object)
    widths = []
    for col in frame.columns:
        longest = frame[col].str.len().max()
        widths.append(0 if pd.isna(longest) else int(longest))
    return widths


# --------------------------
# Row Renderer
# --------------------------
def _render_row(row: List[str], widths: List[int], output_delimiter: str) -> str:
    last = len(row) - 1
    parts = []
    for col, cell in enumerate(row):
        if col == last:
            parts.append(cell)
            break
        width = widths[col] if col < len(widths) else 0
        parts.append(f"{cell:<{width}} {output_delimiter} ")
    return "".join(parts)


def render_rows(lines: List[str], rows: List[Optional[List[str]]], widths: List[int],
                output_delimiter: str, excluded: FrozenSet[int] = frozenset()) -> str:
    """
    Renders every line in order. Excluded lines (or lines that were never
    parsed, given as None in rows) come out exactly as they went in.
    """
    rendered = []
    for index, (line, row) in enumerate(zip(lines, rows)):
        if row is None or index in excluded:
            rendered.append(line)
        else:
            rendered.append(_render_row(row, widths, output_delimiter))
    return "\n".join(rendered).strip()


def insert_separator(rendered: str, output_delimiter: str, after_line: int, fill: str = "-") -> str:
    """
    Adds a fill-character line below output line `after_line`, shaped after
    that line so the delimiter sits in the same position. Out-of-range
    positions leave the text untouched.
    """
    lines = rendered.split("\n")
    if after_line < 0 or after_line >= len(lines):
        return rendered

    segments = lines[after_line].split(f" {output_delimiter} ")
    joint = f"{fill}{output_delimiter}{fill}"
    separator = joint.join(fill * len(segment) for segment in segments)
    lines.insert(after_line + 1, separator)
    return "\n".join(lines)


# --------------------------
# Entry points
# --------------------------
def align(text: str, delimiter: str, output_delimiter: str = "",
          policy: Optional[RenderPolicy] = None, strict_quotes: bool = False) -> str:
    """Aligns the columns of `text` under the given render policy."""
    text = text.strip()
    if not text:
        raise EmptyInputError("empty input")

    policy = policy or RenderPolicy()
    output_delimiter = output_delimiter or delimiter
    lines = text.split("\n")

    if policy.separator_after is None and policy.excluded.issuperset(range(len(lines))):
        return text

    rows = [None if index in policy.excluded else parse_line(line, delimiter, strict_quotes)
            for index, line in enumerate(lines)]
    widths = compute_column_widths([row for row in rows if row is not None])
    rendered = render_rows(lines, rows, widths, output_delimiter, policy.excluded)

    if policy.separator_after is not None:
        rendered = insert_separator(rendered, output_delimiter,
                                    policy.separator_after, policy.separator_fill)
    return rendered


def align_basic(text: str, delimiter: str, output_delimiter: str = "",
                strict_quotes: bool = False) -> str:
    """
    Formats input text by aligning columns on a delimiter.

    Example:
        >>> print(align_basic("name:john\\nage:30\\ncity:new york", ":"))
        name : john
        age  : 30
        city : new york
    """
    return align(text, delimiter, output_delimiter, RenderPolicy(), strict_quotes)


def align_with_header(text: str, delimiter: str, output_delimiter: str, header_lines: int,
                      strict_quotes: bool = False) -> str:
    """The first `header_lines` lines are printed verbatim and not measured."""
    return align(text, delimiter, output_delimiter, RenderPolicy.header(header_lines), strict_quotes)


def align_skipping_lines(text: str, delimiter: str, output_delimiter: str, skip_lines: Iterable[int],
                         strict_quotes: bool = False) -> str:
    """Lines at the given 0-based indices are printed verbatim and not measured."""
    return align(text, delimiter, output_delimiter, RenderPolicy.skipping(skip_lines), strict_quotes)


def align_with_separator(text: str, delimiter: str, output_delimiter: str, after_line: int,
                         fill: str = "-", strict_quotes: bool = False) -> str:
    """Aligns the text and adds a separator line after output line `after_line`."""
    return align(text, delimiter, output_delimiter,
                 RenderPolicy.with_separator(after_line, fill), strict_quotes)
