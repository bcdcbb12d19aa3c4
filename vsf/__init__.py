"""vsf: align delimiter-separated text into readable columns."""
__version__ = "1.2.0"

from .core import (EmptyInputError, RenderPolicy, align, align_basic,  # noqa: E402
                   align_skipping_lines, align_with_header, align_with_separator,
                   compute_column_widths, insert_separator, parse_line, render_rows)

__all__ = [
    "EmptyInputError", "RenderPolicy", "align", "align_basic", "align_skipping_lines",
    "align_with_header", "align_with_separator", "compute_column_widths",
    "insert_separator", "parse_line", "render_rows",
]
