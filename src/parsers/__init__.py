"""Parsers for raw regulation exports."""
from parsers.csv_parser import is_record_row, parse_regulations, parse_rows

__all__ = [
    "is_record_row",
    "parse_regulations",
    "parse_rows",
]
