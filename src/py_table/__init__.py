"""
py-table: a small, zero-dependency typed column store

Named, type-homogeneous, equal-length columns assembled into an immutable
table with row views, plus comma-separated import and export.

Main classes:
    - PyColumn: named sequence of bool, int, float or str values
    - PyFactor: categorical text column stored as integer codes
    - PyTable: columns of equal length, accessed by name or row index

Zero external dependencies - pure Python stdlib only.
"""

from .typing import DataType
from .column import PyColumn, PyFactor
from .table import PyTable
from .csv import read_csv, write_csv
from .errors import (
	PyTableError,
	PyTableTypeError,
	LengthMismatchError,
	DuplicateNameError,
	NotFoundError,
	IndexOutOfRangeError,
	ParseError,
)

__version__ = "0.1.0"
__all__ = [
	"DataType",
	"PyColumn",
	"PyFactor",
	"PyTable",
	"read_csv",
	"write_csv",
	"PyTableError",
	"PyTableTypeError",
	"LengthMismatchError",
	"DuplicateNameError",
	"NotFoundError",
	"IndexOutOfRangeError",
	"ParseError",
]
