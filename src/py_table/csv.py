"""
Delimited text import/export for PyTable.

The first line is a header of column names; every later line is one row.
Column types are declared per column through ``dtypes`` or inferred from
the tokens (logical, then integer, then numeric, then text).
"""

from __future__ import annotations
import csv
import io
import math
import os
import re
import warnings
from typing import Any, Callable, Iterable, Mapping, Optional

from .column import PyColumn
from .column import PyFactor
from .errors import NotFoundError
from .errors import ParseError
from .table import PyTable
from .typing import DataType
from .typing import resolve_dtype


DEFAULT_NA_STRINGS = ("NA",)

_BOOL_TOKENS = {
	"TRUE": True, "True": True, "true": True,
	"FALSE": False, "False": False, "false": False,
}

_SPECIAL_FLOATS = {
	"Inf": math.inf, "+Inf": math.inf, "-Inf": -math.inf, "NaN": math.nan,
	"inf": math.inf, "+inf": math.inf, "-inf": -math.inf, "nan": math.nan,
}

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _parse_bool(token: str) -> bool:
	try:
		return _BOOL_TOKENS[token.strip()]
	except KeyError:
		raise ValueError(f"not a logical value: {token!r}") from None


def _parse_int(token: str) -> int:
	token = token.strip()
	if not _INT_RE.fullmatch(token):
		raise ValueError(f"not an integer: {token!r}")
	return int(token)


def _parse_float(token: str) -> float:
	token = token.strip()
	if token in _SPECIAL_FLOATS:
		return _SPECIAL_FLOATS[token]
	if not _FLOAT_RE.fullmatch(token):
		raise ValueError(f"not a number: {token!r}")
	return float(token)


def _parse_str(token: str) -> str:
	return token


_PARSERS: dict[type, Callable[[str], Any]] = {
	bool: _parse_bool,
	int: _parse_int,
	float: _parse_float,
	str: _parse_str,
}


def _is_missing(token: str, kind: type, na_strings) -> bool:
	if token in na_strings:
		return True
	# Empty fields are missing everywhere except text columns
	return kind is not str and token.strip() == ""


def _infer_kind(tokens: Iterable[str], na_strings) -> type:
	"""Narrowest kind that parses every non-missing token."""
	present = [t for t in tokens if t not in na_strings and t.strip() != ""]
	if not present:
		# All-missing columns are logical
		return bool
	for kind in (bool, int, float):
		parse = _PARSERS[kind]
		try:
			for t in present:
				parse(t)
		except ValueError:
			continue
		return kind
	return str


def _build_column(name, tokens, lines, dtype: Optional[DataType], strings_as_factors, na_strings):
	if dtype is None:
		kind = _infer_kind(tokens, na_strings)
		categorical = kind is str and strings_as_factors
	else:
		kind = dtype.kind
		categorical = dtype.categorical

	parse = _PARSERS[kind]
	values = []
	for token, line in zip(tokens, lines):
		if _is_missing(token, kind, na_strings):
			values.append(None)
			continue
		try:
			values.append(parse(token))
		except ValueError as e:
			raise ParseError(
				f"column '{name}': {e} for declared type {kind.__name__}",
				line=line, column=name,
			) from e

	if categorical:
		return PyFactor(values, name=name)
	return PyColumn(values, dtype=DataType(kind), name=name)


def _read_records(fh, sep):
	"""Yield (line_number, fields) for every non-blank record."""
	reader = csv.reader(fh, delimiter=sep)
	try:
		for fields in reader:
			if not fields:
				continue
			yield reader.line_num, fields
	except csv.Error as e:
		raise ParseError(str(e), line=reader.line_num) from e


def _read_table(fh, sep, dtypes, strings_as_factors, na_strings, row_names):
	records = _read_records(fh, sep)
	try:
		_, header = next(records)
	except StopIteration:
		raise ParseError("empty input, expected a header line") from None

	if row_names:
		if header[0] != "":
			warnings.warn(
				f"First header field '{header[0]}' is a column name; dropping it as row names",
				stacklevel=3,
			)
		header = header[1:]

	declared = {}
	for name, spec in (dtypes or {}).items():
		if name not in header:
			raise NotFoundError(f"Column '{name}' in dtypes not found in header")
		declared[name] = resolve_dtype(spec)

	width = len(header) + (1 if row_names else 0)
	columns = [[] for _ in header]
	lines = []
	for line, fields in records:
		if len(fields) != width:
			raise ParseError(f"expected {width} fields, found {len(fields)}", line=line)
		if row_names:
			fields = fields[1:]
		for col, token in zip(columns, fields):
			col.append(token)
		lines.append(line)

	return PyTable([
		_build_column(name, tokens, lines, declared.get(name), strings_as_factors, na_strings)
		for name, tokens in zip(header, columns)
	])


def read_csv(source, sep=",", dtypes: Optional[Mapping[str, Any]] = None,
		strings_as_factors=False, na_strings=DEFAULT_NA_STRINGS,
		row_names=False, encoding="utf-8") -> PyTable:
	"""
	Read delimited text into a PyTable.

	Parameters
	----------
	source : str, os.PathLike or text file object
		Path to read, or an open text stream
	sep : str
		Field delimiter
	dtypes : mapping of column name to dtype spec, optional
		Declared column types (see ``resolve_dtype``); other columns are inferred
	strings_as_factors : bool
		Store inferred text columns as PyFactor
	na_strings : iterable of str
		Tokens read as missing values
	row_names : bool
		Treat the first column as a row index and drop it

	Raises
	------
	ParseError
		Wrong field count in a row, or a value that does not parse as its
		declared type
	NotFoundError
		A declared column is absent from the header
	DuplicateNameError
		Two header fields share a name
	"""
	na_strings = frozenset(na_strings)
	if isinstance(source, (str, os.PathLike)):
		with open(source, newline="", encoding=encoding) as fh:
			return _read_table(fh, sep, dtypes, strings_as_factors, na_strings, row_names)
	return _read_table(source, sep, dtypes, strings_as_factors, na_strings, row_names)


def _format_value(v, na) -> str:
	if v is None:
		return na
	if isinstance(v, bool):
		return "TRUE" if v else "FALSE"
	if isinstance(v, float):
		if math.isnan(v):
			return "NaN"
		if math.isinf(v):
			return "Inf" if v > 0 else "-Inf"
		return repr(v)
	return str(v)


def _write_table(table, fh, sep, row_names, quote, na):
	writer = csv.writer(
		fh,
		delimiter=sep,
		quoting=csv.QUOTE_ALL if quote else csv.QUOTE_MINIMAL,
		lineterminator="\n",
	)
	header = list(table.column_names)
	if row_names:
		header.insert(0, "")
	writer.writerow(header)

	for i, row in enumerate(table, start=1):
		fields = [_format_value(v, na) for v in row]
		if row_names:
			fields.insert(0, str(i))
		writer.writerow(fields)


def write_csv(table, dest=None, sep=",", row_names=False, quote=False, na="NA", encoding="utf-8"):
	"""
	Write a PyTable as delimited text.

	Returns the text when ``dest`` is None; otherwise writes to the path or
	text file object and returns None. ``row_names=True`` emits a leading
	unnamed column of 1-based row numbers.

	A text value equal to ``na`` is written as is, so it reads back as
	missing even with ``quote=True``.
	"""
	if dest is None:
		buf = io.StringIO()
		_write_table(table, buf, sep, row_names, quote, na)
		return buf.getvalue()
	if isinstance(dest, (str, os.PathLike)):
		with open(dest, "w", newline="", encoding=encoding) as fh:
			_write_table(table, fh, sep, row_names, quote, na)
		return None
	_write_table(table, dest, sep, row_names, quote, na)
	return None
