"""Display and repr logic for PyColumn and PyTable."""

from __future__ import annotations
import math
from typing import List


# How many rows/columns to show before inserting "..."
MAX_HEAD_ROWS = 5
MAX_HEAD_COLS = 5

_ELLIPSIS = object()


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _is_right_aligned(dtype) -> bool:
	return dtype.kind in (int, float) and not dtype.categorical


def _format_value(v, dtype) -> str:
	if v is _ELLIPSIS:
		return '...'
	if v is None:
		return 'None'
	if dtype.kind is float:
		if math.isnan(v) or math.isinf(v):
			return str(v)
		return f"{v:.1f}" if v == int(v) else f"{v:g}"
	if dtype.kind is str and not dtype.categorical:
		return repr(v)
	return str(v)


def _format_column(col, max_preview: int = MAX_HEAD_ROWS) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	# Truncate with symmetric preview
	n = len(col)
	if n > max_preview * 2:
		preview = list(col[:max_preview]) + [_ELLIPSIS] + list(col[n - max_preview:])
	else:
		preview = list(col)

	out = [_format_value(v, col.dtype) for v in preview]

	# Align: numeric right, others left
	max_len = max(len(s) for s in out) if out else 0
	if _is_right_aligned(col.dtype):
		return [s.rjust(max_len) for s in out]
	return [s.ljust(max_len) for s in out]


def _header_rows(display_names, sanitized_names):
	"""Decide which header rows to show based on display vs sanitized names."""
	any_mismatch = any(
		san != "..." and disp != san
		for disp, san in zip(display_names, sanitized_names)
	)

	rows = []

	# Row 1: display names (quoted if needed)
	row = []
	for name in display_names:
		if name == "...":
			row.append("...")
		elif _needs_quoting(name):
			row.append(repr(name))
		else:
			row.append(name)
	rows.append(row)

	# Row 2: sanitized attribute names, only when some differ
	if any_mismatch:
		rows.append([("." + san) if san != "..." else san for san in sanitized_names])

	return rows


def _align_columns(formatted_cols, header_rows, right_aligned):
	"""Pad columns and headers to consistent widths."""
	num_cols = len(formatted_cols)
	col_widths = []

	# Compute desired width per column
	for c in range(num_cols):
		body_width = max(len(s) for s in formatted_cols[c]) if formatted_cols[c] else 0
		header_width = max(len(row[c]) for row in header_rows) if header_rows else 0
		col_widths.append(max(body_width, header_width))

	def pad(s, c):
		return s.rjust(col_widths[c]) if right_aligned[c] else s.ljust(col_widths[c])

	aligned_cols = [[pad(s, c) for s in formatted_cols[c]] for c in range(num_cols)]
	aligned_headers = [[pad(h, c) for c, h in enumerate(row)] for row in header_rows]

	return aligned_cols, aligned_headers


def _footer_column(col) -> str:
	return f"# {len(col)} element column <{col.dtype.name}>"


def _footer_table(tbl, truncated=False, shown=MAX_HEAD_COLS) -> str:
	dtype_list = [dt.name for dt in tbl.dtypes]
	if truncated:
		d = ", ".join(dtype_list[:shown]) + ", ..., " + ", ".join(dtype_list[-shown:])
	else:
		d = ", ".join(dtype_list)
	rows, cols = tbl.shape
	return f"# {rows}×{cols} table <{d}>"


def _repr_column(col) -> str:
	"""Pretty repr for a PyColumn."""
	formatted = _format_column(col)
	right = _is_right_aligned(col.dtype)

	header_text = None
	if col.name is not None:
		header_text = repr(col.name) if _needs_quoting(col.name) else col.name

	width = max(len(s) for s in formatted) if formatted else 0
	if header_text is not None:
		width = max(width, len(header_text))

	lines = []
	if header_text is not None:
		lines.append(header_text.rjust(width) if right else header_text.ljust(width))
	lines.extend(s.rjust(width) if right else s.ljust(width) for s in formatted)
	lines.append("")
	lines.append(_footer_column(col))
	return "\n".join(lines)


def _repr_table(tbl) -> str:
	"""Pretty repr for a PyTable."""
	cols = tbl.columns
	num_cols = len(cols)

	if num_cols == 0:
		return "# 0×0 table"

	truncated = num_cols > MAX_HEAD_COLS * 2

	if truncated:
		col_indices = list(range(MAX_HEAD_COLS)) + list(range(num_cols - MAX_HEAD_COLS, num_cols))
	else:
		col_indices = list(range(num_cols))

	# Attribute names, indexed by column position
	attr_names = {idx: attr for attr, idx in tbl._attribute_map.items()}

	disp = [cols[i].name for i in col_indices]
	san = [attr_names[i] for i in col_indices]
	right_aligned = [_is_right_aligned(cols[i].dtype) for i in col_indices]
	formatted_cols = [_format_column(cols[i]) for i in col_indices]

	# Insert "..." column if truncated
	if truncated:
		formatted_cols.insert(MAX_HEAD_COLS, ["..."] * len(formatted_cols[0]))
		disp.insert(MAX_HEAD_COLS, "...")
		san.insert(MAX_HEAD_COLS, "...")
		right_aligned.insert(MAX_HEAD_COLS, False)

	header_rows = _header_rows(disp, san)
	aligned_cols, aligned_headers = _align_columns(formatted_cols, header_rows, right_aligned)

	lines = []
	for hrow in aligned_headers:
		lines.append("  ".join(hrow).rstrip())

	# Table body
	nrows = len(aligned_cols[0]) if aligned_cols else 0
	for r in range(nrows):
		lines.append("  ".join(col[r] for col in aligned_cols).rstrip())

	lines.append("")
	lines.append(_footer_table(tbl, truncated, MAX_HEAD_COLS))

	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by PyColumn.__repr__ and PyTable.__repr__."""
	if hasattr(obj, 'column_names'):
		return _repr_table(obj)
	return _repr_column(obj)
