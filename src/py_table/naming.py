"""Column name sanitization for attribute access (``table.face``, ``row.face``)."""

from __future__ import annotations
import re


def _reserved_names():
	"""Public PyTable attributes; a column can't shadow them as an attribute."""
	if not hasattr(_reserved_names, '_cache'):
		from .table import PyTable
		_reserved_names._cache = {
			name.lower() for name in dir(PyTable) if not name.startswith('_')
		}
	return _reserved_names._cache


def _sanitize_user_name(name) -> str | None:
	"""Sanitize column name to valid Python identifier.

	Rules:
	- Convert to lowercase
	- Replace runs of non-alphanumeric chars (except _) with single _
	- Strip leading/trailing underscores
	- Prefix with 'c' if starts with digit
	- Append '_' if it collides with a PyTable attribute
	- Return None if empty after sanitization
	"""
	sanitized = re.sub(r'[^a-z0-9_]+', '_', str(name).lower()).strip('_')

	if sanitized == "":
		return None

	if sanitized[0].isdigit():
		sanitized = "c" + sanitized

	if sanitized in _reserved_names():
		sanitized = sanitized + '_'

	return sanitized


def _uniquify(base: str, seen: set[str]) -> str:
	"""Make a unique name by adding __2, __3, etc if needed."""
	if base not in seen:
		return base

	i = 2
	while f"{base}__{i}" in seen:
		i += 1

	return f"{base}__{i}"


def build_attribute_map(names) -> dict[str, int]:
	"""Map sanitized, uniquified attribute names to column positions.

	Columns whose name sanitizes to nothing get the system name ``col{idx}_``.
	"""
	attribute_map = {}
	seen = set()
	for idx, name in enumerate(names):
		base = _sanitize_user_name(name)
		if base is None:
			attr = f'col{idx}_'
		else:
			attr = _uniquify(base, seen)
		seen.add(attr)
		attribute_map[attr] = idx
	return attribute_map
