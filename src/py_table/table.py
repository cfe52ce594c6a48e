from collections.abc import Mapping

from .column import PyColumn
from .display import _printr
from .naming import build_attribute_map
from .naming import _sanitize_user_name
from .errors import DuplicateNameError
from .errors import IndexOutOfRangeError
from .errors import LengthMismatchError
from .errors import NotFoundError
from .errors import PyTableTypeError


# Rows returned by head() when n is not given
DEFAULT_HEAD_ROWS = 6


def _missing_col_error(name, context="PyTable"):
	return NotFoundError(f"Column '{name}' not found in {context}")


class _RowView:
	"""Lightweight row view for iterating over table rows with attribute access."""
	__slots__ = ('_cols', '_names', '_positions', '_attribute_map', '_index')

	def __init__(self, table, index):
		# Cache direct handles to column values (bypasses PyColumn method dispatch)
		self._cols = [col.values for col in table._columns]
		self._names = table.column_names
		self._positions = table._positions
		self._attribute_map = table._attribute_map
		self._index = index

	def set_index(self, index):
		"""Reuse this row view for a different index (avoids allocation during iteration)."""
		self._index = index
		return self

	def __getattr__(self, attr):
		"""Access column values by sanitized attribute name."""
		col_idx = self._attribute_map.get(attr.lower())
		if col_idx is None:
			raise AttributeError(f"Row has no attribute '{attr}'")
		return self._cols[col_idx][self._index]

	def __getitem__(self, key):
		"""Access column values by position or name."""
		if isinstance(key, str):
			col_idx = self._positions.get(key)
			if col_idx is None:
				col_idx = self._attribute_map.get(key.lower())
			if col_idx is None:
				raise _missing_col_error(key, "row")
			return self._cols[col_idx][self._index]
		if isinstance(key, bool) or not isinstance(key, int):
			raise PyTableTypeError(f"Row indices must be int or str, not {type(key).__name__}")
		if not -len(self._cols) <= key < len(self._cols):
			raise IndexOutOfRangeError(f"Column position {key} out of range for row with {len(self._cols)} columns")
		return self._cols[key][self._index]

	def __iter__(self):
		"""Iterate over column values in this row."""
		idx = self._index
		for col in self._cols:
			yield col[idx]

	def __len__(self):
		"""Return number of columns."""
		return len(self._cols)

	def to_dict(self):
		idx = self._index
		return {name: col[idx] for name, col in zip(self._names, self._cols)}

	def __repr__(self):
		idx = self._index
		values = [repr(col[idx]) for col in self._cols]
		return f"Row({idx}: {', '.join(values)})"


class PyTable():
	"""
	Immutable collection of named, equal-length columns.

	Construct from a mapping ``{name: values}`` or from a sequence of
	PyColumns and ``(name, values)`` pairs. Construction is all or nothing:
	duplicate names raise DuplicateNameError, unequal lengths raise
	LengthMismatchError.

	Examples
	--------
	>>> t = PyTable({'face': ['king', 'queen'], 'suit': ['spades', 'spades'], 'value': [13, 12]})
	>>> t.row_count()
	2
	>>> t.get_row(0)
	{'face': 'king', 'suit': 'spades', 'value': 13}
	"""

	def __init__(self, columns=()):
		cols = self._to_columns(columns)

		names = [col.name for col in cols]
		seen = set()
		for name in names:
			if name in seen:
				raise DuplicateNameError(f"Duplicate column name '{name}'")
			seen.add(name)

		lengths = {len(col) for col in cols}
		if len(lengths) > 1:
			detail = ", ".join(f"{col.name}={len(col)}" for col in cols)
			raise LengthMismatchError(f"Columns must all have the same length ({detail})")

		self._columns = cols
		self._length = len(cols[0]) if cols else 0
		self._positions = {name: idx for idx, name in enumerate(names)}
		# Built once for fast attribute and row access
		self._attribute_map = build_attribute_map(names)

	@staticmethod
	def _to_columns(columns):
		if isinstance(columns, PyTable):
			return columns._columns
		if isinstance(columns, Mapping):
			columns = list(columns.items())

		cols = []
		for item in columns:
			if isinstance(item, PyColumn):
				if item.name is None:
					raise PyTableTypeError("Table columns must be named")
				# Snapshot the column; tables have value semantics
				cols.append(item.copy())
			elif isinstance(item, tuple) and len(item) == 2:
				name, values = item
				if not isinstance(name, str):
					raise PyTableTypeError(f"Column name must be a str, not {type(name).__name__}")
				if isinstance(values, PyColumn):
					cols.append(values.rename(name))
				else:
					cols.append(PyColumn(values, name=name))
			else:
				raise PyTableTypeError(
					f"Expected a PyColumn or (name, values) pair, got {type(item).__name__}"
				)
		return tuple(cols)

	def row_count(self):
		return self._length

	def column_count(self):
		return len(self._columns)

	def __len__(self):
		return self._length

	@property
	def shape(self):
		return (self._length, len(self._columns))

	@property
	def column_names(self):
		return tuple(col.name for col in self._columns)

	@property
	def columns(self):
		return self._columns

	@property
	def dtypes(self):
		return tuple(col.dtype for col in self._columns)

	def get_column(self, name):
		"""Column with exactly this name."""
		idx = self._positions.get(name)
		if idx is None:
			raise _missing_col_error(name)
		return self._columns[idx]

	def get_row(self, index):
		"""Mapping of column name to value for the row at index."""
		if isinstance(index, bool) or not isinstance(index, int):
			raise PyTableTypeError(f"Row index must be int, not {type(index).__name__}")
		if not 0 <= index < self._length:
			raise IndexOutOfRangeError(f"Row index {index} out of range for table with {self._length} rows")
		return {col.name: col[index] for col in self._columns}

	def rows(self):
		"""Yield each row as an independent dict."""
		for i in range(self._length):
			yield self.get_row(i)

	def __iter__(self):
		"""Iterate over rows using a reusable _RowView for memory efficiency."""
		row_view = _RowView(self, 0)
		for i in range(self._length):
			row_view.set_index(i)
			yield row_view

	def __dir__(self):
		"""Return list of available attributes including sanitized column names."""
		base_attrs = object.__dir__(self)
		return sorted(set(base_attrs + list(self._attribute_map.keys())))

	def __getattr__(self, attr):
		"""Access columns by sanitized attribute name using pre-computed attribute map."""
		# __dict__ lookup avoids recursion before __init__ has run
		attribute_map = self.__dict__.get('_attribute_map')
		if attribute_map is not None:
			col_idx = attribute_map.get(attr.lower())
			if col_idx is not None:
				return self._columns[col_idx]
		raise AttributeError(f"{self.__class__.__name__!s} object has no attribute '{attr}'")

	def __getitem__(self, key):
		if isinstance(key, str):
			if key in self._positions:
				return self._columns[self._positions[key]]
			# Fall back to the sanitized attribute name
			col_idx = self._attribute_map.get(_sanitize_user_name(key) or key.lower())
			if col_idx is not None:
				return self._columns[col_idx]
			raise _missing_col_error(key)

		if isinstance(key, tuple) and all(isinstance(k, str) for k in key):
			return self.select(*key)

		if isinstance(key, slice):
			return self.take(range(*key.indices(self._length)))

		return self.get_row(key)

	def take(self, indices):
		"""New table holding the rows at indices, in order."""
		indices = list(indices)
		for i in indices:
			if isinstance(i, bool) or not isinstance(i, int):
				raise PyTableTypeError(f"Row index must be int, not {type(i).__name__}")
			if not 0 <= i < self._length:
				raise IndexOutOfRangeError(f"Row index {i} out of range for table with {self._length} rows")
		return PyTable([col.take(indices) for col in self._columns])

	def head(self, n=DEFAULT_HEAD_ROWS):
		"""First n rows; a negative n drops that many rows from the end."""
		if n < 0:
			n = max(self._length + n, 0)
		return self.take(range(min(n, self._length)))

	def select(self, *names):
		"""New table with only the named columns, in the given order."""
		return PyTable([self.get_column(name) for name in names])

	def to_csv(self, dest=None, sep=",", row_names=False, quote=False, na="NA", encoding="utf-8"):
		"""Write this table as delimited text; returns the text when dest is None."""
		from .csv import write_csv
		return write_csv(self, dest, sep=sep, row_names=row_names, quote=quote, na=na, encoding=encoding)

	def __eq__(self, other):
		if not isinstance(other, PyTable):
			return NotImplemented
		return self._columns == other._columns

	__hash__ = None

	def __repr__(self):
		return _printr(self)
