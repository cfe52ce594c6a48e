import math
import warnings

from .display import _printr
from .errors import PyTableTypeError
from .errors import IndexOutOfRangeError
from .storage import choose_storage
from .storage import ArrayStorage
from .typing import DataType
from .typing import infer_dtype
from .typing import resolve_dtype
from .typing import validate_scalar

from typing import Any
from typing import Iterable


def _same_value(a, b):
	"""Equality where NaN matches NaN."""
	if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
		return True
	return a == b


class PyColumn():
	""" Named, type-homogeneous sequence of values """
	_dtype = None  # DataType instance (private)
	_storage = None
	_name = None

	def __new__(cls, values=(), dtype=None, name=None):
		"""
		Decide what type of PyColumn to create based on the dtype spec.
		"""
		if dtype is not None:
			dtype = resolve_dtype(dtype)
			if dtype.categorical:
				# Build the factor here; PyFactor.__init__ sees _built and skips
				instance = PyFactor(values, name=name)
				instance._built = True
				return instance
		return super(PyColumn, cls).__new__(cls)

	def __init__(self, values=(), dtype=None, name=None):
		if self.__dict__.pop('_built', False):
			return
		if name is not None and not isinstance(name, str):
			raise PyTableTypeError(f"Column name must be a str, not {type(name).__name__}")
		self._name = name

		if isinstance(values, PyColumn):
			values = values.values
		values = tuple(values)

		dtype = infer_dtype(values) if dtype is None else resolve_dtype(dtype)
		values = tuple(validate_scalar(v, dtype) for v in values)
		if not dtype.nullable and None in values:
			dtype = dtype.with_nullable(True)

		self._dtype = dtype
		self._storage = choose_storage(values, dtype.kind)

	@classmethod
	def _from_storage(cls, storage, dtype, name):
		col = super(PyColumn, cls).__new__(cls)
		col._name = name
		col._dtype = dtype
		col._storage = storage
		return col

	def schema(self):
		"""Get the DataType schema of this column."""
		return self._dtype

	@property
	def dtype(self):
		return self._dtype

	@property
	def name(self):
		return self._name

	@property
	def values(self):
		return self._storage.to_tuple()

	def to_list(self):
		return list(self.values)

	def is_null(self, index):
		return self._storage.is_null(self._check_index(index))

	def copy(self, name=...):
		# Use sentinel value (...) to distinguish between name=None (clear) and not passing name (preserve)
		use_name = self._name if name is ... else name
		return self._from_storage(self._storage, self._dtype, use_name)

	def rename(self, new_name):
		"""Return a copy of this column under a new name"""
		if new_name is not None and not isinstance(new_name, str):
			raise PyTableTypeError(f"Column name must be a str, not {type(new_name).__name__}")
		return self.copy(name=new_name)

	def take(self, indices: Iterable[int]):
		"""New column holding the elements at indices, in order."""
		indices = [self._check_index(i) for i in indices]
		return self._from_storage(self._storage.take(indices), self._dtype, self._name)

	def _check_index(self, index):
		if isinstance(index, bool) or not isinstance(index, int):
			raise PyTableTypeError(f"Column indices must be int, not {type(index).__name__}")
		n = len(self)
		if index < 0:
			index += n
		if not 0 <= index < n:
			raise IndexOutOfRangeError(f"Index {index} out of range for column of length {n}")
		return index

	def __len__(self):
		return len(self._storage)

	def __iter__(self):
		return iter(self._storage)

	def __getitem__(self, key):
		if isinstance(key, slice):
			return self.take(range(*key.indices(len(self))))
		return self._storage[self._check_index(key)]

	def __eq__(self, other):
		if not isinstance(other, PyColumn):
			return NotImplemented
		if self._name != other._name or self._dtype != other._dtype or len(self) != len(other):
			return False
		return all(_same_value(a, b) for a, b in zip(self, other))

	__hash__ = None

	def __repr__(self):
		return _printr(self)


class PyFactor(PyColumn):
	"""
	Categorical text column.

	Values are stored as 0-based integer codes into ``levels``; indexing and
	iteration give back the labels. Default levels are the sorted distinct
	non-null values. A value outside explicit levels is stored as None.

	Examples
	--------
	>>> f = PyFactor(['spades', 'hearts', 'spades'])
	>>> f.levels
	('hearts', 'spades')
	>>> f.codes
	(1, 0, 1)
	"""
	_levels = ()

	def __new__(cls, values=(), levels=None, name=None, *, dtype=None):
		return object.__new__(cls)

	# dtype is accepted for PyColumn(values, dtype="factor") and ignored
	def __init__(self, values=(), levels=None, name=None, *, dtype=None):
		if self.__dict__.pop('_built', False):
			return
		if name is not None and not isinstance(name, str):
			raise PyTableTypeError(f"Column name must be a str, not {type(name).__name__}")
		self._name = name

		if isinstance(values, PyColumn):
			values = values.values
		values = tuple(values)
		for v in values:
			if v is not None and not isinstance(v, str):
				raise PyTableTypeError(f"Factor values must be str, not {type(v).__name__} {v!r}")

		if levels is None:
			levels = sorted({v for v in values if v is not None})
		levels = tuple(levels)
		if len(set(levels)) != len(levels):
			raise PyTableTypeError(f"Duplicate factor levels in {levels!r}")

		lookup = {label: code for code, label in enumerate(levels)}
		codes = []
		unknown = set()
		for v in values:
			if v is None:
				codes.append(None)
			elif v in lookup:
				codes.append(lookup[v])
			else:
				unknown.add(v)
				codes.append(None)
		if unknown:
			warnings.warn(
				f"Values {sorted(unknown)!r} are not factor levels; stored as None",
				stacklevel=2,
			)

		self._levels = levels
		self._dtype = DataType(str, nullable=None in codes, categorical=True)
		self._storage = ArrayStorage.from_iterable(codes, int)

	@classmethod
	def _from_storage(cls, storage, dtype, name, levels=()):
		col = super()._from_storage(storage, dtype, name)
		col._levels = levels
		return col

	def copy(self, name=...):
		use_name = self._name if name is ... else name
		return self._from_storage(self._storage, self._dtype, use_name, self._levels)

	def take(self, indices: Iterable[int]):
		indices = [self._check_index(i) for i in indices]
		return self._from_storage(self._storage.take(indices), self._dtype, self._name, self._levels)

	@property
	def levels(self):
		return self._levels

	@property
	def codes(self):
		return self._storage.to_tuple()

	def _label(self, code: Any):
		return None if code is None else self._levels[code]

	@property
	def values(self):
		return tuple(self._label(c) for c in self._storage)

	def __iter__(self):
		for c in self._storage:
			yield self._label(c)

	def __getitem__(self, key):
		if isinstance(key, slice):
			return self.take(range(*key.indices(len(self))))
		return self._label(self._storage[self._check_index(key)])

	def __eq__(self, other):
		result = super().__eq__(other)
		if result is True and isinstance(other, PyFactor):
			return self._levels == other._levels
		return result

	__hash__ = None
