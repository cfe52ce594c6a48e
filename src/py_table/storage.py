"""
Storage backends for PyColumn data.

Pure Python implementation using array.array for int and float columns,
with separate null masks for nullable dtypes. Everything else is a tuple.
"""

from __future__ import annotations
from array import array
from typing import Any, Protocol, Iterator
from collections.abc import Iterable


class Storage(Protocol):
    """Protocol for column storage backends."""

    def __len__(self) -> int:
        """Number of elements (including nulls)."""
        ...

    def __getitem__(self, i: int) -> Any:
        """Get element at index (returns None if null)."""
        ...

    def __iter__(self) -> Iterator[Any]:
        """Iterate over elements (yielding None for nulls)."""
        ...

    def take(self, indices: Iterable[int]) -> Storage:
        """Return a new Storage holding the elements at indices."""
        ...

    def to_tuple(self) -> tuple:
        """Export to Python tuple."""
        ...

    def is_null(self, i: int) -> bool:
        """Check if element at index is null."""
        ...


class ArrayStorage:
    """
    Contiguous numeric storage using array.array + optional null mask.

    For int and float columns with or without nulls.
    """

    __slots__ = ('_data', '_mask')

    # Map Python types to array.array typecodes
    _TYPECODE_MAP = {
        int: 'q',      # signed long long
        float: 'd',    # double
    }

    def __init__(self, data: array, mask: array | None = None):
        """
        Parameters
        ----------
        data : array.array
            Contiguous numeric data
        mask : array.array of 'B' or None
            Null mask (1 = null, 0 = valid), same length as data
        """
        self._data = data
        self._mask = mask

    @classmethod
    def from_iterable(cls, values: Iterable[Any], dtype_kind: type) -> ArrayStorage:
        """Create from Python iterable."""
        typecode = cls._TYPECODE_MAP.get(dtype_kind)
        if typecode is None:
            raise ValueError(f"Cannot use ArrayStorage for {dtype_kind}")

        data_list = []
        mask_list = []
        has_nulls = False

        for v in values:
            if v is None:
                has_nulls = True
                mask_list.append(1)
                data_list.append(0)  # sentinel value (ignored when masked)
            else:
                mask_list.append(0)
                data_list.append(v)

        data = array(typecode, data_list)
        mask = array('B', mask_list) if has_nulls else None

        return cls(data, mask)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, i: int) -> Any:
        if self._mask and self._mask[i]:
            return None
        return self._data[i]

    def __iter__(self) -> Iterator[Any]:
        if self._mask:
            for i in range(len(self._data)):
                yield None if self._mask[i] else self._data[i]
        else:
            yield from self._data

    def is_null(self, i: int) -> bool:
        return bool(self._mask and self._mask[i])

    def take(self, indices: Iterable[int]) -> ArrayStorage:
        indices = list(indices)
        data = self._data
        new_data = array(data.typecode, [data[i] for i in indices])
        new_mask = None
        if self._mask:
            new_mask = array('B', [self._mask[i] for i in indices])
            if not any(new_mask):
                new_mask = None
        return ArrayStorage(new_data, new_mask)

    def to_tuple(self) -> tuple:
        return tuple(self)


class TupleStorage:
    """
    Python object storage using tuple.

    For bool and str columns, and ints too large for an array.
    Nulls are stored as None inline.
    """

    __slots__ = ('_data',)

    def __init__(self, data: tuple):
        self._data = data

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> TupleStorage:
        return cls(tuple(values))

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, i: int) -> Any:
        return self._data[i]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def is_null(self, i: int) -> bool:
        return self._data[i] is None

    def take(self, indices: Iterable[int]) -> TupleStorage:
        data = self._data
        return TupleStorage(tuple(data[i] for i in indices))

    def to_tuple(self) -> tuple:
        return self._data


def choose_storage(values: Iterable[Any], dtype_kind: type) -> Storage:
    """
    Choose appropriate storage backend based on dtype.

    Parameters
    ----------
    values : Iterable[Any]
        Data to store (already validated against the dtype)
    dtype_kind : type
        Python type (bool, int, float, str)
    """
    values = tuple(values)

    # Try array.array for numeric types
    if dtype_kind in (int, float):
        try:
            return ArrayStorage.from_iterable(values, dtype_kind)
        except OverflowError:
            # int outside 64 bits
            pass

    return TupleStorage(values)
