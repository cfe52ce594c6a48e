"""
DataType system for PyColumn / PyTable.

Pure metadata design:
  - DataType describes column semantics (type + nullable + categorical flags)
  - Values live in the column's storage, never in DataType
  - Promotion is functional (immutable DataType instances)
  - A column holds exactly one kind: bool, int, float or str
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Type

from .errors import PyTableTypeError


SUPPORTED_KINDS = (bool, int, float, str)


@dataclass(frozen=True)
class DataType:
    """
    Describes the semantic type of a PyColumn.

    Attributes
    ----------
    kind : Type
        Python type (bool, int, float or str)
    nullable : bool
        Whether the column may contain None values
    categorical : bool
        Whether a str column is stored as factor codes

    Notes
    -----
    - DataType holds zero instance data (no codes, no levels)
    - Promotion never mutates — always returns new DataType

    Examples
    --------
    >>> DataType(int)
    <int>
    >>> DataType(int, nullable=True)
    <int nullable>
    >>> DataType(int).promote_with(2.5)
    <float>
    """

    kind: Type[Any]
    nullable: bool = False
    categorical: bool = False

    def __post_init__(self):
        if self.kind not in SUPPORTED_KINDS:
            name = getattr(self.kind, "__name__", repr(self.kind))
            raise PyTableTypeError(
                f"Unsupported column type {name}; expected one of bool, int, float, str"
            )
        if self.categorical and self.kind is not str:
            raise PyTableTypeError("Only str columns can be categorical")

    def __repr__(self):
        if self.nullable:
            return f"<{self.name} nullable>"
        return f"<{self.name}>"

    @property
    def name(self) -> str:
        """Short display name ('factor' for categorical columns)."""
        if self.categorical:
            return "factor"
        return self.kind.__name__

    @property
    def is_numeric(self) -> bool:
        """True if kind is bool, int or float."""
        return self.kind in (bool, int, float)

    def with_nullable(self, nullable: bool = True) -> "DataType":
        if nullable == self.nullable:
            return self
        return DataType(self.kind, nullable, self.categorical)

    def promote_with(self, value: Any) -> "DataType":
        """
        Promote this DataType to accommodate a new Python value.

        Never mutates; always returns new DataType.

        Raises
        ------
        PyTableTypeError
            If value cannot share a column with this kind
        """
        # None just lifts nullability
        if value is None:
            return self.with_nullable(True)

        vkind = infer_kind(value)

        if vkind is self.kind:
            return self

        # Numeric ladder (bool → int → float)
        if self.is_numeric and vkind in (bool, int, float):
            if self.kind is float or vkind is float:
                new_kind = float
            else:
                new_kind = int
            if new_kind is not self.kind:
                return DataType(new_kind, self.nullable)
            return self

        raise PyTableTypeError(
            f"Cannot mix {vkind.__name__} value {value!r} into column<{self.name}>"
        )


def infer_kind(value: Any) -> Optional[Type]:
    """
    Infer the column kind for a single scalar.

    Returns None for None values.
    """
    if value is None:
        return None

    # Check bool BEFORE int (bool is subclass of int)
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, float):
        return float
    if isinstance(value, str):
        return str

    raise PyTableTypeError(
        f"Unsupported value {value!r} of type {type(value).__name__}; "
        "columns hold bool, int, float or str"
    )


def infer_dtype(values: Iterable[Any]) -> DataType:
    """
    Infer a DataType from an iterable of Python scalars.

    Applies promotion across all values.

    Examples
    --------
    >>> infer_dtype([1, 2, 3])
    <int>
    >>> infer_dtype([1, 2.5, 3])
    <float>
    >>> infer_dtype([1, None, 3])
    <int nullable>
    >>> infer_dtype([])
    <bool>
    """
    dtype: Optional[DataType] = None
    saw_none = False

    for v in values:
        if v is None:
            saw_none = True
            if dtype is not None:
                dtype = dtype.with_nullable(True)
            continue
        if dtype is None:
            dtype = DataType(infer_kind(v), nullable=saw_none)
        else:
            dtype = dtype.promote_with(v)

    # Empty or all-None: logical, like an empty vector or a lone NA
    if dtype is None:
        return DataType(bool, nullable=saw_none)

    return dtype


def validate_scalar(value: Any, dtype: DataType) -> Any:
    """
    Validate (and possibly coerce) a scalar before storing it in a column.

    Raises
    ------
    PyTableTypeError
        If value is incompatible with dtype
    """
    if value is None:
        return None

    vtype = type(value)

    if vtype is dtype.kind:
        return value

    # Numeric coercions
    if dtype.kind is float and vtype in (int, bool):
        return float(value)
    if dtype.kind is int and vtype is bool:
        return int(value)

    raise PyTableTypeError(
        f"Incompatible value {value!r} for column<{dtype.name}>"
    )


_DTYPE_NAMES = {
    "int": DataType(int),
    "integer": DataType(int),
    "float": DataType(float),
    "double": DataType(float),
    "numeric": DataType(float),
    "bool": DataType(bool),
    "logical": DataType(bool),
    "str": DataType(str),
    "string": DataType(str),
    "character": DataType(str),
    "factor": DataType(str, categorical=True),
    "category": DataType(str, categorical=True),
}


def resolve_dtype(spec: Any) -> DataType:
    """
    Turn a user-facing dtype spec into a DataType.

    Accepts a DataType, a Python type (int, float, bool, str) or a type name
    such as "integer", "numeric", "character", "logical" or "factor".
    """
    if isinstance(spec, DataType):
        return spec
    if isinstance(spec, str):
        try:
            return _DTYPE_NAMES[spec.lower()]
        except KeyError:
            raise PyTableTypeError(f"Unknown dtype name {spec!r}") from None
    if isinstance(spec, type):
        return DataType(spec)
    raise PyTableTypeError(f"Invalid dtype specification {spec!r}")
