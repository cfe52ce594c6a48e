import pytest
from py_table.typing import DataType, infer_kind, infer_dtype, validate_scalar, resolve_dtype
from py_table.errors import PyTableTypeError


class TestInference:

    @pytest.mark.parametrize("value,expected", [
        (True, bool),
        (1, int),
        (1.5, float),
        ("a", str),
        (None, None),
    ])
    def test_infer_kind(self, value, expected):
        assert infer_kind(value) is expected

    def test_infer_kind_unsupported(self):
        with pytest.raises(PyTableTypeError):
            infer_kind([1, 2])

    @pytest.mark.parametrize("values,expected", [
        ([1, 2, 3], DataType(int)),
        ([True, False], DataType(bool)),
        ([True, 2], DataType(int)),
        ([1, 2.5], DataType(float)),
        ([1, None], DataType(int, nullable=True)),
        ([None, 'a'], DataType(str, nullable=True)),
        ([], DataType(bool)),
        ([None, None], DataType(bool, nullable=True)),
    ])
    def test_infer_dtype(self, values, expected):
        assert infer_dtype(values) == expected

    @pytest.mark.parametrize("values", [
        ['a', 1],
        [1.5, 'b'],
        [True, 'x'],
    ])
    def test_mixed_types_raise(self, values):
        with pytest.raises(PyTableTypeError):
            infer_dtype(values)


class TestDataType:

    def test_repr(self):
        assert repr(DataType(int)) == "<int>"
        assert repr(DataType(int, nullable=True)) == "<int nullable>"

    def test_factor_name(self):
        assert DataType(str, categorical=True).name == "factor"

    def test_categorical_requires_str(self):
        with pytest.raises(PyTableTypeError):
            DataType(int, categorical=True)

    def test_unsupported_kind(self):
        with pytest.raises(PyTableTypeError):
            DataType(list)

    def test_promote_does_not_mutate(self):
        dt = DataType(int)
        promoted = dt.promote_with(2.5)
        assert promoted == DataType(float)
        assert dt == DataType(int)


class TestValidateScalar:

    def test_numeric_coercion(self):
        assert validate_scalar(1, DataType(float)) == 1.0
        assert isinstance(validate_scalar(1, DataType(float)), float)
        assert validate_scalar(True, DataType(int)) == 1
        assert type(validate_scalar(True, DataType(int))) is int

    def test_none_passes(self):
        assert validate_scalar(None, DataType(int)) is None

    @pytest.mark.parametrize("value,dtype", [
        ("1", DataType(int)),
        (1.5, DataType(int)),
        (1, DataType(str)),
        (1, DataType(bool)),
    ])
    def test_rejects(self, value, dtype):
        with pytest.raises(PyTableTypeError):
            validate_scalar(value, dtype)


class TestResolveDtype:

    @pytest.mark.parametrize("spec,expected", [
        (int, DataType(int)),
        ("integer", DataType(int)),
        ("numeric", DataType(float)),
        ("double", DataType(float)),
        ("character", DataType(str)),
        ("logical", DataType(bool)),
        ("Factor", DataType(str, categorical=True)),
        (DataType(float, nullable=True), DataType(float, nullable=True)),
    ])
    def test_resolve(self, spec, expected):
        assert resolve_dtype(spec) == expected

    @pytest.mark.parametrize("spec", ["complex", 3, object])
    def test_unknown(self, spec):
        with pytest.raises(PyTableTypeError):
            resolve_dtype(spec)
