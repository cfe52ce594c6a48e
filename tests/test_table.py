"""PyTable construction, access and derived tables"""
import pytest
from py_table import PyTable, PyColumn, PyFactor
from py_table.typing import DataType
from py_table.errors import (
    LengthMismatchError,
    DuplicateNameError,
    NotFoundError,
    IndexOutOfRangeError,
    PyTableTypeError,
)


@pytest.fixture
def cards():
    return PyTable({
        'face': ['king', 'queen', 'jack'],
        'suit': ['spades', 'spades', 'hearts'],
        'value': [13, 12, 11],
    })


class TestConstruction:

    def test_from_dict(self):
        t = PyTable({'face': ['king', 'queen'], 'suit': ['spades', 'spades'], 'value': [13, 12]})
        assert t.row_count() == 2
        assert t.column_count() == 3
        assert t.get_row(0) == {'face': 'king', 'suit': 'spades', 'value': 13}

    def test_from_pairs(self):
        t = PyTable([('a', [1, 2]), ('b', ['x', 'y'])])
        assert t.column_names == ('a', 'b')
        assert t.shape == (2, 2)

    def test_from_columns(self):
        a = PyColumn([1, 2], name='a')
        t = PyTable([a, PyColumn([3, 4], name='b')])
        assert t.get_column('a') == a

    def test_pair_with_column_renames(self):
        t = PyTable([('renamed', PyColumn([1, 2], name='old'))])
        assert t.column_names == ('renamed',)

    @pytest.mark.parametrize("n", [0, 1, 5, 52])
    def test_row_count_matches_length(self, n):
        t = PyTable({'a': list(range(n)), 'b': [str(i) for i in range(n)]})
        assert t.row_count() == n
        assert len(t) == n

    def test_empty(self):
        t = PyTable()
        assert t.shape == (0, 0)
        assert list(t) == []

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            PyTable({'a': [1, 2, 3], 'b': [1, 2]})

    def test_duplicate_name(self):
        with pytest.raises(DuplicateNameError):
            PyTable([('a', [1]), ('a', [2])])

    def test_unnamed_column_rejected(self):
        with pytest.raises(PyTableTypeError):
            PyTable([PyColumn([1, 2])])

    def test_non_str_name_rejected(self):
        with pytest.raises(PyTableTypeError):
            PyTable([(1, [1, 2])])

    def test_bad_item_rejected(self):
        with pytest.raises(PyTableTypeError):
            PyTable([[1, 2]])

    def test_mixed_column_rejected(self):
        with pytest.raises(PyTableTypeError):
            PyTable({'a': [1, 'x']})

    def test_columns_are_snapshots(self):
        a = PyColumn([1, 2], name='a')
        t = PyTable([a])
        assert t.get_column('a') is not a
        assert t.get_column('a') == a

    def test_factor_columns_survive(self):
        t = PyTable([PyFactor(['b', 'a'], name='f')])
        col = t.get_column('f')
        assert isinstance(col, PyFactor)
        assert col.levels == ('a', 'b')

    def test_declared_factor_column(self):
        t = PyTable([PyColumn(['x'], dtype='category', name='s')])
        assert isinstance(t.get_column('s'), PyFactor)


class TestAccess:

    def test_get_column(self, cards):
        assert cards.get_column('value').values == (13, 12, 11)

    def test_get_column_missing(self, cards):
        with pytest.raises(NotFoundError):
            cards.get_column('colour')

    def test_getitem_by_name(self, cards):
        assert cards['face'].to_list() == ['king', 'queen', 'jack']

    def test_getitem_by_sanitized_name(self):
        t = PyTable({'Card Face': ['king']})
        assert t['card_face'].to_list() == ['king']

    def test_getitem_by_row(self, cards):
        assert cards[2] == {'face': 'jack', 'suit': 'hearts', 'value': 11}

    def test_getitem_names_selects(self, cards):
        sub = cards['value', 'face']
        assert sub.column_names == ('value', 'face')

    def test_getitem_slice(self, cards):
        assert cards[1:].get_column('value').values == (12, 11)

    def test_get_row_every_index(self, cards):
        for i in range(cards.row_count()):
            row = cards.get_row(i)
            assert set(row) == set(cards.column_names)
            for name in cards.column_names:
                assert row[name] == cards.get_column(name)[i]

    def test_get_row_keeps_column_order(self, cards):
        assert list(cards.get_row(0)) == ['face', 'suit', 'value']

    @pytest.mark.parametrize("index", [3, 100, -1])
    def test_get_row_out_of_range(self, cards, index):
        with pytest.raises(IndexOutOfRangeError):
            cards.get_row(index)

    @pytest.mark.parametrize("index", ['0', 1.0, True])
    def test_get_row_non_int(self, cards, index):
        with pytest.raises(PyTableTypeError):
            cards.get_row(index)

    def test_get_row_empty_table(self):
        with pytest.raises(IndexOutOfRangeError):
            PyTable({'a': []}).get_row(0)

    def test_dtypes(self, cards):
        assert cards.dtypes == (DataType(str), DataType(str), DataType(int))

    def test_attribute_access(self, cards):
        assert cards.suit.to_list() == ['spades', 'spades', 'hearts']


class TestIteration:

    def test_row_views(self, cards):
        faces = [row.face for row in cards]
        assert faces == ['king', 'queen', 'jack']

    def test_row_view_indexing(self, cards):
        row = next(iter(cards))
        assert row['suit'] == 'spades'
        assert row[2] == 13
        assert list(row) == ['king', 'spades', 13]
        assert len(row) == 3
        assert row.to_dict() == {'face': 'king', 'suit': 'spades', 'value': 13}

    def test_row_view_missing(self, cards):
        row = next(iter(cards))
        with pytest.raises(AttributeError):
            row.colour
        with pytest.raises(NotFoundError):
            row['colour']

    @pytest.mark.parametrize("position", [3, 5, -4])
    def test_row_view_position_out_of_range(self, cards, position):
        row = next(iter(cards))
        with pytest.raises(IndexOutOfRangeError):
            row[position]

    def test_row_view_negative_position(self, cards):
        row = next(iter(cards))
        assert row[-1] == 13

    def test_row_view_bad_key(self, cards):
        row = next(iter(cards))
        with pytest.raises(PyTableTypeError):
            row[1.0]

    def test_rows_are_independent(self, cards):
        rows = list(cards.rows())
        assert rows[0] == {'face': 'king', 'suit': 'spades', 'value': 13}
        assert rows[2]['face'] == 'jack'


class TestDerived:

    def test_take(self, cards):
        t = cards.take([2, 0])
        assert t.get_column('face').to_list() == ['jack', 'king']
        assert cards.row_count() == 3

    def test_take_out_of_range(self, cards):
        with pytest.raises(IndexOutOfRangeError):
            cards.take([0, 3])

    def test_head_default(self):
        t = PyTable({'a': list(range(10))})
        assert t.head().get_column('a').values == (0, 1, 2, 3, 4, 5)

    def test_head_n(self, cards):
        assert cards.head(2).row_count() == 2
        assert cards.head(10).row_count() == 3

    def test_head_negative(self, cards):
        assert cards.head(-1).get_column('face').to_list() == ['king', 'queen']
        assert cards.head(-5).row_count() == 0

    def test_select(self, cards):
        t = cards.select('value')
        assert t.column_names == ('value',)
        assert t.row_count() == 3

    def test_select_missing(self, cards):
        with pytest.raises(NotFoundError):
            cards.select('face', 'colour')

    def test_equality(self, cards):
        same = PyTable({
            'face': ['king', 'queen', 'jack'],
            'suit': ['spades', 'spades', 'hearts'],
            'value': [13, 12, 11],
        })
        assert cards == same
        assert cards != cards.select('face')
        assert cards != cards.take([1, 0, 2])

    def test_unhashable(self, cards):
        with pytest.raises(TypeError):
            hash(cards)
