class PyTableError(Exception):
    """Base exception for py-table library."""
    pass


class LengthMismatchError(PyTableError, ValueError):
    """Raised when the columns of a table differ in length."""
    pass


class DuplicateNameError(PyTableError, ValueError):
    """Raised when two columns of a table share a name."""
    pass


class NotFoundError(PyTableError, KeyError):
    """Raised when a column name is missing."""
    pass


class IndexOutOfRangeError(PyTableError, IndexError):
    """Raised when a row index falls outside the table."""
    pass


class PyTableTypeError(PyTableError, TypeError):
    """Raised for mixed column types and invalid types in API calls."""
    pass


class ParseError(PyTableError, ValueError):
    """Raised for a malformed row in delimited text.

    ``line`` is the 1-based line number in the source, ``column`` the
    column name the bad value belongs to (None for field-count errors).
    """

    def __init__(self, message, line=None, column=None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
        self.column = column
