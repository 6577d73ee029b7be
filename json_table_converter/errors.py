from __future__ import annotations


class ConversionError(Exception):
    """Base class for every caller-correctable failure in the converter."""


class ReadError(ConversionError):
    def __init__(self, name: str, reason: str = ''):
        self.name = name
        message = f"Error reading file {name}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class FormatError(ConversionError):
    def __init__(self, name: str, reason: str = 'is not an array.'):
        self.name = name
        super().__init__(f"File {name} {reason}")


class EmptyDataError(ConversionError):
    def __init__(self, message: str = 'No JSON data to convert. Please upload a JSON file.'):
        super().__init__(message)


class NoColumnsError(ConversionError):
    def __init__(self, message: str = 'No keys selected for conversion.'):
        super().__init__(message)


class DuplicateColumnError(ConversionError):
    def __init__(self, identifier: str, first: str, second: str):
        self.identifier = identifier
        self.names = (first, second)
        super().__init__(
            f"Columns '{first}' and '{second}' both map to the column name '{identifier}'."
        )


class DuplicateValueError(ConversionError):
    def __init__(self, column: str, value: str):
        self.column = column
        self.value = value
        super().__init__(f"Column '{column}' is marked unique but the value '{value}' appears more than once.")


class EmptyTableNameError(ConversionError):
    def __init__(self):
        super().__init__('Table name must not be empty.')


class ColumnIndexError(ConversionError, IndexError):
    def __init__(self, index, size: int):
        self.index = index
        if size == 0:
            super().__init__(f"Column position {index} is out of range: there are no columns.")
        else:
            super().__init__(f"Column position {index} is out of range (0..{size - 1}).")
