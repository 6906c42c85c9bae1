class CsvUtilityError(Exception):
    pass


class MalformedRow(CsvUtilityError):
    """Raised for rows whose quoting cannot be parsed."""

    def __init__(self, message: str, line: str | None = None):
        super().__init__(message)
        self.line = line


class ConversionError(CsvUtilityError):
    """Raised when a cell value cannot be converted to a field's declared kind."""

    def __init__(self, field: str, value: str, reason: str):
        super().__init__(f"cannot convert {value!r} for field '{field}': {reason}")
        self.field = field
        self.value = value
        self.reason = reason


class UnknownRecordType(CsvUtilityError):
    pass
