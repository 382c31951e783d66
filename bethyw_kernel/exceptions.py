"""
Typed Exception Hierarchy for Beth Yw?

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from BethYwError:

    BethYwError (base)
    |
    +-- ConfigurationError          fatal to the current dataset
    |   +-- MissingColumnError
    |   +-- UnsupportedSourceTypeError
    |   +-- DatasetNotFoundError
    |
    +-- SchemaError                 fatal to the current dataset
    |   +-- ColumnCountError
    |   +-- ColumnNameError
    |   +-- RecordArrayNotFoundError
    |
    +-- SourceError                 fatal to the current dataset
    |   +-- UnreadableSourceError
    |   +-- EmptySourceError
    |   +-- MalformedSourceError
    |
    +-- RowError                    recovered locally by the importers
    |   +-- MalformedRowError
    |   +-- MissingFieldError
    |   +-- InvalidLanguageCodeError
    |   +-- InvalidValueError
    |
    +-- NotFoundError               lookups on the in-memory model
        +-- AreaNotFoundError
        +-- MeasureNotFoundError
        +-- NameNotFoundError
        +-- ReadingNotFoundError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                     | When Raised
----------------|--------------------------|-------------------------------------
Configuration   | MISSING_COLUMN           | Mapping lacks a logical column, or a
                |                          | wide CSV header lacks the code column
                | UNSUPPORTED_SOURCE_TYPE  | No importer for the source type
                | DATASET_NOT_FOUND        | Unknown dataset code in the catalogue
----------------|--------------------------|-------------------------------------
Schema          | INVALID_COLUMN_COUNT     | CSV header has the wrong width
                | INVALID_COLUMN_NAMES     | CSV header names differ from mapping
                | RECORD_ARRAY_NOT_FOUND   | JSON document has no record array
----------------|--------------------------|-------------------------------------
Source          | UNREADABLE_SOURCE        | Stream closed or not readable
                | EMPTY_SOURCE             | Stream has no content
                | MALFORMED_SOURCE         | JSON document cannot be parsed
----------------|--------------------------|-------------------------------------
Row             | MALFORMED_ROW            | Row has the wrong number of tokens
                | MISSING_FIELD            | JSON record lacks a mapped field
                | INVALID_LANGUAGE_CODE    | Name language is not 3 letters
                | INVALID_VALUE            | Year/value cell is not numeric
----------------|--------------------------|-------------------------------------
Not found       | AREA_NOT_FOUND           | No area with the code
                | MEASURE_NOT_FOUND        | No measure with the code
                | NAME_NOT_FOUND           | No name in the language
                | READING_NOT_FOUND        | No reading for the year

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        store.populate(stream, SourceType.WELSH_STATS_JSON, mapping)
    except SchemaError as e:
        log.error("dataset_failed", extra={"code": e.code})

RowError never escapes an importer: the importer logs it and moves on to
the next row. Every other category aborts only the dataset being imported;
rows merged before the failure stay merged.
"""


class BethYwError(Exception):
    """
    Base exception for all Beth Yw? errors.

    All subclasses carry a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BETHYW_ERROR"


# Configuration exceptions


class ConfigurationError(BethYwError):
    """Base exception for column mapping and dataset catalogue errors."""

    code: str = "CONFIGURATION_ERROR"


class MissingColumnError(ConfigurationError):
    """A required logical column is absent from a mapping or a header."""

    code: str = "MISSING_COLUMN"

    def __init__(self, column: str, dataset: str | None = None):
        self.column = column
        self.dataset = dataset
        msg = f"No column found with title: {column}"
        if dataset:
            msg += f" (dataset {dataset})"
        super().__init__(msg)


class UnsupportedSourceTypeError(ConfigurationError):
    """No importer is registered for the requested source type."""

    code: str = "UNSUPPORTED_SOURCE_TYPE"

    def __init__(self, source_type: str):
        self.source_type = source_type
        super().__init__(f"Unsupported source type: {source_type}")


class DatasetNotFoundError(ConfigurationError):
    """Dataset code is not declared in the dataset catalogue."""

    code: str = "DATASET_NOT_FOUND"

    def __init__(self, dataset_code: str):
        self.dataset_code = dataset_code
        super().__init__(f"No dataset matches key: {dataset_code}")


# Schema exceptions


class SchemaError(BethYwError):
    """Base exception for source files whose layout does not match the mapping."""

    code: str = "SCHEMA_ERROR"


class ColumnCountError(SchemaError):
    """CSV header has the wrong number of columns."""

    code: str = "INVALID_COLUMN_COUNT"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid number of columns: expected {expected}, found {actual}"
        )


class ColumnNameError(SchemaError):
    """CSV header names do not match the configured columns, in order."""

    code: str = "INVALID_COLUMN_NAMES"

    def __init__(self, expected: list[str], actual: list[str]):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Incorrect column names: expected {expected}, found {actual}"
        )


class RecordArrayNotFoundError(SchemaError):
    """JSON document holds neither a record array nor a `value` envelope."""

    code: str = "RECORD_ARRAY_NOT_FOUND"

    def __init__(self, found_type: str):
        self.found_type = found_type
        super().__init__(f"Expected a JSON array of records, found {found_type}")


# Source exceptions


class SourceError(BethYwError):
    """Base exception for streams that cannot be imported at all."""

    code: str = "SOURCE_ERROR"


class UnreadableSourceError(SourceError):
    """Stream is closed or not open for reading."""

    code: str = "UNREADABLE_SOURCE"

    def __init__(self, source: str = ""):
        self.source = source
        super().__init__(f"Failed to read source {source}".rstrip())


class EmptySourceError(SourceError):
    """Stream is readable but has no content."""

    code: str = "EMPTY_SOURCE"

    def __init__(self, source: str = ""):
        self.source = source
        super().__init__(f"Source has no content {source}".rstrip())


class MalformedSourceError(SourceError):
    """Stream content cannot be decoded (e.g. invalid JSON)."""

    code: str = "MALFORMED_SOURCE"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed source: {reason}")


# Row exceptions


class RowError(BethYwError):
    """Base exception for a single malformed row, field or token."""

    code: str = "ROW_ERROR"


class MalformedRowError(RowError):
    """Row does not split into the expected number of tokens."""

    code: str = "MALFORMED_ROW"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} tokens in row, found {actual}")


class MissingFieldError(RowError):
    """A JSON record lacks a field the column mapping names."""

    code: str = "MISSING_FIELD"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Record has no field {field!r}")


class InvalidLanguageCodeError(RowError):
    """Name language code is not exactly three alphabetic characters."""

    code: str = "INVALID_LANGUAGE_CODE"

    def __init__(self, lang: str):
        self.lang = lang
        super().__init__(
            f"Language code must be three alphabetical letters only: {lang!r}"
        )


class InvalidValueError(RowError):
    """A cell or record field cannot be coerced to the required type."""

    code: str = "INVALID_VALUE"

    def __init__(self, value: object, expected_type: str):
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Invalid value in file: {value!r} is not {expected_type}")


# Lookup exceptions


class NotFoundError(BethYwError):
    """Base exception for lookups on areas, measures, names and readings."""

    code: str = "NOT_FOUND"


class AreaNotFoundError(NotFoundError):
    code: str = "AREA_NOT_FOUND"

    def __init__(self, local_authority_code: str):
        self.local_authority_code = local_authority_code
        super().__init__(f"No area found matching {local_authority_code}")


class MeasureNotFoundError(NotFoundError):
    code: str = "MEASURE_NOT_FOUND"

    def __init__(self, measure_code: str):
        self.measure_code = measure_code
        super().__init__(f"No measure found matching {measure_code}")


class NameNotFoundError(NotFoundError):
    code: str = "NAME_NOT_FOUND"

    def __init__(self, lang: str):
        self.lang = lang
        super().__init__(f"No name in language {lang}")


class ReadingNotFoundError(NotFoundError):
    code: str = "READING_NOT_FOUND"

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"No value found for year {year}")
