"""Form engine exceptions."""


class SchemaFormError(Exception):
    """Base class for errors raised by the form engine."""


class SchemaIntrospectionError(SchemaFormError):
    """Raised when a schema node is malformed or cannot be inspected."""


class ArrayIndexError(SchemaFormError, IndexError):
    """Raised when an array item operation targets an index that does not exist."""
