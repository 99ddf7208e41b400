class MockTablesError(Exception):
    """Base class for exceptions in this module."""


class CollectionNotFound(MockTablesError):
    """Raised when a collection is not found in a database."""


class FixtureError(MockTablesError):
    """Raised when a database fixture cannot be loaded."""
