"""Employee search gateway: filtered, paged employee lookups rendered as JSON or XML."""

__version__ = "0.1.0"
