class ParseError(ValueError):
    """Raised when a document's markup cannot be parsed."""
