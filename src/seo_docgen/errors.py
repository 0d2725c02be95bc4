"""
Exceptions raised by the document generator.

The pipeline itself is fail-soft: the only input it rejects is empty content.
"""


class DocGenError(ValueError):
    """Base class for document generation failures."""
    pass


class EmptyContentError(DocGenError):
    """Raised when the annotated content is None or blank."""
    pass


class RequestValidationError(DocGenError):
    """Raised when a document-generation request cannot be parsed."""
    pass
