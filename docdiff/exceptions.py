"""Custom exceptions for the document diff engine."""


class DocDiffError(Exception):
    """Base exception for document diff errors."""
    code = "DOCDIFF_ERROR"


class ValidationError(DocDiffError):
    """Raised when input validation fails."""
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TypeMismatchError(DocDiffError):
    """Raised when both sides of a field disagree on their variant or kind."""
    code = "TYPE_MISMATCH"

    def __init__(self, path: str, left_type: str, right_type: str):
        super().__init__(f"Type mismatch at {path}: {left_type} vs {right_type}")
        self.path = path
        self.left_type = left_type
        self.right_type = right_type


class MalformedScalarError(DocDiffError):
    """Raised when a raw value cannot be canonicalized for its declared kind."""
    code = "MALFORMED_SCALAR"

    def __init__(self, kind: str, value, reason: str = None):
        message = f"Cannot canonicalize {value!r} as {kind}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.kind = kind
        self.value = value
        self.reason = reason


class MaxDepthExceededError(DocDiffError):
    """Raised when maximum recursion depth is exceeded."""
    code = "MAX_DEPTH_ERROR"

    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class SchemaDefinitionError(DocDiffError):
    """Raised when a type definition cannot be parsed."""
    code = "SCHEMA_DEFINITION_ERROR"

    def __init__(self, message: str, path: str = None, reason: str = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.reason = reason


class ExternalRefError(SchemaDefinitionError):
    """Raised when an external $ref is encountered."""

    def __init__(self, ref: str):
        super().__init__(f"External $ref not allowed: {ref}", reason="external")
        self.ref = ref


class CircularRefError(SchemaDefinitionError):
    """Raised when a circular reference is detected in a definition."""

    def __init__(self, ref: str):
        super().__init__(f"Circular reference detected at: {ref}", reason="circular")
        self.ref = ref


class UnknownDocumentTypeError(DocDiffError):
    """Raised when a document refers to a type missing from the registry."""
    code = "UNKNOWN_DOCUMENT_TYPE"

    def __init__(self, type_name: str):
        super().__init__(f"Unknown document type: {type_name}")
        self.type_name = type_name
