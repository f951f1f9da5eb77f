"""
Domain errors raised by services and translated to HTTP / view state at the edge
"""

from typing import Optional


class KalimaError(Exception):
    """Base class for service errors"""


class ContentNotFoundError(KalimaError):
    """An article, static page, category or subcategory does not exist"""

    def __init__(self, kind: str, slug: str, parent_path: str = "/"):
        self.kind = kind
        self.slug = slug
        # Safe route to link back to from a not-found view
        self.parent_path = parent_path
        super().__init__(f"{kind} not found: {slug}")


class FetchFailureError(KalimaError):
    """The document store was unreachable or rejected the request"""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"Store operation failed: {operation}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class TranslationValidationError(KalimaError):
    """A translation is missing fields required before it may be saved"""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))
