"""
Errors surfaced to callers of the analysis engine.
Everything else inside the engine degrades to a well-defined default.
"""
from typing import Optional


class DataIntegrityError(Exception):
    """A catalog entry (or the catalog file itself) is corrupt. Not retried."""

    def __init__(self, message: str, substance_id: Optional[str] = None):
        self.substance_id = substance_id
        if substance_id:
            message = f"{message} (substance_id={substance_id})"
        super().__init__(message)
