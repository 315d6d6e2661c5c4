"""
Generated file model: produced by the hook document generator.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A configuration document ready to be written.

    Attributes:
        path:      Path relative to the target directory.
        content:   Full file content.
        overwrite: Whether to replace an existing file.
        reason:    What the file is for.
    """

    path: str
    content: str
    overwrite: bool = True
    reason: str = ""
