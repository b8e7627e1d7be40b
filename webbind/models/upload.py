"""
Where: webbind/models/upload.py
What: Value objects for uploaded files and multipart parts.
Why: Decouple handler code from Starlette's UploadFile and form internals.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UploadedFile:
    """A file received in a multipart request, fully read into memory."""

    name: str
    content: bytes = b""
    filename: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_empty(self) -> bool:
        return not self.content

    def read(self) -> bytes:
        return self.content


@dataclass(frozen=True)
class Part:
    """
    A named section of a multipart body.

    Parts are not necessarily files: plain form fields are parts too,
    in which case `filename` is None.
    """

    name: str
    content: bytes = b""
    filename: Optional[str] = None
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")
