"""
Request models.

Encapsulates the request data argument resolvers read from.
This model decouples the resolvers from FastAPI's Request object.
"""

from typing import Dict, Iterable, List, Optional

from .upload import Part, UploadedFile


class MultipartFiles:
    """Uploaded files of a parsed multipart request, kept in upload order."""

    def __init__(self, files: Iterable[UploadedFile] = ()):
        self._files: List[UploadedFile] = list(files)

    def add(self, file: UploadedFile) -> None:
        self._files.append(file)

    def get_file(self, name: str) -> Optional[UploadedFile]:
        for file in self._files:
            if file.name == name:
                return file
        return None

    def get_files(self, name: str) -> List[UploadedFile]:
        return [file for file in self._files if file.name == name]

    def names(self) -> List[str]:
        return list(dict.fromkeys(file.name for file in self._files))

    def __len__(self) -> int:
        return len(self._files)


class WebRequest:
    """
    Rich context representing an incoming request.

    Parameters are multi-valued and keep submission order. `multipart_files`
    is None unless the multipart body was parsed into uploaded files.
    """

    def __init__(
        self,
        method: str = "GET",
        path: str = "/",
        content_type: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        multipart_files: Optional[MultipartFiles] = None,
    ):
        self.method = method.upper()
        self.path = path
        self.content_type = content_type
        self.headers: Dict[str, str] = dict(headers or {})
        self.multipart_files = multipart_files
        self._parameters: Dict[str, List[str]] = {}
        self._parts: List[Part] = []

    @property
    def is_multipart(self) -> bool:
        return bool(self.content_type) and self.content_type.lower().startswith("multipart/")

    # Parameters

    def add_parameter(self, name: str, *values: str) -> None:
        self._parameters.setdefault(name, []).extend(values)

    def set_parameter(self, name: str, *values: str) -> None:
        self._parameters[name] = list(values)

    def get_parameter(self, name: str) -> Optional[str]:
        values = self._parameters.get(name)
        return values[0] if values else None

    def get_parameter_values(self, name: str) -> Optional[List[str]]:
        values = self._parameters.get(name)
        return list(values) if values is not None else None

    def parameter_names(self) -> List[str]:
        return list(self._parameters)

    def parameter_map(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self._parameters.items()}

    # Parts

    def add_part(self, part: Part) -> None:
        self._parts.append(part)

    def get_part(self, name: str) -> Optional[Part]:
        for part in self._parts:
            if part.name == name:
                return part
        return None

    def get_parts(self, name: Optional[str] = None) -> List[Part]:
        if name is None:
            return list(self._parts)
        return [part for part in self._parts if part.name == name]

    def __repr__(self) -> str:
        return f"WebRequest(method={self.method!r}, path={self.path!r}, content_type={self.content_type!r})"
