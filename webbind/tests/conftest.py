import os
from typing import Annotated, Any, Dict, List, Tuple

import pytest

# Config is loaded at import time, so set environment variables at top level.
# Point logging at a missing file so tests fall back to basicConfig.
os.environ.setdefault("LOG_CONFIG_PATH", "/tmp/webbind-missing-logging.yaml")

from webbind.core.signature import describe_handler  # noqa: E402
from webbind.models import (  # noqa: E402
    MultipartFiles,
    Part,
    RequestParam,
    RequestPart,
    UploadedFile,
    WebRequest,
)


def params(
    param1: Annotated[str, RequestParam("name", default="bar")],
    param2: Annotated[Tuple[str, ...], RequestParam("name")],
    param3: Annotated[Dict[str, Any], RequestParam("name")],
    param4: Annotated[UploadedFile, RequestParam("mfile")],
    param5: Annotated[List[UploadedFile], RequestParam("mfilelist")],
    param6: Annotated[Tuple[UploadedFile, ...], RequestParam("mfilearray")],
    param7: Annotated[Part, RequestParam("pfile")],
    param8: Annotated[List[Part], RequestParam("pfilelist")],
    param9: Annotated[Tuple[Part, ...], RequestParam("pfilearray")],
    param10: Annotated[Dict[str, Any], RequestParam()],
    string_not_annot: str,
    multipart_file_not_annot: UploadedFile,
    multipart_file_list: List[UploadedFile],
    part: Part,
    request_part_annot: Annotated[UploadedFile, RequestPart()],
    param_required: Annotated[str, RequestParam("name")],
    param_not_required: Annotated[str, RequestParam("name", required=False)],
    param_string_list: Annotated[List[str], RequestParam("name")],
):
    pass


@pytest.fixture
def descriptors():
    """Descriptors of `params`, keyed by parameter name."""
    return {d.parameter_name: d for d in describe_handler(params)}


@pytest.fixture
def request_model():
    return WebRequest()


@pytest.fixture
def multipart_request():
    return WebRequest(
        method="POST",
        content_type="multipart/form-data; boundary=test",
        multipart_files=MultipartFiles(),
    )


@pytest.fixture
def part_request():
    """Multipart request whose uploads were not parsed into files."""
    return WebRequest(method="POST", content_type="multipart/form-data")
