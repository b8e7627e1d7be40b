"""
Where: webbind/tests/test_param_resolver.py
What: Unit tests for RequestParamResolver support checks and resolution rules.
Why: Lock down defaults, required/empty handling and multipart binding.
"""

from typing import Annotated, List, Optional
from unittest.mock import Mock

import pytest

from webbind.core.binder import DataBinder, StringTrimmer, WebDataBinderFactory
from webbind.core.exceptions import (
    IllegalArgumentError,
    MissingRequestFileError,
    MissingRequestParameterError,
    MultipartError,
)
from webbind.core.signature import describe_handler
from webbind.models import MultipartFiles, Part, RequestParam, UploadedFile, WebRequest
from webbind.services.param_resolver import RequestParamResolver


@pytest.fixture
def resolver():
    return RequestParamResolver(use_default_resolution=True)


@pytest.fixture
def binder_factory():
    return WebDataBinderFactory()


def _trimming_binder_factory(object_name: str) -> Mock:
    binder = DataBinder(None, object_name)
    binder.register_custom_editor(str, StringTrimmer(empty_as_none=True))
    factory = Mock(spec=WebDataBinderFactory)
    factory.create_binder.return_value = binder
    return factory


# ===========================================
# supports()
# ===========================================


def test_supports_parameter(descriptors):
    resolver = RequestParamResolver(use_default_resolution=True)

    assert resolver.supports(descriptors["param1"]), "str parameter not supported"
    assert resolver.supports(descriptors["param2"]), "str array parameter not supported"
    assert resolver.supports(descriptors["param3"]), "named dict parameter not supported"
    assert resolver.supports(descriptors["param4"]), "UploadedFile parameter not supported"
    assert resolver.supports(descriptors["param5"]), "List[UploadedFile] not supported"
    assert resolver.supports(descriptors["param6"]), "Tuple[UploadedFile, ...] not supported"
    assert resolver.supports(descriptors["param7"]), "Part parameter not supported"
    assert resolver.supports(descriptors["param8"]), "List[Part] parameter not supported"
    assert resolver.supports(descriptors["param9"]), "Tuple[Part, ...] not supported"
    assert not resolver.supports(descriptors["param10"]), "unnamed dict supported"
    assert resolver.supports(descriptors["string_not_annot"]), "simple type w/o marker"
    assert resolver.supports(descriptors["multipart_file_not_annot"])
    assert resolver.supports(descriptors["multipart_file_list"])
    assert resolver.supports(descriptors["part"])
    assert resolver.supports(descriptors["param_string_list"]), "List[str] not supported"

    resolver = RequestParamResolver(use_default_resolution=False)
    assert not resolver.supports(descriptors["string_not_annot"])
    assert not resolver.supports(descriptors["request_part_annot"])


def test_supports_request_part_marker_never(descriptors):
    resolver = RequestParamResolver(use_default_resolution=True)

    assert not resolver.supports(descriptors["request_part_annot"])


def test_supports_annotated_parameters_without_default_resolution(descriptors):
    resolver = RequestParamResolver(use_default_resolution=False)

    assert resolver.supports(descriptors["param1"])
    assert resolver.supports(descriptors["param4"])
    assert resolver.supports(descriptors["param8"])
    assert not resolver.supports(descriptors["multipart_file_not_annot"])
    assert not resolver.supports(descriptors["part"])


# ===========================================
# Scalars and sequences of scalars
# ===========================================


def test_resolve_string(resolver, descriptors, request_model):
    request_model.add_parameter("name", "foo")

    result = resolver.resolve(descriptors["param1"], request_model)

    assert isinstance(result, str)
    assert result == "foo"


def test_resolve_string_array(resolver, descriptors, request_model):
    request_model.add_parameter("name", "foo", "bar")

    result = resolver.resolve(descriptors["param2"], request_model)

    assert isinstance(result, tuple)
    assert result == ("foo", "bar")


def test_resolve_default_value(resolver, descriptors, request_model):
    result = resolver.resolve(descriptors["param1"], request_model)

    assert result == "bar"


def test_missing_request_param(resolver, descriptors, request_model):
    with pytest.raises(MissingRequestParameterError) as exc_info:
        resolver.resolve(descriptors["param2"], request_model)

    assert exc_info.value.parameter_name == "name"
    assert "'name' is not present" in str(exc_info.value)


def test_missing_request_param_empty_value_converted_to_none(
    resolver, descriptors, request_model
):
    factory = _trimming_binder_factory("string_not_annot")
    request_model.add_parameter("string_not_annot", "")

    result = resolver.resolve(descriptors["string_not_annot"], request_model, factory)

    assert result is None
    factory.create_binder.assert_called_once_with(request_model, None, "string_not_annot")


def test_missing_request_param_empty_value_not_required(resolver, descriptors, request_model):
    factory = _trimming_binder_factory("name")
    request_model.add_parameter("name", "")

    result = resolver.resolve(descriptors["param_not_required"], request_model, factory)

    assert result is None
    factory.create_binder.assert_called_once_with(request_model, None, "name")


def test_resolve_simple_type_param(resolver, descriptors, request_model):
    request_model.set_parameter("string_not_annot", "plainValue")

    result = resolver.resolve(descriptors["string_not_annot"], request_model)

    assert isinstance(result, str)
    assert result == "plainValue"


def test_resolve_simple_type_param_to_none(resolver, descriptors, request_model):
    result = resolver.resolve(descriptors["string_not_annot"], request_model)

    assert result is None


def test_resolve_empty_value_to_default(resolver, descriptors, request_model):
    request_model.add_parameter("name", "")

    result = resolver.resolve(descriptors["param1"], request_model)

    assert result == "bar"


def test_resolve_empty_value_without_default(resolver, descriptors, request_model):
    request_model.add_parameter("string_not_annot", "")

    result = resolver.resolve(descriptors["string_not_annot"], request_model)

    assert result == ""


def test_resolve_empty_value_required_without_default(resolver, descriptors, request_model):
    request_model.add_parameter("name", "")

    result = resolver.resolve(descriptors["param_required"], request_model)

    assert result == ""


def test_resolve_missing_required_without_default_raises(resolver, descriptors, request_model):
    with pytest.raises(MissingRequestParameterError):
        resolver.resolve(descriptors["param_required"], request_model)


def test_resolve_missing_not_required_returns_none(resolver, descriptors, request_model):
    assert resolver.resolve(descriptors["param_not_required"], request_model) is None


def test_resolve_scalar_takes_first_of_several_values(resolver, descriptors, request_model):
    request_model.add_parameter("name", "foo", "bar")

    assert resolver.resolve(descriptors["param_required"], request_model) == "foo"


@pytest.mark.parametrize(
    "submitted",
    [
        ["foo", "bar"],
        [""],
        ["", ""],
    ],
    ids=["two-values", "one-empty", "two-empty"],
)
def test_resolve_string_list(resolver, descriptors, request_model, binder_factory, submitted):
    request_model.add_parameter("name", *submitted)

    result = resolver.resolve(descriptors["param_string_list"], request_model, binder_factory)

    assert isinstance(result, list)
    assert len(result) == len(submitted)
    assert result == submitted


def test_resolve_string_array_with_binder_keeps_tuple(
    resolver, descriptors, request_model, binder_factory
):
    request_model.add_parameter("name", "foo", "", "foo")

    result = resolver.resolve(descriptors["param2"], request_model, binder_factory)

    assert result == ("foo", "", "foo")


def test_resolve_default_goes_through_binder(resolver, descriptors, request_model):
    factory = Mock(spec=WebDataBinderFactory)
    factory.create_binder.return_value = DataBinder(None, "name")

    result = resolver.resolve(descriptors["param1"], request_model, factory)

    assert result == "bar"
    factory.create_binder.assert_called_once_with(request_model, None, "name")


# ===========================================
# Mappings
# ===========================================


def test_resolve_named_map_returns_all_parameters(resolver, descriptors, request_model):
    request_model.add_parameter("name", "foo", "bar")
    request_model.add_parameter("other", "baz")

    result = resolver.resolve(descriptors["param3"], request_model)

    assert result == {"name": "foo", "other": "baz"}


# ===========================================
# Uploaded files
# ===========================================


def test_resolve_multipart_file(resolver, descriptors, multipart_request):
    expected = UploadedFile("mfile", b"Hello World")
    multipart_request.multipart_files.add(expected)

    result = resolver.resolve(descriptors["param4"], multipart_request)

    assert isinstance(result, UploadedFile)
    assert result is expected


def test_resolve_multipart_file_list(resolver, descriptors, multipart_request):
    expected1 = UploadedFile("mfilelist", b"Hello World 1")
    expected2 = UploadedFile("mfilelist", b"Hello World 2")
    multipart_request.multipart_files.add(expected1)
    multipart_request.multipart_files.add(expected2)

    result = resolver.resolve(descriptors["param5"], multipart_request)

    assert isinstance(result, list)
    assert result == [expected1, expected2]


def test_resolve_multipart_file_array(resolver, descriptors, multipart_request):
    expected1 = UploadedFile("mfilearray", b"Hello World 1")
    expected2 = UploadedFile("mfilearray", b"Hello World 2")
    multipart_request.multipart_files.add(expected1)
    multipart_request.multipart_files.add(expected2)

    result = resolver.resolve(descriptors["param6"], multipart_request)

    assert isinstance(result, tuple)
    assert result[0] is expected1
    assert result[1] is expected2


def test_resolve_multipart_file_not_annotated(resolver, descriptors, multipart_request):
    expected = UploadedFile("multipart_file_not_annot", b"Hello World")
    multipart_request.multipart_files.add(expected)

    result = resolver.resolve(descriptors["multipart_file_not_annot"], multipart_request)

    assert result is expected


def test_resolve_multipart_file_list_not_annotated(resolver, descriptors, multipart_request):
    expected1 = UploadedFile("multipart_file_list", b"Hello World 1")
    expected2 = UploadedFile("multipart_file_list", b"Hello World 2")
    multipart_request.multipart_files.add(expected1)
    multipart_request.multipart_files.add(expected2)

    result = resolver.resolve(descriptors["multipart_file_list"], multipart_request)

    assert result == [expected1, expected2]


def test_resolve_multipart_file_list_ignores_other_names(
    resolver, descriptors, multipart_request
):
    wanted = UploadedFile("mfilelist", b"1")
    multipart_request.multipart_files.add(UploadedFile("other", b"x"))
    multipart_request.multipart_files.add(wanted)

    assert resolver.resolve(descriptors["param5"], multipart_request) == [wanted]


def test_resolve_multipart_file_list_empty(resolver, descriptors, multipart_request):
    assert resolver.resolve(descriptors["param5"], multipart_request) == []


def test_is_multipart_request(resolver, descriptors, request_model):
    with pytest.raises(MultipartError):
        resolver.resolve(descriptors["param4"], request_model)


def test_is_multipart_request_http_put(resolver, descriptors):
    request = WebRequest(
        method="PUT", content_type="multipart/form-data", multipart_files=MultipartFiles()
    )
    expected = UploadedFile("multipart_file_list", b"Hello World")
    request.multipart_files.add(expected)

    actual = resolver.resolve(descriptors["multipart_file_list"], request)

    assert isinstance(actual, list)
    assert actual[0] is expected


def test_missing_multipart_file(resolver, descriptors, part_request):
    with pytest.raises(IllegalArgumentError):
        resolver.resolve(descriptors["param4"], part_request)


def test_missing_required_multipart_file(resolver, descriptors, multipart_request):
    with pytest.raises(MissingRequestFileError) as exc_info:
        resolver.resolve(descriptors["param4"], multipart_request)

    assert isinstance(exc_info.value, IllegalArgumentError)
    assert isinstance(exc_info.value, MissingRequestParameterError)
    assert exc_info.value.parameter_name == "mfile"


def test_missing_not_annotated_file_returns_none(resolver, descriptors, multipart_request):
    assert resolver.resolve(descriptors["multipart_file_not_annot"], multipart_request) is None


# ===========================================
# Parts
# ===========================================


def test_resolve_part(resolver, descriptors, part_request):
    expected = Part("pfile", b"Hello World")
    part_request.add_part(expected)

    result = resolver.resolve(descriptors["param7"], part_request)

    assert isinstance(result, Part)
    assert result is expected


def test_resolve_part_list(resolver, descriptors, part_request):
    expected1 = Part("pfilelist", b"Hello World 1")
    expected2 = Part("pfilelist", b"Hello World 2")
    part_request.add_part(expected1)
    part_request.add_part(expected2)

    result = resolver.resolve(descriptors["param8"], part_request)

    assert isinstance(result, list)
    assert result == [expected1, expected2]


def test_resolve_part_array(resolver, descriptors, part_request):
    expected1 = Part("pfilearray", b"Hello World 1")
    expected2 = Part("pfilearray", b"Hello World 2")
    part_request.add_part(expected1)
    part_request.add_part(expected2)

    result = resolver.resolve(descriptors["param9"], part_request)

    assert isinstance(result, tuple)
    assert result[0] is expected1
    assert result[1] is expected2


def test_resolve_part_not_annotated(resolver, descriptors, part_request):
    expected = Part("part", b"Hello World")
    part_request.add_part(expected)

    result = resolver.resolve(descriptors["part"], part_request)

    assert result is expected


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_resolve_part_any_http_method(resolver, descriptors, method):
    request = WebRequest(method=method, content_type="multipart/form-data")
    expected = Part("pfile", b"Hello World")
    request.add_part(expected)

    assert resolver.resolve(descriptors["param7"], request) is expected


def test_resolve_part_on_plain_request_raises(resolver, descriptors, request_model):
    with pytest.raises(MultipartError):
        resolver.resolve(descriptors["param7"], request_model)


def test_missing_required_part_raises(resolver, descriptors, part_request):
    with pytest.raises(MissingRequestParameterError) as exc_info:
        resolver.resolve(descriptors["param7"], part_request)

    assert not isinstance(exc_info.value, MissingRequestFileError)


def test_resolve_absent_param_with_none_python_default(resolver, request_model):
    def handler(q: Annotated[Optional[str], RequestParam("q")] = None):
        pass

    (descriptor,) = describe_handler(handler)

    assert resolver.resolve(descriptor, request_model) is None


def test_resolve_empty_values_for_numeric_targets(resolver, request_model, binder_factory):
    def handler(
        count: Annotated[int, RequestParam("count")],
        maybe: Annotated[Optional[int], RequestParam("maybe", required=False)],
        ids: Annotated[List[int], RequestParam("ids")],
    ):
        pass

    count, maybe, ids = describe_handler(handler)
    request_model.add_parameter("count", "")
    request_model.add_parameter("maybe", "")
    request_model.add_parameter("ids", "1", "")

    assert resolver.resolve(count, request_model, binder_factory) is None
    assert resolver.resolve(maybe, request_model, binder_factory) is None
    assert resolver.resolve(ids, request_model, binder_factory) == [1, None]
