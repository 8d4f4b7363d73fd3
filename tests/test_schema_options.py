"""Tests for schema download options."""

import shlex
from dataclasses import FrozenInstanceError

import pytest

from gql_apollo.core.schema_options import SchemaFileType, SchemaOptions

ENDPOINT = "http://localhost:8080/graphql"


class TestDefaults:
    """Tests for options built with only the required parameters."""

    def test_output_path(self, tmp_path):
        options = SchemaOptions(endpoint_url=ENDPOINT, output_folder=tmp_path)
        assert options.output_path == tmp_path / "schema.json"

    def test_default_values(self, tmp_path):
        options = SchemaOptions(endpoint_url=ENDPOINT, output_folder=tmp_path)
        assert options.endpoint_url == ENDPOINT
        assert options.api_key is None
        assert options.headers == ()
        assert options.schema_file_type is SchemaFileType.JSON

    def test_arguments(self, tmp_path):
        options = SchemaOptions(endpoint_url=ENDPOINT, output_folder=tmp_path)
        assert options.arguments == [
            "client:download-schema",
            "--endpoint=http://localhost:8080/graphql",
            f"'{tmp_path / 'schema.json'}'",
        ]


class TestAllParameters:
    """Tests for options with every parameter set."""

    @pytest.fixture
    def options(self, tmp_path):
        return SchemaOptions(
            schema_file_name="different_name",
            schema_file_type=SchemaFileType.SCHEMA_DEFINITION_LANGUAGE,
            api_key="Fake_API_Key",
            endpoint_url=ENDPOINT,
            headers=[
                "Authorization: Bearer tokenGoesHere",
                "Custom-Header: Custom_Customer",
            ],
            output_folder=tmp_path,
        )

    def test_output_path_uses_sdl_extension(self, options, tmp_path):
        assert options.output_path == tmp_path / "different_name.graphql"
        assert options.output_path.suffix == ".graphql"

    def test_headers_are_kept_in_order(self, options):
        assert options.headers == (
            "Authorization: Bearer tokenGoesHere",
            "Custom-Header: Custom_Customer",
        )

    def test_arguments(self, options, tmp_path):
        assert options.arguments == [
            "client:download-schema",
            "--endpoint=http://localhost:8080/graphql",
            "--key=Fake_API_Key",
            f"'{tmp_path / 'different_name.graphql'}'",
            "--header='Authorization: Bearer tokenGoesHere'",
            "--header='Custom-Header: Custom_Customer'",
        ]

    def test_key_before_path_and_headers_after(self, options):
        arguments = options.arguments
        path_index = next(i for i, a in enumerate(arguments) if a.startswith("'"))
        assert arguments.index("--key=Fake_API_Key") < path_index
        header_indexes = [i for i, a in enumerate(arguments) if a.startswith("--header=")]
        assert all(i > path_index for i in header_indexes)

    def test_debug_description(self, options):
        assert str(options) == "\n".join(options.arguments)


class TestValidation:
    """Tests for construction checks and immutability."""

    def test_endpoint_required(self, tmp_path):
        with pytest.raises(ValueError, match="endpoint_url"):
            SchemaOptions(endpoint_url="", output_folder=tmp_path)

    def test_output_folder_required(self):
        with pytest.raises(ValueError, match="output_folder"):
            SchemaOptions(endpoint_url=ENDPOINT, output_folder=None)

    def test_string_folder_is_converted(self, tmp_path):
        options = SchemaOptions(endpoint_url=ENDPOINT, output_folder=str(tmp_path))
        assert options.output_path == tmp_path / "schema.json"

    def test_malformed_header_passed_through(self, tmp_path):
        options = SchemaOptions(
            endpoint_url=ENDPOINT, output_folder=tmp_path, headers=["not a header"]
        )
        assert options.arguments[-1] == "--header='not a header'"

    def test_frozen(self, tmp_path):
        options = SchemaOptions(endpoint_url=ENDPOINT, output_folder=tmp_path)
        with pytest.raises(FrozenInstanceError):
            options.schema_file_name = "other"

    def test_quote_in_output_path_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="single quote"):
            SchemaOptions(endpoint_url=ENDPOINT, output_folder=tmp_path / "it's here")

    def test_output_path_with_space_is_one_shell_word(self, tmp_path):
        options = SchemaOptions(endpoint_url=ENDPOINT, output_folder=tmp_path / "My Schemas")
        assert shlex.split(options.arguments[-1]) == [str(options.output_path)]
