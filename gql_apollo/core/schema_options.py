"""Options for downloading a GraphQL schema with the Apollo CLI.

Example:
    options = SchemaOptions(
        endpoint_url="http://localhost:8080/graphql",
        output_folder=Path("./Sources"),
    )
    options.output_path  # Sources/schema.json
    options.arguments    # ["client:download-schema", "--endpoint=...", "'.../schema.json'"]
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .constants import DEFAULT_SCHEMA_FILE_NAME


class SchemaFileType(Enum):
    """Format the downloaded schema is written in."""

    JSON = "json"
    SCHEMA_DEFINITION_LANGUAGE = "graphql"

    @property
    def file_extension(self) -> str:
        return self.value


@dataclass(frozen=True)
class SchemaOptions:
    """Everything the `client:download-schema` command needs."""

    endpoint_url: str
    output_folder: Path
    schema_file_name: str = DEFAULT_SCHEMA_FILE_NAME
    schema_file_type: SchemaFileType = SchemaFileType.JSON
    api_key: str | None = None
    # Verbatim "Name: Value" strings, validated by the CLI itself
    headers: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.endpoint_url:
            raise ValueError("endpoint_url is required")
        if self.output_folder is None or str(self.output_folder) == "":
            raise ValueError("output_folder is required")
        object.__setattr__(self, "output_folder", Path(self.output_folder))
        object.__setattr__(self, "headers", tuple(self.headers))
        if "'" in str(self.output_path):
            raise ValueError(f"output path {str(self.output_path)!r} contains a single quote")

    @property
    def output_path(self) -> Path:
        """Where the CLI writes the schema; the extension follows the file type."""
        file_name = f"{self.schema_file_name}.{self.schema_file_type.file_extension}"
        return self.output_folder / file_name

    @property
    def arguments(self) -> list[str]:
        arguments = [
            "client:download-schema",
            f"--endpoint={self.endpoint_url}",
        ]

        if self.api_key is not None:
            arguments.append(f"--key={self.api_key}")

        # Quoted so the path survives being spliced into a shell command
        arguments.append(f"'{self.output_path}'")

        for header in self.headers:
            arguments.append(f"--header='{header}'")

        return arguments

    @property
    def debug_description(self) -> str:
        return "\n".join(self.arguments)

    def __str__(self) -> str:
        return self.debug_description
