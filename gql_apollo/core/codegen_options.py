"""Options for running `codegen:generate` with the Apollo CLI."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .constants import DEFAULT_DOWNLOAD_TIMEOUT, DEFAULT_INCLUDES

# Codegen tokens reach the shell unquoted, so values are limited to these
_SHELL_SAFE = re.compile(r"[\w@%+=:,./-]+")


def _check_shell_safe(name: str, value) -> None:
    if value is not None and not _SHELL_SAFE.fullmatch(str(value)):
        raise ValueError(
            f"{name} {str(value)!r} contains whitespace or shell metacharacters"
        )


class CodegenEngine(Enum):
    """Which code generation engine the CLI should run."""

    # The default, tried and true engine
    TYPESCRIPT = "typescript"
    # Work in progress engine which only emits the parsed operations as JSON
    SWIFT_EXPERIMENTAL = "swift-experimental"

    @classmethod
    def default(cls) -> "CodegenEngine":
        return cls.TYPESCRIPT

    @property
    def target(self) -> str:
        """Value of the CLI's `--target` flag for this engine."""
        if self is CodegenEngine.SWIFT_EXPERIMENTAL:
            return "json"
        return "swift"


@dataclass(frozen=True)
class SingleFile:
    """Output everything into one file at `path`."""

    path: Path

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True)
class MultipleFiles:
    """Output one file per operation inside `folder`."""

    folder: Path

    def __post_init__(self):
        object.__setattr__(self, "folder", Path(self.folder))


OutputFormat = SingleFile | MultipleFiles


@dataclass(frozen=True)
class CodegenOptions:
    """Everything the `codegen:generate` command needs.

    Attributes:
        output_format: Where generated code goes, a SingleFile or MultipleFiles.
        url_to_schema_file: The downloaded schema to generate against.
        codegen_engine: Engine to run, defaults to CodegenEngine.TYPESCRIPT.
        includes: Glob of files to search for operations and client schema
            extensions.
        merge_in_fields_from_fragment_spreads: Merge fragment fields onto the
            enclosing type.
        namespace: Namespace to emit generated code into.
        only: Parse all input files but only output code for this one.
        operation_ids_path: Path to an operation id JSON map file.
        omit_deprecated_enum_cases: Leave deprecated enum cases out.
        passthrough_custom_scalars: Use your own types for custom scalars.
        suppress_swift_multiline_string_literals: Avoid multi-line literals.
        download_timeout: Seconds to wait when downloading the CLI bundle.
    """

    output_format: OutputFormat
    url_to_schema_file: Path
    codegen_engine: CodegenEngine = CodegenEngine.TYPESCRIPT
    includes: str = DEFAULT_INCLUDES
    merge_in_fields_from_fragment_spreads: bool = True
    namespace: str | None = None
    only: Path | None = None
    operation_ids_path: Path | None = None
    omit_deprecated_enum_cases: bool = False
    passthrough_custom_scalars: bool = False
    suppress_swift_multiline_string_literals: bool = False
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT

    def __post_init__(self):
        if not isinstance(self.output_format, (SingleFile, MultipleFiles)):
            raise TypeError("output_format must be SingleFile or MultipleFiles")
        if self.url_to_schema_file is None:
            raise ValueError("url_to_schema_file is required")
        object.__setattr__(self, "url_to_schema_file", Path(self.url_to_schema_file))

        if isinstance(self.output_format, SingleFile):
            output = self.output_format.path
        else:
            output = self.output_format.folder
        _check_shell_safe("output", output)
        _check_shell_safe("url_to_schema_file", self.url_to_schema_file)
        _check_shell_safe("namespace", self.namespace)
        _check_shell_safe("only", self.only)
        _check_shell_safe("operation_ids_path", self.operation_ids_path)

    @classmethod
    def for_target_root(
        cls,
        folder: Path,
        codegen_engine: CodegenEngine = CodegenEngine.TYPESCRIPT,
        download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
    ) -> "CodegenOptions":
        """Build options with the conventional layout of a target folder.

        Assumes the schema is at [folder]/schema.json, output is a single
        file [folder]/API.swift ([folder]/API.json for the experimental
        engine) and operation ids go to [folder]/operationIDs.json.
        """
        folder = Path(folder)
        if codegen_engine is CodegenEngine.SWIFT_EXPERIMENTAL:
            output_file = folder / "API.json"
        else:
            output_file = folder / "API.swift"

        return cls(
            codegen_engine=codegen_engine,
            operation_ids_path=folder / "operationIDs.json",
            output_format=SingleFile(output_file),
            url_to_schema_file=folder / "schema.json",
            download_timeout=download_timeout,
        )

    @property
    def arguments(self) -> list[str]:
        # Order matches what the CLI's argument parser expects
        arguments = [
            "codegen:generate",
            f"--target={self.codegen_engine.target}",
            "--addTypename",
            f"--includes={self.includes}",
            f"--localSchemaFile={self.url_to_schema_file}",
        ]

        if self.namespace is not None:
            arguments.append(f"--namespace={self.namespace}")

        if self.only is not None:
            arguments.append(f"--only={self.only}")

        if self.operation_ids_path is not None:
            arguments.append(f"--operationIdsPath={self.operation_ids_path}")

        if self.omit_deprecated_enum_cases:
            arguments.append("--omitDeprecatedEnumCases")

        if self.passthrough_custom_scalars:
            arguments.append("--passthroughCustomScalars")

        if self.merge_in_fields_from_fragment_spreads:
            arguments.append("--mergeInFieldsFromFragmentSpreads")

        if self.suppress_swift_multiline_string_literals:
            arguments.append("--suppressSwiftMultilineStringLiterals")

        if isinstance(self.output_format, SingleFile):
            arguments.append(str(self.output_format.path))
        else:
            arguments.append(str(self.output_format.folder))

        return arguments

    @property
    def debug_description(self) -> str:
        return "\n".join(self.arguments)

    def __str__(self) -> str:
        return self.debug_description
