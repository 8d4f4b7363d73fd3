"""Core modules for driving the Apollo CLI."""

from .apollo_cli import ApolloCLI, execute
from .ast_models import (
    Argument,
    CodegenOutput,
    Fragment,
    GraphQLTypeReference,
    InlineFragment,
    Operation,
    SelectionField,
    TypeKind,
    Variable,
    load_codegen_output,
    parse_codegen_output,
    parse_field,
)
from .codegen_options import (
    CodegenEngine,
    CodegenOptions,
    MultipleFiles,
    OutputFormat,
    SingleFile,
)
from .errors import (
    ApolloToolError,
    ChecksumMismatch,
    CLIDownloadFailed,
    CLIExtractionFailed,
    MalformedSchemaDocument,
    ToolExecutionFailed,
    ToolNotFound,
    ToolTimedOut,
)
from .installer import CLIDownloader, CLIExtractor, ensure_cli
from .runner import CommandRunner, ShellCommandRunner
from .schema_options import SchemaFileType, SchemaOptions
from .tasks import download_schema, run_codegen

__all__ = [
    # Options
    "SchemaFileType",
    "SchemaOptions",
    "CodegenEngine",
    "CodegenOptions",
    "MultipleFiles",
    "OutputFormat",
    "SingleFile",
    # Process invoker
    "ApolloCLI",
    "CommandRunner",
    "ShellCommandRunner",
    "execute",
    # Tasks
    "download_schema",
    "run_codegen",
    # Installer
    "CLIDownloader",
    "CLIExtractor",
    "ensure_cli",
    # AST
    "Argument",
    "CodegenOutput",
    "Fragment",
    "GraphQLTypeReference",
    "InlineFragment",
    "Operation",
    "SelectionField",
    "TypeKind",
    "Variable",
    "load_codegen_output",
    "parse_codegen_output",
    "parse_field",
    # Errors
    "ApolloToolError",
    "ChecksumMismatch",
    "CLIDownloadFailed",
    "CLIExtractionFailed",
    "MalformedSchemaDocument",
    "ToolExecutionFailed",
    "ToolNotFound",
    "ToolTimedOut",
]
