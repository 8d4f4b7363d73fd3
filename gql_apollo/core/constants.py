"""Default values shared by the option records and the CLI installer."""

from pathlib import Path

DEFAULT_SCHEMA_FILE_NAME = "schema"
DEFAULT_INCLUDES = "./**/*.graphql"
DEFAULT_DOWNLOAD_TIMEOUT = 30.0

# Bundled Apollo CLI release unpacked into the CLI folder
DEFAULT_CLI_URL = "https://install.apollographql.com/legacy-cli/linux/2.30.1"
CLI_TARBALL_NAME = "apollo.tar.gz"
CLI_BINARY_FOLDER_NAME = "apollo"
CLI_BINARY_RELATIVE_PATH = Path(CLI_BINARY_FOLDER_NAME) / "bin" / "run"
