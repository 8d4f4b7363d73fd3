"""Download and unpack the Apollo CLI bundle into a CLI folder.

The bundle is a gzipped tarball containing an `apollo/` folder whose
`bin/run` script is the CLI entry point.

Example:
    binary_folder = ensure_cli(Path("./ApolloCLI"), timeout=30.0)
"""

import hashlib
import logging
import shutil
import tarfile
from pathlib import Path

import httpx

from .constants import (
    CLI_BINARY_FOLDER_NAME,
    CLI_BINARY_RELATIVE_PATH,
    CLI_TARBALL_NAME,
    DEFAULT_CLI_URL,
    DEFAULT_DOWNLOAD_TIMEOUT,
)
from .errors import ChecksumMismatch, CLIDownloadFailed, CLIExtractionFailed

logger = logging.getLogger(__name__)


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


class CLIDownloader:
    """Fetches the Apollo CLI tarball if it is not already in `cli_folder`."""

    def __init__(
        self,
        cli_folder: Path,
        url: str = DEFAULT_CLI_URL,
        timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        self.cli_folder = Path(cli_folder)
        self.url = url
        self.timeout = timeout
        self._client = client

    @property
    def tarball_path(self) -> Path:
        return self.cli_folder / CLI_TARBALL_NAME

    def download_if_needed(self) -> Path:
        """Download the tarball unless it already exists. Returns its path."""
        if self.tarball_path.is_file():
            logger.debug("Apollo CLI tarball already present at %s", self.tarball_path)
            return self.tarball_path

        self.cli_folder.mkdir(parents=True, exist_ok=True)
        partial_path = self.tarball_path.with_name(self.tarball_path.name + ".part")
        logger.info("Downloading Apollo CLI from %s", self.url)

        client = self._client or httpx.Client(timeout=self.timeout, follow_redirects=True)
        try:
            with client.stream("GET", self.url, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(partial_path, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
        except httpx.TimeoutException as e:
            partial_path.unlink(missing_ok=True)
            raise CLIDownloadFailed(self.url, f"timed out after {self.timeout} seconds") from e
        except httpx.HTTPError as e:
            partial_path.unlink(missing_ok=True)
            raise CLIDownloadFailed(self.url, str(e)) from e
        finally:
            if self._client is None:
                client.close()

        partial_path.replace(self.tarball_path)
        return self.tarball_path


class CLIExtractor:
    """Unpacks the downloaded tarball so `apollo/bin/run` is available."""

    def __init__(self, cli_folder: Path, expected_sha256: str | None = None):
        self.cli_folder = Path(cli_folder)
        self.expected_sha256 = expected_sha256

    @property
    def tarball_path(self) -> Path:
        return self.cli_folder / CLI_TARBALL_NAME

    @property
    def binary_folder(self) -> Path:
        return self.cli_folder / CLI_BINARY_FOLDER_NAME

    def validate_checksum(self):
        if self.expected_sha256 is None:
            return
        actual = sha256_file(self.tarball_path)
        if actual != self.expected_sha256.lower():
            self.discard_tarball()
            raise ChecksumMismatch(self.expected_sha256, actual)

    def discard_tarball(self):
        """Remove a bad tarball so the next install downloads it again."""
        logger.warning("Removing unusable Apollo CLI tarball %s", self.tarball_path)
        self.tarball_path.unlink(missing_ok=True)

    def extract_if_needed(self) -> Path:
        """Extract the tarball unless the binary is already there.

        Returns:
            The `apollo` folder inside the CLI folder

        Raises:
            ChecksumMismatch: If the tarball does not match `expected_sha256`
            CLIExtractionFailed: If the tarball is corrupt or cannot be unpacked
        """
        if (self.cli_folder / CLI_BINARY_RELATIVE_PATH).is_file():
            return self.binary_folder

        self.validate_checksum()
        logger.info("Extracting %s", self.tarball_path)
        try:
            with tarfile.open(self.tarball_path, "r:gz") as tar_ref:
                tar_ref.extractall(self.cli_folder)
        except (tarfile.TarError, OSError, EOFError) as e:
            self.discard_tarball()
            shutil.rmtree(self.binary_folder, ignore_errors=True)
            raise CLIExtractionFailed(self.tarball_path, str(e)) from e

        if not (self.cli_folder / CLI_BINARY_RELATIVE_PATH).is_file():
            self.discard_tarball()
            raise CLIExtractionFailed(self.tarball_path, f"no {CLI_BINARY_RELATIVE_PATH} in bundle")
        return self.binary_folder


def ensure_cli(
    cli_folder: Path,
    timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
    url: str = DEFAULT_CLI_URL,
    expected_sha256: str | None = None,
    client: httpx.Client | None = None,
) -> Path:
    """Make sure the Apollo CLI is installed in `cli_folder`."""
    cli_folder = Path(cli_folder)
    if (cli_folder / CLI_BINARY_RELATIVE_PATH).is_file():
        return cli_folder / CLI_BINARY_FOLDER_NAME

    CLIDownloader(cli_folder, url=url, timeout=timeout, client=client).download_if_needed()
    return CLIExtractor(cli_folder, expected_sha256=expected_sha256).extract_if_needed()
