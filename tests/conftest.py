"""Shared fixtures: a fake Apollo CLI installed into a temporary folder."""

import stat
from pathlib import Path

import pytest

FAKE_APOLLO_SCRIPT = """#!/bin/sh
cmd="$1"
shift
case "$cmd" in
  client:download-schema)
    endpoint=""
    out=""
    for arg in "$@"; do
      case "$arg" in
        --endpoint=*) endpoint="${arg#--endpoint=}" ;;
        --key=*|--header=*) ;;
        *) out="$arg" ;;
      esac
    done
    case "$endpoint" in
      *unreachable*)
        printf 'partial' > "$out"
        echo "Error: connect ECONNREFUSED" >&2
        exit 1
        ;;
      *slow*)
        sleep 10
        ;;
    esac
    case "$out" in
      *.json) printf '{"__schema": {"types": []}}' > "$out" ;;
      *)
        printf 'type Query {\\n  hero: String\\n}\\n' > "$out"
        cat "$out"
        ;;
    esac
    echo "Saving schema to $out"
    ;;
  codegen:generate)
    for arg in "$@"; do
      out="$arg"
    done
    printf '{"operations": [], "fragments": []}' > "$out"
    echo "Generating query files with 'json' target"
    ;;
  *)
    echo "Unknown command $cmd" >&2
    exit 2
    ;;
esac
"""


def install_fake_cli(cli_folder: Path) -> Path:
    """Write the fake CLI to `cli_folder/apollo/bin/run` and return its path."""
    binary = cli_folder / "apollo" / "bin" / "run"
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_text(FAKE_APOLLO_SCRIPT)
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return binary


@pytest.fixture
def cli_folder(tmp_path):
    """A CLI folder with the fake Apollo CLI installed."""
    folder = tmp_path / "ApolloCLI"
    install_fake_cli(folder)
    return folder


@pytest.fixture
def output_folder(tmp_path):
    folder = tmp_path / "output"
    folder.mkdir()
    return folder


class RecordingRunner:
    """CommandRunner that records commands instead of running them."""

    def __init__(self, output: str = ""):
        self.output = output
        self.calls = []

    def run(self, command, working_directory, timeout=None):
        self.calls.append((command, working_directory, timeout))
        return self.output


@pytest.fixture
def recording_runner():
    return RecordingRunner(output="ok")
