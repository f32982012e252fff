#!/usr/bin/env python3
"""
Tests for running the preprocessor and scanning its output.
"""

import shutil
import stat

import pytest

from symcollect.collector import SymbolCollector
from symcollect.config import CollectorConfig
from symcollect.preprocess import Preprocessor


@pytest.fixture
def fake_cc(tmp_path):
    """A stand-in compiler that prints its input files, ignoring options."""
    script = tmp_path / "fake-cc"
    script.write_text(
        "#!/bin/sh\n"
        "for arg in \"$@\"; do\n"
        "  case \"$arg\" in\n"
        "    -*) ;;\n"
        "    *) cat \"$arg\" ;;\n"
        "  esac\n"
        "done\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


def test_command_shape():
    preprocessor = Preprocessor(compiler="gcc", compiler_flags="-I inc -DX=1")
    assert preprocessor.command("dir with space/a.c") == [
        "/bin/sh",
        "-c",
        "gcc -I inc -DX=1 -E 'dir with space/a.c'",
    ]


def test_command_without_flags():
    assert Preprocessor().command("a.c")[-1] == "gcc -E a.c"


def test_open_streams_output(tmp_path, fake_cc):
    source = tmp_path / "a.c"
    source.write_text("int x;\n")
    with Preprocessor(compiler=fake_cc).open(source) as stream:
        assert stream.read() == b"int x;\n"


def test_collect_through_preprocessor(tmp_path, fake_cc):
    source = tmp_path / "a.c"
    source.write_text("int x;\nstatic int y;\nvoid z(void);\n")
    collector = SymbolCollector(CollectorConfig(compiler=fake_cc, compiler_flags="-DUNUSED"))
    result = collector.collect_file(source)
    assert result.symbols == ["x", "z"]


def test_failing_preprocessor_yields_no_symbols(tmp_path):
    collector = SymbolCollector(CollectorConfig(compiler="false"))
    result = collector.collect_file(tmp_path / "missing.c")
    assert result.symbols == []
    assert len(collector.table) == 0


def test_timeout_kills_hung_preprocessor(tmp_path):
    collector = SymbolCollector(CollectorConfig(compiler="exec sleep 30;", preprocess_timeout=0.5))
    result = collector.collect_file(tmp_path / "a.c")
    assert result.symbols == []


@pytest.mark.skipif(shutil.which("gcc") is None, reason="gcc not available")
def test_real_preprocessor_expands_macros(tmp_path):
    header = tmp_path / "api.h"
    header.write_text(
        "#define EXPORT(name) name\n"
        "#define DECLARE(name) int EXPORT(name)(void)\n"
        "DECLARE(api_open);\n"
        "DECLARE(api_close);\n"
        "static int api_internal;\n"
    )
    source = tmp_path / "api.c"
    source.write_text('#include "api.h"\nint api_version = 2;\n')

    collector = SymbolCollector(CollectorConfig(compiler_flags=f"-I{tmp_path}"))
    collector.collect_file(source)

    assert collector.table.names == ["api_open", "api_close", "api_version"]
