#!/usr/bin/env python3
"""
Collection of externally linked C symbols.

Each input file is preprocessed and scanned on its own, strictly one after the
other, and every symbol found is added to one shared table. The table can then
be rendered as a plain list or as a linker version script.
"""

import io
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from pydantic import BaseModel, Field

from symcollect.arena import TokenArena
from symcollect.config import CollectorConfig
from symcollect.errors import InputError, OutputError, TokenizerError
from symcollect.output import OutputMode, render, write as write_symbols
from symcollect.preprocess import Preprocessor
from symcollect.recognizer import match_unit
from symcollect.stream import CharStream
from symcollect.symfilter import SymbolFilter
from symcollect.symtab import SymbolTable
from symcollect.tokenizer import Tokenizer


class FileScanResult(BaseModel):
    """Outcome of scanning one input."""

    source: str
    units: int = 0  # logical units examined
    symbols: list[str] = Field(default_factory=list)  # accepted, in order of appearance
    filtered: list[str] = Field(default_factory=list)  # rejected by the filter
    truncated: bool = False
    error: str | None = None  # why scanning stopped early


class SymbolCollector:
    """Scans inputs and accumulates their symbols in one table."""

    def __init__(
        self,
        config: CollectorConfig | None = None,
        table: SymbolTable | None = None,
        symbol_filter: SymbolFilter | None = None,
        preprocessor: Preprocessor | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config or CollectorConfig()
        self.table = table if table is not None else SymbolTable()
        self.log = logger or logging.getLogger(__name__)
        if symbol_filter is None:
            symbol_filter = SymbolFilter.from_pattern(self.config.pattern)
        self.symbol_filter = symbol_filter
        self.preprocessor = preprocessor or Preprocessor(
            compiler=self.config.compiler,
            compiler_flags=self.config.compiler_flags,
            timeout=self.config.preprocess_timeout,
            logger=self.log,
        )

    def _tokenizer(self, stream: IO) -> Tokenizer:
        return Tokenizer(
            CharStream(stream, self.config.read_buffer_size),
            TokenArena(self.config.arena_capacity()),
            max_tokens=self.config.max_tokens,
            max_identifier=self.config.max_identifier,
            logger=self.log,
        )

    def scan_stream(self, stream: IO, source: str = "<stream>") -> FileScanResult:
        """Scan one stream of preprocessed source.

        Malformed input stops the scan where it was found. Symbols collected
        before that point are kept, and the failure is only recorded in the
        result and logged.
        """
        result = FileScanResult(source=source)
        tokenizer = self._tokenizer(stream)

        try:
            for unit in tokenizer.units():
                result.units += 1
                found = match_unit(unit.tokens, self.log)
                if found is None:
                    continue

                if self.symbol_filter is None or self.symbol_filter.matches(found.name):
                    self.log.debug(f"{source}: found '{found.name}' ({found.rule})")
                    result.symbols.append(found.name)
                    self.table.add(found.name)
                else:
                    self.log.info(f"filtered non-matching '{found.name}'...")
                    result.filtered.append(found.name)
        except TokenizerError as e:
            result.truncated = True
            result.error = str(e)
            self.log.info(f"{source}: scanning stopped after {result.units} units: {e}")

        return result

    def scan_text(self, text: str, source: str = "<text>") -> FileScanResult:
        """Scan preprocessed source held in memory."""
        return self.scan_stream(io.BytesIO(text.encode("latin-1", errors="replace")), source)

    def collect_file(self, path: Path | str) -> FileScanResult:
        """Preprocess (unless disabled) and scan a single file."""
        if self.config.preprocess:
            with self.preprocessor.open(path) as stream:
                return self.scan_stream(stream, str(path))

        try:
            stream = open(path, "rb")
        except OSError as e:
            raise InputError(f"failed to open '{path}': {e}") from e
        with stream:
            return self.scan_stream(stream, str(path))

    def collect(self, paths: Iterable[Path | str] | None = None) -> list[FileScanResult]:
        """Scan ``paths`` (the configured files by default) one after another."""
        if paths is None:
            paths = self.config.files
        results = []
        for path in paths:
            result = self.collect_file(path)
            self.log.info(f"{path}: {len(result.symbols)} symbols in {result.units} units")
            results.append(result)
        return results

    def render(self, mode: OutputMode | None = None) -> str:
        return render(self.table, mode or self.config.output_mode)

    def write(self, destination: Path | None = None, mode: OutputMode | None = None) -> None:
        """Write the rendered table to ``destination``, or stdout when None."""
        mode = mode or self.config.output_mode
        if destination is None:
            write_symbols(self.table, mode, sys.stdout)
            return
        try:
            with open(destination, "w") as f:
                write_symbols(self.table, mode, f)
        except OSError as e:
            raise OutputError(f"failed to open '{destination}' ({e})") from e
