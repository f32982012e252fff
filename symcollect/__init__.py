"""Heuristic collection of exported symbols from preprocessed C sources."""

from symcollect.collector import FileScanResult, SymbolCollector
from symcollect.config import CollectorConfig
from symcollect.output import OutputMode, render
from symcollect.recognizer import recognize
from symcollect.symfilter import SymbolFilter
from symcollect.symtab import SymbolTable
from symcollect.tokenizer import Tokenizer

__all__ = [
    "CollectorConfig",
    "FileScanResult",
    "OutputMode",
    "SymbolCollector",
    "SymbolFilter",
    "SymbolTable",
    "Tokenizer",
    "recognize",
    "render",
]
