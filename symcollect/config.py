#!/usr/bin/env python3

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from symcollect.arena import capacity_for
from symcollect.errors import ConfigError
from symcollect.output import OutputMode
from symcollect.stream import READBUF_SIZE
from symcollect.tokenizer import MAX_IDENTIFIER, MAX_TOKENS

CONFIG_FILE_NAME = "symcollect.json"


class CollectorConfig(BaseModel):
    """Settings for a symbol collection run."""

    # Inputs
    files: list[Path] = Field(default_factory=list)

    # Preprocessing
    compiler: str = "gcc"
    compiler_flags: str | None = None
    preprocess: bool = True  # False scans files that are already macro expanded
    preprocess_timeout: float | None = None  # seconds

    # Filtering and output
    pattern: str | None = None
    output: Path | None = None  # stdout when unset
    output_mode: OutputMode = OutputMode.PLAIN
    verbose: int = 0

    # Tokenizer limits
    max_tokens: int = Field(default=MAX_TOKENS, gt=0)
    max_identifier: int = Field(default=MAX_IDENTIFIER, gt=0)
    arena_size: int | None = None  # derived from the two limits above when unset
    read_buffer_size: int = Field(default=READBUF_SIZE, gt=0)

    @model_validator(mode="after")
    def _check_arena_size(self) -> "CollectorConfig":
        needed = capacity_for(self.max_tokens, self.max_identifier)
        if self.arena_size is not None and self.arena_size < needed:
            raise ValueError(
                f"arena_size {self.arena_size} is too small for {self.max_tokens} tokens "
                f"of up to {self.max_identifier} characters (needs {needed})"
            )
        return self

    def arena_capacity(self) -> int:
        if self.arena_size is not None:
            return self.arena_size
        return capacity_for(self.max_tokens, self.max_identifier)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "CollectorConfig":
        """Load configuration from a JSON file.

        Relative paths in ``files`` and ``output`` are taken relative to the
        directory holding the config file.
        """
        try:
            args = json.loads(config_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"failed to read config '{config_path}': {e}") from e

        if not isinstance(args, dict):
            raise ConfigError(f"invalid config '{config_path}': expected a JSON object")

        base = config_path.parent
        if isinstance(args.get("files"), list):
            args["files"] = [str(base / f) if isinstance(f, str) else f for f in args["files"]]
        if isinstance(args.get("output"), str):
            args["output"] = str(base / args["output"])

        try:
            return cls.model_validate(args)
        except ValidationError as e:
            raise ConfigError(f"invalid config '{config_path}': {e}") from e

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file."""
        config_path.write_text(self.model_dump_json(indent=2, exclude_defaults=True))

    @classmethod
    def find_config(cls, start_path: Path) -> Optional["CollectorConfig"]:
        """Find configuration by searching up the directory tree."""
        current = start_path.resolve()
        while True:
            config_file = current / CONFIG_FILE_NAME
            if config_file.exists():
                return cls.load_from_file(config_file)
            if current == current.parent:
                return None
            current = current.parent
