"""
Configuration file and run settings for catalog-cleaner.

Loads and validates the YAML configuration file (``.clean_files.yaml``)
consumed by the tidy operations, and defines the ``RunSettings`` value object
built once by the CLI and passed to every engine.
"""

import os
import stat
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from cleaner.config.exceptions import ConfigError

DEFAULT_CONFIG_FILENAME = ".clean_files.yaml"

_SYMBOLIC_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def parse_permissions(value: str) -> int:
    """
    Parse an octal ("644", "0o644") or symbolic ("rw-r--r--") permission string.

    Returns:
        Permission bits (0..0o777)

    Raises:
        ValueError: If the string is neither form
    """
    text = value.strip()

    if len(text) == 9 and all(c in "rwx-" for c in text):
        mode = 0
        for (bit, letter), char in zip(_SYMBOLIC_BITS, text):
            if char == letter:
                mode |= bit
            elif char != "-":
                raise ValueError(f"Invalid symbolic permissions: '{value}'")
        return mode

    digits = text[2:] if text.lower().startswith("0o") else text
    try:
        mode = int(digits, 8)
    except ValueError:
        raise ValueError(f"Invalid permissions: '{value}'") from None

    if not 0 <= mode <= 0o777:
        raise ValueError(f"Permissions out of range: '{value}'")
    return mode


def format_permissions(mode: int) -> str:
    """Render permission bits as ``rwxr-xr-x``."""
    return "".join(letter if mode & bit else "-" for bit, letter in _SYMBOLIC_BITS)


class CleanupConfig(BaseModel):
    """
    Values read from the configuration file.

    Attributes:
        permissions: Permission bits applied by the access operation
        tricky_characters: Characters replaced by the tricky operation
        tricky_substitute: Replacement character for tricky characters
        temporary_patterns: Basename globs identifying temporary files
        hash_chunk_size: Bytes read per step when hashing file content
    """

    permissions: str = Field(default="644", description="Octal or symbolic permissions")
    tricky_characters: str = Field(
        default=':";*?$#\'|\\',
        description="Characters to replace in filenames",
    )
    tricky_substitute: str = Field(default="_", description="Replacement character")
    temporary_patterns: list[str] = Field(
        default_factory=lambda: ["*~", "*.tmp", "*.temp", "*.swp", "#*#"],
        description="Shell-style patterns matched against basenames",
    )
    hash_chunk_size: int = Field(default=65536, gt=0, description="Hashing chunk size")

    @field_validator("permissions", mode="before")
    @classmethod
    def validate_permissions(cls, v: Any) -> str:
        """Accept ints (YAML ``644``) and check the value parses."""
        if isinstance(v, int):
            v = str(v)
        if not isinstance(v, str):
            raise ValueError("permissions must be a string")
        parse_permissions(v)
        return v

    @field_validator("tricky_substitute")
    @classmethod
    def validate_substitute(cls, v: str) -> str:
        """A substitute must be one character and not a path separator."""
        if len(v) != 1:
            raise ValueError("tricky_substitute must be exactly one character")
        if v in ("/", os.sep) or (os.altsep and v == os.altsep):
            raise ValueError("tricky_substitute cannot be a path separator")
        return v

    @field_validator("temporary_patterns")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Drop blank patterns, they would never match a real basename."""
        return [p for p in v if p.strip()]

    @model_validator(mode="after")
    def validate_substitute_not_tricky(self) -> "CleanupConfig":
        """The substitute must not be one of the characters it replaces."""
        if self.tricky_substitute in self.tricky_characters:
            raise ValueError(
                f"tricky_substitute '{self.tricky_substitute}' is itself a tricky character"
            )
        return self

    @property
    def permission_bits(self) -> int:
        return parse_permissions(self.permissions)


def load_cleanup_config(config_path: str | Path | None = None) -> CleanupConfig:
    """
    Load the configuration file.

    Args:
        config_path: Explicit path (must exist). If None, ``./.clean_files.yaml``
            is used when present, built-in defaults otherwise.

    Returns:
        CleanupConfig validated

    Raises:
        ConfigError: If the explicit file is missing, or the file is invalid
    """
    if config_path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if not candidate.exists():
            return CleanupConfig()
        config_path = candidate
    else:
        config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        return CleanupConfig(**config_data)
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e


class Operation(str, Enum):
    """Operations selectable from the command line, in execution order."""

    duplicates = "duplicates"
    empty = "empty"
    temporary = "temporary"
    same_name = "same-name"
    access = "access"
    tricky = "tricky"
    move = "move"
    copy = "copy"
    rename = "rename"


OPERATION_ORDER: tuple[Operation, ...] = tuple(Operation)


class RunSettings(BaseModel):
    """Everything one invocation needs, built once at startup."""

    catalogs: list[Path] = Field(min_length=1, description="Input catalogs, in order")
    destination: Path = Field(default=Path("./X"), description="Destination catalog")
    automatic: bool = Field(default=False, description="Use defaults, never prompt")
    operations: set[Operation] = Field(default_factory=set)
    config: CleanupConfig = Field(default_factory=CleanupConfig)

    def ordered_operations(self) -> list[Operation]:
        """Selected operations in their fixed execution order."""
        return [op for op in OPERATION_ORDER if op in self.operations]
