# fsviz/settings.py

"""Validated configuration of a single ``fsviz`` run."""


from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fsviz.pattern import GlobMatcher, compile_patterns
from fsviz.tree import DEFAULT_MAX_DEPTH

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _with_extension(value: Any, ext: str) -> Any:
    if value is None:
        return None
    name = os.fspath(value)
    return Path(name if name.endswith(ext) else name + ext)


class Settings(BaseModel):
    """
    Options of one run, usually built from the argparse namespace.

    ``ignore`` accepts a pattern string (or list of strings) and stores the
    compiled :class:`~fsviz.pattern.GlobMatcher`, so an invalid pattern is
    rejected before any traversal starts. JSON and CSV destinations get
    their extension appended when it is missing.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: Path = Path(".")
    simple: bool = False
    dirs_only: bool = False
    ignore: GlobMatcher | None = None
    raw_output: Path | None = None
    json_output: Path | None = None
    csv_output: Path | None = None
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    log_level: LogLevel = "WARNING"

    @field_validator("ignore", mode="before")
    @classmethod
    def _compile_ignore(cls, value: Any) -> Any:
        if value is None or isinstance(value, GlobMatcher):
            return value
        return compile_patterns(value)

    @field_validator("json_output", mode="before")
    @classmethod
    def _json_extension(cls, value: Any) -> Any:
        return _with_extension(value, ".json")

    @field_validator("csv_output", mode="before")
    @classmethod
    def _csv_extension(cls, value: Any) -> Any:
        return _with_extension(value, ".csv")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _single_structured_output(self) -> Settings:
        if self.json_output is not None and self.csv_output is not None:
            raise ValueError("only one of --json or --csv may be given")
        return self
