"""
Moderation config store backed by a single JSON document (orjson).

Behaviour:
- `load()` never raises. A missing or unreadable document yields the defaults.
- Fields are recovered one by one; a malformed field only loses itself.
- `save()` replaces the whole document through a temp file + `os.replace`,
  so readers see either the old or the new content.
"""
from __future__ import annotations

import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, List, Type, TypeVar

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class Mode(str, Enum):
    """Which direction(s) get filtered."""

    INPUT_ONLY = "input_only"
    OUTPUT_ONLY = "output_only"
    BOTH = "both"


class Stats(BaseModel):
    """Usage counters."""

    model_config = ConfigDict(populate_by_name=True)

    total_checks: int = Field(0, ge=0, alias="totalChecks")
    blocked: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _blocked_within_total(self) -> "Stats":
        # blocked <= totalChecks
        if self.blocked > self.total_checks:
            self.total_checks = self.blocked
        return self


class ModerationConfig(BaseModel):
    """The persisted moderation document."""

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = True
    mode: Mode = Mode.BOTH
    keywords: List[str] = Field(default_factory=list)
    whitelist: List[str] = Field(default_factory=list)
    stats: Stats = Field(default_factory=Stats)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


M = TypeVar("M", bound=BaseModel)


def _lenient(model_cls: Type[M], raw: Any, where: str = "") -> M:
    """Build `model_cls` from `raw`, falling back to defaults per field."""
    if not isinstance(raw, dict):
        if raw is not None:
            print(f"[CONFIG] Expected a mapping at '{where or '<root>'}', got {type(raw).__name__}; using defaults")
        return model_cls()

    values = {}
    for name, field in model_cls.model_fields.items():
        key = field.alias or name
        if key not in raw:
            continue

        nested = field.annotation
        if isinstance(nested, type) and issubclass(nested, BaseModel):
            values[name] = _lenient(nested, raw[key], f"{where}{key}.")
            continue

        try:
            values[name] = getattr(model_cls.model_validate({key: raw[key]}), name)
        except ValidationError as e:
            print(f"[CONFIG] Ignoring malformed field '{where}{key}': {e.errors()[0]['msg']}")

    return model_cls.model_validate(values)


def parse_config(raw: Any) -> ModerationConfig:
    """Turn a decoded document into a config. Unknown keys are ignored."""
    return _lenient(ModerationConfig, raw)


class ConfigStore:
    """Load / save the moderation document at `path`."""

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> ModerationConfig:
        try:
            raw = orjson.loads(self.path.read_bytes())
            return parse_config(raw)
        except FileNotFoundError:
            print(f"[CONFIG] {self.path} not found, using defaults")
            return ModerationConfig()
        except Exception as e:
            print(f"[CONFIG] Failed to load {self.path}: {e}")
            return ModerationConfig()

    def save(self, config: ModerationConfig) -> bool:
        tmp_path = None
        try:
            data = orjson.dumps(
                config.to_document(),
                option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE,
            )
            directory = self.path.parent
            directory.mkdir(parents=True, exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(directory)
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            return True
        except Exception as e:
            print(f"[CONFIG] Failed to save {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass
            return False
