"""Helpers for building credential fixtures."""

import base64
import json
from pathlib import Path
from typing import Any


def write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data))
    return path


def b64_json(data: Any) -> str:
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")


def warnings_in(records: list[Any]) -> list[Any]:
    return [r for r in records if r["level"].name == "WARNING"]
