"""JSON I/O for scene documents used by the in-memory host."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from src.builders.variants.memory_host import MemoryHost


def load_json(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Load JSON object from path."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object in {path}, got {type(data).__name__}")
    return data


def save_json(path: str | os.PathLike[str], payload: dict[str, Any]) -> str:
    """Save JSON payload to path, creating parent directories."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return str(output_path)


def load_document(path: str | os.PathLike[str]) -> MemoryHost:
    return MemoryHost.from_dict(load_json(path))


def save_document(host: MemoryHost, path: str | os.PathLike[str]) -> str:
    return save_json(path, host.to_dict())
