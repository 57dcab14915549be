"""JSON export of fetched pages.

Why JSON:
- Interoperability with other tools and pipelines.
- Lets a caller persist a page (and its cursor) and resume later.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel


def export_json(*, data: BaseModel, output_path: Path) -> Path:
    """Export a model (page or single entity) to UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = data.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
