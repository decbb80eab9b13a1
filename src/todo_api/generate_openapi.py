"""
Export the Todo List API's OpenAPI document to disk.

Usage:
    python -m todo_api.generate_openapi [output_path]

Without an argument the document goes to <project root>/interfaces/openapi.json.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .logger import get_logger
from .main import app, openapi_tags

logger = get_logger(__name__)

DEFAULT_OUTPUT = Path(__file__).resolve().parents[2] / "interfaces" / "openapi.json"


def _with_tag_metadata(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Append any of our tag descriptions that FastAPI left out of `schema`."""
    tags: List[Dict[str, Any]] = list(schema.get("tags") or [])
    known = {tag.get("name") for tag in tags}
    tags.extend(tag for tag in openapi_tags if tag["name"] not in known)
    return {**schema, "tags": tags}


# PUBLIC_INTERFACE
def generate_openapi(path: Optional[Union[str, Path]] = None) -> Path:
    """Write the OpenAPI schema as pretty JSON and return the written file path."""
    out_path = Path(path) if path is not None else DEFAULT_OUTPUT
    schema = _with_tag_metadata(app.openapi())

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    logger.info("Wrote OpenAPI schema to: %s", out_path)
    return out_path


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    generate_openapi(args[0] if args else None)


if __name__ == "__main__":
    main()
