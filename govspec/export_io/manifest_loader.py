from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

from govspec.core.batch.manifest import Category, ManifestEntry, build_manifest
from govspec.core.contract.exceptions import ManifestError


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"invalid JSON in {path}: {e}") from e


def load_manifest_file(path: str) -> List[ManifestEntry]:
    """Load a batch manifest from JSON.

    Format:

    {
      "pages": [{"id": "homepage", "path": "pages/homepage.json"}],
      "components": [{"id": "nav-primary", "path": "components/nav-primary.json"}]
    }

    Spec paths are resolved relative to the manifest file. Pages come first,
    then components, each in listed order.
    """

    manifest_path = Path(path)
    data = _read_json(manifest_path)
    if not isinstance(data, dict):
        raise ManifestError("manifest JSON must be an object")

    base = manifest_path.parent
    triples = []
    for key, category in (("pages", Category.PAGES), ("components", Category.COMPONENTS)):
        items = data.get(key, [])
        if not isinstance(items, list):
            raise ManifestError(f"manifest.{key} must be a list")
        for item in items:
            if not isinstance(item, dict) or "id" not in item or "path" not in item:
                raise ManifestError(f"manifest.{key} entries need 'id' and 'path'")
            spec_path = base / str(item["path"])
            triples.append((str(item["id"]), category, _read_json(spec_path)))

    return build_manifest(triples)
