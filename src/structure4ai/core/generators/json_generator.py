from __future__ import annotations

"""
JSON Generator.

Serializes the walk as a flat array of entries plus summary statistics:
per-extension counts, the ten largest files and the deepest nesting level.
Entries keep walk order so the array lines up with the tree-text rendering.
"""

import json
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List

from structure4ai.core.generators.base import OutputGenerator
from structure4ai.domain.output_models import OutputDocument
from structure4ai.domain.tree_models import Entry, EntryKind, StructureModel

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
LARGEST_FILES_LIMIT = 10


def format_bytes(size: int) -> str:
    """
    Render a byte count with the largest unit whose scaled value rounds to 1+.

    Examples: 0 -> "0 B", 10 -> "10.0 B", 2000 -> "2.0 KB".
    """
    if size == 0:
        return "0 B"

    value = float(size)
    unit = 0
    while round(value / 1024) >= 1 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:,.1f} {SIZE_UNITS[unit]}"


def entry_to_dict(entry: Entry) -> Dict[str, Any]:
    item: Dict[str, Any] = {
        "name": entry.name,
        "type": entry.kind.value,
        "relativePath": entry.relative_path,
        "depth": entry.depth,
    }
    if entry.kind is EntryKind.FILE:
        item["extension"] = entry.extension
        if entry.size is not None:
            item["size"] = entry.size
            item["sizeFormatted"] = format_bytes(entry.size)
    elif entry.kind is EntryKind.ERROR:
        item["error"] = entry.error or ""
    return item


def compute_statistics(model: StructureModel) -> Dict[str, Any]:
    """
    Build the `statistics` block from the model counters and entries.

    `fileTypes` only counts files that have an extension; extensionless
    files (`Makefile`, `LICENSE`) still count towards `totalFiles` but
    get no `fileTypes` key.
    """
    files = model.files

    type_counts = Counter(f.extension for f in files if f.extension)
    # sorted() is stable, so equal counts keep first-seen order
    file_types = dict(sorted(type_counts.items(), key=lambda kv: -kv[1]))

    sized = [f for f in files if f.size]
    largest = sorted(sized, key=lambda f: -(f.size or 0))[:LARGEST_FILES_LIMIT]
    largest_files: List[Dict[str, Any]] = [
        {
            "name": f.name,
            "relativePath": f.relative_path,
            "size": f.size,
            "sizeFormatted": format_bytes(f.size or 0),
        }
        for f in largest
    ]

    return {
        "totalFolders": model.folder_count,
        "totalFiles": model.file_count,
        "totalErrors": model.error_count,
        "totalItems": model.processed_count,
        "fileTypes": file_types,
        "largestFiles": largest_files,
        "deepestPath": max((e.depth for e in model.entries), default=0),
    }


class JsonGenerator(OutputGenerator):
    FORMAT_NAME = "JSON"
    EXTENSION = "json"
    ALIASES = ("json",)

    def generate(self, model: StructureModel, root_path: str) -> OutputDocument:
        cfg = self.config
        payload = {
            "projectName": model.root_name,
            "path": root_path,
            "generatedAt": datetime.now().isoformat(timespec="seconds"),
            "configuration": {
                "includeHiddenFiles": cfg.general.include_hidden_files,
                "maxDepth": cfg.general.max_depth,
                "formats": list(cfg.output.formats),
            },
            "statistics": compute_statistics(model),
            "structure": [entry_to_dict(e) for e in model.entries],
        }
        return self._document(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
