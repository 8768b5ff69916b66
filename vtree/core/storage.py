'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.

JSON tree files:

    {"name": "...", "roots": [{"id": "a", "name": "A", "open": false,
                               "children": [...]}, ...]}
'''
from __future__ import annotations

import json, os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

__all__ = ["load_tree_file", "save_tree_file", "count_nodes"]

def _read_json(p: Path, default: Any) -> Any:
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in {p}: {e}") from e

def _atomic_write_json(p: Path, obj: Dict[str, Any]) -> None:
    tmp = p.with_suffix(p.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp.replace(p)

def _check_nodes(nodes: Any, where: str, seen: Optional[Set[Any]] = None) -> None:
    if seen is None:
        seen = set()
    if not isinstance(nodes, list):
        raise ValueError(f"{where}: expected a list of nodes")
    for i, node in enumerate(nodes):
        if not isinstance(node, dict) or "id" not in node:
            raise ValueError(f"{where}[{i}]: node must be an object with an 'id'")
        try:
            if node["id"] in seen:
                raise ValueError(f"{where}[{i}]: duplicate id {node['id']!r}")
            seen.add(node["id"])
        except TypeError:
            raise ValueError(f"{where}[{i}]: id {node['id']!r} is not hashable") from None
        _check_nodes(node.get("children", []), f"{where}[{i}].children", seen)

# ---------- tree files ----------

def load_tree_file(path: str) -> List[Dict[str, Any]]:
    """Return the root nodes stored in `path`. Raises ValueError if the file is missing or malformed."""
    p = Path(path).expanduser()
    doc = _read_json(p, None)
    if doc is None:
        raise ValueError(f"tree file not found: {p}")

    # A bare list of roots is accepted as well.
    roots = doc if isinstance(doc, list) else doc.get("roots") if isinstance(doc, dict) else None
    if roots is None:
        raise ValueError(f"{p}: no 'roots' list")
    _check_nodes(roots, "roots")
    return roots

def save_tree_file(path: str, roots: List[Dict[str, Any]], name: Optional[str] = None) -> None:
    _check_nodes(roots, "roots")
    p = Path(path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write_json(p, {"name": name or p.stem, "roots": roots})

def count_nodes(roots: List[Dict[str, Any]]) -> int:
    total = 0
    stack = list(roots)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.get("children", []))
    return total
