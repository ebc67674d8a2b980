from __future__ import annotations

from typing import Any, Dict, Optional

from .kinds import BLOCK_EMBED_KINDS


def embed_kind_name(op: Dict[str, Any]) -> Optional[str]:
    """Name of the embed carried by ``op``, or ``None`` for text inserts."""
    insert = op.get("insert") if isinstance(op, dict) else None
    if isinstance(insert, dict) and insert:
        return next(iter(insert))
    return None


def maybe_get_embed_sizes(op: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Return ``{"width": ..., "height": ...}`` from the first insert payload
    exposing both ``embedWidth`` and ``embedHeight``, else ``None``.
    """
    insert = op.get("insert") if isinstance(op, dict) else None
    if not isinstance(insert, dict):
        return None
    for payload in insert.values():
        if not isinstance(payload, dict):
            continue
        if payload.get("embedWidth") and payload.get("embedHeight"):
            return {"width": payload["embedWidth"], "height": payload["embedHeight"]}
    return None


def should_render_as_block(op: Dict[str, Any]) -> bool:
    insert = op.get("insert") if isinstance(op, dict) else None
    if isinstance(insert, dict) and any(insert.get(kind.value) for kind in BLOCK_EMBED_KINDS):
        return True
    if maybe_get_embed_sizes(op):
        return True
    return False
