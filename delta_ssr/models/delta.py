from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


class DeltaInputError(ValueError):
    """Raised when the input is neither an op list nor an ``{"ops": [...]}`` container."""


class DeltaOp(BaseModel):
    model_config = ConfigDict(extra="allow")

    insert: Union[str, Dict[str, Any]]
    attributes: Optional[Dict[str, Any]] = None

    @field_validator("insert")
    @classmethod
    def _single_embed(cls, v: Union[str, Dict[str, Any]]):
        if isinstance(v, dict) and len(v) != 1:
            raise ValueError("an embed insert must carry exactly one embed kind")
        return v


class Delta(BaseModel):
    ops: List[DeltaOp]


def normalize_delta(data: Any) -> List[Dict[str, Any]]:
    """
    Validate a delta and return its operations as fresh dictionaries.

    Accepts either a bare list of operations or a ``{"ops": [...]}``
    container. The returned dictionaries are new objects, so callers may
    derive promoted operations from them without touching the input.
    """
    if isinstance(data, dict) and "ops" in data:
        payload = {"ops": data["ops"]}
    elif isinstance(data, list):
        payload = {"ops": data}
    else:
        raise DeltaInputError(
            f"Expected a list of operations or an {{'ops': [...]}} mapping, got {type(data).__name__}"
        )

    try:
        delta = Delta.model_validate(payload)
    except ValidationError as exc:
        raise DeltaInputError(f"Invalid delta operations: {exc}") from exc

    ops: List[Dict[str, Any]] = []
    for op in delta.ops:
        item: Dict[str, Any] = dict(op.model_extra or {})
        item["insert"] = op.insert if isinstance(op.insert, str) else dict(op.insert)
        if op.attributes is not None:
            item["attributes"] = dict(op.attributes)
        ops.append(item)
    return ops
