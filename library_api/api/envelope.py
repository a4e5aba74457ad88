"""Success envelope: {success: true, message, data}."""

from typing import Any, Iterable

from pydantic import BaseModel


def success(message: str, data: Any = None) -> dict:
    return {"success": True, "message": message, "data": data}


def dump(model: BaseModel) -> dict:
    """Serialize with public field names (_id, createdAt, ...)."""
    return model.model_dump(mode="json", by_alias=True)


def dump_all(models: Iterable[BaseModel]) -> list[dict]:
    return [dump(m) for m in models]
