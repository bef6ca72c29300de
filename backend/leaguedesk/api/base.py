"""Shared plumbing for resource wrappers."""

from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter

from leaguedesk.api.client import ApiClient

M = TypeVar("M", bound=BaseModel)


def to_payload(data: Any) -> Any:
    """Serialize a request body; pydantic models drop unset optional fields."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_none=True)
    return data


class ResourceApi:
    def __init__(self, client: ApiClient):
        self.client = client

    @staticmethod
    def _parse(model: Type[M], data: Any) -> M:
        return model.model_validate(data)

    @staticmethod
    def _parse_list(model: Type[M], data: Any) -> List[M]:
        return TypeAdapter(List[model]).validate_python(data or [])
