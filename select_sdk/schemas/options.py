# select_sdk/schemas/options.py
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AjaxConfig(BaseModel):
    """
    Нормализованная опция `ajax` поля.
    Строится один раз за рендер и после этого не меняется.
    """

    resource_class: Optional[type] = Field(
        default=None,
        description="Класс ресурса админки. None - определить по связям модели.",
    )
    collection_name: str = Field(
        default="all",
        description="Имя коллекции опций, зарегистрированной у ресурса.",
    )
    params: Mapping[str, Any] = Field(
        default_factory=dict,
        description="Query-параметры для эндпоинта опций. Только для чтения.",
        validate_default=True,
    )

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("params", mode="after")
    @classmethod
    def _read_only_params(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))


class ResolvedOption(BaseModel):
    label: str
    value: Any

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def as_choice(self) -> Tuple[Any, str]:
        # Формат опций как в FieldRenderContext.options: (value, label)
        return self.value, self.label


class UrlDescriptor(BaseModel):
    namespace: Optional[str] = None
    resource_path: str
    action: str
    params: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        segments = [self.namespace, self.resource_path, self.action]
        return "/" + "/".join(s.strip("/") for s in segments if s)

    @property
    def query_string(self) -> str:
        return str(httpx.QueryParams(flatten_query_params(self.params))) if self.params else ""

    @property
    def url(self) -> str:
        query = self.query_string
        return f"{self.path}?{query}" if query else self.path

    def __str__(self) -> str:
        return self.url


class RelationshipDescriptor(BaseModel):
    name: str
    target: type
    foreign_key: Optional[str] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def flatten_query_params(params: Mapping[str, Any], prefix: Optional[str] = None) -> List[Tuple[str, Any]]:
    """
    {"filter": {"status": "enabled"}, "ids": [1, 2]} -> [("filter[status]", "enabled"), ("ids", 1), ("ids", 2)]

    Вложенные словари раскрываются в ключи вида `filter[status]`, списки - в повторяющиеся ключи.
    """
    items: List[Tuple[str, Any]] = []
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if isinstance(value, Mapping):
            items.extend(flatten_query_params(value, name))
        elif isinstance(value, (list, tuple)):
            items.extend((name, v) for v in value)
        else:
            items.append((name, value))
    return items
