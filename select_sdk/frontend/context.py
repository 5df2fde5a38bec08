# select_sdk/frontend/context.py
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from select_sdk.config import SelectSDKSettings, settings as default_settings
from select_sdk.schemas import AjaxConfig

from .ajax_config import interpret
from .relationships import ModelRelationshipResolver, RelationshipMetadataResolver

logger = logging.getLogger("select_sdk.frontend.context")


class ViewContext(BaseModel):
    """
    То, что доступно скоупам коллекций во время рендера (аналог шаблонного контекста):
    сессия БД, текущий пользователь и произвольные данные приложения.
    """

    session: Optional[Session] = None
    user: Optional[Any] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)


class RenderMemo:
    """Ячейки мемоизации одного рендера одного поля. Не разделяется между рендерами."""

    def __init__(self):
        self._cells: Dict[str, Any] = {}

    def get_or_compute(self, key: str, factory: Callable[[], Any]) -> Any:
        # None тоже запоминается: повторный доступ не должен повторять поиск
        if key not in self._cells:
            self._cells[key] = factory()
        return self._cells[key]

    def discard(self) -> None:
        self._cells.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._cells

    def __len__(self) -> int:
        return len(self._cells)


class FieldContext:
    def __init__(
        self,
        attribute_name: str,
        raw_options: Optional[Mapping[str, Any]] = None,
        bound_object: Optional[Any] = None,
        relationship_metadata: Optional[RelationshipMetadataResolver] = None,
        view_context: Optional[Any] = None,
        entity_type: Optional[type] = None,
        strict_ajax_options: Optional[bool] = None,
        default_collection_name: Optional[str] = None,
        settings: Optional[SelectSDKSettings] = None,
    ):
        settings = settings or default_settings
        self.attribute_name = attribute_name
        self.raw_options: Mapping[str, Any] = dict(raw_options or {})
        self.bound_object = bound_object
        self.relationship_metadata = relationship_metadata or ModelRelationshipResolver()
        self.view_context = view_context if view_context is not None else ViewContext()
        self._entity_type = entity_type
        self.strict_ajax_options = (
            settings.STRICT_AJAX_OPTIONS if strict_ajax_options is None else strict_ajax_options
        )
        self.default_collection_name = default_collection_name or settings.DEFAULT_COLLECTION_NAME
        self.memo = RenderMemo()

    @property
    def entity_type(self) -> Optional[type]:
        if self._entity_type is not None:
            return self._entity_type
        return type(self.bound_object) if self.bound_object is not None else None

    @property
    def value_attribute(self) -> str:
        """
        Атрибут, в котором хранится значение поля.
        Для поля, названного именем связи (`category`), это ее внешний ключ (`category_id`).
        """
        entity_type = self.entity_type
        if entity_type is None:
            return self.attribute_name
        relationship = self.relationship_metadata.relationship_for(entity_type, self.attribute_name)
        if relationship is not None and relationship.name == self.attribute_name and relationship.foreign_key:
            return relationship.foreign_key
        return self.attribute_name

    @property
    def ajax_config(self) -> Optional[AjaxConfig]:
        return self.memo.get_or_compute(
            "ajax_config",
            lambda: interpret(
                self.raw_options,
                default_collection_name=self.default_collection_name,
                strict=self.strict_ajax_options,
            ),
        )

    @property
    def is_ajax(self) -> bool:
        return self.ajax_config is not None

    def end_render(self) -> None:
        logger.debug(f"Field '{self.attribute_name}': discarding {len(self.memo)} memoized render values")
        self.memo.discard()

    def __enter__(self) -> "FieldContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end_render()

    def __repr__(self) -> str:
        return f"FieldContext({self.attribute_name!r}, entity_type={getattr(self.entity_type, '__name__', None)})"
