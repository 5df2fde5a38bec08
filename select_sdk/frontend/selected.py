# select_sdk/frontend/selected.py
import logging
from typing import Any, Mapping, Optional

from select_sdk.data_access.scopes import as_queryable, record_identity
from select_sdk.registry import OptionCollection, ResourceRegistration
from select_sdk.schemas import AjaxConfig, ResolvedOption

from .context import FieldContext

logger = logging.getLogger("select_sdk.frontend.selected")


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return tuple(sorted((str(k), _freeze(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(_freeze(v) for v in value)
    return value


class SelectedValueResolver:
    """
    Находит подпись уже выбранного значения поля, обращаясь к скоупу коллекции напрямую,
    без ajax-эндпоинта. Значение, запись и итоговая опция вычисляются не более одного раза
    за рендер: результаты лежат в memo контекста поля.
    """

    def __init__(
        self,
        field_context: FieldContext,
        registration: ResourceRegistration,
        option_collection: OptionCollection,
        ajax_config: AjaxConfig,
    ):
        self.field_context = field_context
        self.registration = registration
        self.option_collection = option_collection
        self.ajax_config = ajax_config
        # Запись и опция зависят от коллекции и ее параметров, значение поля - нет
        self._scope_key = f"{option_collection.name}:{_freeze(ajax_config.params)!r}"

    @property
    def selected_value(self) -> Any:
        return self.field_context.memo.get_or_compute("selected_value", self._read_selected_value)

    @property
    def selected_record(self) -> Any:
        return self.field_context.memo.get_or_compute(f"selected_record:{self._scope_key}", self._find_selected_record)

    def resolve(self) -> Optional[ResolvedOption]:
        return self.field_context.memo.get_or_compute(f"selected_option:{self._scope_key}", self._build_option)

    def _read_selected_value(self) -> Any:
        bound_object = self.field_context.bound_object
        if bound_object is None:
            return None
        value = getattr(bound_object, self.field_context.value_attribute, None)
        return None if value == "" else value

    def _find_selected_record(self) -> Any:
        value = self.selected_value
        if value is None:
            return None
        view_context = self.field_context.view_context
        scope = as_queryable(
            self.option_collection.scope(view_context, self.ajax_config.params),
            view_context,
        )
        record = scope.find_by_id(value)
        if record is None:
            logger.debug(
                f"Field '{self.field_context.attribute_name}': no '{self.registration.resource_name}' "
                f"record with id {value!r} in collection '{self.option_collection.name}'"
            )
        return record

    def _build_option(self) -> Optional[ResolvedOption]:
        record = self.selected_record
        if record is None:
            return None
        return ResolvedOption(label=self.option_collection.text(record), value=record_identity(record))


def resolve_selected(
    field_context: FieldContext,
    registration: ResourceRegistration,
    option_collection: OptionCollection,
    ajax_config: AjaxConfig,
) -> Optional[ResolvedOption]:
    return SelectedValueResolver(field_context, registration, option_collection, ajax_config).resolve()
