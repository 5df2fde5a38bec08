# select_sdk/frontend/field.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from jinja2 import TemplateError
from pydantic import BaseModel, ConfigDict

from select_sdk.config import SelectSDKSettings, settings as default_settings
from select_sdk.registry import OptionCollection, ResourceRegistration, ResourceRegistry
from select_sdk.schemas import AjaxConfig, ResolvedOption

from .context import FieldContext
from .endpoint import build_endpoint
from .exceptions import RenderingError
from .locator import locate
from .selected import resolve_selected
from .templating import get_templates
from .utils import normalize_choices

logger = logging.getLogger("select_sdk.frontend.field")

DEFAULT_SELECT_TEMPLATE = "fields/searchable_select.html"


class FieldRenderContext(BaseModel):
    name: str
    value: Any = None
    label: str
    template_path: str
    html_id: str
    html_name: str
    html_attrs: Dict[str, Any] = {}
    options: List[Tuple[Any, str]] = []
    include_blank: bool = True
    ajax_url: Optional[str] = None
    selected_option: Optional[ResolvedOption] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)


class SelectInput:
    """
    Базовый select: опции берутся из опции `collection` и отдаются целиком.
    Это та часть конвейера ввода хост-фреймворка, которую оборачивает SearchableSelectInput.
    """

    def __init__(self, field_context: FieldContext, settings: Optional[SelectSDKSettings] = None):
        self.field_context = field_context
        self.settings = settings or default_settings

    @property
    def name(self) -> str:
        return self.field_context.attribute_name

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self.field_context.raw_options)

    @property
    def label(self) -> str:
        return self.options.get("label") or self.name.replace("_", " ").capitalize()

    @property
    def html_name(self) -> str:
        return self.options.get("html_name") or self.field_context.value_attribute

    @property
    def value(self) -> Any:
        bound_object = self.field_context.bound_object
        return getattr(bound_object, self.field_context.value_attribute, None) if bound_object is not None else None

    def input_html_options(self) -> Dict[str, Any]:
        html_options: Dict[str, Any] = {"id": self.name}
        html_options.update(self.options.get("input_html") or {})
        return html_options

    def collection(self) -> List[Tuple[Any, str]]:
        return normalize_choices(self.options.get("collection"))


class SearchableSelectInput:
    """
    Обертка над SelectInput для полей с опцией `ajax`:
    опции подгружаются с эндпоинта коллекции (атрибут data-ajax-url),
    а локально отдается только текущее выбранное значение с подписью.

    Без опции `ajax` поле ведет себя как обычный select (добавляется только CSS-класс).
    """

    template_path = DEFAULT_SELECT_TEMPLATE

    def __init__(
        self,
        base: SelectInput,
        registry: ResourceRegistry,
        settings: Optional[SelectSDKSettings] = None,
    ):
        self.base = base
        self.registry = registry
        self.settings = settings or base.settings

    @property
    def field_context(self) -> FieldContext:
        return self.base.field_context

    @property
    def name(self) -> str:
        return self.base.name

    @property
    def ajax_config(self) -> Optional[AjaxConfig]:
        return self.field_context.ajax_config

    def ajax_resource_class(self) -> type:
        return self.field_context.memo.get_or_compute(
            "ajax_resource_class", lambda: locate(self.field_context, self.ajax_config)
        )

    def ajax_registration(self) -> ResourceRegistration:
        return self.field_context.memo.get_or_compute(
            "ajax_registration", lambda: self.registry.get_registration(self.ajax_resource_class())
        )

    def option_collection(self) -> OptionCollection:
        return self.field_context.memo.get_or_compute(
            "option_collection",
            lambda: self.ajax_registration().get_option_collection(self.ajax_config.collection_name),
        )

    def build_endpoint_attribute(self) -> Optional[str]:
        if self.ajax_config is None:
            return None
        endpoint = build_endpoint(self.ajax_registration(), self.option_collection(), self.ajax_config)
        return str(endpoint) if endpoint is not None else None

    def resolve_selected_option(self) -> Optional[ResolvedOption]:
        if self.ajax_config is None:
            return None
        return resolve_selected(
            self.field_context,
            self.ajax_registration(),
            self.option_collection(),
            self.ajax_config,
        )

    def input_html_options(self) -> Dict[str, Any]:
        html_options = self.base.input_html_options()
        css_classes = [html_options.get("class"), self.settings.INPUT_CSS_CLASS]
        html_options["class"] = " ".join(c for c in css_classes if c)
        html_options[self.settings.AJAX_URL_ATTRIBUTE] = self.build_endpoint_attribute()
        return html_options

    def collection(self) -> List[Tuple[Any, str]]:
        # С ajax опция `collection` игнорируется
        if self.ajax_config is None:
            return self.base.collection()
        selected = self.resolve_selected_option()
        return [selected.as_choice()] if selected is not None else []

    def get_render_context(self) -> FieldRenderContext:
        html_attrs = self.input_html_options()
        html_id = str(html_attrs.pop("id", self.name))
        options = self.collection()
        selected = self.resolve_selected_option()
        value = selected.value if selected is not None else (None if self.ajax_config else self.base.value)

        logger.debug(
            f"Field '{self.name}': ajax={self.ajax_config is not None}, "
            f"options={len(options)}, selected={selected.value if selected else None!r}"
        )
        return FieldRenderContext(
            name=self.name,
            value=value,
            label=self.base.label,
            template_path=self.template_path,
            html_id=html_id,
            html_name=self.base.html_name,
            html_attrs=html_attrs,
            options=options,
            include_blank=bool(self.base.options.get("include_blank", True)),
            ajax_url=html_attrs.get(self.settings.AJAX_URL_ATTRIBUTE),
            selected_option=selected,
        )

    def render(self) -> str:
        """HTML поля. Мемоизированные значения рендера сбрасываются по его окончании."""
        try:
            field_ctx = self.get_render_context()
            try:
                template = get_templates().get_template(field_ctx.template_path)
                return template.render(field=field_ctx)
            except TemplateError as e:
                logger.error(f"Failed to render field '{self.name}' with '{field_ctx.template_path}': {e}", exc_info=True)
                raise RenderingError(f"Failed to render field '{self.name}': {e}") from e
        finally:
            self.field_context.end_render()


def build_select_input(
    field_context: FieldContext,
    registry: ResourceRegistry,
    settings: Optional[SelectSDKSettings] = None,
) -> SearchableSelectInput:
    return SearchableSelectInput(SelectInput(field_context, settings), registry, settings)
