# select_sdk/frontend/__init__.py
from .ajax_config import interpret
from .context import FieldContext, RenderMemo, ViewContext
from .endpoint import build_endpoint
from .field import FieldRenderContext, SearchableSelectInput, SelectInput, build_select_input
from .locator import locate
from .relationships import (
    ModelRelationshipResolver,
    RelationshipMetadataResolver,
    StaticRelationshipResolver,
)
from .selected import SelectedValueResolver, resolve_selected

__all__ = [
    "interpret",
    "FieldContext",
    "RenderMemo",
    "ViewContext",
    "build_endpoint",
    "FieldRenderContext",
    "SearchableSelectInput",
    "SelectInput",
    "build_select_input",
    "locate",
    "ModelRelationshipResolver",
    "RelationshipMetadataResolver",
    "StaticRelationshipResolver",
    "SelectedValueResolver",
    "resolve_selected",
]
