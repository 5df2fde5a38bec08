# select_sdk/schemas/__init__.py

from .options import AjaxConfig, ResolvedOption, UrlDescriptor, RelationshipDescriptor

__all__ = [
    "AjaxConfig",
    "ResolvedOption",
    "UrlDescriptor",
    "RelationshipDescriptor",
]
