# select_sdk/registry.py
import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlmodel import select

from select_sdk.config import SelectSDKSettings, settings as default_settings
from select_sdk.data_access.scopes import call_with_supported_args
from select_sdk.exceptions import (
    ConfigurationError,
    UnknownCollectionError,
    UnregisteredResourceError,
)

logger = logging.getLogger("select_sdk.registry")

ScopeType = Any  # callable(context, params) | select() | list
DisplayTextType = Callable[[Any], Any]


def underscore(name: str) -> str:
    """CategoryItem -> category_item"""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def pluralize(word: str) -> str:
    if re.search(r"[^aeiou]y$", word):
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", word):
        return word + "es"
    return word + "s"


def default_resource_path(resource_class: Any) -> str:
    return pluralize(underscore(resource_class.__name__))


def _is_mapped(resource_class: Any) -> bool:
    try:
        sa_inspect(resource_class)
    except NoInspectionAvailable:
        return False
    return True


class OptionCollection:
    """
    Именованная коллекция опций ресурса: какие записи годятся в опции (scope)
    и как подписать каждую из них (text).
    """

    def __init__(
        self,
        name: str,
        scope: ScopeType,
        text_attribute: Optional[str] = None,
        display_text: Optional[DisplayTextType] = None,
        action_suffix: str = "_options",
    ):
        if not text_attribute and display_text is None:
            raise ConfigurationError(
                f"Option collection '{name}' requires either text_attribute or display_text."
            )
        self.name = name
        self._scope = scope
        self.text_attribute = text_attribute
        self.display_text = display_text
        self.action_suffix = action_suffix

    @property
    def collection_action_name(self) -> str:
        return f"{self.name}{self.action_suffix}"

    def scope(self, context: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        params = dict(params or {})
        if callable(self._scope):
            return call_with_supported_args(self._scope, context, params)
        return self._scope

    def text(self, record: Any) -> str:
        if self.display_text is not None:
            return str(self.display_text(record))
        return str(getattr(record, self.text_attribute))

    def __repr__(self) -> str:
        return f"OptionCollection(name={self.name!r}, action={self.collection_action_name!r})"


class ResourceRegistration:
    def __init__(
        self,
        resource_class: type,
        namespace: Optional[str],
        resource_path: str,
    ):
        self.resource_class = resource_class
        self.namespace = namespace
        self.resource_path = resource_path
        self.collections: Dict[str, OptionCollection] = {}

    @property
    def resource_name(self) -> str:
        return self.resource_class.__name__

    def get_option_collection(self, name: str) -> OptionCollection:
        collection = self.collections.get(name)
        if collection is None:
            raise UnknownCollectionError(name, self.resource_class)
        return collection

    def __repr__(self) -> str:
        return (
            f"ResourceRegistration({self.resource_name}, namespace={self.namespace!r}, "
            f"collections={list(self.collections)})"
        )


class ResourceRegistry:
    """
    Реестр ресурсов одного пространства имен админки.
    Заполняется один раз при старте приложения и передается в рендеринг явно.
    """

    def __init__(
        self,
        namespace: Optional[str] = None,
        settings: Optional[SelectSDKSettings] = None,
    ):
        self.settings = settings or default_settings
        self.namespace = self.settings.ADMIN_NAMESPACE if namespace is None else namespace
        self._registry: Dict[type, ResourceRegistration] = {}

    def register(
        self,
        resource_class: type,
        *,
        plural_name: Optional[str] = None,
    ) -> ResourceRegistration:
        if not isinstance(resource_class, type):
            raise TypeError(f"resource_class must be a class, got {type(resource_class)}")
        if resource_class in self._registry:
            logger.warning(
                f"Resource '{resource_class.__name__}' is already registered in namespace "
                f"'{self.namespace}'. Overwriting previous configuration."
            )
        registration = ResourceRegistration(
            resource_class=resource_class,
            namespace=self.namespace,
            resource_path=plural_name or default_resource_path(resource_class),
        )
        self._registry[resource_class] = registration
        logger.info(
            f"Registry: Registered '{resource_class.__name__}' "
            f"(namespace: '{self.namespace}', path: '{registration.resource_path}')"
        )
        return registration

    def register_option_collection(
        self,
        resource_class: type,
        name: Optional[str] = None,
        scope: Optional[ScopeType] = None,
        text_attribute: Optional[str] = None,
        display_text: Optional[DisplayTextType] = None,
    ) -> OptionCollection:
        registration = self.get_registration(resource_class)
        name = name or self.settings.DEFAULT_COLLECTION_NAME
        if scope is None:
            if not _is_mapped(resource_class):
                raise ConfigurationError(
                    f"Option collection '{name}' of '{resource_class.__name__}' needs an explicit scope: "
                    "the resource is not a mapped table."
                )
            scope = select(resource_class)
        if name in registration.collections:
            logger.warning(
                f"Option collection '{name}' is already defined in '{resource_class.__name__}' admin. Overwriting."
            )
        collection = OptionCollection(
            name=name,
            scope=scope,
            text_attribute=text_attribute,
            display_text=display_text,
            action_suffix=self.settings.COLLECTION_ACTION_SUFFIX,
        )
        registration.collections[name] = collection
        logger.debug(
            f"Registry: '{resource_class.__name__}' serves collection '{name}' "
            f"via action '{collection.collection_action_name}'"
        )
        return collection

    def find_registration(self, resource_class: Any) -> Optional[ResourceRegistration]:
        return self._registry.get(resource_class)

    def get_registration(self, resource_class: Any, raise_error: bool = True) -> Optional[ResourceRegistration]:
        registration = self.find_registration(resource_class)
        if registration is None and raise_error:
            raise UnregisteredResourceError(resource_class, namespace=self.namespace)
        return registration

    def clear(self) -> None:
        logger.info(f"Clearing ResourceRegistry (namespace: '{self.namespace}').")
        self._registry = {}

    def is_configured(self) -> bool:
        return bool(self._registry)

    def __contains__(self, resource_class: Any) -> bool:
        return resource_class in self._registry

    def __len__(self) -> int:
        return len(self._registry)
