# select_sdk/exceptions.py
from typing import Any, Optional


def _resource_name(resource_class: Any) -> str:
    return getattr(resource_class, "__name__", repr(resource_class))


class SelectSDKError(Exception):
    """
    Базовый класс для всех исключений select_sdk.
    Позволяет ловить все ошибки SDK одним блоком except SelectSDKError.
    """

    pass


class ConfigurationError(SelectSDKError):
    """
    Ошибка конфигурации поля или реестра ресурсов.
    Это ошибки разработчика: они должны "ронять" рендеринг, а не превращаться в пустой select.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"Configuration Error: {self.message}"


class ResourceResolutionError(ConfigurationError):
    """Ресурс для поля не указан явно и не может быть определен по связям модели."""

    def __init__(self, message: str, attribute_name: Optional[str] = None):
        self.attribute_name = attribute_name
        super().__init__(message)


class UnregisteredResourceError(ConfigurationError):
    """Для найденного класса ресурса нет регистрации в админке."""

    def __init__(self, resource_class: Any, namespace: Optional[str] = None):
        self.resource_class = resource_class
        self.namespace = namespace
        where = f" in namespace '{namespace}'" if namespace else ""
        super().__init__(
            f"No admin found for '{_resource_name(resource_class)}'{where} "
            "to fetch options for searchable select input from."
        )


class UnknownCollectionError(ConfigurationError):
    """Регистрация ресурса есть, но коллекции опций с таким именем нет."""

    def __init__(self, collection_name: str, resource_class: Any):
        self.collection_name = collection_name
        self.resource_class = resource_class
        super().__init__(
            f"No option collection named '{collection_name}' "
            f"defined in '{_resource_name(resource_class)}' admin."
        )
