# select_sdk/__init__.py
from .config import SelectSDKSettings, settings
from .exceptions import (
    ConfigurationError,
    ResourceResolutionError,
    SelectSDKError,
    UnknownCollectionError,
    UnregisteredResourceError,
)
from .logging_config import get_sdk_logger, setup_sdk_logging
from .registry import OptionCollection, ResourceRegistration, ResourceRegistry

__all__ = [
    "SelectSDKSettings",
    "settings",
    "ConfigurationError",
    "ResourceResolutionError",
    "SelectSDKError",
    "UnknownCollectionError",
    "UnregisteredResourceError",
    "get_sdk_logger",
    "setup_sdk_logging",
    "OptionCollection",
    "ResourceRegistration",
    "ResourceRegistry",
]
