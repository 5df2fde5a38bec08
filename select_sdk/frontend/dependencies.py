# select_sdk/frontend/dependencies.py
import logging

from fastapi import FastAPI, Request

from select_sdk.exceptions import ConfigurationError
from select_sdk.registry import ResourceRegistry

logger = logging.getLogger("select_sdk.frontend.dependencies")

REGISTRY_STATE_KEY = "select_resource_registry"


def install_registry(app: FastAPI, registry: ResourceRegistry) -> None:
    """Сохраняет реестр ресурсов в состоянии приложения. Вызывается при старте."""
    setattr(app.state, REGISTRY_STATE_KEY, registry)
    logger.info(
        f"ResourceRegistry for namespace '{registry.namespace}' installed "
        f"({len(registry)} resources)."
    )


def get_resource_registry(request: Request) -> ResourceRegistry:
    registry = getattr(request.app.state, REGISTRY_STATE_KEY, None)
    if registry is None:
        raise ConfigurationError(
            "ResourceRegistry has not been installed. Call install_registry(app, registry) during app startup."
        )
    return registry
