# select_sdk/frontend/locator.py
import logging

from select_sdk.exceptions import ResourceResolutionError
from select_sdk.schemas import AjaxConfig

from .context import FieldContext

logger = logging.getLogger("select_sdk.frontend.locator")


def _cannot_auto_detect_message(attribute_name: str) -> str:
    return (
        "Cannot auto detect resource to fetch options for searchable select input "
        f"'{attribute_name}' from. Explicitly pass class of an admin resource:\n\n"
        f"  build_select_input(\n"
        f"      FieldContext(\"{attribute_name}\", {{\n"
        f"          \"ajax\": {{\"resource\": Category}},\n"
        f"      }}, ...),\n"
        f"      registry,\n"
        f"  )\n"
    )


def locate(field_context: FieldContext, ajax_config: AjaxConfig) -> type:
    """Класс ресурса, которому принадлежат опции поля. Явная настройка важнее связей модели."""
    if ajax_config.resource_class is not None:
        return ajax_config.resource_class

    attribute_name = field_context.attribute_name
    entity_type = field_context.entity_type
    if entity_type is None:
        logger.debug(f"Field '{attribute_name}': no entity type to inspect relationships of")
        raise ResourceResolutionError(_cannot_auto_detect_message(attribute_name), attribute_name=attribute_name)

    relationship = field_context.relationship_metadata.relationship_for(entity_type, attribute_name)
    if relationship is None:
        logger.debug(f"Field '{attribute_name}': '{entity_type.__name__}' declares no relationship for it")
        raise ResourceResolutionError(_cannot_auto_detect_message(attribute_name), attribute_name=attribute_name)

    logger.debug(
        f"Field '{attribute_name}': resolved resource '{relationship.target.__name__}' "
        f"via relationship '{entity_type.__name__}.{relationship.name}'"
    )
    return relationship.target
