# select_sdk/frontend/endpoint.py
from typing import Optional

from select_sdk.registry import OptionCollection, ResourceRegistration
from select_sdk.schemas import AjaxConfig, UrlDescriptor


def build_endpoint(
    registration: ResourceRegistration,
    option_collection: OptionCollection,
    ajax_config: Optional[AjaxConfig],
) -> Optional[UrlDescriptor]:
    # Не-ajax поле: атрибут data-ajax-url просто не выводится
    if ajax_config is None:
        return None
    return UrlDescriptor(
        namespace=registration.namespace,
        resource_path=registration.resource_path,
        action=option_collection.collection_action_name,
        params=dict(ajax_config.params),
    )
