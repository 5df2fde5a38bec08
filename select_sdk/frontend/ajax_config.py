# select_sdk/frontend/ajax_config.py
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from select_sdk.exceptions import ConfigurationError
from select_sdk.schemas import AjaxConfig

logger = logging.getLogger("select_sdk.frontend.ajax_config")

KNOWN_AJAX_KEYS = frozenset({"resource", "collection_name", "params"})


def interpret(
    raw_options: Mapping[str, Any],
    *,
    default_collection_name: str = "all",
    strict: bool = False,
) -> Optional[AjaxConfig]:
    """
    Нормализует опцию `ajax` поля.

    - нет ключа или False -> None (обычный select с предзагруженными опциями);
    - True -> настройки по умолчанию;
    - словарь -> `resource`, `collection_name`, `params` копируются как есть,
      остальные ключи игнорируются (или отклоняются при strict=True).
    """
    ajax = raw_options.get("ajax")
    if ajax is None or ajax is False:
        return None
    if isinstance(ajax, AjaxConfig):
        return ajax
    if ajax is True:
        return AjaxConfig(collection_name=default_collection_name)
    if not isinstance(ajax, Mapping):
        raise ConfigurationError(
            f"Option 'ajax' must be True or a mapping with resource/collection_name/params, got {type(ajax).__name__}."
        )

    unknown_keys = sorted(str(k) for k in ajax.keys() if k not in KNOWN_AJAX_KEYS)
    if unknown_keys:
        if strict:
            raise ConfigurationError(f"Unknown keys in 'ajax' option: {unknown_keys}.")
        logger.debug(f"Ignoring unknown keys in 'ajax' option: {unknown_keys}")

    params = ajax.get("params", {})
    if not isinstance(params, Mapping):
        raise ConfigurationError(f"'ajax.params' must be a mapping, got {type(params).__name__}.")
    try:
        return AjaxConfig(
            resource_class=ajax.get("resource"),
            collection_name=ajax.get("collection_name", default_collection_name),
            params=dict(params),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid 'ajax' option: {e}") from e
