# select_sdk/frontend/utils.py
import inspect
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Union, get_args, get_origin

from pydantic import BaseModel as PydanticBaseModel
from sqlmodel import SQLModel


def get_base_type(annotation: Any) -> Any:
    """
    Извлекает "базовый" тип из Optional[T] / Union[T, None].
    Для List[T] и Dict[K, V] возвращает саму аннотацию.
    """
    origin = get_origin(annotation)
    if origin is Union:
        non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if non_none_args:
            return get_base_type(non_none_args[0])
        return Any
    return annotation


def is_pydantic_sqlmodel_type(type_to_check: Any) -> bool:
    if inspect.isclass(type_to_check):
        return issubclass(type_to_check, PydanticBaseModel) or issubclass(type_to_check, SQLModel)
    return False


def related_model_from_annotation(annotation: Any) -> Optional[type]:
    """Класс модели для аннотации вида Optional[Category]; для списков и скаляров - None."""
    base_type = get_base_type(annotation)
    if get_origin(base_type) in (list, List):
        return None
    return base_type if is_pydantic_sqlmodel_type(base_type) else None


def strip_id_suffix(attribute_name: str) -> Optional[str]:
    """category_id -> category"""
    if attribute_name.endswith("_id") and len(attribute_name) > 3:
        return attribute_name[:-3]
    return None


def normalize_choices(collection: Any) -> List[Tuple[Any, str]]:
    """
    Приводит опцию `collection` к списку пар (value, label).
    Поддерживаются: список пар, список скаляров, словарь value -> label и Enum-класс.
    """
    if collection is None:
        return []
    if inspect.isclass(collection) and issubclass(collection, Enum):
        return [(member.value, member.name) for member in collection]
    if isinstance(collection, Mapping):
        return [(value, str(label)) for value, label in collection.items()]
    choices: List[Tuple[Any, str]] = []
    for item in collection:
        if isinstance(item, (tuple, list)) and len(item) == 2:
            choices.append((item[0], str(item[1])))
        else:
            choices.append((item, str(item)))
    return choices
