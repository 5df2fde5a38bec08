# select_sdk/frontend/relationships.py
import logging
from typing import Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import MANYTOONE, Mapper

from select_sdk.schemas import RelationshipDescriptor

from .utils import related_model_from_annotation, strip_id_suffix

logger = logging.getLogger("select_sdk.frontend.relationships")


@runtime_checkable
class RelationshipMetadataResolver(Protocol):
    def relationship_for(self, entity_type: type, attribute_name: str) -> Optional[RelationshipDescriptor]: ...


class ModelRelationshipResolver:
    """
    Определяет связь "принадлежит" (belongs-to) по метаданным модели.

    Для SQLModel-таблиц используется маппер SQLAlchemy:
      1. many-to-one связь с именем атрибута или имени без суффикса `_id`;
      2. many-to-one связь, у которой атрибут - локальная колонка;
      3. внешний ключ колонки, если целевая таблица замаплена.
    Для прочих Pydantic-моделей - аннотация поля `category` для атрибута `category_id`.
    """

    def relationship_for(self, entity_type: type, attribute_name: str) -> Optional[RelationshipDescriptor]:
        mapper = self._mapper_for(entity_type)
        if mapper is not None:
            descriptor = self._from_mapper(mapper, attribute_name)
            if descriptor is not None:
                return descriptor
        return self._from_annotations(entity_type, attribute_name)

    @staticmethod
    def _mapper_for(entity_type: type) -> Optional[Mapper]:
        try:
            return sa_inspect(entity_type)
        except NoInspectionAvailable:
            return None

    def _from_mapper(self, mapper: Mapper, attribute_name: str) -> Optional[RelationshipDescriptor]:
        relationships = mapper.relationships
        for name in filter(None, (attribute_name, strip_id_suffix(attribute_name))):
            if name in relationships and relationships[name].direction is MANYTOONE:
                rel = relationships[name]
                local = [col.key for col in rel.local_columns]
                return RelationshipDescriptor(
                    name=rel.key,
                    target=rel.mapper.class_,
                    foreign_key=local[0] if local else None,
                )

        for rel in relationships:
            if rel.direction is MANYTOONE and any(col.key == attribute_name for col in rel.local_columns):
                return RelationshipDescriptor(name=rel.key, target=rel.mapper.class_, foreign_key=attribute_name)

        if attribute_name in mapper.columns:
            column = mapper.columns[attribute_name]
            for fk in column.foreign_keys:
                target_table = fk.column.table
                target_mapper = next(
                    (m for m in mapper.registry.mappers if m.local_table is target_table), None
                )
                if target_mapper is not None:
                    return RelationshipDescriptor(
                        name=strip_id_suffix(attribute_name) or attribute_name,
                        target=target_mapper.class_,
                        foreign_key=attribute_name,
                    )
                logger.debug(
                    f"Foreign key {fk.target_fullname} of '{mapper.class_.__name__}.{attribute_name}' "
                    "points to an unmapped table."
                )
        return None

    def _from_annotations(self, entity_type: type, attribute_name: str) -> Optional[RelationshipDescriptor]:
        if not (isinstance(entity_type, type) and issubclass(entity_type, PydanticBaseModel)):
            return None
        fields = entity_type.model_fields
        for name in filter(None, (strip_id_suffix(attribute_name), attribute_name)):
            field_info = fields.get(name)
            if field_info is None:
                continue
            target = related_model_from_annotation(field_info.annotation)
            if target is not None:
                return RelationshipDescriptor(
                    name=name,
                    target=target,
                    foreign_key=attribute_name if name != attribute_name else None,
                )
        return None


class StaticRelationshipResolver:
    """Явно объявленные связи: {(EntityType, "attribute"): TargetType}."""

    def __init__(self, relationships: Optional[Mapping[Tuple[type, str], type]] = None):
        self._relationships: Dict[Tuple[type, str], type] = dict(relationships or {})

    def declare(self, entity_type: type, attribute_name: str, target: type) -> None:
        self._relationships[(entity_type, attribute_name)] = target

    def relationship_for(self, entity_type: type, attribute_name: str) -> Optional[RelationshipDescriptor]:
        target = self._relationships.get((entity_type, attribute_name))
        if target is None:
            return None
        return RelationshipDescriptor(
            name=strip_id_suffix(attribute_name) or attribute_name,
            target=target,
            foreign_key=attribute_name,
        )
