# select_sdk/data_access/scopes.py
import inspect
import logging
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable

from sqlalchemy import Select, inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlmodel import Session

from select_sdk.exceptions import ConfigurationError

logger = logging.getLogger("select_sdk.data_access.scopes")


@runtime_checkable
class QueryableSet(Protocol):
    """Набор записей, в котором можно найти одну запись по первичному ключу."""

    def find_by_id(self, value: Any) -> Optional[Any]: ...


def _primary_key_attribute(entity_cls: Any) -> str:
    try:
        mapper = sa_inspect(entity_cls)
    except NoInspectionAvailable:
        return "id"
    pk_columns = mapper.primary_key
    if not pk_columns:
        return "id"
    return mapper.get_property_by_column(pk_columns[0]).key


def record_identity(record: Any) -> Any:
    """Первичный ключ записи: колонка PK для SQLModel-таблиц, иначе атрибут `id`."""
    return getattr(record, _primary_key_attribute(type(record)), None)


def same_identity(left: Any, right: Any) -> bool:
    # Значения из формы приходят строками: "7" == 7
    if left == right:
        return True
    return left is not None and right is not None and str(left) == str(right)


class RecordListScope:
    """Скоуп поверх уже загруженного списка записей."""

    def __init__(self, records: Sequence[Any], identity_attribute: Optional[str] = None):
        self.records = list(records)
        self.identity_attribute = identity_attribute

    def _identity(self, record: Any) -> Any:
        if self.identity_attribute:
            return getattr(record, self.identity_attribute, None)
        return record_identity(record)

    def find_by_id(self, value: Any) -> Optional[Any]:
        return next((r for r in self.records if same_identity(self._identity(r), value)), None)

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


class SQLModelScope:
    """Скоуп поверх select()-выражения, исполняемого в синхронной сессии."""

    def __init__(self, statement: Select, session: Session):
        self.statement = statement
        self.session = session

    @property
    def entity_cls(self) -> Any:
        descriptions = self.statement.column_descriptions
        entity = descriptions[0].get("entity") if descriptions else None
        if entity is None:
            raise ConfigurationError(
                "Option collection scope must select a mapped entity, "
                f"got statement selecting {[d.get('name') for d in descriptions]}."
            )
        return entity

    def find_by_id(self, value: Any) -> Optional[Any]:
        entity_cls = self.entity_cls
        pk_attr = getattr(entity_cls, _primary_key_attribute(entity_cls))
        logger.debug(f"SQLModelScope: looking up {entity_cls.__name__} by primary key {value!r}")
        return self.session.scalars(self.statement.where(pk_attr == value)).first()


def call_with_supported_args(func: Callable[..., Any], *args: Any) -> Any:
    """
    Вызывает func только с теми позиционными аргументами, которые она принимает:
    `lambda: ...`, `lambda context: ...` и `lambda context, params: ...` равноправны.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return func(*args)
    parameters = list(signature.parameters.values())
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
        return func(*args)
    positional = [
        p for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    return func(*args[: len(positional)])


def as_queryable(scope_result: Any, context: Any = None) -> QueryableSet:
    """Приводит результат скоупа коллекции к QueryableSet."""
    if isinstance(scope_result, QueryableSet):
        return scope_result
    if isinstance(scope_result, Select):
        session = getattr(context, "session", None)
        if session is None:
            raise ConfigurationError(
                "Option collection scope returned a select() statement, "
                "but the view context carries no database session to execute it."
            )
        return SQLModelScope(scope_result, session)
    if isinstance(scope_result, (list, tuple)):
        return RecordListScope(scope_result)
    raise ConfigurationError(
        f"Option collection scope returned unsupported value of type '{type(scope_result).__name__}'. "
        "Expected a select() statement, a list of records or an object with find_by_id()."
    )
