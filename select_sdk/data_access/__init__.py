# select_sdk/data_access/__init__.py
from .scopes import (
    QueryableSet,
    RecordListScope,
    SQLModelScope,
    as_queryable,
    call_with_supported_args,
    record_identity,
)

__all__ = [
    "QueryableSet",
    "RecordListScope",
    "SQLModelScope",
    "as_queryable",
    "call_with_supported_args",
    "record_identity",
]
