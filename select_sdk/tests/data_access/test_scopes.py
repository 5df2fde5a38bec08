# select_sdk/tests/data_access/test_scopes.py
from types import SimpleNamespace
from unittest import mock

import pytest
from sqlmodel import Session, select

from select_sdk.data_access.scopes import (
    QueryableSet,
    RecordListScope,
    SQLModelScope,
    as_queryable,
    call_with_supported_args,
    record_identity,
)
from select_sdk.exceptions import ConfigurationError
from select_sdk.frontend.context import ViewContext
from select_sdk.tests.conftest import SelBrand, SelCategory


def test_record_list_scope(categories):
    scope = RecordListScope(categories)
    assert scope.find_by_id(8).name == "Music"
    assert scope.find_by_id("9").name == "Games"
    assert scope.find_by_id(100) is None
    assert len(scope) == 3


def test_record_list_scope_custom_identity():
    rows = [SimpleNamespace(code="RU", name="Russia"), SimpleNamespace(code="DE", name="Germany")]
    assert RecordListScope(rows, identity_attribute="code").find_by_id("DE").name == "Germany"


def test_record_identity():
    assert record_identity(SelCategory(id=5, name="X")) == 5
    assert record_identity(SelBrand(id=3, title="Acme")) == 3
    assert record_identity(SimpleNamespace(id="abc")) == "abc"


def test_sqlmodel_scope_finds_by_primary_key(db_session: Session):
    scope = SQLModelScope(select(SelCategory), db_session)
    assert scope.entity_cls is SelCategory
    assert scope.find_by_id(7).name == "Books"
    assert scope.find_by_id(99) is None


def test_sqlmodel_scope_keeps_statement_filters(db_session: Session):
    scope = SQLModelScope(select(SelCategory).where(SelCategory.status == "enabled"), db_session)
    assert scope.find_by_id(7) is not None
    assert scope.find_by_id(8) is None


def test_as_queryable_variants(categories, db_session: Session):
    custom = mock.Mock(spec=["find_by_id"])
    assert as_queryable(custom) is custom
    assert isinstance(as_queryable(categories), RecordListScope)
    assert isinstance(as_queryable(tuple(categories)), RecordListScope)
    sql_scope = as_queryable(select(SelCategory), ViewContext(session=db_session))
    assert isinstance(sql_scope, SQLModelScope)
    assert isinstance(sql_scope, QueryableSet)


def test_as_queryable_rejects_unknown(categories):
    with pytest.raises(ConfigurationError, match="unsupported value"):
        as_queryable({"id": 1})


def test_as_queryable_select_requires_session():
    with pytest.raises(ConfigurationError, match="no database session"):
        as_queryable(select(SelCategory), ViewContext())


def test_call_with_supported_args():
    assert call_with_supported_args(lambda: "none", 1, 2) == "none"
    assert call_with_supported_args(lambda a: a, 1, 2) == 1
    assert call_with_supported_args(lambda a, b: (a, b), 1, 2) == (1, 2)
    assert call_with_supported_args(lambda *args: args, 1, 2) == (1, 2)
    assert call_with_supported_args(lambda a, *, key=None: (a, key), 1, 2) == (1, None)
