# select_sdk/tests/conftest.py
import logging
from typing import Any, Generator, List, Optional

import pytest
from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.pool import StaticPool
from sqlmodel import Field as SQLModelField, Relationship, Session, SQLModel, create_engine

from select_sdk.config import SelectSDKSettings
from select_sdk.frontend.context import FieldContext, ViewContext
from select_sdk.frontend.templating import reset_templates
from select_sdk.registry import ResourceRegistry

logger = logging.getLogger("select_sdk.tests.conftest")


# --- Модели для тестов ---

class SelCategory(SQLModel, table=True):
    __tablename__ = "select_sdk_test_categories"
    __table_args__ = {"extend_existing": True}
    id: Optional[int] = SQLModelField(default=None, primary_key=True)
    name: str
    status: str = "enabled"


class SelUser(SQLModel, table=True):
    __tablename__ = "select_sdk_test_users"
    __table_args__ = {"extend_existing": True}
    id: Optional[int] = SQLModelField(default=None, primary_key=True)
    email: str


class SelPost(SQLModel, table=True):
    __tablename__ = "select_sdk_test_posts"
    __table_args__ = {"extend_existing": True}
    id: Optional[int] = SQLModelField(default=None, primary_key=True)
    title: str = ""
    # belongs-to со связью
    category_id: Optional[int] = SQLModelField(default=None, foreign_key="select_sdk_test_categories.id")
    category: Optional[SelCategory] = Relationship()
    # только внешний ключ, без связи
    author_id: Optional[int] = SQLModelField(default=None, foreign_key="select_sdk_test_users.id")
    # связь, имя которой не совпадает с колонкой
    reviewer_id: Optional[int] = SQLModelField(default=None, foreign_key="select_sdk_test_users.id")
    reviewer_account: Optional[SelUser] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[SelPost.reviewer_id]"}
    )
    # просто колонка, ресурс не определить
    custom_category_id: Optional[int] = None


class SelBrand(PydanticBaseModel):
    id: int
    title: str


class SelProductForm(PydanticBaseModel):
    brand_id: Optional[int] = None
    brand: Optional[SelBrand] = None
    color: Optional[str] = None


# --- Фикстуры ---

@pytest.fixture
def test_settings() -> SelectSDKSettings:
    return SelectSDKSettings(ADMIN_NAMESPACE="admin", STRICT_AJAX_OPTIONS=False)


@pytest.fixture
def categories() -> List[SelCategory]:
    return [
        SelCategory(id=7, name="Books", status="enabled"),
        SelCategory(id=8, name="Music", status="disabled"),
        SelCategory(id=9, name="Games", status="enabled"),
    ]


@pytest.fixture
def users() -> List[SelUser]:
    return [SelUser(id=1, email="ann@example.com"), SelUser(id=2, email="bob@example.com")]


@pytest.fixture
def brands() -> List[SelBrand]:
    return [SelBrand(id=3, title="Acme")]


@pytest.fixture
def registry(
    test_settings: SelectSDKSettings,
    categories: List[SelCategory],
    users: List[SelUser],
    brands: List[SelBrand],
) -> ResourceRegistry:
    reg = ResourceRegistry(settings=test_settings)

    reg.register(SelCategory, plural_name="categories")
    reg.register_option_collection(
        SelCategory, name="all", scope=lambda context, params: categories, text_attribute="name"
    )
    reg.register_option_collection(
        SelCategory,
        name="active",
        scope=lambda context, params: [c for c in categories if c.status == params.get("status", "enabled")],
        display_text=lambda c: f"{c.name} ({c.status})",
    )

    reg.register(SelUser)
    reg.register_option_collection(SelUser, scope=lambda: users, text_attribute="email")

    reg.register(SelBrand)
    reg.register_option_collection(SelBrand, scope=brands, text_attribute="title")
    return reg


@pytest.fixture
def make_field_context(test_settings: SelectSDKSettings):
    def _make(attribute_name: str, raw_options: Optional[dict] = None, bound_object: Any = None, **kwargs: Any) -> FieldContext:
        kwargs.setdefault("settings", test_settings)
        return FieldContext(attribute_name, raw_options or {}, bound_object, **kwargs)
    return _make


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    logger.debug("SQLite test tables created.")
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    with Session(db_engine) as session:
        session.add_all([
            SelCategory(id=7, name="Books", status="enabled"),
            SelCategory(id=8, name="Music", status="disabled"),
        ])
        session.commit()
        yield session


@pytest.fixture
def view_context(db_session: Session) -> ViewContext:
    return ViewContext(session=db_session)


@pytest.fixture(autouse=True)
def reset_sdk_templates():
    reset_templates()
    yield
    reset_templates()
