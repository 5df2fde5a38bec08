# select_sdk/tests/frontend/test_dependencies.py
import pytest
from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse
from fastapi.testclient import TestClient

from select_sdk.exceptions import ConfigurationError
from select_sdk.frontend.context import FieldContext
from select_sdk.frontend.dependencies import get_resource_registry, install_registry
from select_sdk.frontend.field import build_select_input
from select_sdk.registry import ResourceRegistry
from select_sdk.tests.conftest import SelPost


def _make_app() -> FastAPI:
    app = FastAPI()

    @app.get("/posts/{category_id}/edit", response_class=HTMLResponse)
    def edit_post(category_id: int, registry: ResourceRegistry = Depends(get_resource_registry)):
        field_ctx = FieldContext("category_id", {"ajax": True}, SelPost(category_id=category_id), settings=registry.settings)
        return build_select_input(field_ctx, registry).render()

    return app


def test_installed_registry_is_injected(registry: ResourceRegistry):
    app = _make_app()
    install_registry(app, registry)
    client = TestClient(app)

    response = client.get("/posts/7/edit")
    assert response.status_code == 200
    assert 'data-ajax-url="/admin/categories/all_options"' in response.text
    assert ">Books</option>" in response.text


def test_missing_registry_is_configuration_error():
    client = TestClient(_make_app(), raise_server_exceptions=True)
    with pytest.raises(ConfigurationError, match="install_registry"):
        client.get("/posts/7/edit")
