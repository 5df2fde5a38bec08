# select_sdk/tests/frontend/test_ajax_config.py
import pytest
from pydantic import ValidationError

from select_sdk.exceptions import ConfigurationError
from select_sdk.frontend.ajax_config import interpret
from select_sdk.schemas import AjaxConfig
from select_sdk.tests.conftest import SelCategory


@pytest.mark.parametrize("raw_options", [{}, {"ajax": False}, {"ajax": None}, {"collection": [1, 2]}])
def test_not_ajax_backed(raw_options):
    assert interpret(raw_options) is None


def test_true_gives_defaults():
    config = interpret({"ajax": True})
    assert config == AjaxConfig(resource_class=None, collection_name="all", params={})


def test_true_uses_configured_default_collection_name():
    assert interpret({"ajax": True}, default_collection_name="everything").collection_name == "everything"


def test_empty_mapping_is_still_ajax():
    assert interpret({"ajax": {}}) == AjaxConfig()


def test_mapping_is_copied_verbatim():
    config = interpret({
        "ajax": {"resource": SelCategory, "collection_name": "active", "params": {"status": "enabled"}},
        "collection": [("ignored", "Ignored")],
    })
    assert config.resource_class is SelCategory
    assert config.collection_name == "active"
    assert config.params == {"status": "enabled"}


def test_unknown_keys_are_ignored(caplog):
    caplog.set_level("DEBUG", logger="select_sdk.frontend.ajax_config")
    config = interpret({"ajax": {"collection_name": "active", "per_page": 20}})
    assert config.collection_name == "active"
    assert "per_page" in caplog.text


def test_unknown_keys_rejected_in_strict_mode():
    with pytest.raises(ConfigurationError, match="per_page"):
        interpret({"ajax": {"per_page": 20}}, strict=True)


def test_config_instance_passes_through():
    config = AjaxConfig(collection_name="active")
    assert interpret({"ajax": config}) is config


def test_config_is_immutable():
    config = interpret({"ajax": True})
    with pytest.raises(ValidationError):
        config.collection_name = "other"


@pytest.mark.parametrize(
    "ajax",
    [
        "yes",
        {"params": ["status", "enabled"]},
        {"collection_name": None},
        {"resource": "Category"},
    ],
)
def test_malformed_ajax_option(ajax):
    with pytest.raises(ConfigurationError):
        interpret({"ajax": ajax})


def test_interpret_does_not_mutate_input():
    params = {"status": "enabled"}
    raw = {"ajax": {"params": params}}
    config = interpret(raw)
    assert config.params is not params
    assert raw == {"ajax": {"params": {"status": "enabled"}}}


def test_params_are_read_only():
    config = interpret({"ajax": {"params": {"a": 1}}})
    with pytest.raises(TypeError):
        config.params["b"] = 2
    assert config.params == {"a": 1}


def test_default_params_are_read_only():
    with pytest.raises(TypeError):
        AjaxConfig().params["a"] = 1
