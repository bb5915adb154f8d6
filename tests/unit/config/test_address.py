"""resolve_address: param, environment, settings fallback; trailing slash; missing address."""

import pytest

from okta_suspend.config.address import resolve_address
from okta_suspend.domain.exceptions import AddressConfigurationError
from okta_suspend.domain.schemas import ActionContext


def test_param_wins():
    context = ActionContext(environment={"ADDRESS": "https://env.okta.com"})
    assert resolve_address({"address": "https://param.okta.com"}, context, "https://default.okta.com") == "https://param.okta.com"


def test_environment_fallback():
    context = ActionContext(environment={"ADDRESS": "https://env.okta.com"})
    assert resolve_address({}, context, "https://default.okta.com") == "https://env.okta.com"


def test_settings_fallback():
    assert resolve_address({}, ActionContext(), "https://default.okta.com") == "https://default.okta.com"


def test_trailing_slashes_stripped():
    assert resolve_address({"address": "https://example.okta.com//"}, ActionContext()) == "https://example.okta.com"


def test_missing_address():
    with pytest.raises(AddressConfigurationError) as exc_info:
        resolve_address({}, ActionContext())
    assert exc_info.value.message == "No URL specified. Provide address parameter or ADDRESS environment variable"
