import pytest

from drmtoday_callback import ConfigurationError, DrmtodayEnvironment, SessionConfig


VALID = dict(
    drmtoday_url="https://lic.staging.drmtoday.com",
    merchant="client_dev",
    user_id="purchase",
    session_id="p0",
)


def test_valid_configuration_is_accepted():
    config = SessionConfig(**VALID)
    config.validate()
    assert config.is_valid


def test_optional_fields_are_not_required():
    config = SessionConfig(**VALID, auth_token=None, asset_id=None)
    config.validate()
    assert not config.has_auth_token
    assert not config.has_asset_id


@pytest.mark.parametrize("field", ["drmtoday_url", "merchant", "user_id", "session_id"])
@pytest.mark.parametrize("missing_value", [None, ""])
def test_missing_mandatory_field_is_rejected(field, missing_value):
    values = dict(VALID)
    values[field] = missing_value
    config = SessionConfig(**values)

    with pytest.raises(ConfigurationError) as exc_info:
        config.validate()

    assert exc_info.value.field == field
    assert not config.is_valid


def test_first_missing_field_is_reported():
    config = SessionConfig(drmtoday_url="https://lic.drmtoday.com", merchant=None, user_id=None, session_id=None)
    with pytest.raises(ConfigurationError, match="merchant") as exc_info:
        config.validate()
    assert exc_info.value.field == "merchant"


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        SessionConfig(None, None, None, None).validate()


def test_empty_asset_id_counts_as_absent():
    assert not SessionConfig(**VALID, asset_id="").has_asset_id
    assert SessionConfig(**VALID, asset_id="asset-1").has_asset_id


def test_config_is_immutable():
    config = SessionConfig(**VALID)
    with pytest.raises(AttributeError):
        config.merchant = "other"


@pytest.mark.parametrize("name, url", [
    ("production", "https://lic.drmtoday.com"),
    ("STAGING", "https://lic.staging.drmtoday.com"),
    ("test", "https://lic.test.drmtoday.com"),
    ("https://licensing.example.com/base", "https://licensing.example.com/base"),
])
def test_environment_resolution(name, url):
    assert DrmtodayEnvironment.resolve_url(name) == url


def test_environment_member_resolves_to_its_url():
    assert DrmtodayEnvironment.resolve_url(DrmtodayEnvironment.TEST) == "https://lic.test.drmtoday.com"


def test_to_dict_masks_auth_token():
    config = SessionConfig(**VALID, auth_token="secret")
    assert config.to_dict()["auth_token"] == "***"
    assert config.to_dict(mask_secrets=False)["auth_token"] == "secret"


def test_from_dict_accepts_environment_name():
    config = SessionConfig.from_dict({
        "environment": "staging",
        "merchant": "client_dev",
        "user_id": "purchase",
        "session_id": "p0",
        "asset_id": "",
    })
    assert config.drmtoday_url == "https://lic.staging.drmtoday.com"
    assert config.asset_id is None
    assert config.is_valid


def test_from_environment_reads_settings(make_environment):
    env = make_environment(
        drmtoday_environment="test",
        merchant="client_dev",
        user_id="purchase",
        session_id="p0",
        auth_token="token",
    )
    config = SessionConfig.from_environment(env)

    assert config == SessionConfig(
        drmtoday_url="https://lic.test.drmtoday.com",
        merchant="client_dev",
        user_id="purchase",
        session_id="p0",
        auth_token="token",
        asset_id=None,
    )


def test_from_environment_defaults_to_production(make_environment):
    config = SessionConfig.from_environment(make_environment())
    assert config.drmtoday_url == "https://lic.drmtoday.com"
    assert not config.is_valid
