"""Tests for API key resolution from the environment and SSM Parameter Store."""
import boto3
import pytest
from botocore.stub import Stubber

from config import ConfigurationError, get_api_key_from_parameter_store, load_api_key


@pytest.fixture
def ssm_client():
    """An SSM client with dummy credentials, meant to be wrapped in a Stubber."""
    return boto3.client("ssm", region_name="us-east-1",
                        aws_access_key_id="testing", aws_secret_access_key="testing")


@pytest.fixture(autouse=True)
def clear_api_key_env(monkeypatch):
    """Start every test without API key settings in the environment."""
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    monkeypatch.delenv("OPENWEATHER_API_KEY_PARAMETER", raising=False)


def test_environment_variable_wins(monkeypatch):
    """OPENWEATHER_API_KEY takes precedence over the Parameter Store setting."""
    monkeypatch.setenv("OPENWEATHER_API_KEY", "from-env")
    monkeypatch.setenv("OPENWEATHER_API_KEY_PARAMETER", "/weather/api-key")

    assert load_api_key() == "from-env"


def test_parameter_store_is_used_when_env_var_missing(monkeypatch, ssm_client):
    """The SecureString named by OPENWEATHER_API_KEY_PARAMETER is read with decryption."""
    monkeypatch.setenv("OPENWEATHER_API_KEY_PARAMETER", "/weather/api-key")

    with Stubber(ssm_client) as stubber:
        stubber.add_response(
            "get_parameter",
            {"Parameter": {"Name": "/weather/api-key", "Type": "SecureString", "Value": "from-ssm"}},
            {"Name": "/weather/api-key", "WithDecryption": True},
        )
        assert load_api_key(ssm_client) == "from-ssm"
        stubber.assert_no_pending_responses()


def test_parameter_store_error_becomes_configuration_error(ssm_client):
    """An SSM ClientError is reported as ConfigurationError."""
    with Stubber(ssm_client) as stubber:
        stubber.add_client_error("get_parameter", service_error_code="ParameterNotFound")

        with pytest.raises(ConfigurationError):
            get_api_key_from_parameter_store("/weather/missing", ssm_client)


def test_missing_configuration_raises():
    """With neither setting present the key cannot be resolved."""
    with pytest.raises(ConfigurationError):
        load_api_key()
