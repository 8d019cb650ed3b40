"""Runtime configuration for the weather page.

The only setting is the OpenWeatherMap API key. It is read from the
OPENWEATHER_API_KEY environment variable or, when that is not set, from the AWS
SSM Parameter Store SecureString named by OPENWEATHER_API_KEY_PARAMETER.
"""
import os
from typing import Optional

import boto3
from botocore.exceptions import ClientError

API_KEY_ENV_VAR = "OPENWEATHER_API_KEY"
API_KEY_PARAMETER_ENV_VAR = "OPENWEATHER_API_KEY_PARAMETER"


class ConfigurationError(Exception):
    """Raised when the deployment is missing a required setting."""
    pass


def get_api_key_from_parameter_store(parameter_name: str, ssm_client=None) -> str:
    """Reads and decrypts the API key stored in SSM Parameter Store.

        Args:
            parameter_name: Name of the SecureString parameter.
            ssm_client: Optional boto3 SSM client. A new one is created when omitted.

        Raises:
            ConfigurationError: If the parameter cannot be read.
    """
    if ssm_client is None:
        ssm_client = boto3.client("ssm")

    try:
        response = ssm_client.get_parameter(Name=parameter_name, WithDecryption=True)
    except ClientError as e:
        raise ConfigurationError(f"Could not read API key parameter {parameter_name!r}: {e}") from e

    return response["Parameter"]["Value"]


def load_api_key(ssm_client=None) -> str:
    """Resolves the OpenWeatherMap API key from the environment or Parameter Store.

        Raises:
            ConfigurationError: If neither source provides a key.
    """
    api_key: Optional[str] = os.getenv(API_KEY_ENV_VAR)
    if api_key:
        return api_key

    parameter_name = os.getenv(API_KEY_PARAMETER_ENV_VAR)
    if parameter_name:
        return get_api_key_from_parameter_store(parameter_name, ssm_client)

    raise ConfigurationError(f"Set {API_KEY_ENV_VAR} or {API_KEY_PARAMETER_ENV_VAR} to provide an API key")
