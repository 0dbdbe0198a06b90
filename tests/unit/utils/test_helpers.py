"""Unit tests for helper functions in helpers.py.

Test coverage includes:

1. base_url() correct extraction
   - 1.1. Ensures URLs include the stage (e.g., `/Prod`) when invoked via AWS.
   - 1.2. Ensures URLs do NOT include stage information for clean public links.
   - 1.3. Confirms a proper localhost fallback is returned when no domain is present.

2. get_short_url() retrieves short URL string representation

3. request_id() and get_header() event accessors

4. check_basic_auth() credential verification
   - 4.1. Accepts matching credentials regardless of header casing.
   - 4.2. Rejects missing, malformed or wrong credentials.

5. require_environment() decorator behavior
   - 5.1. Ensures decorated functions execute when all env vars are present.
   - 5.2. Ensures missing or empty env vars raise a descriptive error.

6. guarantee_500_response() decorator behavior
"""

import json
import base64

import pytest

from linkalias.exceptions import MissingEnvironmentVariableError
from linkalias.utils.helpers import (
    base_url,
    get_short_url,
    request_id,
    get_header,
    check_basic_auth,
    require_environment,
    guarantee_500_response,
)


def _basic(credentials: str) -> str:
    return 'Basic ' + base64.b64encode(credentials.encode('utf-8')).decode('ascii')


# -------------------------------
# 1.1. AWS default domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Dev', 'https://abc123.execute-api.us-east-1.amazonaws.com/Dev'),
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Prod', 'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'),
    ],
)
def test_base_url_with_aws_domain(domain, stage, expected):
    """Ensure base_url() appends stage for default AWS execute-api domains."""
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.2. Custom domain handling
# -------------------------------


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('sho.rt', 'Dev', 'https://sho.rt'),
        ('example.com', 'Prod', 'https://example.com'),
    ],
)
def test_base_url_with_custom_domain(domain, stage, expected):
    """Ensure base_url() excludes stage for custom user-defined domains."""
    event = {'requestContext': {'domainName': domain, 'stage': stage}}
    assert base_url(event) == expected


# -------------------------------
# 1.3. Local fallback behavior
# -------------------------------


@pytest.mark.parametrize('event', [{}, {'requestContext': {}}, {'requestContext': {'stage': 'Dev'}}])
def test_base_url_local_fallback(event):
    """Ensure base_url() returns localhost URL when no domain is provided."""
    assert base_url(event) == 'http://localhost:3000'


# -------------------------------
# 2. Get short url string representation
# -------------------------------


@pytest.mark.parametrize(
    'alias, event, expected',
    [
        ('abc123', {'requestContext': {'domainName': 'sho.rt'}}, 'https://sho.rt/abc123'),
        ('ex1', {'requestContext': {'domainName': 'x.execute-api.aws.com', 'stage': 'Prod'}}, 'https://x.execute-api.aws.com/Prod/ex1'),
        ('ex1', {}, 'http://localhost:3000/ex1'),
    ],
)
def test_get_short_url(alias, event, expected):
    assert get_short_url(alias, event) == expected


# -------------------------------
# 3. Event accessors
# -------------------------------


def test_request_id():
    assert request_id({'requestContext': {'requestId': 'req-1'}}) == 'req-1'
    assert request_id({'requestContext': None}) is None
    assert request_id({}) is None


def test_get_header_is_case_insensitive():
    event = {'headers': {'content-type': 'application/json', 'Authorization': 'Basic abc'}}

    assert get_header(event, 'Content-Type') == 'application/json'
    assert get_header(event, 'authorization') == 'Basic abc'
    assert get_header(event, 'X-Missing') is None
    assert get_header({'headers': None}, 'Authorization') is None


# -------------------------------
# 4.1. check_basic_auth() happy path
# -------------------------------


@pytest.mark.parametrize('header_name', ['Authorization', 'authorization', 'AUTHORIZATION'])
def test_check_basic_auth_accepts_valid_credentials(header_name):
    event = {'headers': {header_name: _basic('admin:s3cret')}}
    assert check_basic_auth(event, 'admin', 's3cret') is True


def test_check_basic_auth_accepts_colon_in_password():
    event = {'headers': {'Authorization': _basic('admin:pa:ss')}}
    assert check_basic_auth(event, 'admin', 'pa:ss') is True


# -------------------------------
# 4.2. check_basic_auth() rejections
# -------------------------------


@pytest.mark.parametrize(
    'headers',
    [
        None,
        {},
        {'Authorization': ''},
        {'Authorization': 'Bearer abc'},
        {'Authorization': 'Basic'},
        {'Authorization': 'Basic not-base64!'},
        {'Authorization': _basic('admin')},
        {'Authorization': _basic('admin:wrong')},
        {'Authorization': _basic('root:s3cret')},
        {'Authorization': 'Basic ' + base64.b64encode(b'\xff\xfe:x').decode('ascii')},
    ],
)
def test_check_basic_auth_rejects_invalid_credentials(headers):
    assert check_basic_auth({'headers': headers}, 'admin', 's3cret') is False


# -------------------------------
# 5.1. require_environment() happy path
# -------------------------------


def test_require_environment_happy_path(monkeypatch):
    """5.1. Decorated function executes when all env vars are present."""
    monkeypatch.setenv('ENV1', 'value1')
    monkeypatch.setenv('ENV2', 'value2')

    @require_environment('ENV1', 'ENV2')
    def sample_function(x: int) -> int:
        return x + 1

    assert sample_function(1) == 2


# -------------------------------
# 5.2. require_environment() missing or empty env vars
# -------------------------------


@pytest.mark.parametrize(
    'env_setup, missing_names',
    [
        ({'ENV1': None, 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': '', 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': None, 'ENV2': None}, ["'ENV1'", "'ENV2'"]),
    ],
)
def test_require_environment_missing_or_empty(monkeypatch, env_setup, missing_names):
    """5.2. Missing or empty env vars raise a descriptive MissingEnvironmentVariableError."""
    for name, value in env_setup.items():
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    @require_environment('ENV1', 'ENV2')
    def sample_function() -> None:
        pass

    expected_message = f'Missing required environment variables: {", ".join(missing_names)}'
    with pytest.raises(MissingEnvironmentVariableError, match=expected_message):
        sample_function()


def test_missing_environment_variable_error_is_key_error():
    assert issubclass(MissingEnvironmentVariableError, KeyError)


# -------------------------------
# 6. guarantee_500_response() behavior
# -------------------------------


def test_guarantee_500_response(monkeypatch):
    """6.1. Faulty lambda handler returns 500 response when not running locally."""
    monkeypatch.setattr('linkalias.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    response = faulty_lambda_handler({'requestContext': {'requestId': 'req-1'}}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert body == {'message': 'Internal Server Error', 'error_code': 'UNKNOWN_INTERNAL_SERVER_ERROR'}
    assert 'boom' not in response['body']


def test_guarantee_500_response_reraises_when_running_locally(monkeypatch):
    """6.2. Faulty lambda handler reraises the original exception when running locally."""
    monkeypatch.setattr('linkalias.utils.helpers.running_locally', lambda: True)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        faulty_lambda_handler({}, None)


def test_guarantee_500_response_passes_through_responses():
    """6.3. Healthy handlers' responses are returned untouched."""

    @guarantee_500_response
    def lambda_handler(event, context):
        """Docstring."""
        return {'statusCode': 200, 'body': '{}'}

    assert lambda_handler({}, None) == {'statusCode': 200, 'body': '{}'}
    assert lambda_handler.__name__ == 'lambda_handler'
