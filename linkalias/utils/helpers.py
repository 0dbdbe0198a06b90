"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given alias
    request_id() -> str | None
        Extract the API Gateway request id used for log correlation
    get_header() -> str | None
        Case-insensitive lookup of a request header
    check_basic_auth() -> bool
        Verify HTTP basic auth credentials of a request
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from linkalias.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import hmac
import json
import base64
import binascii
import functools
import logging
from typing import Any
from collections.abc import Callable

from linkalias.exceptions import MissingEnvironmentVariableError
from linkalias.utils.runtime import running_locally
from linkalias.utils.constants import UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    Works with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(alias: str, event: dict[str, Any]) -> str:
    """Get string representation of shortened URL

    Args:
        alias (str): alias
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: short url string representation
    """
    return f'{base_url(event).rstrip("/")}/{alias}'


def request_id(event: dict[str, Any]) -> str | None:
    """Return the API Gateway request id of an event (None for direct invocations)."""
    return (event.get('requestContext') or {}).get('requestId')


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive lookup of a request header

    API Gateway preserves client header casing, so 'authorization' and
    'Authorization' must be treated alike.
    """
    headers = event.get('headers') or {}
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def check_basic_auth(event: dict[str, Any], user: str, password: str) -> bool:
    """Verify the HTTP basic auth credentials of a request

    Args:
        event (dict): API Gateway event object passed to Lambda handler
        user (str): expected user name
        password (str): expected password

    Returns:
        bool: True if the Authorization header carries exactly these credentials.

    Example:
        >>> token = base64.b64encode(b'admin:secret').decode()
        >>> check_basic_auth({'headers': {'Authorization': f'Basic {token}'}}, 'admin', 'secret')
        True
    """
    header = get_header(event, 'Authorization')
    if not header:
        return False

    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'basic' or not token:
        return False

    try:
        decoded = base64.b64decode(token.strip(), validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return False

    given_user, sep, given_password = decoded.partition(':')
    if not sep:
        return False

    # both comparisons always run
    user_ok = hmac.compare_digest(given_user.encode('utf-8'), user.encode('utf-8'))
    password_ok = hmac.compare_digest(given_password.encode('utf-8'), password.encode('utf-8'))
    return user_ok and password_ok


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: "Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'"
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: turn unexpected handler exceptions into a 500 response

    No single request may take the process down. Any exception escaping the
    handler is logged with its traceback and answered with a generic 500.
    When running locally the exception is re-raised instead, to keep
    tracebacks visible during development.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event, context):
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in handler. Responding with 500.',
                extra={'op': handler.__module__, 'request_id': request_id(event or {})},
            )
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
