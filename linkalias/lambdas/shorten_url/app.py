import json
import base64
import binascii
import logging

from linkalias.types import AppConfig, LambdaEvent, LambdaContext, LambdaResponse
from linkalias.dao.factory import short_link_dao
from linkalias.dao.exceptions import AliasConflictError, DataStoreError
from linkalias.exceptions import AliasAllocationError, BadConfigurationError, ConfigurationError, ValidationError
from linkalias.services import SaveService
from linkalias.utils import AliasGenerator, load_config, get_short_url, request_id, check_basic_auth, with_context
from linkalias.utils.helpers import guarantee_500_response
from linkalias.utils.constants import DEFAULT_ALIAS_LENGTH, DEFAULT_MAX_ALIAS_ATTEMPTS
from linkalias.lambdas.responses import response_200, response_400, response_401, response_409, response_500
from linkalias.lambdas.shorten_url.constants import (
    CONFIG_UNAVAILABLE,
    UNAUTHORIZED,
    EMPTY_REQUEST_BODY,
    INVALID_REQUEST_BODY,
    INVALID_REQUEST,
    STORAGE_UNAVAILABLE,
    ALIAS_ALREADY_EXISTS,
    ALIAS_ALLOCATION_FAILED,
    SAVE_FAILED,
    URL_ADDED,
    AUTH_REALM,
)


OP = 'lambdas.shorten_url.lambda_handler'

logger = logging.getLogger(__name__)


def _decode_body(event: LambdaEvent) -> str:
    body = event.get('body') or ''
    if body and event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return body


def _auth_credentials(app_config: AppConfig) -> tuple[str, str] | None:
    """Return the configured basic auth (user, password), or None when auth is off

    Raises:
        BadConfigurationError: If a password is configured without a user.
    """
    auth = app_config.get('auth') or {}
    user, password = auth.get('user'), auth.get('password')
    if not user:
        if password:
            raise BadConfigurationError('auth.password is set but auth.user is empty.')
        return None
    return str(user), str(password or '')


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Load the handler's configuration
    - Step 2: Check HTTP basic auth credentials (when configured)
    - Step 3: Decode the JSON request body
    - Step 4: Open the short link data store
    - Step 5: Save the mapping (caller's alias or a generated one)
    - Step 6: Respond to user with 200 success

    Request body:
        url: target URL to shorten (required)
        alias: desired alias (optional)

    HTTP responses:
        200: Successful URL shortening
            status: "OK"
            alias: allocated alias
            id: id of the new short link
            short_url: public URL of the new short link
        400: Bad client request
            message: empty body, malformed JSON or invalid url/alias
        401: Unauthorized
            missing or wrong basic auth credentials
        409: Conflict
            message: requested alias already exists
        500: Internal server error
            message: indicate the server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"url": "https://example.com", "alias": "ex1"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['alias']
        'ex1'
    """
    log = with_context(logger, op=OP, request_id=request_id(event))

    # 1- Get handler's config
    try:
        app_config = load_config('shorten_url')
    except (FileNotFoundError, ConfigurationError):
        log.exception('Failed to load config for shorten URL handler. Responding with 500.', extra={'event': CONFIG_UNAVAILABLE})
        return response_500()

    # 2- Check basic auth credentials
    try:
        credentials = _auth_credentials(app_config)
    except BadConfigurationError:
        log.exception('Invalid basic auth configuration. Responding with 500.', extra={'event': CONFIG_UNAVAILABLE})
        return response_500()

    if credentials is not None and not check_basic_auth(event, *credentials):
        log.info('Missing or invalid basic auth credentials. Responding with 401.', extra={'event': UNAUTHORIZED})
        return response_401(realm=AUTH_REALM, error_code=UNAUTHORIZED)

    # 3- Decode request body
    try:
        raw_body = _decode_body(event)
    except (binascii.Error, UnicodeDecodeError):
        log.info('Failed to decode request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400(message='failed to decode request', error_code=INVALID_REQUEST_BODY)

    if not raw_body.strip():
        log.info('Request body is empty. Responding with 400.', extra={'event': EMPTY_REQUEST_BODY})
        return response_400(message='request body is empty', error_code=EMPTY_REQUEST_BODY)

    try:
        request_body = json.loads(raw_body)
    except json.JSONDecodeError:
        log.info('Failed to decode request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400(message='failed to decode request', error_code=INVALID_REQUEST_BODY)

    if not isinstance(request_body, dict):
        log.info('Request body is not a JSON object. Responding with 400.', extra={'event': INVALID_REQUEST_BODY})
        return response_400(message='failed to decode request', error_code=INVALID_REQUEST_BODY)

    target_url = request_body.get('url')
    desired_alias = request_body.get('alias')
    log.debug('Request body decoded.', extra={'url': target_url, 'alias': desired_alias})

    # 4- Open short link data store
    try:
        dao = short_link_dao(app_config)
    except (DataStoreError, ConfigurationError):
        log.exception('Failed to initialize storage. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(message='failed to initialize storage', error_code=STORAGE_UNAVAILABLE)

    alias_config = app_config.get('alias') or {}
    service = SaveService(
        dao,
        generator=AliasGenerator(
            length=alias_config.get('length', DEFAULT_ALIAS_LENGTH),
            digits=alias_config.get('digits', True),
        ),
        logger=log,
        max_attempts=alias_config.get('max_attempts', DEFAULT_MAX_ALIAS_ATTEMPTS),
    )

    # 5- Save the alias -> target URL mapping
    try:
        alias, link_id = service.create(target_url, desired_alias)
    except ValidationError as e:
        log.info('Invalid request. Responding with 400.', extra={'event': INVALID_REQUEST, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_REQUEST)
    except AliasAllocationError:
        log.error('Could not allocate a free alias. Responding with 500.', extra={'event': ALIAS_ALLOCATION_FAILED})
        return response_500(error_code=ALIAS_ALLOCATION_FAILED)
    except AliasConflictError:
        log.info('Alias already exists. Responding with 409.', extra={'event': ALIAS_ALREADY_EXISTS, 'alias': desired_alias})
        return response_409(message='alias already exists', error_code=ALIAS_ALREADY_EXISTS)
    except DataStoreError:
        log.exception('Failed to add url. Responding with 500.', extra={'event': SAVE_FAILED})
        return response_500(message='failed to add url', error_code=SAVE_FAILED)

    # 6- Return successful response to user
    log.info('Short link created. Responding with 200.', extra={'event': URL_ADDED, 'alias': alias, 'id': link_id})
    return response_200(
        {
            'status': 'OK',
            'alias': alias,
            'id': link_id,
            'short_url': get_short_url(alias, event),
        }
    )
