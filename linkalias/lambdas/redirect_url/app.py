import logging

from linkalias.types import LambdaEvent, LambdaContext, LambdaResponse
from linkalias.dao.factory import short_link_dao
from linkalias.dao.exceptions import AliasNotFoundError, DataStoreError
from linkalias.exceptions import ConfigurationError
from linkalias.services import RedirectResolver
from linkalias.utils import load_config, get_short_url, request_id, with_context
from linkalias.utils.helpers import guarantee_500_response
from linkalias.lambdas.responses import response_302, response_400, response_404, response_500
from linkalias.lambdas.redirect_url.constants import (
    CONFIG_UNAVAILABLE,
    MISSING_ALIAS,
    STORAGE_UNAVAILABLE,
    ALIAS_NOT_FOUND,
    RESOLVE_FAILED,
    REDIRECT_SUCCESS,
)


OP = 'lambdas.redirect_url.lambda_handler'

logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect aliases

    This Lambda handler follows this procedure to redirect aliases:
    - Step 1: Load the handler's configuration
    - Step 2: Extract alias from request path
    - Step 3: Resolve the alias to its target URL
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing alias in path parameters
        404: Not found
            message: alias doesn't exist
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload containing the alias path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'alias': 'ex1'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com'
    """
    log = with_context(logger, op=OP, request_id=request_id(event))

    # 1- Get handler's config
    try:
        app_config = load_config('redirect_url')
    except (FileNotFoundError, ConfigurationError):
        log.exception('Failed to load config for redirect URL handler. Responding with 500.', extra={'event': CONFIG_UNAVAILABLE})
        return response_500()

    # 2- Extract alias from request's path
    alias = (event.get('pathParameters') or {}).get('alias')
    if not alias:
        log.info('Missing "alias" in path. Responding with 400.', extra={'event': MISSING_ALIAS})
        return response_400(message="missing 'alias' in path", error_code=MISSING_ALIAS)
    log.debug('Client requested short URL %s.', get_short_url(alias, event))

    try:
        resolver = RedirectResolver(short_link_dao(app_config))
    except (DataStoreError, ConfigurationError):
        log.exception('Failed to initialize storage. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(message='failed to initialize storage', error_code=STORAGE_UNAVAILABLE)

    # 3- Resolve alias to target URL
    try:
        target_url = resolver.resolve(alias)
    except AliasNotFoundError:
        log.info('Alias not found. Responding with 404.', extra={'event': ALIAS_NOT_FOUND, 'alias': alias})
        return response_404(message=f"short url {get_short_url(alias, event)} doesn't exist", error_code=ALIAS_NOT_FOUND)
    except DataStoreError:
        log.exception('Failed to get url. Responding with 500.', extra={'event': RESOLVE_FAILED, 'alias': alias})
        return response_500(error_code=RESOLVE_FAILED)

    # 4- Redirect client to target URL
    log.info('Redirecting client to target URL. Responding with 302.', extra={'event': REDIRECT_SUCCESS, 'alias': alias})
    return response_302(location=target_url)
