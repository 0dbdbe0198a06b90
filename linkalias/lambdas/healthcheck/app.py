import logging

from linkalias.types import LambdaEvent, LambdaContext, LambdaResponse
from linkalias.utils import request_id, with_context
from linkalias.utils.helpers import guarantee_500_response
from linkalias.lambdas.responses import response_200


OP = 'lambdas.healthcheck.lambda_handler'

logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Liveness probe: answer 200 without touching the data store."""
    log = with_context(logger, op=OP, request_id=request_id(event))
    log.info('check server')
    return response_200({'message': 'check ok'})
