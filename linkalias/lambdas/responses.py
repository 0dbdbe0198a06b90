"""API Gateway (Lambda proxy) response builders shared by all handlers."""

import json


def _error_body(base: str, message: str | None, error_code: str | None) -> str:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    return json.dumps(body)


def response_200(body: dict) -> dict:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    return {
        'statusCode': 400,
        'headers': {'Content-Type': 'application/json'},
        'body': _error_body('Bad Request', message, error_code),
    }


def response_401(*, realm: str, error_code: str | None = None) -> dict:
    return {
        'statusCode': 401,
        'headers': {
            'Content-Type': 'application/json',
            'WWW-Authenticate': f'Basic realm="{realm}"',
        },
        'body': _error_body('Unauthorized', None, error_code),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    return {
        'statusCode': 404,
        'headers': {'Content-Type': 'application/json'},
        'body': _error_body('Not Found', message, error_code),
    }


def response_409(message: str | None = None, error_code: str | None = None) -> dict:
    return {
        'statusCode': 409,
        'headers': {'Content-Type': 'application/json'},
        'body': _error_body('Conflict', message, error_code),
    }


def response_500(message: str | None = None, error_code: str | None = None) -> dict:
    return {
        'statusCode': 500,
        'headers': {'Content-Type': 'application/json'},
        'body': _error_body('Internal Server Error', message, error_code),
    }
