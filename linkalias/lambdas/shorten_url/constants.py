# Log events / error codes
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
UNAUTHORIZED = 'UNAUTHORIZED'
EMPTY_REQUEST_BODY = 'EMPTY_REQUEST_BODY'
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
INVALID_REQUEST = 'INVALID_REQUEST'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
ALIAS_ALREADY_EXISTS = 'ALIAS_ALREADY_EXISTS'
ALIAS_ALLOCATION_FAILED = 'ALIAS_ALLOCATION_FAILED'
SAVE_FAILED = 'SAVE_FAILED'
URL_ADDED = 'URL_ADDED'

# Basic auth realm advertised in WWW-Authenticate
AUTH_REALM = 'linkalias'
