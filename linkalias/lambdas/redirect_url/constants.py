# Log events / error codes
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
MISSING_ALIAS = 'MISSING_ALIAS'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
ALIAS_NOT_FOUND = 'ALIAS_NOT_FOUND'
RESOLVE_FAILED = 'RESOLVE_FAILED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
