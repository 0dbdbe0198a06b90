# Aliases
DEFAULT_ALIAS_LENGTH = 6
MAX_ALIAS_LENGTH = 32
DEFAULT_MAX_ALIAS_ATTEMPTS = 5

# SQLite busy timeout (seconds) while waiting for a concurrent writer
DEFAULT_SQLITE_TIMEOUT = 5.0

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
PROJECT_ROOT_ENV = 'PROJECT_ROOT'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# Local YAML configuration file (takes precedence over AppConfig)
CONFIG_PATH_ENV = 'CONFIG_PATH'

# AWS AppConfig identifiers
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'

# Storage backends understood by the DAO factory
BACKENDS = ('sqlite', 'redis', 'memory')

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
