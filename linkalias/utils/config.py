"""Utility functions for application configuration management.

Handlers read their configuration from a single document, either a local YAML
file (pointed to by `CONFIG_PATH`) or **AWS AppConfig** (the AppConfig
*Application*, *Environment* and *Configuration profile* identifiers come from
`APPCONFIG_APP_ID`, `APPCONFIG_ENV_ID` and `APPCONFIG_PROFILE_ID`).

The configuration document follows this structure:

    {
        "build": 3,
        "active_backend": "sqlite",
        "configs": {
            "shorten_url": {
                "sqlite": { "storage_path": "./storage/storage.db" },
                "redis": { ... },
                "auth": { "user": "admin", "password": "..." },
                "alias": { "length": 6, "digits": true, "max_attempts": 5 }
            },
            "redirect_url": {
                "sqlite": { "storage_path": "./storage/storage.db" }
            }
        }
    }

Each handler loads its own section (e.g., `"shorten_url"`), keeping only the
active backend's settings next to its non-backend settings.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    select_handler_config(document, handler_name) -> dict
        Extract one handler's configuration from a full document.

    load_config(handler_name: str) -> dict
        Load the configuration of a handler from the local YAML file when
        `CONFIG_PATH` is set, from AWS AppConfig otherwise.

Example:
    Typical usage inside a Lambda handler:

        >>> from linkalias.utils.config import load_config
        >>> config = load_config('shorten_url')
        >>> config['sqlite']['storage_path']
        './storage/storage.db'
"""

import os
import json
import functools
import logging
from pathlib import Path
from collections.abc import Callable

import boto3
import yaml

from linkalias.types import AppConfig, AppConfigDataClient
from linkalias.exceptions import BadConfigurationError
from linkalias.utils.helpers import require_environment
from linkalias.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    PROJECT_ROOT_ENV,
    CONFIG_PATH_ENV,
    APPCONFIG_APP_ID_ENV,
    APPCONFIG_ENV_ID_ENV,
    APPCONFIG_PROFILE_ID_ENV,
    BACKENDS,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(APP_NAME_ENV)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Uses the PROJECT_ROOT environment variable, falls back to the current
    working directory.
    """
    return Path(os.environ.get(PROJECT_ROOT_ENV, os.getcwd()))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkalias'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkalias:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def select_handler_config(document: dict, handler_name: str) -> AppConfig:
    """Extract one handler's configuration from a full configuration document

    The active backend's section is kept and every other backend's section is
    dropped. Non-backend settings (e.g. 'auth', 'alias') are kept as they are.

    Args:
        document (dict):
            Full configuration document.
        handler_name (str):
            Name of the handler (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: e.g. {'sqlite': {...}, 'auth': {...}}

    Raises:
        BadConfigurationError:
            If the document lacks the active backend, the handler section or
            the active backend's settings for that handler.
    """
    try:
        backend = document['active_backend']
        section = document['configs'][handler_name]
        backend_config = section[backend]
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"Configuration for handler '{handler_name}' is incomplete (missing {e}).") from e

    if backend not in BACKENDS:
        raise BadConfigurationError(f"Unsupported active backend '{backend}' (supported: {', '.join(BACKENDS)}).")

    data = {key: value for key, value in section.items() if key not in BACKENDS}
    data[backend] = backend_config or {}
    return data


def _load_local_config_file(func: Callable[[str], AppConfig]) -> Callable[[str], AppConfig]:
    """Decorator: load configuration from a local YAML file when CONFIG_PATH is set

    Behavior:
        - If `CONFIG_PATH` is set, read the YAML document at that path (relative
          paths resolve against `project_root()`) and extract the handler's section.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Raises:
        FileNotFoundError:
            If CONFIG_PATH points to a file that does not exist.
        BadConfigurationError:
            If the file is not valid YAML or misses required sections.
    """

    @functools.wraps(func)
    def wrapper(handler_name: str, *args, **kwargs) -> AppConfig:
        config_path = os.getenv(CONFIG_PATH_ENV)
        if not config_path:
            return func(handler_name, *args, **kwargs)

        path = Path(config_path)
        if not path.is_absolute():
            path = project_root() / path
        if not path.is_file():
            raise FileNotFoundError(f'Config file does not exist: {path}')

        logger.debug('Trying to load config from local file.', extra={'configPath': str(path), 'handlerName': handler_name})
        try:
            with path.open(encoding='utf-8') as f:
                document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BadConfigurationError(f'Cannot parse config file {path}: {e}') from e

        data = select_handler_config(document, handler_name)
        logger.debug('Loaded config from local file.', extra={'handlerName': handler_name, 'build': document.get('build')})
        return data

    return wrapper


@_load_local_config_file
@require_environment(APPCONFIG_APP_ID_ENV, APPCONFIG_ENV_ID_ENV, APPCONFIG_PROFILE_ID_ENV)
def load_config(handler_name: str) -> AppConfig:
    """Load configuration for a given handler from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested handler (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        handler_name (str):
            Name of the handler (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: The handler's config section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig identifier is missing.
        BadConfigurationError:
            If AppConfig returns a document that is not valid JSON or misses required sections.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.

    Example:
        >>> app_config = load_config('shorten_url')
        >>> app_config['redis']['host']
        'redis.internal'
    """
    logger.debug('Trying to load config from AWS AppConfig.', extra={'handlerName': handler_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[APPCONFIG_APP_ID_ENV],
        EnvironmentIdentifier=os.environ[APPCONFIG_ENV_ID_ENV],
        ConfigurationProfileIdentifier=os.environ[APPCONFIG_PROFILE_ID_ENV],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError(f'AppConfig returned a malformed document: {e}') from e

    data = select_handler_config(document, handler_name)
    logger.debug('Loaded config from AWS AppConfig.', extra={'handlerName': handler_name, 'build': document.get('build')})
    return data
