"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the handler is running locally (APP_ENV=local or SAM local), False otherwise.

Example:
    >>> from linkalias.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'prod'
    >>> running_locally()
    False
"""

import os

from linkalias.utils.constants import APP_ENV_ENV, AWS_SAM_LOCAL_ENV


def running_locally() -> bool:
    """Check if the handler is running locally

    Returns:
        bool: True if running locally, False otherwise.
    """
    env = os.getenv(APP_ENV_ENV, '').lower()
    return env == 'local' or os.getenv(AWS_SAM_LOCAL_ENV) == 'true'
