from linkalias.utils.config import app_env, app_name, project_root, app_prefix, load_config
from linkalias.utils.helpers import base_url, get_short_url, request_id, check_basic_auth, require_environment
from linkalias.utils.shortener import AliasGenerator
from linkalias.utils.validators import validate_target_url, validate_alias
from linkalias.utils.logging import initialize_logging, with_context


__all__ = [
    'AliasGenerator',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'request_id',
    'check_basic_auth',
    'require_environment',
    'validate_target_url',
    'validate_alias',
    'initialize_logging',
    'with_context',
]
