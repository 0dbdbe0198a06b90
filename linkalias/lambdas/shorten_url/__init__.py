from linkalias.utils.logging import initialize_logging


initialize_logging()
