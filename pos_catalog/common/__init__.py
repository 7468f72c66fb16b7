# Common utilities
from .config_loader import load_code_map, load_config, load_settings
from .errors import PersistenceError, PosCatalogError, ValidationError
from .log_config import setup_logging
from .session import Session
