from mu.common.core.config import BaseAppConfig
from mu.common.core.logging_config import setup_logging as common_setup_logging


def setup_logging():
    """
    Load the YAML config and initialize logging.
    """
    settings = BaseAppConfig()
    common_setup_logging(settings.LOG_CONFIG_PATH, level=settings.LOG_LEVEL)
