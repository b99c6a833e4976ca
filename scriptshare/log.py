import logging
import logging.config
from os import environ

from yaml import safe_load

from scriptshare.config import Config

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_FORMAT = "%(asctime)s   %(name)-30s %(levelname)-8s %(message)s"


def configure_logging(config: Config) -> None:
    """
    Configure logging for the service.

    A YAML dictConfig file named by SCRIPTSHARE_LOG_CONFIG wins. Otherwise the
    level comes from SCRIPTSHARE_LOG_LEVEL, falling back to DEBUG for debug
    deployments and INFO elsewhere.
    """
    log_config_path = environ.get("SCRIPTSHARE_LOG_CONFIG")
    if log_config_path is not None:
        with open(log_config_path, "r") as f:
            logging.config.dictConfig(safe_load(f.read()))
        return

    default_level = "DEBUG" if config.debug else "INFO"
    log_level = environ.get("SCRIPTSHARE_LOG_LEVEL", default_level).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {log_level}")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = environ.get("SCRIPTSHARE_LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=environ.get("SCRIPTSHARE_LOG_FORMAT", DEFAULT_FORMAT),
        handlers=handlers,
    )
