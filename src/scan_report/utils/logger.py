"""
Logging for scan runs.

Handlers and formats come from ``config/logging.yaml`` when one is found;
otherwise a single stderr handler is installed. Modules never configure
logging themselves, they ask ``get_logger`` for a child of the
``scan_report`` logger.
"""

import logging
import logging.config
import yaml
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'scan_report'
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LOGGING_CONFIG_LOCATIONS = [
    Path(__file__).parent.parent.parent.parent / 'config' / 'logging.yaml',
    Path('config/logging.yaml'),
]


def find_logging_config() -> Optional[Path]:
    """First existing logging.yaml among the known locations, if any."""
    for path in LOGGING_CONFIG_LOCATIONS:
        if path.is_file():
            return path
    return None


def setup_logging(
    verbose: bool = False,
    config_path: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure logging for a scan run.

    Args:
        verbose: Log DEBUG detail (per-column decisions, read sizes)
        config_path: dictConfig YAML file (default: search known locations)

    Returns:
        The ``scan_report`` logger
    """
    path = Path(config_path) if config_path else find_logging_config()

    if path is not None and path.is_file():
        with open(path, 'r') as f:
            logging.config.dictConfig(yaml.safe_load(f))
    else:
        logging.basicConfig(level=logging.WARNING, format=DEFAULT_FORMAT)

    # pandas parser warnings (mixed types, bad lines) end up in the run log
    logging.captureWarnings(True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger of the package logger, e.g. ``scan_report.profiler``."""
    return logging.getLogger(f'{LOGGER_NAME}.{name}')
