import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(service_name: str, level: str = "INFO") -> logging.Logger:
    """Standardized logging setup for all engine components"""

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Only one console handler, even when several components call this
    if not any(getattr(h, "_carbon_engine_console", False) for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler._carbon_engine_console = True
        root_logger.addHandler(console_handler)

    return logging.getLogger(service_name)
