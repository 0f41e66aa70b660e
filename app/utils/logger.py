import logging
from app.config import settings

def setup_logger(level: str = None):
    """Configure the service logger"""

    level_name = (level or settings.log_level).upper()

    logger = logging.getLogger("lor_service")
    logger.setLevel(getattr(logging, level_name))

    # avoid duplicate handlers on reload
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level_name))

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger

# shared logger instance
logger = setup_logger()
