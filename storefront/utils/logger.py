"""
Loguru configuration shared by the API and the command line tools
"""
import os
import sys

from loguru import logger

_configured = False


def setup_logging(log_dir: str = "logs", level: str = "INFO", name: str = "storefront"):
    """Send logs to stderr and to a rotating file under log_dir"""
    global _configured
    if _configured:
        return logger

    logger.remove()
    logger.add(sys.stderr, level=level, format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}")
    try:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, f"{name}.log"),
            level=level,
            mode="a",
            format="{time} | {level} | {message}",
            rotation="5 MB",
            retention="7 days",
        )
    except OSError as e:
        logger.warning(f"File logging disabled: {e}")

    _configured = True
    logger.info(f"{name} logging initialized")
    return logger
