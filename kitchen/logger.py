import sys
from loguru import logger

_configured = False


def setup_logging(level: str = "INFO"):
    """Replace loguru's default handler with a single stderr sink."""
    global _configured
    if _configured:
        return logger
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        backtrace=True,
        diagnose=False,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
    )
    _configured = True
    logger.debug(f"Logging initialized at {level}")
    return logger
