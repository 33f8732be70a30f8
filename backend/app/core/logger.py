import sys

from loguru import logger

from app.core.config import get_settings

# Replace loguru's default stderr handler with a single stdout sink
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level: <8}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    level=get_settings().LOG_LEVEL,
)

__all__ = ["logger"]
