import logging
import sys
from pathlib import Path
from farmwatch.core.config import settings

def setup_logging() -> logging.Logger:
    """Setup application logging"""

    # Create logger
    logger = logging.getLogger("farmwatch")
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # Already configured (reload, repeated lifespan in tests)
    if logger.handlers:
        return logger

    # Create handlers
    console_handler = logging.StreamHandler(sys.stdout)
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_dir / "application.log")

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Add formatter to handlers
    console_handler.setFormatter(formatter)
    file_handler.setFormatter(formatter)

    # Add handlers to logger
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger
