import logging
from datetime import datetime

from nextchat_ui.config.settings import config_dir

logger = logging.getLogger("nextchat_ui")

def setup_logging(level: int = logging.INFO, log_to_file: bool = True) -> None:
    """Attach stream and dated file handlers to the package logger once."""
    if logger.handlers:
        return
    logger.setLevel(level)

    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s]: %(message)s"))
    logger.addHandler(ch)

    if log_to_file:
        log_dir = config_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / f"nextchat_ui_{datetime.now():%Y%m%d}.log")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        logger.addHandler(fh)

    logger.info("NextChat UI logging initialized")
