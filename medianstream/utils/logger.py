import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional
from medianstream import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_project_logging(level: Optional[int] = None, logs_dir: Optional[Path] = None, stream=None) -> logging.Logger:
    """
    Configure the root logger once: console plus a dated file under the logs dir.

    Level and logs dir default to MEDIANSTREAM_LOG_LEVEL and MEDIANSTREAM_LOGS_DIR.
    The console goes to stdout unless ``stream`` is given, which the CLI uses to
    keep stdout for filter output.
    """
    root_logger = logging.getLogger()
    if getattr(root_logger, "_project_logging_configured", False):
        return root_logger

    level = config.get_log_level() if level is None else level
    logs_dir = Path(logs_dir) if logs_dir is not None else config.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    root_logger.setLevel(level)

    log_file_path = logs_dir / f"medianstream-{datetime.now().strftime('%Y-%m-%d')}.log"
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    handlers = [logging.StreamHandler(stream or sys.stdout), logging.FileHandler(str(log_file_path))]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    setattr(root_logger, "_project_logging_configured", True)
    logging.getLogger(__name__).debug(f"[INIT] Logging to {log_file_path} at {logging.getLevelName(level)}")
    return root_logger
