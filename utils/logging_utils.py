import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler

from utils.config import load_config, get_repo_root

LOG_FORMAT = '%(asctime)s [PID: %(process)d] [Thread: %(threadName)s] [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S %z'

# === Set up logging ===
def setup_logging(log_level_str="INFO", log_dir=None, log_to_file=None, backup_count=None):
    """
    Configure the root logger for a test run.

    - Console output always goes to stdout.
    - When file logging is enabled, every record lands in test_run.log and
      ERROR and above are duplicated into test_error.log. Both rotate at
      midnight.

    Calling this more than once is safe; handlers are only added once.
    """
    config = load_config().get("logging", {})
    if log_to_file is None:
        log_to_file = config.get("log_to_file", False)
    if backup_count is None:
        backup_count = config.get("backup_count", 1)
    if log_dir is None:
        log_dir = config.get("log_dir", "logs")
    if not os.path.isabs(log_dir):
        log_dir = os.path.join(get_repo_root(), log_dir)

    # Convert string to logging level (default to INFO if invalid)
    log_level = getattr(logging, str(log_level_str).upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Avoid adding duplicate handlers
    if getattr(logger, "_harness_configured", False):
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)

        run_handler = TimedRotatingFileHandler(
            os.path.join(log_dir, "test_run.log"),
            when="midnight",
            backupCount=backup_count,
            encoding="utf-8",
        )
        run_handler.setFormatter(formatter)
        logger.addHandler(run_handler)

        error_handler = TimedRotatingFileHandler(
            os.path.join(log_dir, "test_error.log"),
            when="midnight",
            backupCount=backup_count,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    logger._harness_configured = True
    return logger
