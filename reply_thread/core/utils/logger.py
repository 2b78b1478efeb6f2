import logging
import logging.handlers
import os

from reply_thread.core.utils.config import Config

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

class SensitiveDataFilter(logging.Filter):
    """Replaces the bot token in log records"""

    def __init__(self, token: str = None):
        super().__init__()
        self.token = token

    def filter(self, record: logging.LogRecord) -> bool:
        if self.token and isinstance(record.msg, str):
            record.msg = record.msg.replace(self.token, "[REDACTED_TOKEN]")
        return True

def setup_logging(config: Config) -> None:
    """Set up logging based on configuration

    Args:
        config: Config instance
    """
    log_level = LOG_LEVELS.get(
        str(config.get_setting("logging", "logging_level")).upper(), logging.INFO
    )
    log_format = config.get_setting("logging", "log_format")
    log_file_path = config.get_setting("logging", "log_file_path")
    max_log_size = config.get_setting("logging", "max_log_size")
    backup_count = config.get_setting("logging", "backup_count")

    formatter = logging.Formatter(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    log_dir = os.path.dirname(log_file_path)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=max_log_size,
        backupCount=backup_count
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # Console only gets critical errors, everything else goes to the file
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.CRITICAL)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    sensitive_filter = SensitiveDataFilter(config.get_setting("adapter", "bot_token"))
    for handler in root_logger.handlers:
        handler.addFilter(sensitive_filter)

    logging.info(f"Log file created at {log_file_path}")
