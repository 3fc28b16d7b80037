import logging
import os


def initialize_logging(config):
    log_path = config.logging["log_file_path"]
    log_level = str(config.logging.get("log_level", "INFO")).upper()

    logger = logging.getLogger()
    level = logging.getLevelName(log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    # prompt_toolkit and friends may have attached handlers already
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # the log usually lives next to the pets file, which may not exist yet
    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.info(f"Logging to {log_path} at {logging.getLevelName(logger.level)}")
