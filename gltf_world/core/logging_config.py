import logging
import logging
import sys
import sys

LOGGER_NAME: str = "gltf_world"

# Console lines stay short since reports from scripts share the terminal; files keep the call site
CONSOLE_FORMAT: str = "%(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT: str = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"

# Handlers installed here carry this name prefix so a second call only replaces its own
HANDLER_PREFIX: str = "gltf_world."

def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """
    Attaches a stderr handler (and optionally a file handler) to the 'gltf_world' logger.
#   Attaches a stderr handler (and optionally a file handler) to the 'gltf_world' logger.
    The importer only emits records; applications and scripts decide where they go.
#   The importer only emits records; applications and scripts decide where they go.
    Handlers added by the application itself are left in place.
#   Handlers added by the application itself are left in place.
    """
    logger: logging.Logger = logging.getLogger(LOGGER_NAME)
#   logger: logging.Logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
#   logger.setLevel(level)

    for handler in list(logger.handlers):
#   for handler in list(logger.handlers):
        if handler.get_name() and handler.get_name().startswith(HANDLER_PREFIX):
#       if handler.get_name() and handler.get_name().startswith(HANDLER_PREFIX):
            logger.removeHandler(handler)
#           logger.removeHandler(handler)
            handler.close()
#           handler.close()

    # stdout belongs to the inspection report
#   # stdout belongs to the inspection report
    console_handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
#   console_handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(HANDLER_PREFIX + "console")
#   console_handler.set_name(HANDLER_PREFIX + "console")
    console_handler.setLevel(level)
#   console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
#   console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)
#   logger.addHandler(console_handler)

    if log_file:
#   if log_file:
        file_handler: logging.FileHandler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
#       file_handler: logging.FileHandler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.set_name(HANDLER_PREFIX + "file")
#       file_handler.set_name(HANDLER_PREFIX + "file")
        file_handler.setLevel(level)
#       file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
#       file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
#       logger.addHandler(file_handler)

    logger.debug("Logging set up at level %s", logging.getLevelName(level))
#   logger.debug("Logging set up at level %s", logging.getLevelName(level))
