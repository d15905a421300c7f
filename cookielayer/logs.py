import logging


def get_logger():
    """
    Returns a "cookielayer" logger.
    """
    logger = logging.getLogger("cookielayer")
    logger.setLevel(logging.INFO)
    return logger
