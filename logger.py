import logging

FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(level="WARNING"):
    logger = logging.getLogger()
    if logger.handlers:
        logger.setLevel(level)
        return
    logger.setLevel(level)
    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(stream)
