import logging
from logging.config import dictConfig


def configure(settings):
    dictConfig(settings)
    # route warnings.warn (e.g. django deprecations) through the same handlers
    logging.captureWarnings(True)
