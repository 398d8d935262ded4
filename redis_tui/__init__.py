# coding: utf-8
"""Interactive terminal inspector for Redis keys."""
import logging

__version__ = "0.1.1"

logging.getLogger(__name__).addHandler(logging.NullHandler())
