# Common utilities
from foxauth.common.crypto import CryptoUtils as CryptoUtils
from foxauth.common.logging_utils import setup_logger as setup_logger

__all__ = ["CryptoUtils", "setup_logger"]
