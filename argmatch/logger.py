# Argmatch Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for argmatch."""
import logging

logger: logging.Logger = logging.getLogger("argmatch")
