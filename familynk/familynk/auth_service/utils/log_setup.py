"""
Logging setup for the auth service.
"""
from typing import Optional
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure root logging with a stdout handler and, when ``log_dir`` is
    given, a file handler writing ``auth_service.log`` inside it.

    A log directory that cannot be created is reported on stderr and
    logging continues on stdout only.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "auth_service.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
