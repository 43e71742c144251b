import logging
import os
from logging.handlers import RotatingFileHandler
import sys
from typing import Optional

# SETLIST_STUDIO_LOG_DIR is set by server.py (production).
# Otherwise logs go next to the backend directory (development).
if "SETLIST_STUDIO_LOG_DIR" in os.environ:
    LOG_DIR = os.environ["SETLIST_STUDIO_LOG_DIR"]
else:
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    LOG_DIR = os.path.join(BASE_DIR, "logs")

os.makedirs(LOG_DIR, exist_ok=True)

MAX_LOGGED_MESSAGE_LENGTH = 200

def get_logger(name: str):
    """
    Logger writing to both a rotating file and the console.
    """
    logger = logging.getLogger(name)

    # handlers are attached only once per logger
    if not logger.handlers:
        logger.setLevel(logging.INFO)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # 1. File handler (rotate every 10MB, keep 5 generations)
        log_file = os.path.join(LOG_DIR, "setlist_studio.log")
        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10*1024*1024,
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.INFO)
            logger.addHandler(file_handler)
        except Exception as e:
            # permission errors etc. leave us with console logging only
            print(f"Failed to set up file logging: {e}", file=sys.stderr)

        # 2. Console handler (docker logs / terminal)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)
        logger.addHandler(console_handler)

    return logger

def sanitize_user_id(user_id: Optional[str]) -> Optional[str]:
    """Mask the domain part of e-mail style user ids before logging them."""
    if not user_id:
        return user_id

    if "@" in user_id:
        parts = user_id.split("@")
        if len(parts) == 2:
            return f"{parts[0]}@[DOMAIN]"

    return user_id

def sanitize_message(value: Optional[str]) -> str:
    """Strip line breaks (log forging) and cap the length of user supplied text."""
    if not value:
        return ""

    cleaned = value.replace("\r", " ").replace("\n", " ")
    if len(cleaned) > MAX_LOGGED_MESSAGE_LENGTH:
        cleaned = cleaned[:MAX_LOGGED_MESSAGE_LENGTH] + "..."
    return cleaned
