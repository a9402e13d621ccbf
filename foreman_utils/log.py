# foreman_utils/log.py - shared logger setup
import logging

DEFAULT_LOGGER = "foreman-client"


def get_logger(name: str = DEFAULT_LOGGER):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def redact_headers(headers):
    """Copy of ``headers`` safe for logging: Authorization keeps only its scheme."""
    safe = dict(headers)
    for key in list(safe):
        if key.lower() != "authorization":
            continue
        try:
            scheme, _ = safe[key].split(" ", 1)
            safe[key] = f"{scheme} [REDACTED]"
        except ValueError:
            safe[key] = "[REDACTED]"
    return safe
