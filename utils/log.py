import logging
import sys

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level="WARNING", stream=None):
    """Send log records to stderr, leaving stdout for results.

    Calling it again swaps the handler, so the stream is always the
    current ``sys.stderr`` unless one is given.
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    root = logging.getLogger()
    for old in [h for h in root.handlers if getattr(h, "_sat_handler", False)]:
        root.removeHandler(old)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(FORMAT))
    handler._sat_handler = True
    root.addHandler(handler)
    root.setLevel(level)
    return handler
