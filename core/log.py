"""Logging setup shared by the CLI runner and the dashboard."""

import logging
import sys

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-24s | %(message)s"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure the root logger once at startup."""
    root = logging.getLogger()
    # Streamlit re-runs the script on every interaction; don't stack handlers.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(level)

    for noisy in ("urllib3", "httpx", "httpcore", "openai", "kaleido", "choreographer"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
