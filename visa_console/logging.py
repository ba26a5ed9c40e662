import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for the console.
    Call this once at the top of app.py; Streamlit reruns are harmless
    because basicConfig is a no-op once handlers exist.
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


logger = logging.getLogger("visa_console")
