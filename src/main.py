"""Application entry point.

Serves the API and the NiceGUI chat page from one uvicorn process by
default. Environment variables are loaded from a .env file.
"""

import logging
import os
import subprocess
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Send log records to stdout at LOG_LEVEL (default INFO)."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # httpx logs every request at INFO
    if logging.getLogger().level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def run_integrated() -> None:
    """Mount the chat page on the FastAPI app and serve both on one port."""
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="Lightyear AI",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "lightyear-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Chat UI available at http://localhost:{port}/")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the API (PORT, default 8000) and the chat page (port 8080) as two processes.

    The page reaches the API through API_BASE_URL, or localhost on PORT.
    """
    port = os.getenv("PORT", "8000")
    api_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "src.api.app:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            port,
            "--reload",
        ]
    )
    ui_proc = subprocess.Popen([sys.executable, "-c", "from src.ui.chat_page import main; main()"])

    logger.info(f"API on http://localhost:{port}, chat UI on http://localhost:8080")
    try:
        api_proc.wait()
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in (api_proc, ui_proc):
            proc.terminate()
            proc.wait()


def main() -> None:
    """Start the assistant.

    Set RUN_MODE=separate to run the API and the page on different ports.
    """
    configure_logging()
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting Lightyear Assistant in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
