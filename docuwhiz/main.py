"""Main application entry point.

Runs FastAPI (port 8000) with NiceGUI mounted for the chat page.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    The chat page talks to the API over HTTP on the same port.
    """
    import uvicorn
    from nicegui import ui

    from docuwhiz.api.app import create_app
    from docuwhiz.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    port = int(os.getenv("PORT", "8000"))
    os.environ.setdefault("API_BASE_URL", f"http://localhost:{port}")

    ui.run_with(
        app,
        title="DocuWhiz",
        favicon="📄",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "docuwhiz-secret"),
    )

    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the API and the chat page as two processes.

    The API listens on PORT (8000) and the page on UI_PORT (8080). The page
    process gets API_BASE_URL pointing at the API unless one is already set.
    """
    import subprocess
    import time

    host = os.getenv("HOST", "0.0.0.0")
    api_port = os.getenv("PORT", "8000")
    ui_env = {**os.environ}
    ui_env.setdefault("API_BASE_URL", f"http://localhost:{api_port}")

    logger.info(f"API on http://localhost:{api_port}, chat page on port {os.getenv('UI_PORT', '8080')}")

    procs = [
        subprocess.Popen(
            [sys.executable, "-m", "uvicorn", "docuwhiz.api.app:app", "--host", host, "--port", api_port]
        ),
        subprocess.Popen(
            [sys.executable, "-c", "from docuwhiz.ui.chat_page import main; main()"],
            env=ui_env,
        ),
    ]

    try:
        while all(proc.poll() is None for proc in procs):
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in procs:
            proc.terminate()
            proc.wait()


def main() -> None:
    """Application entry point.

    RUN_MODE=separate starts the API and the chat page as two processes;
    anything else serves both from one uvicorn server.
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting DocuWhiz in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
