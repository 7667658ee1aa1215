"""Main entry point for the dialog bot."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from dialogbot.api import create_fastapi_app
from dialogbot.logging_config import setup_logging
from sim import Sim


def main():
    """Run the bot."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "3978"))
    api_url = f"http://{api_host}:{api_port}"

    sim = Sim(api_url=api_url)

    from dialogbot.api.routes import control
    control.set_sim_instance(sim)

    app = create_fastapi_app()

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
