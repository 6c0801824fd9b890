# =============================================================================
# main.py  —  Entry Point for the nora-ce Odoo MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the installed `nora-ce` script)
#
# WHAT HAPPENS:
#   1. Loads a .env file if present (ODOO_URL, ODOO_DB, ODOO_USERNAME, ...)
#   2. Reads the settings; a missing variable stops the process (exit 1)
#   3. Builds ONE OdooClient and hands it to the ToolDispatcher
#   4. Serves the tools over stdio until the client disconnects, then closes
#      the HTTP connection pool
#
# SIGNALS:
#   SIGINT / SIGTERM flush the log and exit immediately with status 0.
# =============================================================================

import logging
import os
import signal
import sys

from dotenv import load_dotenv

from nora_core.client import OdooClient
from nora_core.config import Settings
from nora_core.errors import ConfigError
from nora_tools.dispatcher import ToolDispatcher
from nora_tools.logging_setup import configure_logging
from nora_tools.mcp_server import create_server

logger = logging.getLogger("nora")


def _exit_cleanly(signum, frame) -> None:
    logger.info("received signal %s, shutting down", signum)
    for handler in logging.getLogger().handlers:
        handler.flush()
    os._exit(0)


def main() -> int:
    load_dotenv()
    configure_logging()

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        logger.error("configuration error: %s", exc)
        return 1
    configure_logging(settings.log_level)

    signal.signal(signal.SIGINT, _exit_cleanly)
    signal.signal(signal.SIGTERM, _exit_cleanly)

    client = OdooClient.from_settings(settings)
    server = create_server(ToolDispatcher(client), on_shutdown=client.aclose)

    logger.info("Odoo MCP server running on stdio (url=%s db=%s)", settings.url, settings.database)
    try:
        server.run()
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("server stopped with an unexpected error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
