#!/usr/bin/env python3
"""
Script to run the Bookshelf API server.
"""

import sys
from pathlib import Path

import uvicorn

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from api.config import config
from utilities.logger import get_logger, setup_logging


def main():
    """Run the API server."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file,
        debug=config.debug
    )
    logger = get_logger(__name__)
    logger.info("Server running", host=config.host, port=config.port, debug=config.debug)

    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
        access_log=False  # AccessLogMiddleware logs every request
    )


if __name__ == "__main__":
    main()
