#!/usr/bin/env python3
"""Lost & Found Pet Matching: single entry point.

Loads settings from ``.env``, configures logging and serves the FastAPI
matching and image-analysis API with uvicorn.

Without ``ROBOFLOW_API_KEY`` the image endpoints answer with mock features,
which is enough to try the whole API locally.

Usage:
    python main.py
    python main.py --port 8000
    python main.py --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("pet-finder")


def main() -> None:
    """Parse arguments, configure logging and launch the API server."""
    from src.config import get_config

    config = get_config()

    parser = argparse.ArgumentParser(
        description="Lost & Found Pet Matching API"
    )
    parser.add_argument(
        "--port", type=int, default=config.port, help="Server port"
    )
    parser.add_argument(
        "--host", type=str, default=config.host, help="Server host"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    if not config.roboflow_api_key:
        logger.warning(
            "ROBOFLOW_API_KEY is not set; image analysis will return mock data."
        )

    logger.info("Launching API on %s:%d", args.host, args.port)
    import uvicorn

    from src.api.app import create_app

    app = create_app()
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
