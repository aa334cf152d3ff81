#!/usr/bin/env python
"""
Start the crop risk FastAPI service.
"""

import os
import sys
import argparse
import logging
import uvicorn

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from kisan.infra.config import get_config

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    cfg = get_config()
    parser = argparse.ArgumentParser(
        description="Start the Kisan crop risk API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python run_web.py                    # default settings
    python run_web.py --port 8080        # listen on 8080
    python run_web.py --seed 7           # reproducible confidence values
    python run_web.py --reload           # auto reload (development)
        """
    )

    parser.add_argument(
        '--host',
        type=str,
        default='0.0.0.0',
        help='bind address (default: 0.0.0.0)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=cfg.fastapi_port,
        help=f'port (default: {cfg.fastapi_port})'
    )

    parser.add_argument(
        '--reload',
        action='store_true',
        help='enable auto reload (development mode)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='seed for the confidence random source'
    )

    args = parser.parse_args()

    if args.seed is not None:
        os.environ['RISK_RANDOM_SEED'] = str(args.seed)
        get_config.cache_clear()

    host = args.host if args.host != '0.0.0.0' else 'localhost'
    logger.info(f"Starting API server: http://{host}:{args.port}")
    logger.info(f"Auto reload: {args.reload}")
    logger.info(f"API docs: http://{host}:{args.port}/docs")

    uvicorn.run(
        "kisan.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info"
    )


if __name__ == '__main__':
    main()
