# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""Run the registry: python -m composer_registry"""

import sys

import uvicorn
from dotenv import load_dotenv

from composer_registry.core.config import get_config
from composer_registry.core.errors import ConfigurationError
from composer_registry.core.logging import get_logger
from composer_registry.main import create_app

logger = get_logger("composer_registry.server")


def main() -> None:
    # Local development; deployments set the environment directly
    load_dotenv()

    config = get_config()
    try:
        app = create_app(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        sys.exit(1)

    logger.info(f"Listening to {config.service_host}:{config.port}")
    uvicorn.run(app, host=config.service_host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
