#!/usr/bin/env python3
import uvicorn

from predict_relay.config import Config
from predict_relay.logging import setup_logging

if __name__ == "__main__":
    config = Config()
    setup_logging(config)
    try:
        uvicorn.run(
            "predict_relay.dashboard.api.main:app",
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )
    except KeyboardInterrupt:
        pass
