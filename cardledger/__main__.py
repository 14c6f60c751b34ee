import logging

import uvicorn

from cardledger.config import get_config
from cardledger.log import configure_logging

logger = logging.getLogger("cardledger")


def main() -> None:
    configure_logging()
    config = get_config()
    if config.workers > 1:
        # every worker keeps its own subscribers, a change reaches only the
        # clients connected to the worker that handled it
        logger.warning(
            "Running %d workers, live card updates stay within one worker",
            config.workers,
        )
    uvicorn.run(
        "cardledger.app:app",
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_config=None,
    )


if __name__ == "__main__":
    main()
