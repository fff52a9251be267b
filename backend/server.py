from __future__ import annotations

import logging

import uvicorn

from app.config import get_host, get_log_level, get_port, load_env

# Load .env from backend dir before the app reads its settings.
load_env()
logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


def main() -> None:
    from app.main import app

    host, port = get_host(), get_port()
    logger.info("Tic Tac Toe relay listening on %s:%d (REST under /api, push on /ws)", host, port)
    uvicorn.run(app, host=host, port=port, log_level=get_log_level().lower())


if __name__ == "__main__":
    main()
