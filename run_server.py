import logging

import uvicorn

from inkstudio.config import HOST, LOG_LEVEL, PORT, RELOAD

logger = logging.getLogger(__name__)


def main():
    logger.info(f"🚀 Ink Studio API on http://{HOST}:{PORT} (reload={RELOAD})")
    uvicorn.run("inkstudio.main:app", host=HOST, port=PORT, reload=RELOAD, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
