"""Application entry point."""

import logging

from digits.game.app.session import open_session
from digits.game.infra.app_data import ensure_app_data_dirs
from digits.game.infra.config import load_default_env_files
from digits.game.infra.logging import setup_logging, shutdown_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Prepare the runtime and restore the saved board."""
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    try:
        logger.info(
            "app_data_paths root=%s logs=%s saves=%s",
            paths["root"],
            paths["logs"],
            paths["saves"],
        )
        session = open_session()
        state = session.state
        logger.info(
            "board_ready placed=%d inventory=%d occupied=%d",
            len(state.board.placed_pieces),
            len(state.inventory),
            len(state.board.occupied_segments),
        )
        if session.status:
            logger.warning("board_status %s", session.status)
    finally:
        # Daemon listener: records still queued at exit are lost.
        shutdown_logging()


if __name__ == "__main__":
    main()
