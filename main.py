import logging
import os
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import load_config
from core.lyricus_client import LyricusClient
from core.state import AppState, Notify
from ui.models.artists_model import ArtistsModel
from ui.models.browse_model import BrowseModel

logger = logging.getLogger("lyricus")


def init_app_state() -> AppState:
    config = load_config()
    client = LyricusClient.from_config(config)
    logger.debug("API base URL: %s (timeout=%s)", config.api_base_url, config.request_timeout_s)
    return AppState(config=config, client=client)


def _log_notification(n: Notify):
    print(f"[{n.notify_type}] {n.message}")


def main() -> int:
    logging.basicConfig(
        level=logging.DEBUG if os.getenv("LYRICUS_DEBUG") == "1" else logging.INFO,
        format="%(levelname)s: %(name)s: %(message)s",
    )
    app = QCoreApplication(sys.argv)
    query = " ".join(sys.argv[1:])

    app_state = init_app_state()
    app_state.notification.connect(_log_notification)

    browse = BrowseModel(app_state, app_state.client)
    artists = ArtistsModel(app_state, app_state.client)
    browse.setSearchValue(query)

    pending = {"browse", "artists"}

    def _done(name: str, loading: bool):
        if loading:
            return
        pending.discard(name)
        if not pending:
            app.quit()

    def _print_results(results):
        if not browse.store.is_loaded:
            return
        for r in results:
            print(f"{r.id:>5}  {r.song_name} - {r.artist_name}")
        print(f"{len(results)} songs found")

    def _print_artists(groups):
        for g in groups[:5]:
            print(f"[{g.initials:>2}] {g.name}: {g.song_count} song(s)")

    browse.resultsChanged.connect(_print_results)
    artists.artistsChanged.connect(_print_artists)
    browse.loadingChanged.connect(lambda loading: _done("browse", loading))
    artists.loadingChanged.connect(lambda loading: _done("artists", loading))

    browse.load()
    artists.load()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
