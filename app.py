import argparse
import logging
from pathlib import Path

from dash import Dash
import dash_bootstrap_components as dbc

from examstress import config
from examstress.app_state import registry
from examstress.engine.store import SessionStore

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


def create_app() -> Dash:
    """Load every session, then instantiate the Dash app with sidebar layout and routing."""
    # Fails fast: the dashboard never runs on a partial table set.
    registry.session_store.load()
    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.CYBORG],
        suppress_callback_exceptions=True,
        assets_folder=str(config.ASSETS_DIR),
    )
    app.title = "examstress"

    # Import layout and pages AFTER app is created so @callback decorators bind to this app.
    from examstress.ui import pages
    from examstress.ui.layout import build_layout

    app.layout = build_layout()
    pages.register_page_callbacks(app)
    app.registry = registry
    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Exam stress nearest-session dashboard")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8050)
    parser.add_argument("--data-dir", type=Path, default=None, help="Override the CleanData directory")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format=LOG_FORMAT)
    if args.data_dir is not None:
        registry.session_store = SessionStore(data_dir=args.data_dir)
    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
