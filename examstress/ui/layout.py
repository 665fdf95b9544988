from dash import dcc, html
import dash_bootstrap_components as dbc

from examstress.app_state import registry
from examstress.ui import pages


def build_sidebar() -> html.Div:
    """Construct the left navigation sidebar."""
    status = registry.session_store.get_status()
    return html.Div(
        [
            html.Div("examstress", className="sidebar-title"),
            dbc.Nav(pages.get_nav_links(), vertical=True, pills=True, className="sidebar-nav"),
            html.Div(
                f"{status['session_count']} sessions loaded",
                className="sidebar-footer text-muted small",
            ),
        ],
        className="sidebar",
    )


def build_layout() -> dbc.Container:
    """Create the top-level Dash layout with routing slots."""
    return dbc.Container(
        [
            dcc.Location(id="url"),
            dbc.Row(
                [
                    dbc.Col(build_sidebar(), width=2, className="sidebar-col"),
                    dbc.Col(html.Div(id="page-content"), width=10, className="content-col"),
                ],
                className="g-0",
            ),
        ],
        fluid=True,
        className="app-shell",
    )


__all__ = ["build_sidebar", "build_layout"]
