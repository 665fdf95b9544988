from dash import Input, Output
import dash_bootstrap_components as dbc

from . import explorer, sessions


PAGES = [
    {"name": "Explorer", "path": "/", "layout": explorer.layout},
    {"name": "Sessions", "path": "/sessions", "layout": sessions.layout},
]

PAGE_MAP = {page["path"]: page for page in PAGES}


def get_nav_links():
    """Return navigation links for the sidebar."""
    return [
        dbc.NavLink(page["name"], href=page["path"], active="exact", className="sidebar-link")
        for page in PAGES
    ]


def render_path(pathname: str):
    if not pathname:
        return PAGE_MAP["/"]["layout"]()
    page = PAGE_MAP.get(pathname)
    if page:
        return page["layout"]()
    return dbc.Container(
        [dbc.Alert(f"404: {pathname} not found", color="danger", className="mt-3")],
        fluid=True,
        className="page-container",
    )


def register_page_callbacks(app):
    """Wire routing callback that swaps page content based on pathname."""

    @app.callback(Output("page-content", "children"), Input("url", "pathname"))
    def render_page_content(pathname: str):
        return render_path(pathname)


__all__ = ["PAGES", "get_nav_links", "render_path", "register_page_callbacks"]
