"""Web adapters for displaying the connection board."""

from connection_board.adapters.web.starlette_app import BoardWebAdapter, create_app

__all__ = ["BoardWebAdapter", "create_app"]
