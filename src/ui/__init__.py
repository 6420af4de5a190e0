from .home_page import render_home_page
from .locale_provider import build_locale_store, get_locale_store

__all__ = [
    "render_home_page",
    "build_locale_store",
    "get_locale_store",
]
