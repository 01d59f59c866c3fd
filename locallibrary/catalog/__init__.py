"""Catalog blueprint: pages for authors, genres, books and book copies."""
from flask import Blueprint

bp = Blueprint('catalog', __name__, url_prefix='/catalog')

from . import authors, bookinstances, books, genres, views  # noqa: E402,F401
