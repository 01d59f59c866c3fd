"""Catalog home page."""
from flask import render_template

from ..models import Author, Book, BookInstance, Genre
from . import bp


@bp.route('/')
def index():
    return render_template(
        'index.html',
        title="Local Library Home",
        book_count=Book.query.count(),
        book_instance_count=BookInstance.query.count(),
        book_instance_available_count=BookInstance.query.filter_by(status="Available").count(),
        author_count=Author.query.count(),
        genre_count=Genre.query.count(),
    )
