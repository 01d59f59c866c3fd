from datetime import date

import pytest

from locallibrary import create_app
from locallibrary.config import TestingConfig
from locallibrary.models import Author, Book, BookInstance, Genre, db


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_author(app):
    def _make(first_name="Jane", family_name="Austen", **kwargs):
        author = Author(first_name=first_name, family_name=family_name, **kwargs)
        db.session.add(author)
        db.session.commit()
        return author
    return _make


@pytest.fixture
def make_genre(app):
    def _make(name="Fiction"):
        genre = Genre(name=name)
        db.session.add(genre)
        db.session.commit()
        return genre
    return _make


@pytest.fixture
def make_book(app, make_author):
    def _make(title="Emma", author=None, genres=(), summary="A comedy of manners.", isbn="9780141439587"):
        book = Book(title=title, author=author or make_author(), summary=summary, isbn=isbn,
                    genre=list(genres))
        db.session.add(book)
        db.session.commit()
        return book
    return _make


@pytest.fixture
def make_instance(app, make_book):
    def _make(book=None, imprint="Penguin, 2003", status="Available", due_back=None):
        instance = BookInstance(book=book or make_book(), imprint=imprint, status=status,
                                due_back=due_back or date(2026, 10, 14))
        db.session.add(instance)
        db.session.commit()
        return instance
    return _make
