"""Database commands for the ``flask`` CLI."""
from datetime import date

import click

from .models import Author, Book, BookInstance, Genre, db


def seed_catalog():
    """Insert a small sample catalog. Returns False if data already exists."""
    if Author.query.first() is not None:
        return False

    austen = Author(first_name="Jane", family_name="Austen",
                    date_of_birth=date(1775, 12, 16), date_of_death=date(1817, 7, 18))
    twain = Author(first_name="Mark", family_name="Twain",
                   date_of_birth=date(1835, 11, 30), date_of_death=date(1910, 4, 21))
    fiction = Genre(name="Fiction")
    satire = Genre(name="Satire")
    db.session.add_all([austen, twain, fiction, satire])
    db.session.flush()

    pride = Book(title="Pride and Prejudice", author=austen, isbn="9780141439518",
                 summary="A classic novel of manners.", genre=[fiction])
    finn = Book(title="Adventures of Huckleberry Finn", author=twain, isbn="9780486280615",
                summary="A classic American novel.", genre=[fiction, satire])
    db.session.add_all([pride, finn])
    db.session.flush()

    db.session.add_all([
        BookInstance(book=pride, imprint="Penguin Classics, 2003", status="Available"),
        BookInstance(book=pride, imprint="Penguin Classics, 2003", status="Loaned",
                     due_back=date.today()),
        BookInstance(book=finn, imprint="Dover, 1994", status="Maintenance"),
    ])
    db.session.commit()
    return True


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all catalog tables."""
        db.create_all()
        click.echo("Initialized the database.")

    @app.cli.command("seed-db")
    def seed_db():
        """Add sample data (for dev only)."""
        db.create_all()
        if seed_catalog():
            click.echo("Initialized DB with sample data.")
        else:
            click.echo("DB already initialized.")
