"""Record schemas: Author, Genre, Book and BookInstance."""
from datetime import date

from flask_sqlalchemy import SQLAlchemy
from markupsafe import Markup
from sqlalchemy.orm import validates

db = SQLAlchemy()

# text columns hold escaped input; "&" becomes "&amp;"
ESCAPED_WIDTH = 5

BOOK_INSTANCE_STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_BOOK_INSTANCE_STATUS = "Maintenance"


class RecordValidationError(ValueError):
    """A value violates a column's declared bounds or enumeration."""

    def __init__(self, field, message):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def format_date_med(value):
    """Format a date as e.g. 'Jan 28, 1813'."""
    return f"{value:%b} {value.day}, {value.year}"


def _iso(value):
    return value.isoformat() if value else ""


def _check_length(field, value, max_length, min_length=0):
    """Check bounds against the text as typed, before escaping."""
    if value is None:
        return value
    length = len(Markup(value).unescape())
    if length > max_length:
        raise RecordValidationError(field, f"must be at most {max_length} characters")
    if length < min_length:
        raise RecordValidationError(field, f"must be at least {min_length} characters")
    return value


# Book <-> Genre, many-to-many
book_genres = db.Table(
    'book_genres',
    db.Column('book_id', db.Integer, db.ForeignKey('books.id'), primary_key=True),
    db.Column('genre_id', db.Integer, db.ForeignKey('genres.id'), primary_key=True),
)


class Author(db.Model):
    __tablename__ = 'authors'
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100 * ESCAPED_WIDTH), nullable=False)
    family_name = db.Column(db.String(100 * ESCAPED_WIDTH), nullable=False)
    date_of_birth = db.Column(db.Date, nullable=True)
    date_of_death = db.Column(db.Date, nullable=True)

    @validates('first_name', 'family_name')
    def _validate_name(self, key, value):
        return _check_length(key, value, 100)

    @property
    def name(self):
        # Empty when either part is missing
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def url(self):
        return f"/catalog/author/{self.id}"

    @property
    def lifespan(self):
        born = format_date_med(self.date_of_birth) if self.date_of_birth else "Unknown"
        died = format_date_med(self.date_of_death) if self.date_of_death else ""
        return f"{born} - {died}" if died else born

    @property
    def date_of_birth_yyyy_mm_dd(self):
        return _iso(self.date_of_birth)

    @property
    def date_of_death_yyyy_mm_dd(self):
        return _iso(self.date_of_death)

    def __repr__(self):
        return f"<Author {self.id} {self.name!r}>"


class Genre(db.Model):
    __tablename__ = 'genres'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100 * ESCAPED_WIDTH), nullable=False, unique=True, index=True)

    @validates('name')
    def _validate_name(self, key, value):
        return _check_length(key, value, 100, min_length=3)

    @property
    def url(self):
        return f"/catalog/genre/{self.id}"

    def __repr__(self):
        return f"<Genre {self.id} {self.name!r}>"


class Book(db.Model):
    __tablename__ = 'books'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300 * ESCAPED_WIDTH), nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('authors.id'), nullable=False, index=True)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(32 * ESCAPED_WIDTH), nullable=False)

    author = db.relationship('Author')
    genre = db.relationship('Genre', secondary=book_genres, order_by='Genre.name')

    @validates('title')
    def _validate_title(self, key, value):
        return _check_length(key, value, 300)

    @validates('isbn')
    def _validate_isbn(self, key, value):
        return _check_length(key, value, 32)

    @property
    def url(self):
        return f"/catalog/book/{self.id}"

    def __repr__(self):
        return f"<Book {self.id} {self.title!r}>"


class BookInstance(db.Model):
    __tablename__ = 'book_instances'
    id = db.Column(db.Integer, primary_key=True)
    book_id = db.Column(db.Integer, db.ForeignKey('books.id'), nullable=False, index=True)
    imprint = db.Column(db.String(300 * ESCAPED_WIDTH), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=DEFAULT_BOOK_INSTANCE_STATUS)
    due_back = db.Column(db.Date, nullable=True, default=date.today)

    book = db.relationship('Book')

    @validates('imprint')
    def _validate_imprint(self, key, value):
        return _check_length(key, value, 300)

    @validates('status')
    def _validate_status(self, key, value):
        if value is not None and value not in BOOK_INSTANCE_STATUSES:
            raise RecordValidationError(key, f"'{value}' is not one of {', '.join(BOOK_INSTANCE_STATUSES)}")
        return value

    @property
    def url(self):
        return f"/catalog/bookinstance/{self.id}"

    @property
    def due_back_formatted(self):
        return format_date_med(self.due_back) if self.due_back else ""

    @property
    def due_back_yyyy_mm_dd(self):
        return _iso(self.due_back)

    def __repr__(self):
        return f"<BookInstance {self.id} {self.status}>"
