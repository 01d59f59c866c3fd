"""
Form validation and sanitization.

One form class per record type, shared by the create and update flows.
Submitted text is trimmed as the request body is processed and HTML-escaped
once validation has run, so length bounds count typed characters. Dates
are parsed from ISO-8601 and multi-valued selections are normalised to a
list without repeats.
"""
from dateutil import parser as date_parser
from flask_wtf import FlaskForm
from markupsafe import escape
from wtforms import SelectField, SelectMultipleField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional, Regexp, ValidationError
from wtforms.widgets import CheckboxInput, ListWidget

from .models import BOOK_INSTANCE_STATUSES, DEFAULT_BOOK_INSTANCE_STATUS


def escape_html(value):
    """Escape all markup in ``value``, keeping every character the user typed."""
    return str(escape(value))


def coerce_id(value):
    """Coerce a submitted record id, treating a blank value as missing."""
    if value is None or value == "":
        return None
    return int(value)


def validation_errors(form):
    """Flatten ``form.errors`` into a list of {field, message} pairs."""
    return [
        {"field": field, "message": message}
        for field, messages in form.errors.items()
        for message in messages
    ]


# --- Fields ---
class SanitizedMixin:
    """Trim on input, escape once the validators have seen the plain text."""

    def process_formdata(self, valuelist):
        super().process_formdata(valuelist)
        if self.data is not None:
            self.data = self.data.strip()

    def post_validate(self, form, validation_stopped):
        if self.data is not None:
            self.data = escape_html(self.data)


class SanitizedStringField(SanitizedMixin, StringField):
    pass


class SanitizedTextAreaField(SanitizedMixin, TextAreaField):
    pass


class IsoDateField(StringField):
    """A text input holding an optional ISO-8601 date."""

    def __init__(self, label=None, validators=None, invalid_message="Invalid date", **kwargs):
        super().__init__(label, validators, **kwargs)
        self.invalid_message = invalid_message

    def process_formdata(self, valuelist):
        self.data = None
        raw = valuelist[0].strip() if valuelist and valuelist[0] else ""
        if raw:
            try:
                self.data = date_parser.isoparse(raw).date()
            except (ValueError, OverflowError):
                raise ValueError(self.invalid_message)

    def _value(self):
        if self.raw_data:
            return self.raw_data[0]
        return self.data.isoformat() if self.data else ""


class MultiCheckboxField(SelectMultipleField):
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()

    def process_formdata(self, valuelist):
        super().process_formdata(valuelist)
        # absent -> [], repeated values collapse to one
        self.data = list(dict.fromkeys(self.data or []))


# --- Forms ---
class AuthorForm(FlaskForm):
    first_name = SanitizedStringField("First Name", validators=[
        DataRequired(message="First name must be specified."),
        Regexp(r"^[A-Za-z0-9]+$", message="First name has non-alphanumeric characters."),
        Length(max=100, message="First name must be at most 100 characters."),
    ])
    family_name = SanitizedStringField("Family Name", validators=[
        DataRequired(message="Family name must be specified."),
        Regexp(r"^[A-Za-z0-9]+$", message="Family name has non-alphanumeric characters."),
        Length(max=100, message="Family name must be at most 100 characters."),
    ])
    date_of_birth = IsoDateField("Date of birth", validators=[Optional()],
                                 invalid_message="Invalid date of birth")
    date_of_death = IsoDateField("Date of death", validators=[Optional()],
                                 invalid_message="Invalid date of death")


class GenreForm(FlaskForm):
    name = SanitizedStringField("Genre", validators=[
        Length(min=3, message="Genre name must contain at least 3 characters"),
        Length(max=100, message="Genre name must be at most 100 characters"),
    ])


class BookForm(FlaskForm):
    title = SanitizedStringField("Title", validators=[
        DataRequired(message="Title must not be empty."),
        Length(max=300),
    ])
    author = SelectField("Author", coerce=coerce_id, validate_choice=False, validators=[
        DataRequired(message="Author must not be empty."),
    ])
    summary = SanitizedTextAreaField("Summary", validators=[
        DataRequired(message="Summary must not be empty."),
    ])
    isbn = SanitizedStringField("ISBN", validators=[
        DataRequired(message="ISBN must not be empty."),
        Length(max=32),
    ])
    genre = MultiCheckboxField("Genre", coerce=int, validate_choice=False)

    def set_choices(self, authors, genres):
        self.author.choices = [(a.id, a.name) for a in authors]
        self.genre.choices = [(g.id, g.name) for g in genres]

    def validate_author(self, field):
        if field.data not in {value for value, _ in self.author.choices}:
            raise ValidationError("Author not found.")

    def validate_genre(self, field):
        known = {value for value, _ in self.genre.choices}
        if any(genre_id not in known for genre_id in field.data or []):
            raise ValidationError("Unknown genre selected.")

    @classmethod
    def for_record(cls, book):
        return cls(data={
            "title": book.title,
            "author": book.author_id,
            "summary": book.summary,
            "isbn": book.isbn,
            "genre": [g.id for g in book.genre],
        })


class BookInstanceForm(FlaskForm):
    book = SelectField("Book", coerce=coerce_id, validate_choice=False, validators=[
        DataRequired(message="Book must be specified"),
    ])
    imprint = SanitizedStringField("Imprint", validators=[
        DataRequired(message="Imprint must be specified"),
        Length(max=300),
    ])
    status = SelectField("Status", choices=[(s, s) for s in BOOK_INSTANCE_STATUSES],
                         default=DEFAULT_BOOK_INSTANCE_STATUS)
    due_back = IsoDateField("Date when book available", validators=[Optional()],
                            invalid_message="Invalid date")

    def set_choices(self, books):
        self.book.choices = [(b.id, b.title) for b in books]

    def validate_book(self, field):
        if field.data not in {value for value, _ in self.book.choices}:
            raise ValidationError("Book not found.")

    @classmethod
    def for_record(cls, bookinstance):
        return cls(data={
            "book": bookinstance.book_id,
            "imprint": bookinstance.imprint,
            "status": bookinstance.status,
            "due_back": bookinstance.due_back,
        })
