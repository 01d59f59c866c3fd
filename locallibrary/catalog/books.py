"""Book pages."""
from flask import current_app, redirect, render_template, request, url_for
from sqlalchemy.orm import joinedload

from ..forms import BookForm, validation_errors
from ..models import Author, Book, BookInstance, Genre, db
from . import bp


def instances_of(book_id):
    return BookInstance.query.filter_by(book_id=book_id).order_by(BookInstance.id).all()


def form_choices():
    authors = Author.query.order_by(Author.family_name).all()
    genres = Genre.query.order_by(Genre.name).all()
    return authors, genres


def fill_book(book, form):
    book.title = form.title.data
    book.author_id = form.author.data
    book.summary = form.summary.data
    book.isbn = form.isbn.data
    book.genre = Genre.query.filter(Genre.id.in_(form.genre.data)).all() if form.genre.data else []


def render_book_form(title, form, authors, genres, book=None):
    return render_template('book_form.html', title=title, form=form, book=book,
                           authors=authors, genres=genres, errors=validation_errors(form))


@bp.route('/books')
def book_list():
    books = Book.query.options(joinedload(Book.author)).order_by(Book.title).all()
    return render_template('book_list.html', title="Book List", book_list=books)


@bp.route('/book/<int:book_id>')
def book_detail(book_id):
    book = db.get_or_404(Book, book_id, description="Book not found")
    return render_template('book_detail.html', title=book.title, book=book,
                           book_instances=instances_of(book_id))


@bp.route('/book/create', methods=['GET', 'POST'])
def book_create():
    authors, genres = form_choices()
    form = BookForm()
    form.set_choices(authors, genres)

    if form.validate_on_submit():
        book = Book()
        fill_book(book, form)
        db.session.add(book)
        db.session.commit()
        current_app.logger.info("Created book %s (%s)", book.id, book.title)
        return redirect(book.url)
    return render_book_form("Create Book", form, authors, genres)


@bp.route('/book/<int:book_id>/delete', methods=['GET', 'POST'])
def book_delete(book_id):
    book = db.get_or_404(Book, book_id, description="Book not found")
    book_instances = instances_of(book_id)

    if request.method == 'POST':
        if len(book_instances) > 0:
            current_app.logger.info("Refused to delete book %s: %d copies remain",
                                    book_id, len(book_instances))
        else:
            db.session.delete(book)
            db.session.commit()
            current_app.logger.info("Deleted book %s", book_id)
            return redirect(url_for('catalog.book_list'))

    return render_template('book_delete.html', title="Delete Book", book=book,
                           book_instances=book_instances)


@bp.route('/book/<int:book_id>/update', methods=['GET', 'POST'])
def book_update(book_id):
    book = db.get_or_404(Book, book_id, description="Book not found")
    authors, genres = form_choices()
    form = BookForm() if request.method == 'POST' else BookForm.for_record(book)
    form.set_choices(authors, genres)

    if form.validate_on_submit():
        fill_book(book, form)
        db.session.commit()
        current_app.logger.info("Updated book %s", book_id)
        return redirect(book.url)
    return render_book_form("Update Book", form, authors, genres, book=book)
