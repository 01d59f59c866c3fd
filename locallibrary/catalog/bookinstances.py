"""Book copy (BookInstance) pages."""
from datetime import date

from flask import current_app, redirect, render_template, request, url_for
from sqlalchemy.orm import joinedload

from ..forms import BookInstanceForm, coerce_id, validation_errors
from ..models import Book, BookInstance, db
from . import bp


def book_choices():
    return Book.query.order_by(Book.title).all()


def render_bookinstance_form(title, form, books, bookinstance=None):
    return render_template('bookinstance_form.html', title=title, form=form,
                           book_list=books, selected_book=form.book.data,
                           bookinstance=bookinstance, errors=validation_errors(form))


@bp.route('/bookinstances')
def bookinstance_list():
    instances = BookInstance.query.options(joinedload(BookInstance.book)).order_by(BookInstance.id).all()
    return render_template('bookinstance_list.html', title="Book Instance List",
                           bookinstance_list=instances)


@bp.route('/bookinstance/<int:bookinstance_id>')
def bookinstance_detail(bookinstance_id):
    bookinstance = db.get_or_404(BookInstance, bookinstance_id, description="Book copy not found")
    return render_template('bookinstance_detail.html', title=f"Copy: {bookinstance.book.title}",
                           bookinstance=bookinstance)


@bp.route('/bookinstance/create', methods=['GET', 'POST'])
def bookinstance_create():
    books = book_choices()
    if request.method == 'POST':
        form = BookInstanceForm()
    else:
        # ?book=<id> preselects the book being copied
        try:
            preselected = coerce_id(request.args.get('book'))
        except ValueError:
            preselected = None
        form = BookInstanceForm(data={"book": preselected})
    form.set_choices(books)

    if form.validate_on_submit():
        bookinstance = BookInstance(
            book_id=form.book.data,
            imprint=form.imprint.data,
            status=form.status.data,
            due_back=form.due_back.data or date.today(),
        )
        db.session.add(bookinstance)
        db.session.commit()
        current_app.logger.info("Created book copy %s of book %s", bookinstance.id, bookinstance.book_id)
        return redirect(bookinstance.url)
    return render_bookinstance_form("Create BookInstance", form, books)


@bp.route('/bookinstance/<int:bookinstance_id>/delete', methods=['GET', 'POST'])
def bookinstance_delete(bookinstance_id):
    bookinstance = db.get_or_404(BookInstance, bookinstance_id, description="Book copy not found")

    if request.method == 'POST':
        # nothing depends on a copy
        db.session.delete(bookinstance)
        db.session.commit()
        current_app.logger.info("Deleted book copy %s", bookinstance_id)
        return redirect(url_for('catalog.bookinstance_list'))

    book = bookinstance.book
    return render_template('bookinstance_delete.html', title="Delete Book Instance",
                           bookinstance=bookinstance, book=book, author=book.author)


@bp.route('/bookinstance/<int:bookinstance_id>/update', methods=['GET', 'POST'])
def bookinstance_update(bookinstance_id):
    bookinstance = db.get_or_404(BookInstance, bookinstance_id, description="Book copy not found")
    books = book_choices()
    form = BookInstanceForm() if request.method == 'POST' else BookInstanceForm.for_record(bookinstance)
    form.set_choices(books)

    if form.validate_on_submit():
        bookinstance.book_id = form.book.data
        bookinstance.imprint = form.imprint.data
        bookinstance.status = form.status.data
        bookinstance.due_back = form.due_back.data
        db.session.commit()
        current_app.logger.info("Updated book copy %s", bookinstance_id)
        return redirect(bookinstance.url)
    return render_bookinstance_form("Update Book Instance", form, books, bookinstance=bookinstance)
