"""Author pages."""
from flask import current_app, redirect, render_template, request, url_for

from ..forms import AuthorForm, validation_errors
from ..models import Author, Book, db
from . import bp


def books_by_author(author_id):
    return Book.query.filter_by(author_id=author_id).order_by(Book.title).all()


def fill_author(author, form):
    author.first_name = form.first_name.data
    author.family_name = form.family_name.data
    author.date_of_birth = form.date_of_birth.data
    author.date_of_death = form.date_of_death.data


@bp.route('/authors')
def author_list():
    authors = Author.query.order_by(Author.family_name).all()
    return render_template('author_list.html', title="Author List", author_list=authors)


@bp.route('/author/<int:author_id>')
def author_detail(author_id):
    author = db.get_or_404(Author, author_id, description="Author not found")
    return render_template('author_detail.html', title="Author Detail", author=author,
                           author_books=books_by_author(author_id))


@bp.route('/author/create', methods=['GET', 'POST'])
def author_create():
    form = AuthorForm()
    if form.validate_on_submit():
        author = Author()
        fill_author(author, form)
        db.session.add(author)
        db.session.commit()
        current_app.logger.info("Created author %s (%s)", author.id, author.name)
        return redirect(author.url)
    return render_template('author_form.html', title="Create Author", form=form,
                           errors=validation_errors(form))


@bp.route('/author/<int:author_id>/delete', methods=['GET', 'POST'])
def author_delete(author_id):
    author = db.get_or_404(Author, author_id, description="Author not found")
    author_books = books_by_author(author_id)

    if request.method == 'POST':
        if len(author_books) > 0:
            current_app.logger.info("Refused to delete author %s: %d book(s) remain",
                                    author_id, len(author_books))
        else:
            db.session.delete(author)
            db.session.commit()
            current_app.logger.info("Deleted author %s", author_id)
            return redirect(url_for('catalog.author_list'))

    return render_template('author_delete.html', title="Delete Author", author=author,
                           author_books=author_books)


@bp.route('/author/<int:author_id>/update', methods=['GET', 'POST'])
def author_update(author_id):
    author = db.get_or_404(Author, author_id, description="Author not found")
    form = AuthorForm() if request.method == 'POST' else AuthorForm(obj=author)

    if form.validate_on_submit():
        fill_author(author, form)
        db.session.commit()
        current_app.logger.info("Updated author %s", author_id)
        return redirect(author.url)
    return render_template('author_form.html', title="Update Author", form=form, author=author,
                           errors=validation_errors(form))
