"""Genre pages."""
from flask import current_app, redirect, render_template, request, url_for
from sqlalchemy.exc import IntegrityError

from ..forms import GenreForm, validation_errors
from ..models import Book, Genre, db
from . import bp


def books_in_genre(genre_id):
    return Book.query.filter(Book.genre.any(Genre.id == genre_id)).order_by(Book.title).all()


def find_genre(name):
    # exact, case-sensitive match
    return Genre.query.filter(Genre.name == name).first()


@bp.route('/genres')
def genre_list():
    genres = Genre.query.order_by(Genre.name).all()
    return render_template('genre_list.html', title="Genre List", genre_list=genres)


@bp.route('/genre/<int:genre_id>')
def genre_detail(genre_id):
    genre = db.get_or_404(Genre, genre_id, description="Genre not found")
    return render_template('genre_detail.html', title="Genre Detail", genre=genre,
                           genre_books=books_in_genre(genre_id))


@bp.route('/genre/create', methods=['GET', 'POST'])
def genre_create():
    form = GenreForm()
    if form.validate_on_submit():
        existing = find_genre(form.name.data)
        if existing is not None:
            return redirect(existing.url)

        genre = Genre(name=form.name.data)
        db.session.add(genre)
        try:
            db.session.commit()
        except IntegrityError:
            # lost a race with another insert of the same name
            db.session.rollback()
            existing = find_genre(form.name.data)
            if existing is None:
                raise
            return redirect(existing.url)
        current_app.logger.info("Created genre %s (%s)", genre.id, genre.name)
        return redirect(genre.url)
    return render_template('genre_form.html', title="Create Genre", form=form,
                           errors=validation_errors(form))


@bp.route('/genre/<int:genre_id>/delete', methods=['GET', 'POST'])
def genre_delete(genre_id):
    genre = db.get_or_404(Genre, genre_id, description="Genre not found")
    genre_books = books_in_genre(genre_id)

    if request.method == 'POST':
        if len(genre_books) > 0:
            current_app.logger.info("Refused to delete genre %s: %d book(s) remain",
                                    genre_id, len(genre_books))
        else:
            db.session.delete(genre)
            db.session.commit()
            current_app.logger.info("Deleted genre %s", genre_id)
            return redirect(url_for('catalog.genre_list'))

    return render_template('genre_delete.html', title="Delete Genre", genre=genre,
                           genre_books=genre_books)


@bp.route('/genre/<int:genre_id>/update', methods=['GET', 'POST'])
def genre_update(genre_id):
    genre = db.get_or_404(Genre, genre_id, description="Genre not found")
    form = GenreForm() if request.method == 'POST' else GenreForm(obj=genre)

    if form.validate_on_submit():
        existing = find_genre(form.name.data)
        if existing is not None and existing.id != genre.id:
            return redirect(existing.url)
        genre.name = form.name.data
        try:
            db.session.commit()
        except IntegrityError:
            # another genre took the name after the check above
            db.session.rollback()
            existing = find_genre(form.name.data)
            if existing is None:
                raise
            return redirect(existing.url)
        current_app.logger.info("Updated genre %s", genre_id)
        return redirect(genre.url)
    return render_template('genre_form.html', title="Update Genre", form=form, genre=genre,
                           errors=validation_errors(form))
