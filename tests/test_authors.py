from datetime import date

from locallibrary.models import Author, db


def test_author_list_sorted_by_family_name(client, make_author):
    make_author("Mark", "Twain")
    make_author("Jane", "Austen")
    response = client.get("/catalog/authors")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert body.index("Austen, Jane") < body.index("Twain, Mark")


def test_create_author(client):
    response = client.post("/catalog/author/create", data={"first_name": "Jane", "family_name": "Austen"})
    author = Author.query.one()
    assert response.status_code == 302
    assert response.headers["Location"] == author.url
    assert author.name == "Austen, Jane"

    detail = client.get(author.url)
    assert "Austen, Jane" in detail.get_data(as_text=True)


def test_create_author_with_dates(client):
    client.post("/catalog/author/create", data={
        "first_name": "Jane", "family_name": "Austen",
        "date_of_birth": "1775-12-16", "date_of_death": "1817-07-18",
    })
    author = Author.query.one()
    assert author.date_of_birth == date(1775, 12, 16)
    assert author.lifespan == "Dec 16, 1775 - Jul 18, 1817"


def test_create_author_missing_field_saves_nothing(client):
    response = client.post("/catalog/author/create", data={"first_name": "Jane"})
    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert Author.query.count() == 0
    assert 'data-field="family_name"' in body
    assert "Family name must be specified." in body
    # entered value is kept
    assert 'value="Jane"' in body


def test_create_form(client):
    response = client.get("/catalog/author/create")
    assert response.status_code == 200
    assert "Create Author" in response.get_data(as_text=True)


def test_author_detail_lists_books(client, make_book):
    book = make_book(title="Persuasion")
    response = client.get(book.author.url)
    assert response.status_code == 200
    assert "Persuasion" in response.get_data(as_text=True)


def test_missing_author_detail_is_not_found(client):
    response = client.get("/catalog/author/999")
    assert response.status_code == 404
    assert "Author not found" in response.get_data(as_text=True)


def test_update_form_is_prefilled(client, make_author):
    author = make_author(date_of_birth=date(1775, 12, 16))
    body = client.get(f"/catalog/author/{author.id}/update").get_data(as_text=True)
    assert 'value="Austen"' in body
    assert 'value="1775-12-16"' in body


def test_update_author(client, make_author):
    author = make_author()
    author_id = author.id
    response = client.post(f"/catalog/author/{author_id}/update",
                           data={"first_name": "Cassandra", "family_name": "Austen"})
    assert response.status_code == 302
    assert response.headers["Location"] == f"/catalog/author/{author_id}"
    assert db.session.get(Author, author_id).name == "Austen, Cassandra"
    assert Author.query.count() == 1


def test_update_author_replaces_all_fields(client, make_author):
    author = make_author(date_of_birth=date(1775, 12, 16))
    client.post(f"/catalog/author/{author.id}/update", data={"first_name": "Jane", "family_name": "Austen"})
    assert db.session.get(Author, author.id).date_of_birth is None


def test_update_author_invalid_keeps_record(client, make_author):
    author = make_author()
    response = client.post(f"/catalog/author/{author.id}/update", data={"first_name": "", "family_name": "X"})
    assert response.status_code == 200
    assert "First name must be specified." in response.get_data(as_text=True)
    assert db.session.get(Author, author.id).first_name == "Jane"


def test_update_missing_author_is_not_found(client):
    assert client.get("/catalog/author/42/update").status_code == 404
    assert client.post("/catalog/author/42/update", data={"first_name": "A", "family_name": "B"}).status_code == 404


def test_delete_author_without_books(client, make_author):
    author = make_author()
    assert client.get(f"/catalog/author/{author.id}/delete").status_code == 200

    response = client.post(f"/catalog/author/{author.id}/delete")
    assert response.status_code == 302
    assert response.headers["Location"] == "/catalog/authors"
    assert Author.query.count() == 0


def test_delete_author_with_books_is_blocked(client, make_book):
    book = make_book(title="Persuasion")
    author_id = book.author_id

    response = client.post(f"/catalog/author/{author_id}/delete")
    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "Delete the following books" in body
    assert "Persuasion" in body
    assert db.session.get(Author, author_id) is not None


def test_delete_missing_author_is_not_found(client):
    assert client.get("/catalog/author/5/delete").status_code == 404
    assert client.post("/catalog/author/5/delete").status_code == 404
