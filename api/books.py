from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.utils.params import json_body, paginate, parse_date_arg, services
from models.schemas.author import AuthorOutSchema
from models.schemas.book import BookOutSchema, BookWithAuthorsOutSchema
from services.errors import MissingFieldError

bp = Blueprint("books", __name__)

# Schemas
book_out_schema = BookOutSchema()
books_out_schema = BookOutSchema(many=True)
book_with_authors_schema = BookWithAuthorsOutSchema()
authors_out_schema = AuthorOutSchema(many=True)


@bp.post("/books")
def create_book():
    """
    Create a new book
    ---
    tags:
      - Books
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [isbn, title, published_date, publisher_id]
          properties:
            isbn: { type: string, maxLength: 20 }
            title: { type: string, maxLength: 255 }
            published_date: { type: string, format: date }
            publisher_id: { type: integer }
    responses:
      201:
        description: Created
      400:
        description: Publisher not found
      409:
        description: Book with same ISBN already exists
      422:
        description: Validation error
    """
    b = services().books.create_book(json_body())
    return jsonify({"data": book_out_schema.dump(b)}), 201


@bp.get("/books")
def list_books():
    """
    List books (pagination, title search, publication window)
    ---
    tags:
      - Books
    parameters:
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 20
      - in: query
        name: q
        type: string
        description: Case-insensitive title fragment
      - in: query
        name: published_from
        type: string
        format: date
      - in: query
        name: published_to
        type: string
        format: date
    responses:
      200:
        description: OK
    """
    svc = services().books
    q = request.args.get("q")
    published_from = parse_date_arg("published_from")
    published_to = parse_date_arg("published_to")

    if published_from or published_to:
        rows = svc.get_books_by_publication_range(published_from, published_to)
    elif q:
        rows = svc.search_books(q)
    else:
        rows = svc.list_books()
    return jsonify(paginate(rows, books_out_schema))


@bp.get("/books/<isbn>")
def get_book(isbn: str):
    """
    Get a book with its authors
    ---
    tags:
      - Books
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
    responses:
      200:
        description: OK
      404:
        description: Not found
    """
    result = services().books.get_book_with_authors(isbn)
    return jsonify({"data": book_with_authors_schema.dump(result)})


@bp.put("/books/<isbn>")
def update_book(isbn: str):
    """
    Replace a book's title, publication date and publisher
    ---
    tags:
      - Books
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            title: { type: string, maxLength: 255 }
            published_date: { type: string, format: date }
            publisher_id: { type: integer }
    responses:
      200:
        description: OK
      400:
        description: Publisher not found
      404:
        description: Not found
      422:
        description: Validation error
    """
    b = services().books.update_book(isbn, json_body())
    return jsonify({"data": book_out_schema.dump(b)})


@bp.delete("/books/<isbn>")
def delete_book(isbn: str):
    """
    Delete a book and its authorships (refused while printing jobs exist)
    ---
    tags:
      - Books
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
    responses:
      204:
        description: Deleted
      404:
        description: Not found
      409:
        description: Book has printing jobs
    """
    services().books.delete_book(isbn)
    return ("", 204)


@bp.get("/books/<isbn>/authors")
def list_book_authors(isbn: str):
    """
    List the authors of a book, ordered by name
    ---
    tags:
      - Books
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
    responses:
      200:
        description: OK
      404:
        description: Not found
    """
    result = services().books.get_book_with_authors(isbn)
    return jsonify({"data": authors_out_schema.dump(result.authors)})


@bp.post("/books/<isbn>/authors")
def add_book_author(isbn: str):
    """
    Link an author to a book
    ---
    tags:
      - Books
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [rg]
          properties:
            rg: { type: string }
    responses:
      201:
        description: Linked
      400:
        description: Book or author not found
      409:
        description: Author already linked
    """
    rg = json_body().get("rg")
    if not rg:
        raise MissingFieldError("rg")
    authorship = services().books.add_author_to_book(isbn, rg)
    return jsonify({"data": {"isbn": authorship.isbn, "rg": authorship.rg}}), 201


@bp.delete("/books/<isbn>/authors/<rg>")
def remove_book_author(isbn: str, rg: str):
    """
    Unlink an author from a book (a book keeps at least one author)
    ---
    tags:
      - Books
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
      - in: path
        name: rg
        type: string
        required: true
    responses:
      204:
        description: Unlinked
      400:
        description: Authorship not found
      409:
        description: Last author of the book
    """
    services().books.remove_author_from_book(isbn, rg)
    return ("", 204)
