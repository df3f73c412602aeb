from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.utils.params import json_body, paginate, services
from models.schemas.author import AuthorOutSchema
from models.schemas.book import BookOutSchema

bp = Blueprint("authors", __name__)

out_schema = AuthorOutSchema()
out_list_schema = AuthorOutSchema(many=True)
books_out_schema = BookOutSchema(many=True)


@bp.post("/authors")
def create_author():
    """
    Create an author
    ---
    tags: [Authors]
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [rg, name, address]
          properties:
            rg: { type: string, maxLength: 20 }
            name: { type: string, maxLength: 255 }
            address: { type: string, maxLength: 255 }
    responses:
      201: { description: Created }
      409: { description: RG already exists }
      422: { description: Validation error }
    """
    a = services().authors.create_author(json_body())
    return jsonify({"data": out_schema.dump(a)}), 201


@bp.get("/authors")
def list_authors():
    """
    List authors (pagination, q search)
    ---
    tags: [Authors]
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
    responses:
      200: { description: OK }
    """
    q = request.args.get("q")
    svc = services().authors
    rows = svc.search_authors(q) if q else svc.list_authors()
    return jsonify(paginate(rows, out_list_schema))


@bp.get("/authors/<rg>")
def get_author(rg: str):
    """
    Get an author by RG
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: rg
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    a = services().authors.get_author(rg)
    return jsonify({"data": out_schema.dump(a)})


@bp.put("/authors/<rg>")
def update_author(rg: str):
    """
    Replace an author's name and address
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: rg
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            name: { type: string, maxLength: 255 }
            address: { type: string, maxLength: 255 }
    responses:
      200: { description: OK }
      404: { description: Not found }
      422: { description: Validation error }
    """
    a = services().authors.update_author(rg, json_body())
    return jsonify({"data": out_schema.dump(a)})


@bp.delete("/authors/<rg>")
def delete_author(rg: str):
    """
    Delete an author (refused while authoring books)
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: rg
        type: string
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
      409: { description: Author has books }
    """
    services().authors.delete_author(rg)
    return ("", 204)


@bp.get("/authors/<rg>/books")
def list_author_books(rg: str):
    """
    List the books of an author
    ---
    tags: [Authors]
    parameters:
      - in: path
        name: rg
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    books = services().authors.get_author_books(rg)
    return jsonify({"data": books_out_schema.dump(books)})
