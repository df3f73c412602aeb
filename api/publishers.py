from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.utils.params import json_body, paginate, services
from models.schemas.book import BookOutSchema
from models.schemas.publisher import PublisherOutSchema

bp = Blueprint("publishers", __name__)

out_schema = PublisherOutSchema()
out_list_schema = PublisherOutSchema(many=True)
books_out_schema = BookOutSchema(many=True)


@bp.post("/publishers")
def create_publisher():
    """
    Create a publisher
    ---
    tags: [Publishers]
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, address]
          properties:
            name: { type: string, maxLength: 255 }
            address: { type: string, maxLength: 255 }
    responses:
      201: { description: Created }
      409: { description: Name already exists }
      422: { description: Validation error }
    """
    p = services().publishers.create_publisher(json_body())
    return jsonify({"data": out_schema.dump(p)}), 201


@bp.get("/publishers")
def list_publishers():
    """
    List publishers (pagination, q search)
    ---
    tags: [Publishers]
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
        description: Case-insensitive name fragment
    responses:
      200: { description: OK }
    """
    q = request.args.get("q")
    svc = services().publishers
    rows = svc.search_publishers(q) if q else svc.list_publishers()
    return jsonify(paginate(rows, out_list_schema))


@bp.get("/publishers/<int:publisher_id>")
def get_publisher(publisher_id: int):
    """
    Get a publisher by id
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    p = services().publishers.get_publisher(publisher_id)
    return jsonify({"data": out_schema.dump(p)})


@bp.put("/publishers/<int:publisher_id>")
def update_publisher(publisher_id: int):
    """
    Replace a publisher's name and address
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: integer
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
      409: { description: Name already exists }
      422: { description: Validation error }
    """
    p = services().publishers.update_publisher(publisher_id, json_body())
    return jsonify({"data": out_schema.dump(p)})


@bp.delete("/publishers/<int:publisher_id>")
def delete_publisher(publisher_id: int):
    """
    Delete a publisher (refused while it has books)
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: integer
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
      409: { description: Publisher has books }
    """
    services().publishers.delete_publisher(publisher_id)
    return ("", 204)


@bp.get("/publishers/<int:publisher_id>/books")
def list_publisher_books(publisher_id: int):
    """
    List the books of a publisher
    ---
    tags: [Publishers]
    parameters:
      - in: path
        name: publisher_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    books = services().publishers.get_publisher_books(publisher_id)
    return jsonify({"data": books_out_schema.dump(books)})
