from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.utils.params import json_body, paginate, parse_date_arg, services
from models.schemas.printing_job import PrintingJobOutSchema

bp = Blueprint("printing_jobs", __name__)

out_schema = PrintingJobOutSchema()
out_list_schema = PrintingJobOutSchema(many=True)

JOB_PATH = "/printing-jobs/<isbn>/<int:company_id>"


@bp.post("/printing-jobs")
def schedule_printing_job():
    """
    Schedule a book for printing at a company
    ---
    tags: [Printing Jobs]
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [isbn, company_id, copies, delivery_date]
          properties:
            isbn: { type: string }
            company_id: { type: integer }
            copies: { type: integer, minimum: 1 }
            delivery_date: { type: string, format: date-time }
    responses:
      201: { description: Scheduled }
      400: { description: Book or company not found }
      409: { description: Job already scheduled for this book and company }
      422: { description: Validation error }
    """
    job = services().printing.schedule_printing_job(json_body())
    return jsonify({"data": out_schema.dump(job)}), 201


@bp.get("/printing-jobs")
def list_printing_jobs():
    """
    List printing jobs (pagination, book filter, delivery window)
    ---
    tags: [Printing Jobs]
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
        name: isbn
        type: string
      - in: query
        name: delivery_from
        type: string
        format: date
      - in: query
        name: delivery_to
        type: string
        format: date
    responses:
      200: { description: OK }
    """
    svc = services().printing
    isbn = request.args.get("isbn")
    delivery_from = parse_date_arg("delivery_from")
    delivery_to = parse_date_arg("delivery_to")

    if delivery_from or delivery_to:
        rows = svc.get_printing_jobs_by_delivery_range(delivery_from, delivery_to)
    elif isbn:
        rows = svc.get_printing_jobs_by_book(isbn)
    else:
        rows = svc.list_printing_jobs()
    return jsonify(paginate(rows, out_list_schema))


@bp.get("/printing-jobs/overdue")
def list_overdue_jobs():
    """
    Jobs whose delivery date has passed
    ---
    tags: [Printing Jobs]
    responses:
      200: { description: OK }
    """
    return jsonify({"data": out_list_schema.dump(services().printing.get_overdue_jobs())})


@bp.get("/printing-jobs/pending")
def list_pending_jobs():
    """
    Jobs still awaiting delivery
    ---
    tags: [Printing Jobs]
    responses:
      200: { description: OK }
    """
    return jsonify({"data": out_list_schema.dump(services().printing.get_pending_jobs())})


@bp.get(JOB_PATH)
def get_printing_job(isbn: str, company_id: int):
    """
    Get one printing job
    ---
    tags: [Printing Jobs]
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
      - in: path
        name: company_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    job = services().printing.get_printing_job(isbn, company_id)
    return jsonify({"data": out_schema.dump(job)})


@bp.put(JOB_PATH)
def update_printing_job(isbn: str, company_id: int):
    """
    Replace the copy count and delivery date of a job
    ---
    tags: [Printing Jobs]
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
      - in: path
        name: company_id
        type: integer
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            copies: { type: integer, minimum: 1 }
            delivery_date: { type: string, format: date-time }
    responses:
      200: { description: OK }
      404: { description: Not found }
      422: { description: Validation error }
    """
    job = services().printing.update_printing_job(isbn, company_id, json_body())
    return jsonify({"data": out_schema.dump(job)})


@bp.delete(JOB_PATH)
def delete_printing_job(isbn: str, company_id: int):
    """
    Cancel a printing job
    ---
    tags: [Printing Jobs]
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
      - in: path
        name: company_id
        type: integer
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
    """
    services().printing.delete_printing_job(isbn, company_id)
    return ("", 204)


@bp.post(JOB_PATH + "/complete")
def complete_printing_job(isbn: str, company_id: int):
    """
    Mark a job delivered (the job is removed)
    ---
    tags: [Printing Jobs]
    parameters:
      - in: path
        name: isbn
        type: string
        required: true
      - in: path
        name: company_id
        type: integer
        required: true
    responses:
      200: { description: Completed }
      404: { description: Not found }
    """
    job = services().printing.complete_printing_job(isbn, company_id)
    return jsonify({"data": out_schema.dump(job)})
