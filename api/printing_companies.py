from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.utils.params import json_body, paginate, services
from models.schemas.contract import ContractOutSchema
from models.schemas.printing_company import PrintingCompanyCreateSchema, PrintingCompanyOutSchema
from models.schemas.printing_job import PrintingJobOutSchema
from services.base import load_or_raise

bp = Blueprint("printing_companies", __name__)

create_schema = PrintingCompanyCreateSchema()
out_schema = PrintingCompanyOutSchema()
out_list_schema = PrintingCompanyOutSchema(many=True)
contracts_out_schema = ContractOutSchema(many=True)
jobs_out_schema = PrintingJobOutSchema(many=True)


@bp.post("/printing-companies")
def create_printing_company():
    """
    Create a private or contracted printing company
    ---
    tags: [Printing Companies]
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [name, is_private]
          properties:
            name: { type: string, maxLength: 255 }
            is_private: { type: boolean }
            address:
              type: string
              maxLength: 255
              description: Required for contracted companies, ignored for private ones
    responses:
      201: { description: Created }
      422: { description: Validation error or missing address }
    """
    data = load_or_raise(create_schema, json_body())
    company = services().printing.create_printing_company(
        {"name": data["name"]}, is_private=data["is_private"], address=data["address"]
    )
    return jsonify({"data": out_schema.dump(company)}), 201


@bp.get("/printing-companies")
def list_printing_companies():
    """
    List printing companies (pagination, kind filter, q search)
    ---
    tags: [Printing Companies]
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
        name: kind
        type: string
        enum: [private, contracted]
      - in: query
        name: q
        type: string
    responses:
      200: { description: OK }
    """
    svc = services().printing
    q = request.args.get("q")
    if q:
        rows = svc.search_printing_companies(q)
    else:
        rows = svc.list_printing_companies(request.args.get("kind"))
    return jsonify(paginate(rows, out_list_schema))


@bp.get("/printing-companies/<int:company_id>")
def get_printing_company(company_id: int):
    """
    Get a printing company by id
    ---
    tags: [Printing Companies]
    parameters:
      - in: path
        name: company_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    company = services().printing.get_printing_company(company_id)
    return jsonify({"data": out_schema.dump(company)})


@bp.put("/printing-companies/<int:company_id>")
def update_printing_company(company_id: int):
    """
    Rename a company (and replace the address of a contracted one)
    ---
    tags: [Printing Companies]
    parameters:
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
            name: { type: string, maxLength: 255 }
            address: { type: string, maxLength: 255 }
    responses:
      200: { description: OK }
      404: { description: Not found }
      422: { description: Validation error }
    """
    company = services().printing.update_printing_company(company_id, json_body())
    return jsonify({"data": out_schema.dump(company)})


@bp.delete("/printing-companies/<int:company_id>")
def delete_printing_company(company_id: int):
    """
    Delete a company together with its contracts
    ---
    tags: [Printing Companies]
    parameters:
      - in: path
        name: company_id
        type: integer
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
      409: { description: Company has printing jobs }
    """
    services().printing.delete_printing_company(company_id)
    return ("", 204)


@bp.get("/printing-companies/<int:company_id>/contracts")
def list_company_contracts(company_id: int):
    """
    List the contracts of a company
    ---
    tags: [Printing Companies]
    parameters:
      - in: path
        name: company_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    contracts = services().printing.get_contracts_by_company(company_id)
    return jsonify({"data": contracts_out_schema.dump(contracts)})


@bp.get("/printing-companies/<int:company_id>/printing-jobs")
def list_company_printing_jobs(company_id: int):
    """
    List the printing jobs of a company, earliest delivery first
    ---
    tags: [Printing Companies]
    parameters:
      - in: path
        name: company_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    jobs = services().printing.get_printing_jobs_by_company(company_id)
    return jsonify({"data": jobs_out_schema.dump(jobs)})
