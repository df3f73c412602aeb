from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.utils.params import json_body, paginate, services
from models.schemas.contract import ContractOutSchema

bp = Blueprint("contracts", __name__)

out_schema = ContractOutSchema()
out_list_schema = ContractOutSchema(many=True)


@bp.post("/contracts")
def create_contract():
    """
    Create a contract with a contracted printing company
    ---
    tags: [Contracts]
    consumes: [application/json]
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [value, responsible, company_id]
          properties:
            value: { type: string, example: "1500.00" }
            responsible: { type: string, maxLength: 255 }
            company_id: { type: integer }
    responses:
      201: { description: Created }
      400: { description: Company is not a contracted company }
      422: { description: Validation error }
    """
    c = services().printing.create_contract(json_body())
    return jsonify({"data": out_schema.dump(c)}), 201


@bp.get("/contracts")
def list_contracts():
    """
    List contracts (pagination, responsible search, value window)
    ---
    tags: [Contracts]
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
        name: responsible
        type: string
      - in: query
        name: value_min
        type: string
      - in: query
        name: value_max
        type: string
    responses:
      200: { description: OK }
    """
    svc = services().printing
    responsible = request.args.get("responsible")
    value_min = request.args.get("value_min")
    value_max = request.args.get("value_max")

    if value_min is not None or value_max is not None:
        rows = svc.get_contracts_by_value_range(value_min, value_max)
    elif responsible:
        rows = svc.get_contracts_by_responsible(responsible)
    else:
        rows = svc.list_contracts()
    return jsonify(paginate(rows, out_list_schema))


@bp.get("/contracts/<int:contract_id>")
def get_contract(contract_id: int):
    """
    Get a contract by id
    ---
    tags: [Contracts]
    parameters:
      - in: path
        name: contract_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    c = services().printing.get_contract(contract_id)
    return jsonify({"data": out_schema.dump(c)})


@bp.put("/contracts/<int:contract_id>")
def update_contract(contract_id: int):
    """
    Replace a contract
    ---
    tags: [Contracts]
    parameters:
      - in: path
        name: contract_id
        type: integer
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            value: { type: string }
            responsible: { type: string }
            company_id: { type: integer }
    responses:
      200: { description: OK }
      400: { description: Company is not a contracted company }
      404: { description: Not found }
      422: { description: Validation error }
    """
    c = services().printing.update_contract(contract_id, json_body())
    return jsonify({"data": out_schema.dump(c)})


@bp.delete("/contracts/<int:contract_id>")
def delete_contract(contract_id: int):
    """
    Delete a contract
    ---
    tags: [Contracts]
    parameters:
      - in: path
        name: contract_id
        type: integer
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Not found }
    """
    services().printing.delete_contract(contract_id)
    return ("", 204)
