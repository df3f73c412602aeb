from flask import Blueprint, jsonify

from api.utils.params import parse_date_arg, services
from models.schemas.contract import ContractValueAnalysisOutSchema
from models.schemas.printing_job import PrintingStatisticsOutSchema

bp = Blueprint("reports", __name__)

statistics_schema = PrintingStatisticsOutSchema()
analysis_schema = ContractValueAnalysisOutSchema()


@bp.get("/reports/printing-statistics")
def printing_statistics():
    """
    Printing statistics for a delivery window
    ---
    tags: [Reports]
    parameters:
      - in: query
        name: start
        type: string
        format: date
        required: true
      - in: query
        name: end
        type: string
        format: date
        required: true
    responses:
      200:
        description: OK
        schema:
          type: object
          properties:
            period: { type: string, example: "2024-01-01 to 2024-01-31" }
            total_jobs: { type: integer }
            total_copies: { type: integer }
            most_active_company_id: { type: integer }
            overdue_jobs: { type: integer }
            pending_jobs: { type: integer }
            urgent_jobs: { type: integer }
      422:
        description: Missing or inverted window
    """
    stats = services().reporting.get_printing_statistics(
        parse_date_arg("start", required=True), parse_date_arg("end", required=True)
    )
    return jsonify({"data": statistics_schema.dump(stats)})


@bp.get("/reports/contract-analysis")
def contract_analysis():
    """
    Contract value analysis (count, total, average, min, max)
    ---
    tags: [Reports]
    responses:
      200: { description: OK }
    """
    return jsonify({"data": analysis_schema.dump(services().reporting.get_contract_value_analysis())})
