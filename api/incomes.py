from __future__ import annotations

from flask import Blueprint, request, jsonify

from models import storage
from models.income import Income
from models.schemas.entry import IncomeSchema, IncomeOutSchema, DateRangeSchema
from services.entries import EntryService
from utils.decorators import login_required

bp = Blueprint("incomes", __name__)

income_schema = IncomeSchema()
income_out_schema = IncomeOutSchema()
incomes_out_schema = IncomeOutSchema(many=True)
date_range_schema = DateRangeSchema()

incomes = EntryService(storage, Income, "income_date")


@bp.post("/incomes")
@login_required()
def create_income(principal):
    """
    Create an income owned by the caller
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [title, amount, income_date]
          properties:
            title: { type: string, maxLength: 100 }
            category: { type: string, maxLength: 50 }
            amount: { type: string, example: "19.99" }
            income_date: { type: string, format: date }
            note: { type: string }
    responses:
      201:
        description: Created
      401:
        description: Unauthorized
      422:
        description: Validation error
    """
    data = income_schema.load(request.get_json(silent=True) or {})
    row = incomes.create(principal, data)
    return jsonify(income_out_schema.dump(row)), 201


@bp.get("/incomes")
@login_required()
def list_incomes(principal):
    """
    List the caller's incomes, newest first
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    responses:
      200:
        description: OK
    """
    return jsonify(incomes_out_schema.dump(incomes.list(principal)))


@bp.get("/incomes/<int:income_id>")
@login_required()
def get_income(income_id: int, principal):
    """
    Get one income
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    parameters:
      - in: path
        name: income_id
        type: integer
        required: true
    responses:
      200:
        description: OK
      403:
        description: Income belongs to another user
      404:
        description: Not found
    """
    return jsonify(income_out_schema.dump(incomes.get(principal, income_id)))


@bp.put("/incomes/<int:income_id>")
@login_required()
def update_income(income_id: int, principal):
    """
    Replace an income's fields
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: path
        name: income_id
        type: integer
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
    responses:
      200:
        description: Updated
      403:
        description: Income belongs to another user
      404:
        description: Not found
      422:
        description: Validation error
    """
    data = income_schema.load(request.get_json(silent=True) or {})
    row = incomes.update(principal, income_id, data)
    return jsonify(income_out_schema.dump(row))


@bp.delete("/incomes/<int:income_id>")
@login_required()
def delete_income(income_id: int, principal):
    """
    Delete an income
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    parameters:
      - in: path
        name: income_id
        type: integer
        required: true
    responses:
      204:
        description: Deleted
      403:
        description: Income belongs to another user
      404:
        description: Not found
    """
    incomes.delete(principal, income_id)
    return ("", 204)


@bp.get("/incomes/category/<category>")
@login_required()
def incomes_by_category(category: str, principal):
    """
    List the caller's incomes in one category
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    parameters:
      - in: path
        name: category
        type: string
        required: true
    responses:
      200:
        description: OK
    """
    return jsonify(incomes_out_schema.dump(incomes.by_category(principal, category)))


@bp.get("/incomes/date-range")
@login_required()
def incomes_by_date_range(principal):
    """
    List the caller's incomes between two dates (inclusive), newest first
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    parameters:
      - in: query
        name: start_date
        type: string
        format: date
        required: true
      - in: query
        name: end_date
        type: string
        format: date
        required: true
    responses:
      200:
        description: OK
      422:
        description: Missing or invalid dates
    """
    rng = date_range_schema.load(request.args.to_dict())
    rows = incomes.by_date_range(principal, rng["start_date"], rng["end_date"])
    return jsonify(incomes_out_schema.dump(rows))


@bp.get("/incomes/total")
@login_required()
def total_incomes(principal):
    """
    Sum of the caller's incomes
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    responses:
      200:
        description: OK
    """
    return jsonify({"total": str(incomes.total(principal))})


@bp.get("/incomes/total/category/<category>")
@login_required()
def total_incomes_by_category(category: str, principal):
    """
    Sum of the caller's incomes in one category
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    parameters:
      - in: path
        name: category
        type: string
        required: true
    responses:
      200:
        description: OK
    """
    return jsonify({"category": category, "total": str(incomes.total(principal, category))})


@bp.get("/incomes/count")
@login_required()
def count_incomes(principal):
    """
    Number of incomes the caller owns
    ---
    tags:
      - Incomes
    security:
      - Bearer: []
    responses:
      200:
        description: OK
    """
    return jsonify({"count": incomes.count(principal)})
