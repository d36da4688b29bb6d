from __future__ import annotations

from flask import Blueprint, request, jsonify

from models import storage
from models.expense import Expense
from models.schemas.entry import ExpenseSchema, ExpenseOutSchema, DateRangeSchema
from services.entries import EntryService
from utils.decorators import login_required

bp = Blueprint("expenses", __name__)

expense_schema = ExpenseSchema()
expense_out_schema = ExpenseOutSchema()
expenses_out_schema = ExpenseOutSchema(many=True)
date_range_schema = DateRangeSchema()

expenses = EntryService(storage, Expense, "expense_date")


@bp.post("/expenses")
@login_required()
def create_expense(principal):
    """
    Create an expense owned by the caller
    ---
    tags:
      - Expenses
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
          required: [title, amount, expense_date]
          properties:
            title: { type: string, maxLength: 100 }
            category: { type: string, maxLength: 50 }
            amount: { type: string, example: "19.99" }
            expense_date: { type: string, format: date }
            note: { type: string }
    responses:
      201:
        description: Created
      401:
        description: Unauthorized
      422:
        description: Validation error
    """
    data = expense_schema.load(request.get_json(silent=True) or {})
    row = expenses.create(principal, data)
    return jsonify(expense_out_schema.dump(row)), 201


@bp.get("/expenses")
@login_required()
def list_expenses(principal):
    """
    List the caller's expenses, newest first
    ---
    tags:
      - Expenses
    security:
      - Bearer: []
    responses:
      200:
        description: OK
    """
    return jsonify(expenses_out_schema.dump(expenses.list(principal)))


@bp.get("/expenses/<int:expense_id>")
@login_required()
def get_expense(expense_id: int, principal):
    """
    Get one expense
    ---
    tags:
      - Expenses
    security:
      - Bearer: []
    parameters:
      - in: path
        name: expense_id
        type: integer
        required: true
    responses:
      200:
        description: OK
      403:
        description: Expense belongs to another user
      404:
        description: Not found
    """
    return jsonify(expense_out_schema.dump(expenses.get(principal, expense_id)))


@bp.put("/expenses/<int:expense_id>")
@login_required()
def update_expense(expense_id: int, principal):
    """
    Replace an expense's fields
    ---
    tags:
      - Expenses
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: path
        name: expense_id
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
        description: Expense belongs to another user
      404:
        description: Not found
      422:
        description: Validation error
    """
    data = expense_schema.load(request.get_json(silent=True) or {})
    row = expenses.update(principal, expense_id, data)
    return jsonify(expense_out_schema.dump(row))


@bp.delete("/expenses/<int:expense_id>")
@login_required()
def delete_expense(expense_id: int, principal):
    """
    Delete an expense
    ---
    tags:
      - Expenses
    security:
      - Bearer: []
    parameters:
      - in: path
        name: expense_id
        type: integer
        required: true
    responses:
      204:
        description: Deleted
      403:
        description: Expense belongs to another user
      404:
        description: Not found
    """
    expenses.delete(principal, expense_id)
    return ("", 204)


@bp.get("/expenses/category/<category>")
@login_required()
def expenses_by_category(category: str, principal):
    """
    List the caller's expenses in one category
    ---
    tags:
      - Expenses
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
    return jsonify(expenses_out_schema.dump(expenses.by_category(principal, category)))


@bp.get("/expenses/date-range")
@login_required()
def expenses_by_date_range(principal):
    """
    List the caller's expenses between two dates (inclusive), newest first
    ---
    tags:
      - Expenses
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
    rows = expenses.by_date_range(principal, rng["start_date"], rng["end_date"])
    return jsonify(expenses_out_schema.dump(rows))


@bp.get("/expenses/total")
@login_required()
def total_expenses(principal):
    """
    Sum of the caller's expenses
    ---
    tags:
      - Expenses
    security:
      - Bearer: []
    responses:
      200:
        description: OK
    """
    return jsonify({"total": str(expenses.total(principal))})


@bp.get("/expenses/total/category/<category>")
@login_required()
def total_expenses_by_category(category: str, principal):
    """
    Sum of the caller's expenses in one category
    ---
    tags:
      - Expenses
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
    return jsonify({"category": category, "total": str(expenses.total(principal, category))})


@bp.get("/expenses/count")
@login_required()
def count_expenses(principal):
    """
    Number of expenses the caller owns
    ---
    tags:
      - Expenses
    security:
      - Bearer: []
    responses:
      200:
        description: OK
    """
    return jsonify({"count": expenses.count(principal)})
