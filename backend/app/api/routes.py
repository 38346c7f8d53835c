"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.dates import parse_utc_date
from backend.core.locale import build_script, format_prorata_output, strings_for
from backend.core.ping import get_ping_response
from backend.core.proration import compute_prorata, prorate
from backend.core.storage import MemStorage
from backend.domain.proration import ProrataError
from backend.schemas.proration import ProrateRequest, ProrateResponse, ProrationResultPayload
from backend.schemas.records import CalculationCreate, ProRataCreate

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _storage() -> MemStorage:
    return current_app.extensions["storage"]


def _with_defaults(payload: Dict[str, Any]) -> Dict[str, Any]:
    settings = current_app.config["SETTINGS"]
    payload.setdefault("vatRate", settings.default_vat_rate)
    payload.setdefault("anchorDay", settings.default_anchor_day)
    return payload


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=False)
    if not isinstance(payload, dict):
        raise ProrataError("request body must be a JSON object")
    return payload


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("rejected %s: %d validation error(s)", request.path, exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(ProrataError)
def _handle_prorata_error(exc: ProrataError):
    logger.warning("rejected %s: %s", request.path, exc)
    return jsonify({"error": str(exc), "field": exc.field}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = get_ping_response(current_app.config["SETTINGS"])
    return jsonify(response.model_dump())


@api_bp.post("/pro-rata/compute")
def compute() -> Any:
    """First-invoice pro-rata figures plus the copyable client script."""
    payload = _with_defaults(_json_body())
    language = payload.pop("language", "en")
    strings_for(language)

    output = compute_prorata(payload)
    body = output.model_dump(mode="json")
    body["script"] = build_script(output, language)
    return jsonify(body)


@api_bp.post("/pro-rata/format")
def format_proration() -> Any:
    """Prorate around a pivot date and render it as script, totals or VAT lines."""
    params = ProrateRequest.model_validate(_json_body())
    pivot = parse_utc_date(params.pivotDate, field="pivotDate")
    result = prorate(params.monthly, pivot, params.anchorDay, params.mode)
    text = format_prorata_output(params.language, params.format, params.monthly, result, vat_rate=params.vatRate)

    response = ProrateResponse(
        text=text,
        result=ProrationResultPayload(
            start=result.start,
            end=result.end,
            days=result.days,
            usedDays=result.used_days,
            ratio=result.ratio,
            value=result.value,
        ),
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/calculations")
def list_calculations() -> Any:
    return jsonify([row.model_dump(mode="json") for row in _storage().get_calculations()])


@api_bp.get("/calculations/<record_id>")
def get_calculation(record_id: str) -> Any:
    record = _storage().get_calculation(record_id)
    if record is None:
        return jsonify({"error": "Calculation not found"}), HTTPStatus.NOT_FOUND
    return jsonify(record.model_dump(mode="json"))


@api_bp.post("/calculations")
def create_calculation() -> Any:
    data = CalculationCreate.model_validate(_json_body())
    record = _storage().create_calculation(data)
    logger.info("saved calculation %s (%s)", record.id, record.type)
    return jsonify(record.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.get("/pro-rata")
def list_pro_rata() -> Any:
    return jsonify([row.model_dump(mode="json") for row in _storage().get_pro_rata_calculations()])


@api_bp.get("/pro-rata/<record_id>")
def get_pro_rata(record_id: str) -> Any:
    record = _storage().get_pro_rata_calculation(record_id)
    if record is None:
        return jsonify({"error": "Pro-rata calculation not found"}), HTTPStatus.NOT_FOUND
    return jsonify(record.model_dump(mode="json"))


@api_bp.post("/pro-rata")
def create_pro_rata() -> Any:
    data = ProRataCreate.model_validate(_with_defaults(_json_body()))
    record = _storage().create_pro_rata_calculation(data)
    logger.info("saved pro-rata record %s", record.id)
    return jsonify(record.model_dump(mode="json")), HTTPStatus.CREATED
