from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request, Response

from salon.services.customer_service import (
    CustomerService,
    DuplicatePhoneError,
    InvalidCustomerError,
    InvalidVisitError,
)

router = APIRouter(prefix="/api/customers", tags=["customers"])
logger = logging.getLogger(__name__)


def _get_customer_service(request: Request) -> CustomerService:
    svc = getattr(getattr(request.app, "state", None), "customer_service", None)
    if not svc:
        raise RuntimeError("CustomerService not configured")
    return svc


def _json_object(payload: Any) -> dict:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise HTTPException(400, "Request body must be a JSON object")
    return payload


@router.get("")
def list_customers(request: Request):
    svc = _get_customer_service(request)
    return [customer.to_dict() for customer in svc.list_customers()]


@router.get("/search/{term}")
def search_customers(term: str, request: Request):
    svc = _get_customer_service(request)
    return [customer.to_dict() for customer in svc.search_customers(term)]


@router.get("/{customer_id}")
def get_customer(customer_id: str, request: Request):
    svc = _get_customer_service(request)
    customer = svc.get_customer(customer_id)
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer.to_dict()


@router.post("", status_code=201)
def create_customer(request: Request, payload: Any = Body(None)):
    svc = _get_customer_service(request)
    payload = _json_object(payload)
    try:
        customer = svc.create_customer(
            payload.get("name"),
            payload.get("phoneNumber"),
            payload.get("preferredStyles"),
            payload.get("notes") or "",
        )
    except InvalidCustomerError as exc:
        raise HTTPException(400, str(exc))
    except DuplicatePhoneError as exc:
        raise HTTPException(409, str(exc))
    if not customer:
        logger.error("Customer creation returned no record for phone %s", payload.get("phoneNumber"))
        raise HTTPException(500, "Error creating customer")
    return customer.to_dict()


@router.put("/{customer_id}")
def update_customer(customer_id: str, request: Request, payload: Any = Body(None)):
    svc = _get_customer_service(request)
    payload = _json_object(payload)
    try:
        customer = svc.update_customer(customer_id, payload)
    except InvalidCustomerError as exc:
        raise HTTPException(400, str(exc))
    except DuplicatePhoneError as exc:
        raise HTTPException(409, str(exc))
    if not customer:
        raise HTTPException(404, "Customer not found")
    return customer.to_dict()


@router.post("/{customer_id}/visits", status_code=201)
def add_visit(customer_id: str, request: Request, payload: Any = Body(None)):
    svc = _get_customer_service(request)
    payload = _json_object(payload)
    try:
        visit = svc.add_visit(customer_id, payload.get("servicesTaken"), payload.get("notes") or "")
    except InvalidVisitError as exc:
        raise HTTPException(400, str(exc))
    if not visit:
        raise HTTPException(404, "Customer not found")
    return visit.to_dict()


@router.delete("/{customer_id}", status_code=204)
def delete_customer(customer_id: str, request: Request):
    svc = _get_customer_service(request)
    if not svc.delete_customer(customer_id):
        raise HTTPException(404, "Customer not found")
    return Response(status_code=204)
