"""FastAPI application: the create_app factory and its /api endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from foamdesk.config import AppConfig, configure_logging, load_config
from foamdesk.data.repository import RecordStore  # noqa: TCH001 (FastAPI resolves at runtime)
from foamdesk.data.snapshot import backup_filename, export_json, import_data
from foamdesk.engine import estimate as run_estimate
from foamdesk.exceptions import EstimateCommitError, RecordNotFoundError
from foamdesk.formatting import format_result
from foamdesk.models.enums import JobStatus
from foamdesk.models.estimate import (  # noqa: TCH001
    EstimateInputs,
    JobLocation,
    PricingSettings,
)
from foamdesk.models.records import CompanySettings, Customer, InventoryItem  # noqa: TCH001
from foamdesk.services import crm, dashboard, inventory, session
from foamdesk.services import estimates as estimate_service

logger = logging.getLogger(__name__)


class ComputeRequest(BaseModel):
    inputs: EstimateInputs
    pricing: PricingSettings | None = None  # stored settings when omitted


class CommitRequest(BaseModel):
    customer_id: str
    inputs: EstimateInputs
    status: JobStatus = JobStatus.DRAFT
    job_name: str = ""
    job_address: str | None = None
    location: JobLocation | None = None
    images: list[str] = Field(default_factory=list)
    notes: str | None = None


class StatusUpdate(BaseModel):
    status: JobStatus


class AdjustRequest(BaseModel):
    delta: float = Field(allow_inf_nan=False)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    company: str = ""


def _not_found(exc: RecordNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc))


def create_app(
    *,
    store: RecordStore | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    store
        Optional pre-built record store for dependency injection (e.g. tests).
        If not provided, one is created from the configuration on first use.
    config
        Optional configuration. Read from the environment when omitted.
    """
    if config is None:
        config = load_config()
        configure_logging(config)

    app = FastAPI(title="FoamDesk", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject their own
    app.state.store = store
    app.state.config = config

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Rejected inputs may be non-finite floats, which JSONResponse refuses to encode.
        errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

    def _get_store() -> RecordStore:
        st: RecordStore | None = app.state.store
        if st is not None:
            return st
        from foamdesk.factory import create_store

        st = create_store(app.state.config)
        app.state.store = st
        return st

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": "0.1.0"}

    # ------------------------------------------------------------------
    # Estimates
    # ------------------------------------------------------------------

    @app.post("/api/estimates/compute")
    def compute_estimate(request: ComputeRequest) -> dict[str, Any]:
        pricing = request.pricing or _get_store().get_settings().pricing()
        result = run_estimate(request.inputs, pricing)
        return {
            "result": result.model_dump(mode="json"),
            "formatted": format_result(result),
        }

    @app.get("/api/estimates")
    def list_estimates(status: JobStatus | None = None) -> list[dict[str, Any]]:
        found = estimate_service.filter_by_status(_get_store().get_estimates(), status)
        return [e.model_dump(mode="json") for e in found]

    @app.post("/api/estimates", status_code=201)
    def commit_estimate(request: CommitRequest) -> dict[str, Any]:
        try:
            est = estimate_service.commit_estimate(
                _get_store(),
                customer_id=request.customer_id,
                inputs=request.inputs,
                status=request.status,
                job_name=request.job_name,
                job_address=request.job_address,
                location=request.location,
                images=request.images,
                notes=request.notes,
            )
        except EstimateCommitError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return est.model_dump(mode="json")

    @app.get("/api/estimates/{estimate_id}")
    def get_estimate(estimate_id: str) -> dict[str, Any]:
        try:
            return _get_store().get_estimate(estimate_id).model_dump(mode="json")
        except RecordNotFoundError as exc:
            raise _not_found(exc) from exc

    @app.get("/api/estimates/{estimate_id}/summary")
    def estimate_summary(estimate_id: str) -> dict[str, Any]:
        st = _get_store()
        try:
            est = st.get_estimate(estimate_id)
        except RecordNotFoundError as exc:
            raise _not_found(exc) from exc
        customer_name = None
        try:
            customer_name = st.get_customer(est.customer_id).name
        except RecordNotFoundError:
            logger.warning("Estimate %s references missing customer %s", est.number, est.customer_id)
        return est.to_summary_dict(customer_name)

    @app.patch("/api/estimates/{estimate_id}/status")
    def update_status(estimate_id: str, update: StatusUpdate) -> dict[str, Any]:
        try:
            est = estimate_service.change_status(_get_store(), estimate_id, update.status)
        except RecordNotFoundError as exc:
            raise _not_found(exc) from exc
        return est.model_dump(mode="json")

    @app.delete("/api/estimates/{estimate_id}", status_code=204)
    def delete_estimate(estimate_id: str) -> Response:
        if not _get_store().delete_estimate(estimate_id):
            raise HTTPException(status_code=404, detail="Estimate not found")
        return Response(status_code=204)

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    @app.get("/api/customers")
    def list_customers(q: str = "") -> list[dict[str, Any]]:
        customers = _get_store().get_customers()
        if q:
            customers = crm.search_customers(customers, q)
        return [c.model_dump(mode="json") for c in customers]

    @app.post("/api/customers", status_code=201)
    def create_customer(customer: Customer) -> dict[str, Any]:
        return _get_store().save_customer(customer).model_dump(mode="json")

    @app.get("/api/customers/{customer_id}")
    def get_customer(customer_id: str) -> dict[str, Any]:
        st = _get_store()
        try:
            customer = st.get_customer(customer_id)
        except RecordNotFoundError as exc:
            raise _not_found(exc) from exc
        all_estimates = st.get_estimates()
        return {
            "customer": customer.model_dump(mode="json"),
            "estimates": [
                e.model_dump(mode="json")
                for e in crm.customer_estimates(all_estimates, customer_id)
            ],
            "lifetime_value": crm.lifetime_value(all_estimates, customer_id),
        }

    @app.put("/api/customers/{customer_id}")
    def save_customer(customer_id: str, customer: Customer) -> dict[str, Any]:
        saved = _get_store().save_customer(customer.model_copy(update={"id": customer_id}))
        return saved.model_dump(mode="json")

    @app.delete("/api/customers/{customer_id}", status_code=204)
    def delete_customer(customer_id: str) -> Response:
        if not _get_store().delete_customer(customer_id):
            raise HTTPException(status_code=404, detail="Customer not found")
        return Response(status_code=204)

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    @app.get("/api/inventory")
    def list_inventory() -> list[dict[str, Any]]:
        return [
            {
                **item.model_dump(mode="json"),
                "low_stock": inventory.is_low_stock(item),
                "stock_level_percent": inventory.stock_level_percent(item),
            }
            for item in _get_store().get_inventory()
        ]

    @app.put("/api/inventory/{item_id}")
    def save_inventory_item(item_id: str, item: InventoryItem) -> dict[str, Any]:
        saved = _get_store().save_inventory_item(item.model_copy(update={"id": item_id}))
        return saved.model_dump(mode="json")

    @app.post("/api/inventory/{item_id}/adjust")
    def adjust_inventory(item_id: str, request: AdjustRequest) -> dict[str, Any]:
        try:
            item = inventory.adjust_quantity(_get_store(), item_id, request.delta)
        except RecordNotFoundError as exc:
            raise _not_found(exc) from exc
        return item.model_dump(mode="json")

    @app.delete("/api/inventory/{item_id}", status_code=204)
    def delete_inventory_item(item_id: str) -> Response:
        if not _get_store().delete_inventory_item(item_id):
            raise HTTPException(status_code=404, detail="Inventory item not found")
        return Response(status_code=204)

    # ------------------------------------------------------------------
    # Settings and dashboard
    # ------------------------------------------------------------------

    @app.get("/api/settings")
    def get_settings() -> dict[str, Any]:
        return _get_store().get_settings().model_dump(mode="json")

    @app.put("/api/settings")
    def save_settings(settings: CompanySettings) -> dict[str, Any]:
        return _get_store().save_settings(settings).model_dump(mode="json")

    @app.get("/api/dashboard")
    def get_dashboard() -> dict[str, Any]:
        st = _get_store()
        stats = dashboard.compute_dashboard(st.get_estimates(), st.get_inventory())
        return {
            "pipeline_value": stats.pipeline_value,
            "active_work_orders": stats.active_work_orders,
            "pending_invoices": stats.pending_invoices,
            "low_stock_items": [i.model_dump(mode="json") for i in stats.low_stock_items],
            "status_counts": stats.status_counts,
        }

    # ------------------------------------------------------------------
    # Backup
    # ------------------------------------------------------------------

    @app.get("/api/data/export")
    def export_data() -> Response:
        return Response(
            content=export_json(_get_store()),
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{backup_filename()}"'},
        )

    @app.post("/api/data/import")
    async def import_backup(request: Request) -> dict[str, bool]:
        if not import_data(_get_store(), await request.body()):
            raise HTTPException(status_code=400, detail="Failed to import data.")
        return {"success": True}

    @app.post("/api/data/clear")
    def clear_data() -> dict[str, bool]:
        _get_store().clear_data()
        return {"success": True}

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @app.get("/api/session")
    def get_session() -> dict[str, Any]:
        user = session.current_user(_get_store())
        return {"user": user.model_dump(mode="json") if user else None}

    @app.post("/api/session")
    def login(request: LoginRequest) -> dict[str, Any]:
        user = session.login(_get_store(), request.username, request.company)
        return {"user": user.model_dump(mode="json")}

    @app.delete("/api/session", status_code=204)
    def logout() -> Response:
        session.logout(_get_store())
        return Response(status_code=204)

    return app
