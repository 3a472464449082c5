"""
Leads API Endpoints.

Endpoints used by the funnel (create) and the admin dashboard (list, stats,
update, delete).
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from api.dependencies import get_store, read_json_body, require_admin_credentials
from api.models import (
    ApiResponse,
    DeleteResultModel,
    LeadModel,
    LeadPageModel,
    LeadStatsModel,
)
from repositories.kv_store import KeyValueStore
from services.admin_service import collect_all_leads, filter_leads, maturity_distribution
from services.lead_service import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    LeadNotFoundError,
    LeadValidationError,
    create_lead,
    delete_lead,
    get_lead,
    list_leads,
    update_processed_flag,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/leads",
    response_model=ApiResponse[LeadModel],
    summary="Create Lead",
    description="Validate and store a lead submitted at the end of the funnel."
)
def create_lead_endpoint(
    payload: Dict[str, Any] = Body(...),
    store: KeyValueStore = Depends(get_store),
):
    """
    Create a lead from the funnel's contact form.

    **Validation** (the first failing rule is reported, HTTP 400):
    1. `company` is required
    2. `contact` is required
    3. `email` must be a valid address (stored trimmed and lowercased)
    4. `phone` is required
    5. `consent` must be `true`

    **Example request:**
    ```json
    {
      "company": "Muster GmbH",
      "contact": "Max Mustermann",
      "employeesRange": "21-50",
      "email": "Max@Muster.de",
      "phone": "+49 123 456789",
      "consent": true,
      "scoreSummary": {"areaA": 4, "areaB": 3, "areaC": 2, "average": 3.0}
    }
    ```
    """
    try:
        lead = create_lead(store, payload)
        return ApiResponse[LeadModel](success=True, data=LeadModel.from_domain(lead))

    except LeadValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception("Lead creation failed")
        raise HTTPException(
            status_code=500,
            detail=f"Lead creation failed: {str(e)}"
        )


@router.get(
    "/leads",
    response_model=ApiResponse[LeadPageModel],
    summary="List Leads",
    description="Paginated lead listing, newest first.",
    dependencies=[Depends(require_admin_credentials)],
)
def list_leads_endpoint(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT, description="Page size"),
    cursor: Optional[str] = Query(None, description="Opaque cursor from the previous page's `next`"),
    q: Optional[str] = Query(None, description="Filter the page by company or contact"),
    store: KeyValueStore = Depends(get_store),
):
    """
    List one page of leads sorted by creation time, newest first.

    Pass the `next` value of a response as `cursor` to get the following
    page; `next` is `null` on the last page. The `q` filter only applies to
    the leads of the returned page.

    **Example usage:**
    - First page: `GET /api/leads?limit=10`
    - Next page: `GET /api/leads?limit=10&cursor=<next>`
    """
    try:
        page = list_leads(store, cursor=cursor, limit=limit)
        items = filter_leads(page.items, q)
        return ApiResponse[LeadPageModel](
            success=True,
            data=LeadPageModel(
                items=[LeadModel.from_domain(lead) for lead in items],
                next=page.next_cursor,
            ),
        )

    except LeadValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception("Lead listing failed")
        raise HTTPException(
            status_code=500,
            detail=f"List error: {str(e)}"
        )


@router.get(
    "/leads/stats",
    response_model=ApiResponse[LeadStatsModel],
    summary="Lead Maturity Distribution",
    description="Count of all leads per overall maturity level.",
    dependencies=[Depends(require_admin_credentials)],
)
def lead_stats_endpoint(store: KeyValueStore = Depends(get_store)):
    try:
        leads = collect_all_leads(store)
        counts = maturity_distribution(leads)
        return ApiResponse[LeadStatsModel](
            success=True,
            data=LeadStatsModel(total=len(leads), **counts),
        )

    except Exception as e:
        logger.exception("Lead stats failed")
        raise HTTPException(
            status_code=500,
            detail=f"Stats error: {str(e)}"
        )


@router.patch(
    "/leads/{lead_id}",
    response_model=ApiResponse[LeadModel],
    summary="Update Processed Flag",
    description="Mark a lead as processed or unprocessed.",
    dependencies=[Depends(require_admin_credentials)],
)
def update_lead_endpoint(
    lead_id: str,
    payload: Any = Depends(read_json_body),
    store: KeyValueStore = Depends(get_store),
):
    """
    Set the `processed` flag of a lead.

    - 404 if the lead does not exist, checked before the body is looked at
    - 400 if the body is not a JSON object
    - 400 if `processed` is missing or not a boolean

    **Example request:** `{"processed": true}`
    """
    try:
        if not isinstance(payload, dict):
            get_lead(store, lead_id)
            raise LeadValidationError("body", "Invalid JSON body")
        lead = update_processed_flag(store, lead_id, payload.get("processed"))
        return ApiResponse[LeadModel](success=True, data=LeadModel.from_domain(lead))

    except LeadNotFoundError:
        raise HTTPException(status_code=404, detail="Not Found")
    except LeadValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.exception("Lead update failed for %s", lead_id)
        raise HTTPException(
            status_code=500,
            detail=f"Update failed: {str(e)}"
        )


@router.delete(
    "/leads/{lead_id}",
    response_model=ApiResponse[DeleteResultModel],
    summary="Delete Lead",
    description="Delete a lead. Succeeds even if the lead does not exist.",
    dependencies=[Depends(require_admin_credentials)],
)
def delete_lead_endpoint(lead_id: str, store: KeyValueStore = Depends(get_store)):
    try:
        result = delete_lead(store, lead_id)
        return ApiResponse[DeleteResultModel](success=True, data=DeleteResultModel(**result))

    except Exception as e:
        logger.exception("Lead delete failed for %s", lead_id)
        raise HTTPException(
            status_code=500,
            detail=f"Delete failed: {str(e)}"
        )
