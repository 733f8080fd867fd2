"""
External data endpoints.

Routes:
- GET /integrations/data/{query_name}?k=v - Run a query; query values are context variables
- POST /integrations/data/{query_name} - Run a query with a JSON context

Dependencies: backoffice.application.services, backoffice.core.integrations
System role: External data HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Request

from backoffice.api.deps import WRITE_ROLES, get_data_fetcher_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors
from backoffice.application.services import DataFetcherService
from backoffice.core.integrations.templating import coerce_query_param
from backoffice.core.security import TokenPayload
from backoffice.models.integration import FetchDataRequest, FetchDataResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integrations/data", tags=["integrations"])


@router.get("/{query_name}", response_model=FetchDataResponse)
@handle_domain_errors
async def fetch_data_get(
    query_name: str,
    request: Request,
    fetcher: DataFetcherService = Depends(get_data_fetcher_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Run a named query.

    Every query-string parameter becomes a context variable; "true" and
    "false" become booleans and numeric strings become numbers.

    Returns:
        dict with query_name, data (the extracted and coerced value) and
        cached (True when served from the result cache)

    Raises:
        HTTPException(400): Data source unavailable, missing variable, fetch or extraction failure
        HTTPException(404): Query not found or inactive
    """
    context = {key: coerce_query_param(value) for key, value in request.query_params.items()}
    logger.info(
        "Fetching external data",
        extra={"query_name": query_name, "user_id": str(user.user_id), "variables": sorted(context)},
    )
    return await fetcher.fetch_data(query_name, context)


@router.post("/{query_name}", response_model=FetchDataResponse)
@handle_domain_errors
async def fetch_data_post(
    query_name: str,
    body: FetchDataRequest,
    fetcher: DataFetcherService = Depends(get_data_fetcher_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Run a named query with context variables from the JSON body.

    A body without context_variables leaves the endpoint path and query
    template unchanged.

    Returns:
        dict with query_name, data (the extracted and coerced value) and
        cached (True when served from the result cache)
    """
    logger.info("Fetching external data", extra={"query_name": query_name, "user_id": str(user.user_id)})
    return await fetcher.fetch_data(query_name, body.context_variables)
