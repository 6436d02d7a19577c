"""Form, table and delete-confirmation endpoints for the product list."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from product_manager.api.dependencies.manager import get_manager
from product_manager.api.routers.product_helpers import build_form, build_table
from product_manager.api.schemas.product import (
    DraftUpdate,
    FormView,
    PendingDeleteRead,
    ProductRead,
    ProductTable,
    SubmitResponse,
)
from product_manager.services.product_manager import MSG_INVALID, ProductManager
from product_manager.services.product_state import SubmitOutcome

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/",
    summary="List products for the table",
    response_model=ProductTable,
)
async def list_products(
    manager: ProductManager = Depends(get_manager),
) -> ProductTable:
    """Return every product, newest first, with display columns."""
    return build_table(manager.products)


@router.get(
    "/form",
    summary="Current form state",
    response_model=FormView,
)
async def get_form(
    manager: ProductManager = Depends(get_manager),
) -> FormView:
    return build_form(manager.state)


@router.patch(
    "/form",
    summary="Update draft fields",
    response_model=FormView,
)
async def update_form(
    payload: DraftUpdate,
    manager: ProductManager = Depends(get_manager),
) -> FormView:
    """Apply the fields the user changed; the draft stays off the list."""
    try:
        manager.update_draft(**payload.model_dump(exclude_unset=True, exclude_none=True))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    return build_form(manager.state)


@router.post(
    "/form/submit",
    summary="Submit the form (create or update)",
    response_model=SubmitResponse,
    responses={
        201: {"description": "Product created"},
        400: {"description": "Draft failed validation"},
    },
)
async def submit_form(
    response: Response,
    manager: ProductManager = Depends(get_manager),
) -> SubmitResponse:
    """Validate the draft, then prepend a new product or replace the edited one.

    Validation failures return 400 with the per-field messages; they are
    also kept on the form state for inline display.
    """
    try:
        result = manager.submit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error submitting product form: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        ) from e

    if result.outcome is SubmitOutcome.INVALID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": MSG_INVALID, "errors": result.errors},
        )

    if result.outcome is SubmitOutcome.CREATED:
        response.status_code = status.HTTP_201_CREATED

    return SubmitResponse(
        outcome=result.outcome.value,
        product=(
            ProductRead.model_validate(result.product)
            if result.product is not None
            else None
        ),
        form=build_form(manager.state),
    )


@router.post(
    "/form/cancel",
    summary="Leave edit mode and clear the form",
    response_model=FormView,
)
async def cancel_form(
    manager: ProductManager = Depends(get_manager),
) -> FormView:
    return build_form(manager.start_create())


@router.post(
    "/delete-requests/{token}/confirm",
    summary="Confirm a pending delete",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def confirm_delete(
    token: str,
    manager: ProductManager = Depends(get_manager),
) -> Response:
    """Remove the product behind the token.

    A product that disappeared after the request was made is ignored.
    """
    try:
        manager.confirm_delete(token)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Delete request not found",
        ) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/delete-requests/{token}/cancel",
    summary="Cancel a pending delete",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def cancel_delete(
    token: str,
    manager: ProductManager = Depends(get_manager),
) -> Response:
    try:
        manager.cancel_delete(token)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Delete request not found",
        ) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{product_id}",
    summary="Get one product",
    response_model=ProductRead,
)
async def get_product(
    product_id: int,
    manager: ProductManager = Depends(get_manager),
) -> ProductRead:
    product = manager.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductRead.model_validate(product)


@router.post(
    "/{product_id}/edit",
    summary="Load a product into the form",
    response_model=FormView,
)
async def edit_product(
    product_id: int,
    manager: ProductManager = Depends(get_manager),
) -> FormView:
    """Switch the form to edit mode; unknown ids leave the form unchanged."""
    return build_form(manager.start_edit(product_id))


@router.post(
    "/{product_id}/delete-request",
    summary="Ask for delete confirmation",
    response_model=PendingDeleteRead,
    responses={204: {"description": "No such product; nothing to confirm"}},
)
async def request_delete(
    product_id: int,
    manager: ProductManager = Depends(get_manager),
) -> PendingDeleteRead | Response:
    """Return a confirmation token and prompt for the UI to show."""
    pending = manager.request_delete(product_id)
    if pending is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return PendingDeleteRead(**pending.model_dump())
