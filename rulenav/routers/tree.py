from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from rulenav.core.auth import require_api_key
from rulenav.core.services.tree_service import paths_tree, paths_tree_text, ruleset_tree
from rulenav.models import ErrorResponse, PathsTreeRequest, PathsTreeResponse, RulesetTreeResponse

router = APIRouter(
    tags=["tree"],
    dependencies=[Depends(require_api_key)],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


@router.get(
    "/rulesets/tree",
    response_model=RulesetTreeResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def ruleset_tree_endpoint(
    prefix: str = Query("", description="Only list rulesets under this path"),
    separator: str | None = Query(None, min_length=1),
) -> RulesetTreeResponse:
    return await ruleset_tree(prefix=prefix, separator=separator)


@router.post(
    "/tree",
    response_model=PathsTreeResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def paths_tree_endpoint(payload: PathsTreeRequest) -> PathsTreeResponse:
    return paths_tree(payload)


@router.post("/tree/text", response_class=PlainTextResponse, responses=ERROR_RESPONSES)
def paths_tree_text_endpoint(payload: PathsTreeRequest) -> str:
    return paths_tree_text(payload)
