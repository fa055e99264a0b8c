from typing import Annotated

from fastapi import APIRouter, Query, Request, Response

from bizdir.dependencies import DirectoryDep
from bizdir.schemas.queries import BusinessQuery
from bizdir.schemas.responses import BusinessDetail, BusinessPage
from bizdir.schemas.submission import BusinessType

router = APIRouter(prefix="/api/businesses", tags=["businesses"])


def _multi_select(request: Request, name: str) -> list[str]:
    """Collect ``name[]`` and ``name`` query values, dropping blanks."""
    params = request.query_params
    values = params.getlist(f"{name}[]") + params.getlist(name)
    return list(dict.fromkeys(v.strip() for v in values if v and v.strip()))


def _parse_verified(value: str) -> bool | None:
    if value == "":
        return None
    return value == "true"


@router.get("", response_model=BusinessPage)
async def list_businesses(
    request: Request,
    response: Response,
    service: DirectoryDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 12,
    search: str = "",
    verified: str = "",
) -> BusinessPage:
    known_types = {t.value for t in BusinessType}
    query = BusinessQuery(
        search=search.strip(),
        categories=_multi_select(request, "categories"),
        cities=_multi_select(request, "cities"),
        business_types=[
            t for t in _multi_select(request, "businessTypes") if t in known_types
        ],
        verified=_parse_verified(verified),
    )
    response.headers["Cache-Control"] = "public, max-age=120, s-maxage=300"
    return await service.search(query, page=page, limit=limit)


@router.get("/{identifier}", response_model=BusinessDetail)
async def get_business(identifier: str, service: DirectoryDep) -> BusinessDetail:
    return await service.get_business(identifier)
