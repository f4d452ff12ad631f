from __future__ import annotations

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from chain_registry.core.dependencies import get_registry_handle, get_snapshot
from chain_registry.data.registry import RegistryHandle, RegistrySnapshot
from chain_registry.domain import path_filters
from chain_registry.domain.registry_utils import MatchType, match_text, strip_nulls

logger = logging.getLogger(__name__)
router = APIRouter()


def _dump(model: BaseModel) -> dict:
    return strip_nulls(model.model_dump(mode="json", by_alias=True))


def _dump_all(models) -> List[dict]:
    return [_dump(m) for m in models]


# ---------------------------------------------------------------------------
# 1. GET /information
# ---------------------------------------------------------------------------

@router.get("/information")
async def get_information(
    handle: RegistryHandle = Depends(get_registry_handle),
    snapshot: RegistrySnapshot = Depends(get_snapshot),
) -> dict:
    config = handle.config
    return {
        "SourceIdentifier": config.source_identifier,
        "DisplayName": config.display_name,
        "DuplicatePolicy": config.duplicate_policy.value,
        "Chains": len(snapshot.chains),
        "AssetLists": len(snapshot.assets),
        "Paths": len(snapshot.paths),
        "LastBuiltAt": snapshot.built_at.isoformat(),
    }


# ---------------------------------------------------------------------------
# 2. Chains and assets
# ---------------------------------------------------------------------------

@router.get("/chains")
async def list_chains(
    q: Optional[str] = Query(default=None, description="Keyword to match chain names against."),
    match: Optional[MatchType] = Query(default=None, description="Exact, CaseInsensitive, StartsWith, Substring or Wildcard."),
    snapshot: RegistrySnapshot = Depends(get_snapshot),
) -> dict:
    names = snapshot.chains.names()
    if q is not None:
        names = [name for name in names if match_text(name, q, match)]
    return {"Data": names}


@router.get("/chains/{name}")
async def get_chain(name: str, snapshot: RegistrySnapshot = Depends(get_snapshot)) -> dict:
    chain = snapshot.chains.get(name)
    if chain is None:
        raise HTTPException(status_code=404, detail="Chain not found")
    return {"Data": _dump(chain)}


@router.get("/chains/{name}/assets")
async def get_assets(name: str, snapshot: RegistrySnapshot = Depends(get_snapshot)) -> dict:
    assets = snapshot.assets.get(name)
    if assets is None:
        raise HTTPException(status_code=404, detail="Asset list not found")
    return {"Data": _dump(assets)}


@router.get("/chains/{name}/paths")
async def get_chain_paths(name: str, snapshot: RegistrySnapshot = Depends(get_snapshot)) -> dict:
    return {"Data": _dump_all(snapshot.paths.by_chain(name))}


# ---------------------------------------------------------------------------
# 3. Paths
# ---------------------------------------------------------------------------

@router.get("/paths")
async def list_paths(
    status: Optional[str] = Query(default=None, description="Channel status tag, e.g. live."),
    dex: Optional[str] = Query(default=None, description="Channel dex tag, e.g. osmosis."),
    preferred: Optional[bool] = Query(default=None, description="Channel preferred tag."),
    snapshot: RegistrySnapshot = Depends(get_snapshot),
) -> dict:
    if status is None and dex is None and preferred is None:
        records = snapshot.paths.all()
    else:
        # All tag values must hold on the same channel
        predicate = path_filters.with_tag(dex=dex, preferred=preferred, status=status)
        records = snapshot.paths.filter(predicate)
    return {"Data": _dump_all(records)}


@router.get("/paths/{chain_a}/{chain_b}")
async def get_path(
    chain_a: str,
    chain_b: str,
    snapshot: RegistrySnapshot = Depends(get_snapshot),
) -> dict:
    record = snapshot.paths.by_pair(chain_a, chain_b)
    if record is None:
        raise HTTPException(status_code=404, detail="Path not found")
    return {"Data": _dump(record)}
