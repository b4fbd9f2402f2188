"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import (
    AnalyzeRequest,
    OptimizeRequest,
    OptimizeResponse,
    RegionCatalogResponse,
    RegionLookupResponse,
    RouteAnalysisModel,
)
from ...services.routing.service import analyze_payload, get_route_optimizer, optimize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizeRequest) -> OptimizeResponse:
    try:
        return optimize_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc


@router.post("/analyze", response_model=RouteAnalysisModel, status_code=status.HTTP_200_OK)
def analyze(payload: AnalyzeRequest) -> RouteAnalysisModel:
    """Compute distance and map-jump metrics for an already ordered route."""
    try:
        return analyze_payload(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error analyzing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyze route: {str(exc)}"
        ) from exc


@router.get("/regions", response_model=RegionCatalogResponse, status_code=status.HTTP_200_OK)
def list_regions() -> RegionCatalogResponse:
    return RegionCatalogResponse(regions=get_route_optimizer().catalog.as_dict())


@router.get("/regions/{map_id}", response_model=RegionLookupResponse, status_code=status.HTTP_200_OK)
def lookup_region(map_id: int) -> RegionLookupResponse:
    """Region of a map; ``region`` is null for maps outside every region."""
    return RegionLookupResponse(map_id=map_id, region=get_route_optimizer().catalog.lookup_region(map_id))
