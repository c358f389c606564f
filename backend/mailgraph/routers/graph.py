"""Read-only graph routes."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from mailgraph.db.dependencies import get_db
from mailgraph.schemas.common import ApiResponse
from mailgraph.schemas.graph import EventRead, GraphEdgeWithNamesRead, PersonRead, PlaceRead
from mailgraph.services.graph import list_edges, list_events, list_people, list_places


router = APIRouter(prefix="/graph")


@router.get("/people", response_model=ApiResponse[list[PersonRead]])
def get_people(
    organization: str | None = Query(None),
    db: Session = Depends(get_db),
) -> ApiResponse[list[PersonRead]]:
    """List person nodes."""

    return ApiResponse(data=[PersonRead.model_validate(row) for row in list_people(db, organization=organization)])


@router.get("/places", response_model=ApiResponse[list[PlaceRead]])
def get_places(
    type: str | None = Query(None),
    db: Session = Depends(get_db),
) -> ApiResponse[list[PlaceRead]]:
    """List place nodes."""

    return ApiResponse(data=[PlaceRead.model_validate(row) for row in list_places(db, place_type=type)])


@router.get("/events", response_model=ApiResponse[list[EventRead]])
def get_events(
    name: str | None = Query(None),
    db: Session = Depends(get_db),
) -> ApiResponse[list[EventRead]]:
    """List event nodes."""

    return ApiResponse(data=[EventRead.model_validate(row) for row in list_events(db, name=name)])


@router.get("/edges", response_model=ApiResponse[list[GraphEdgeWithNamesRead]])
def get_edges(
    edge_type: str | None = Query(None),
    db: Session = Depends(get_db),
) -> ApiResponse[list[GraphEdgeWithNamesRead]]:
    """List relationship edges with endpoint names."""

    return ApiResponse(data=list_edges(db, edge_type=edge_type))
