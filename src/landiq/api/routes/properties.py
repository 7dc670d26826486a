from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from landiq.api.deps import open_store
from landiq.properties.models import PermitPrediction
from landiq.properties.predict import predict_permit
from landiq.properties.suggest import suggest_addresses

router = APIRouter(tags=["properties"])


class PredictBody(BaseModel):
    address: str


@router.post("/predict")
def predict(body: PredictBody) -> Dict[str, Any]:
    try:
        prediction = predict_permit(body.address)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"ok": True, "prediction": prediction.model_dump()}


@router.get("/properties")
def list_properties(limit: Optional[int] = None) -> Dict[str, Any]:
    store = open_store()
    try:
        items = store.list_recent(limit=limit)
        return {"ok": True, "properties": [p.model_dump() for p in items]}
    finally:
        store.close()


@router.post("/properties")
def save_property(body: PermitPrediction) -> Dict[str, Any]:
    store = open_store()
    try:
        try:
            saved = store.save(body)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return {"ok": True, "property": saved.model_dump()}
    finally:
        store.close()


@router.get("/properties/{property_id}")
def get_property(property_id: str) -> Dict[str, Any]:
    store = open_store()
    try:
        prop = store.get(property_id)
        if prop is None:
            raise HTTPException(status_code=404, detail="property not found")
        return {"ok": True, "property": prop.model_dump()}
    finally:
        store.close()


@router.delete("/properties/{property_id}")
def delete_property(property_id: str) -> Dict[str, Any]:
    store = open_store()
    try:
        if not store.delete(property_id):
            raise HTTPException(status_code=404, detail="property not found")
        return {"ok": True, "deleted": property_id}
    finally:
        store.close()


@router.get("/addresses/suggest")
def suggest(q: str = "", limit: int = 5) -> Dict[str, Any]:
    store = open_store()
    try:
        addresses = store.list_addresses()
    finally:
        store.close()
    return {"suggestions": suggest_addresses(q, addresses, limit=max(1, limit))}
