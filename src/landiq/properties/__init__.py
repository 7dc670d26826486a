"""Saved properties, mocked permit predictions and their map styling."""

from .models import PermitPrediction, SavedProperty
from .predict import mock_geocode, predict_permit
from .storage import PropertyStore

__all__ = [
    "PermitPrediction",
    "PropertyStore",
    "SavedProperty",
    "mock_geocode",
    "predict_permit",
]
