"""Application factories."""

from mockbank.application.factories.sync_layer_factory import SyncLayerFactory

__all__ = ["SyncLayerFactory"]
