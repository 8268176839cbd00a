from .collection_controller import KeepSide, TabCollectionController

__all__ = ["KeepSide", "TabCollectionController"]
