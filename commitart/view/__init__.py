from .view_widget import CommitArtViewWidget

__all__ = ["CommitArtViewWidget"]
