class OperationCanceled(Exception):
    """Raised when a sitemap generation run was canceled by the caller."""


class NavigationTreeError(Exception):
    """Raised when the navigation tree cannot be loaded or parsed."""
