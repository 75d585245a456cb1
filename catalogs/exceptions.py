"""
Catalog exceptions.
"""


class CatalogError(ValueError):
    """A catalog or configuration document is structurally unusable."""

    pass
