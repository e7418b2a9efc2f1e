"""Custom exceptions for the disease catalog."""

class CatalogError(Exception):
    """Base class for catalog loading and lookup errors."""
    pass

class CatalogNotFoundError(CatalogError):
    """Raised when the catalog JSON file cannot be located."""
    pass

class CatalogFormatError(CatalogError):
    """Raised when the catalog file is not valid JSON or not a list of records."""
    pass

class DiseaseNotFoundError(CatalogError):
    """Raised when a disease name is not present in the catalog."""
    pass
