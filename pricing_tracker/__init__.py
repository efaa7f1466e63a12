"""Small-business recipe costing and pricing tracker."""

__version__ = "0.1.0"
