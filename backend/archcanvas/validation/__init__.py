"""
Validation module for generated system designs.
"""

from archcanvas.validation.diagram_validator import (
    DiagramValidator,
    DiagramValidationResult,
    ValidationIssue,
    ValidationSeverity,
    validate_diagram,
)

__all__ = [
    "DiagramValidator",
    "DiagramValidationResult",
    "ValidationIssue",
    "ValidationSeverity",
    "validate_diagram",
]
