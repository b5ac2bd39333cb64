"""
Diagram Validator - Checks the integrity of a generated system design.

Catches issues like:
- Duplicate component IDs
- Connections pointing at components that do not exist
- Self-loops and duplicate connections
- Empty labels
- Component types outside the known categories
- Orphaned components (no connections)

Validation is advisory: results are reported next to the diagram and never
stop it from being applied to the canvas.
"""

from dataclasses import dataclass, field
from typing import List, Set, Dict, Optional, Tuple
from enum import Enum
from collections import defaultdict

from archcanvas.ir.categories import to_category
from archcanvas.ir.diagram import Diagram


class ValidationSeverity(Enum):
    ERROR = "error"      # Diagram will not render correctly
    WARNING = "warning"  # Diagram renders but has issues
    INFO = "info"        # Suggestions for improvement


@dataclass
class ValidationIssue:
    """A single validation issue found in the diagram"""
    severity: ValidationSeverity
    code: str           # Machine-readable issue code
    message: str        # Human-readable description
    component_id: Optional[str] = None
    connection_info: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "component_id": self.component_id,
            "connection_info": self.connection_info,
            "suggestion": self.suggestion,
        }


@dataclass
class DiagramValidationResult:
    """Result of diagram validation"""
    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.INFO)

    def codes(self) -> Set[str]:
        return {i.code for i in self.issues}

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "info_count": self.info_count,
            "issues": [i.to_dict() for i in self.issues],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        status = "Valid" if self.is_valid else "Invalid"
        return (
            f"{status} | "
            f"Errors: {self.error_count}, Warnings: {self.warning_count}, Info: {self.info_count}"
        )


class DiagramValidator:
    """
    Usage:
        validator = DiagramValidator()
        result = validator.validate(diagram)

        if not result.is_valid:
            for issue in result.issues:
                print(f"[{issue.severity.value}] {issue.message}")
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def validate(self, diagram: Diagram) -> DiagramValidationResult:
        issues: List[ValidationIssue] = []
        component_ids = {c.id for c in diagram.components}

        issues.extend(self._check_empty_diagram(diagram))
        issues.extend(self._check_duplicate_component_ids(diagram))
        issues.extend(self._check_empty_labels(diagram))
        issues.extend(self._check_unknown_categories(diagram))
        issues.extend(self._check_missing_references(diagram, component_ids))
        issues.extend(self._check_self_loops(diagram))
        issues.extend(self._check_duplicate_connections(diagram))
        issues.extend(self._check_orphaned_components(diagram, component_ids))

        has_errors = any(i.severity == ValidationSeverity.ERROR for i in issues)
        has_warnings = any(i.severity == ValidationSeverity.WARNING for i in issues)

        is_valid = not has_errors
        if self.strict_mode:
            is_valid = not has_errors and not has_warnings

        return DiagramValidationResult(
            is_valid=is_valid,
            issues=issues,
            stats=self._calculate_stats(diagram, component_ids),
        )

    def _check_empty_diagram(self, diagram: Diagram) -> List[ValidationIssue]:
        issues = []
        if not diagram.components:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.ERROR,
                code="NO_COMPONENTS",
                message="Diagram has no components",
                suggestion="Rephrase the prompt with more detail about the system",
            ))
        if not diagram.connections and len(diagram.components) > 1:
            issues.append(ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="NO_CONNECTIONS",
                message=f"Diagram has {len(diagram.components)} components but no connections",
            ))
        return issues

    def _check_duplicate_component_ids(self, diagram: Diagram) -> List[ValidationIssue]:
        issues = []
        seen: Dict[str, int] = defaultdict(int)
        for component in diagram.components:
            seen[component.id] += 1
        for component_id, count in seen.items():
            if count > 1:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="DUPLICATE_COMPONENT_ID",
                    message=f"Duplicate component ID '{component_id}' appears {count} times",
                    component_id=component_id,
                    suggestion="Ensure each component has a unique ID",
                ))
        return issues

    def _check_empty_labels(self, diagram: Diagram) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="EMPTY_LABEL",
                message=f"Component '{c.id}' has empty label",
                component_id=c.id,
            )
            for c in diagram.components
            if not c.label or not c.label.strip()
        ]

    def _check_unknown_categories(self, diagram: Diagram) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="UNKNOWN_CATEGORY",
                message=f"Component '{c.id}' has unknown type '{c.type}'",
                component_id=c.id,
                suggestion="Placed in the overflow grid instead of a layer",
            )
            for c in diagram.components
            if to_category(c.type) is None
        ]

    def _check_missing_references(self, diagram: Diagram, component_ids: Set[str]) -> List[ValidationIssue]:
        issues = []
        for conn in diagram.connections:
            info = f"{conn.source} -> {conn.target}"
            if conn.source not in component_ids:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="MISSING_SOURCE_COMPONENT",
                    message=f"Connection references non-existent source '{conn.source}'",
                    connection_info=info,
                ))
            if conn.target not in component_ids:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="MISSING_TARGET_COMPONENT",
                    message=f"Connection references non-existent target '{conn.target}'",
                    connection_info=info,
                ))
        return issues

    def _check_self_loops(self, diagram: Diagram) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                code="SELF_LOOP",
                message=f"Connection creates self-loop on '{conn.source}'",
                component_id=conn.source,
                connection_info=f"{conn.source} -> {conn.target}",
            )
            for conn in diagram.connections
            if conn.source == conn.target
        ]

    def _check_duplicate_connections(self, diagram: Diagram) -> List[ValidationIssue]:
        issues = []
        counts: Dict[Tuple[str, str, str], int] = defaultdict(int)
        for conn in diagram.connections:
            counts[(conn.source, conn.target, conn.kind.value)] += 1
        for (source, target, kind), count in counts.items():
            if count > 1:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    code="DUPLICATE_CONNECTION",
                    message=f"Connection '{source}' -> '{target}' ({kind}) appears {count} times",
                    connection_info=f"{source} -> {target}",
                ))
        return issues

    def _check_orphaned_components(self, diagram: Diagram, component_ids: Set[str]) -> List[ValidationIssue]:
        connected = set()
        for conn in diagram.connections:
            connected.add(conn.source)
            connected.add(conn.target)

        # Keep input order so reports are stable.
        return [
            ValidationIssue(
                severity=ValidationSeverity.INFO,
                code="ORPHANED_COMPONENT",
                message=f"Component '{c.label}' ({c.id}) has no connections",
                component_id=c.id,
            )
            for c in diagram.components
            if c.id not in connected and len(component_ids) > 1
        ]

    def _calculate_stats(self, diagram: Diagram, component_ids: Set[str]) -> Dict[str, int]:
        connected = set()
        for conn in diagram.connections:
            connected.add(conn.source)
            connected.add(conn.target)

        return {
            "components": len(diagram.components),
            "connections": len(diagram.connections),
            "orphaned_components": len(component_ids - connected),
            "unknown_categories": sum(
                1 for c in diagram.components if to_category(c.type) is None
            ),
        }


def validate_diagram(diagram: Diagram, strict: bool = False) -> DiagramValidationResult:
    """Convenience function to validate a diagram."""
    validator = DiagramValidator(strict_mode=strict)
    return validator.validate(diagram)
