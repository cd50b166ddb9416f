# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for parsed diagrams.

These checks flag constructs the parser accepts but the layout engine either
cannot place or resolves in a possibly unintended way.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from seqdraft.model.entities import AltGroup, ConditionalBlock, Diagram, Signal, Statement

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue; the diagram can still be laid out.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal inconsistency in the diagram.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running validation checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors that indicate an inconsistent diagram.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(diagram: Diagram) -> ValidationResult:
    """Run all validation checks on a Diagram.

    Checks performed:

    1. **Unknown participants** (error): a signal endpoint, after alias
       resolution, that is not a registered participant.

    2. **Dangling aliases** (error): an alias bound to a name that is not a
       registered participant and not itself an alias.

    3. **Alias chains** (warning): an alias bound to another alias. Aliases
       are resolved in a single step, so the chain is not followed.

    4. **Shadowing aliases** (warning): an alias that is also the name of a
       participant. The alias takes precedence when resolving endpoints.

    5. **Nested signals** (warning): signals inside ``opt`` blocks are part of
       the tree but are not placed by the layout engine.

    Args:
        diagram: The diagram to check.

    Returns:
        A ValidationResult containing all warnings and errors found.
    """
    result = ValidationResult()
    _check_aliases(diagram, result)
    _check_signal_endpoints(diagram, result)
    _check_nested_signals(diagram, result)
    return result


# ################
# Implementation
# ################


def _check_aliases(diagram: Diagram, result: ValidationResult) -> None:
    for alias, name in diagram.aliases.items():
        if name in diagram.aliases:
            result.warnings.append(
                ValidationWarning(f"Alias '{alias}' refers to alias '{name}'; alias chains are not followed")
            )
        elif diagram.participant(name) is None:
            result.errors.append(ValidationError(f"Alias '{alias}' refers to unknown participant '{name}'"))
        if diagram.participant(alias) is not None:
            result.warnings.append(ValidationWarning(f"Alias '{alias}' shadows participant '{alias}'"))


def _check_signal_endpoints(diagram: Diagram, result: ValidationResult) -> None:
    reported: set[str] = set()
    for signal in _iter_signals(diagram.statements):
        for name in (signal.source, signal.target):
            canonical = diagram.resolve(name)
            if diagram.participant(canonical) is None and canonical not in reported:
                reported.add(canonical)
                result.errors.append(ValidationError(f"Signal refers to unknown participant '{canonical}'"))


def _check_nested_signals(diagram: Diagram, result: ValidationResult) -> None:
    for statement in diagram.statements:
        if isinstance(statement, ConditionalBlock):
            count = sum(1 for _ in _iter_signals(statement.statements))
            if count:
                result.warnings.append(
                    ValidationWarning(
                        f"{count} signal(s) inside '{statement.label}' block are not laid out"
                    )
                )


def _iter_signals(statements: list[Statement]) -> Iterator[Signal]:
    """Yield every signal in *statements*, descending into blocks."""
    for statement in statements:
        if isinstance(statement, Signal):
            yield statement
        elif isinstance(statement, ConditionalBlock):
            yield from _iter_signals(statement.statements)
        elif isinstance(statement, AltGroup):
            for block in statement.blocks:
                yield from _iter_signals(block.statements)
