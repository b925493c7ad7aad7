"""Compatibility Rule Engine — Deterministic Rule-Based Build Checker.

Pure Python. No I/O. Fully unit-testable.

Each rule compares one operand on the left with one on the right:
  1. CPU socket vs motherboard socket
  2. RAM memory type vs motherboard memory type
  3. Cooler socket support vs CPU socket
  4. Case motherboard support vs motherboard form factor
  5. GPU length vs case maximum GPU length
  6. Selected PSU wattage vs recommended PSU wattage

A missing operand on either side skips the rule, so partial builds and
incomplete catalog data never produce a warning.

Input:  BuildSlotMap + estimated load watts
Output: warning strings, or a CompatibilityReport with per-rule outcomes
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pcbuilder.power.wattage import PSU_WATTAGE_KEYS, recommended_psu
from pcbuilder.schemas.build import BuildSlotMap
from pcbuilder.schemas.compatibility import (
    CheckOutcome,
    CheckStatus,
    CompatibilityIssue,
    CompatibilityReport,
    CompatibilityStatus,
)
from pcbuilder.schemas.component import SlotKind
from pcbuilder.specs.extractor import extract_metric, format_value, spec_text

logger = logging.getLogger(__name__)

OperandValue = str | float


# ─── Operands ───


@dataclass(frozen=True)
class Operand:
    """One side of a rule: a spec read from a slot, or a value derived
    from the estimated load."""

    slot: SlotKind | None
    keys: tuple[str, ...] = ()
    numeric: bool = False
    derive: Callable[[float], float] | None = None

    def read(self, build: BuildSlotMap, watts: float) -> OperandValue | None:
        if self.derive is not None:
            return self.derive(watts)
        component = build.get(self.slot) if self.slot else None
        if component is None:
            return None
        if self.numeric:
            value = extract_metric(component, self.keys)
            return value if value > 0 else None
        return spec_text(component, self.keys)


def text_spec(slot: SlotKind, *keys: str) -> Operand:
    return Operand(slot=slot, keys=keys)


def number_spec(slot: SlotKind, *keys: str) -> Operand:
    return Operand(slot=slot, keys=keys, numeric=True)


def load_derived(fn: Callable[[float], float]) -> Operand:
    return Operand(slot=None, derive=fn)


# ─── Comparators (True means compatible) ───


def equals(left: OperandValue, right: OperandValue) -> bool:
    return left == right


def contains_casefold(left: OperandValue, right: OperandValue) -> bool:
    """Left text mentions right text, ignoring case."""
    return str(right).casefold() in str(left).casefold()


def at_most(left: OperandValue, right: OperandValue) -> bool:
    return float(left) <= float(right)


def at_least(left: OperandValue, right: OperandValue) -> bool:
    return float(left) >= float(right)


# ─── Rule Table ───


@dataclass(frozen=True)
class CompatibilityRule:
    code: str
    label: str
    left: Operand
    right: Operand
    comparator: Callable[[OperandValue, OperandValue], bool]
    message: str
    pass_detail: str
    suggestion: str | None = None

    @property
    def slots(self) -> list[str]:
        return [op.slot.value for op in (self.left, self.right) if op.slot]


# Evaluation order is the order of this table.
COMPATIBILITY_RULES: tuple[CompatibilityRule, ...] = (
    CompatibilityRule(
        code="SOCKET_MISMATCH",
        label="CPU and Motherboard Socket",
        left=text_spec(SlotKind.CPU, "Socket"),
        right=text_spec(SlotKind.MOTHERBOARD, "Socket"),
        comparator=equals,
        message="CPU socket {left} does not match motherboard socket {right}.",
        pass_detail="{left} processor fits the selected motherboard.",
        suggestion="Pick a motherboard with the same socket as the CPU",
    ),
    CompatibilityRule(
        code="MEMORY_TYPE_MISMATCH",
        label="RAM Generation Match",
        left=text_spec(SlotKind.RAM, "Memory Type", "Type"),
        right=text_spec(SlotKind.MOTHERBOARD, "Memory Type"),
        comparator=equals,
        message="RAM type {left} is not supported by the motherboard ({right}).",
        pass_detail="{left} memory is supported by the motherboard.",
        suggestion="Match the RAM generation to the motherboard",
    ),
    CompatibilityRule(
        code="COOLER_SOCKET_UNSUPPORTED",
        label="Cooling Support",
        left=text_spec(SlotKind.COOLER, "Socket Compatibility", "Socket Support"),
        right=text_spec(SlotKind.CPU, "Socket"),
        comparator=contains_casefold,
        message="Cooler does not list support for CPU socket {right}.",
        pass_detail="Cooler supports the {right} socket.",
        suggestion="Choose a cooler that lists the CPU socket or add a mounting kit",
    ),
    CompatibilityRule(
        code="CASE_FORM_FACTOR_UNSUPPORTED",
        label="Case Form Factor",
        left=text_spec(SlotKind.CASE, "Motherboard Support"),
        right=text_spec(SlotKind.MOTHERBOARD, "Form Factor"),
        comparator=contains_casefold,
        message="Case does not support the {right} motherboard form factor.",
        pass_detail="Case accepts {right} motherboards.",
        suggestion="Use a case that lists the motherboard form factor",
    ),
    CompatibilityRule(
        code="GPU_TOO_LONG",
        label="GPU Clearance",
        left=number_spec(SlotKind.GPU, "Length"),
        right=number_spec(SlotKind.CASE, "Max GPU Length"),
        comparator=at_most,
        message="GPU length {left}mm exceeds the case limit of {right}mm.",
        pass_detail="{left}mm card fits within the {right}mm case limit.",
        suggestion="Pick a shorter GPU or a larger case",
    ),
    CompatibilityRule(
        code="PSU_UNDERSIZED",
        label="Power Supply Capacity",
        left=number_spec(SlotKind.PSU, *PSU_WATTAGE_KEYS),
        right=load_derived(recommended_psu),
        comparator=at_least,
        message="PSU wattage {left}W is below the recommended {right}W.",
        pass_detail="{left}W PSU covers the recommended {right}W.",
        suggestion="Upgrade to a PSU at or above the recommended wattage",
    ),
)


# ═══════════════════════════════════════════════════════════
# Rule Evaluation
# ═══════════════════════════════════════════════════════════


def evaluate_rule(
    rule: CompatibilityRule, build: BuildSlotMap, watts: float
) -> tuple[CheckOutcome, CompatibilityIssue | None]:
    """Evaluate a single rule. Never raises for missing data."""
    left = rule.left.read(build, watts)
    right = rule.right.read(build, watts)

    if left is None or right is None:
        return (
            CheckOutcome(
                code=rule.code,
                label=rule.label,
                status=CheckStatus.SKIPPED,
                detail="Not enough part data to check.",
            ),
            None,
        )

    fields = {"left": format_value(left), "right": format_value(right)}
    if rule.comparator(left, right):
        return (
            CheckOutcome(
                code=rule.code,
                label=rule.label,
                status=CheckStatus.PASS,
                detail=rule.pass_detail.format(**fields),
            ),
            None,
        )

    message = rule.message.format(**fields)
    return (
        CheckOutcome(
            code=rule.code,
            label=rule.label,
            status=CheckStatus.WARNING,
            detail=message,
        ),
        CompatibilityIssue(
            code=rule.code,
            label=rule.label,
            message=message,
            slots=rule.slots,
            suggestion=rule.suggestion,
        ),
    )


def run_compatibility_checks(
    build: BuildSlotMap,
    watts: float,
    rules: tuple[CompatibilityRule, ...] | list[CompatibilityRule] | None = None,
) -> CompatibilityReport:
    """Run all (or selected) rules over a build.

    Args:
        build: Current slot assignment.
        watts: Estimated load, used by derived operands.
        rules: Optional subset of rules. Defaults to COMPATIBILITY_RULES.

    Returns:
        CompatibilityReport with OK/WARNINGS status and one outcome per rule.
    """
    active = COMPATIBILITY_RULES if rules is None else rules
    checks: list[CheckOutcome] = []
    issues: list[CompatibilityIssue] = []

    for rule in active:
        outcome, issue = evaluate_rule(rule, build, watts)
        logger.debug("Rule %s -> %s", rule.code, outcome.status.value)
        checks.append(outcome)
        if issue is not None:
            issues.append(issue)

    status = CompatibilityStatus.OK if not issues else CompatibilityStatus.WARNINGS

    return CompatibilityReport(
        status=status,
        issues=issues,
        checks=checks,
        checks_passed=sum(1 for c in checks if c.status == CheckStatus.PASS),
        checks_skipped=sum(1 for c in checks if c.status == CheckStatus.SKIPPED),
        checks_total=len(active),
    )


def check_compatibility(build: BuildSlotMap, watts: float) -> list[str]:
    """Warning messages for a build, in rule order. Empty means no issues."""
    return run_compatibility_checks(build, watts).warnings
