"""Corpus validation: schema re-check and required-section lint."""

import logging

from pydantic import ValidationError as PydanticValidationError

from ..domain import Case, CaseFrontmatter, ValidationReport

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("install", "setup", "usage")


def missing_sections(case: Case, required: tuple[str, ...] = REQUIRED_SECTIONS) -> list[str]:
    """Required section names with no ``# name`` or ``## name`` header in the body."""
    content = case.content.lower()
    return [
        section
        for section in required
        if f"## {section}" not in content and f"# {section}" not in content
    ]


def validate_cases(cases: list[Case]) -> ValidationReport:
    """Check loaded cases against the frontmatter schema and section conventions.

    Missing sections are warnings; schema failures are errors.
    """
    report = ValidationReport()

    for case in cases:
        try:
            CaseFrontmatter.model_validate(case.to_frontmatter())
        except PydanticValidationError as e:
            report.errors[case.id] = str(e)
            logger.error("Case %s validation failed: %s", case.id, e)
            continue

        missing = missing_sections(case)
        if missing:
            report.missing_sections[case.id] = missing
            logger.warning("Case %s missing sections: %s", case.id, ", ".join(missing))

        report.valid += 1
        logger.debug("Case %s is valid", case.id)

    logger.info("Validation complete: %d valid, %d errors", report.valid, len(report.errors))
    return report
