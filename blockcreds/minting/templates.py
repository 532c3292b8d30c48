"""Lender templates and credential issuers offered to requesters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LenderTemplate:
    """A preset mint request published by a lender."""

    name: str
    min_score: int
    amount: int


ISSUERS: tuple[str, ...] = (
    "BlockCreds Labs",
    "PrimeTrust Bank",
    "DeFi Underwriters",
    "KYC Oracle",
)

LENDER_TEMPLATES: tuple[LenderTemplate, ...] = (
    LenderTemplate(name="PrimeTrust Starter Loan", min_score=600, amount=1),
    LenderTemplate(name="DeFi Underwriters Pro", min_score=680, amount=2),
    LenderTemplate(name="KYC Oracle Premium", min_score=720, amount=3),
)


def find_template(name: str) -> LenderTemplate | None:
    for template in LENDER_TEMPLATES:
        if template.name == name:
            return template
    return None
