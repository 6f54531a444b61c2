from collections import namedtuple
from enum import Enum

# All records are immutable; nested collections are tuples.

UserInput = namedtuple("UserInput", [
    "gross_annual_salary", "family_status", "number_of_children", "partner_gross_annual_salary"
], defaults=[0, 0])

SocialContributionLine = namedtuple("SocialContributionLine", ["id", "label", "rate", "base", "amount"])
SocialContributionsBreakdown = namedtuple("SocialContributionsBreakdown", [
    "total",
    "retirement",          # vieillesse + complémentaire + CEG
    "health",              # CSG, considered as mostly funding health
    "csg_deductible",
    "csg_non_deductible",
    "crds",
    "details",
])


class TaxInfoFlag(Enum):
    FEE_REBATE_CEILING_1 = "[1] Hit ceiling for professional fees deduction"
    FEE_REBATE_CEILING_2 = "[2] Hit ceiling for professional fees deduction"
    FEE_REBATE_FLOOR_1 = "[1] Professional fees deduction raised to its minimum"
    FEE_REBATE_FLOOR_2 = "[2] Professional fees deduction raised to its minimum"
    MARGINAL_TAX_RATE = "Marginal tax rate"
    FAMILY_QUOTIENT_CAPPING = "Capped family quotient benefices"
    SINGLE_PARENT_SHARE = "Extra half-share for single parent"


IncomeTaxResult = namedtuple("IncomeTaxResult", [
    "net_imposable",             # gross - deductible contributions
    "taxable_income",            # after professional deduction
    "parts",
    "marginal_rate",
    "effective_rate",            # amount / net_imposable
    "amount",                    # individual share of the household tax
    "household_net_imposable",
    "household_taxable_income",
    "household_tax",
    "flags",                     # read-only mapping TaxInfoFlag -> message
])

EstimatedVATResult = namedtuple("EstimatedVATResult", [
    "net_after_tax", "savings_rate", "estimated_savings", "estimated_consumption", "effective_rate", "amount"
])

Equivalence = namedtuple("Equivalence", ["description", "quantity", "unit", "unit_price", "emoji", "source"])

SousActionAllocation = namedtuple("SousActionAllocation", ["code", "name", "amount", "percentage_of_action"])
ActionAllocation = namedtuple("ActionAllocation", [
    "code", "name", "amount", "percentage_of_programme", "sous_actions"
])
ProgrammeAllocation = namedtuple("ProgrammeAllocation", [
    "code", "name", "mission", "amount", "percentage_of_sector", "actions"
])
BudgetSector = namedtuple("BudgetSector", [
    "id", "name", "amount", "percentage", "color", "icon", "description", "equivalence",
    "includes_social_security", "programmes"
])

CotisationDestination = namedtuple("CotisationDestination", [
    "id", "label", "organism", "description", "amount", "percentage", "color", "emoji", "equivalence"
])

TaxResult = namedtuple("TaxResult", [
    "input",
    "social_contributions",
    "income_tax",
    "estimated_vat",
    "direct_taxes",               # contributions + income tax, what's deducted from the paycheck
    "total_taxes",                # direct taxes + estimated VAT
    "net_take_home",
    "direct_tax_rate",
    "overall_tax_rate",
    "budget_allocation",
    "cotisations_by_destination",  # where the social contributions go (social protection)
    "state_budget_allocation",     # where income tax + VAT go (state budget only)
    "state_taxes",
    "statement_year",
])

OtherTaxInputs = namedtuple("OtherTaxInputs", [
    "vehicle_type", "km_per_year", "packs_per_week", "drinks_per_week", "proprietaire", "taxe_fonciere_amount"
], defaults=["berline", 12200, 0, 0, False, 1082])

OtherTaxEstimate = namedtuple("OtherTaxEstimate", [
    "id", "label", "emoji", "amount", "color", "destination_label", "description"
])

# Tagged optional: kind is "absent" (estimate is None) or "present"
OptionalTax = namedtuple("OptionalTax", ["kind", "estimate"])
ABSENT = OptionalTax("absent", None)


def present(estimate):
    return OptionalTax("present", estimate)


DonutSegment = namedtuple("DonutSegment", ["name", "value", "color"])

_OtherTaxesResult = namedtuple("OtherTaxesResult", [
    "ticpe", "tsca", "tabac", "alcool", "taxe_fonciere", "cehr",
    "total_other_taxes", "grand_total", "donut_segments"
])


class OtherTaxesResult(_OtherTaxesResult):
    __slots__ = ()

    @property
    def optional_taxes(self):
        return (self.tabac, self.alcool, self.taxe_fonciere)

    @property
    def taxes(self):
        # itemized excise taxes, CEHR excluded as it is income based
        return (self.ticpe, self.tsca) + tuple(o.estimate for o in self.optional_taxes if o.kind == "present")
