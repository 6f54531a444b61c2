from types import MappingProxyType

from .calculator import Calculator, check_family_status
from .results import IncomeTaxResult, TaxInfoFlag
from .rounding import round2, round4, round_euro
from .social_contributions import SocialContributionsCalculator


def compute_fiscal_parts(family_status, nb_children):
    # See https://www.service-public.fr/particuliers/vosdroits/F2705 and https://www.service-public.fr/particuliers/vosdroits/F2702
    # /!\ no extra half-share here for single parents, IncomeTaxCalculator.household_shares() does add it.
    # Both are kept on purpose: callers rely on either value.
    check_family_status(family_status)
    base_shares = 2 if family_status == "couple" else 1
    nb_children_1 = min(nb_children, 2)
    nb_children_2 = max(0, nb_children - nb_children_1)
    return base_shares + nb_children_1 * 0.5 + nb_children_2


def apply_brackets(income, brackets):
    """Progressive tax: each rate only applies to the slice of income within its bracket.

    Returns the tax and the marginal rate (rate of the highest bracket reached).
    """
    tax = 0
    marginal_tax_rate = 0
    for bracket in brackets:
        if income <= bracket.min:
            break
        ceiling = bracket.max if bracket.max is not None else income
        tax += (min(income, ceiling) - bracket.min) * bracket.rate
        marginal_tax_rate = bracket.rate
    return tax, marginal_tax_rate


def household_tax_share(household_tax, net_imposable, household_net_imposable):
    # Not a legal computation (a couple files jointly), only a way to show "your" part of the household tax:
    # split it proportionally to each one's net taxable income.
    ratio = net_imposable / household_net_imposable if household_net_imposable > 0 else 1.0
    return round_euro(household_tax * ratio)


class IncomeTaxCalculator(Calculator):
    def __init__(self, parameters=None, contributions_calculator=None, debug=False):
        super().__init__(parameters, debug)
        self.contributions_calculator = contributions_calculator or SocialContributionsCalculator(self.parameters,
                                                                                                 debug=debug)

    def household_shares(self, family_status, nb_children):
        shares = compute_fiscal_parts(family_status, nb_children)
        # simplification: any single filer with a child is considered an isolated parent (sole custody not checked)
        if family_status == "single" and nb_children >= 1:
            shares += 0.5
        return shares

    def net_imposable(self, gross, contributions):
        # CRDS and non-deductible CSG do not reduce the taxable base
        deductible_contributions = contributions.total - contributions.csg_non_deductible - contributions.crds
        return gross - deductible_contributions

    def professional_deduction(self, net_imposable):
        # 10% flat deduction for professional fees, with a minimum and a ceiling, see:
        # https://www.impots.gouv.fr/particulier/questions/comment-puis-je-beneficier-de-la-deduction-forfaitaire-de-10
        ded = self.parameters.professional_deduction
        return max(ded.min, min(ded.max, net_imposable * ded.rate))

    def _apply_professional_deduction(self, net_imposable, declarant, flags):
        ded = self.parameters.professional_deduction
        deduction = self.professional_deduction(net_imposable)
        if net_imposable * ded.rate > ded.max:
            flag = TaxInfoFlag.FEE_REBATE_CEILING_1 if declarant == 1 else TaxInfoFlag.FEE_REBATE_CEILING_2
            flags[flag] = f"taxable income += {round(net_imposable * ded.rate - ded.max)}€"
        elif 0 < net_imposable and net_imposable * ded.rate < ded.min:
            flag = TaxInfoFlag.FEE_REBATE_FLOOR_1 if declarant == 1 else TaxInfoFlag.FEE_REBATE_FLOOR_2
            flags[flag] = f"deduction raised to {ded.min}€"
        return max(0, net_imposable - deduction)

    def _compute_income_tax(self, taxable_income, household_shares):
        # https://www.service-public.fr/particuliers/vosdroits/F1419
        tax_per_share, marginal_tax_rate = apply_brackets(taxable_income / household_shares,
                                                          self.parameters.income_tax_brackets)
        self.maybe_print("Shares: ", household_shares, " ; Tax per share: ", tax_per_share)
        return tax_per_share * household_shares, marginal_tax_rate

    def compute_household_tax(self, taxable_income, household_shares, family_status, flags):
        tax_with_family_quotient, marginal_tax_rate = self._compute_income_tax(taxable_income, household_shares)
        flags[TaxInfoFlag.MARGINAL_TAX_RATE] = f"{round(marginal_tax_rate * 100)}%"
        final_income_tax = tax_with_family_quotient
        household_shares_without_family_quotient = 2 if family_status == "couple" else 1
        if household_shares > household_shares_without_family_quotient:
            # apply capping of the family quotient benefices, see
            # https://www.economie.gouv.fr/particuliers/quotient-familial
            tax_without_family_quotient, _ = self._compute_income_tax(taxable_income,
                                                                      household_shares_without_family_quotient)
            extra_half_shares = (household_shares - household_shares_without_family_quotient) * 2
            family_quotient_benefices = tax_without_family_quotient - tax_with_family_quotient
            family_quotient_benefices_capping = extra_half_shares * self.parameters.family_quotient_benefices_capping
            self.maybe_print("Family quotient benefices: ", family_quotient_benefices, "  ;  Capped to: ",
                             family_quotient_benefices_capping)
            if family_quotient_benefices > family_quotient_benefices_capping:
                additional_taxes = family_quotient_benefices - family_quotient_benefices_capping
                flags[TaxInfoFlag.FAMILY_QUOTIENT_CAPPING] = f"tax += {round(additional_taxes, 2)}€"
                final_income_tax = tax_without_family_quotient - family_quotient_benefices_capping
        return max(0, round_euro(final_income_tax)), marginal_tax_rate

    def calculate(self, gross, contributions, family_status, nb_children, partner_gross=0):
        check_family_status(family_status)
        flags = {}
        net_imposable = self.net_imposable(gross, contributions)
        taxable_income = self._apply_professional_deduction(net_imposable, 1, flags)
        household_net_imposable = net_imposable
        household_taxable_income = taxable_income

        with_partner = family_status == "couple" and partner_gross > 0
        if with_partner:
            # the deduction applies per declarant, then incomes are summed
            partner_contributions = self.contributions_calculator.calculate(partner_gross)
            partner_net_imposable = self.net_imposable(partner_gross, partner_contributions)
            household_net_imposable += partner_net_imposable
            household_taxable_income += self._apply_professional_deduction(partner_net_imposable, 2, flags)
        self.maybe_print("Household taxable income: ", household_taxable_income)

        household_shares = self.household_shares(family_status, nb_children)
        if household_shares > compute_fiscal_parts(family_status, nb_children):
            flags[TaxInfoFlag.SINGLE_PARENT_SHARE] = f"{household_shares} shares"
        household_tax, marginal_tax_rate = self.compute_household_tax(household_taxable_income, household_shares,
                                                                      family_status, flags)

        if with_partner:
            amount = household_tax_share(household_tax, net_imposable, household_net_imposable)
        else:
            amount = household_tax
        effective_rate = amount / net_imposable if net_imposable > 0 else 0

        return IncomeTaxResult(
            net_imposable=round2(net_imposable),
            taxable_income=round2(taxable_income),
            parts=household_shares,
            marginal_rate=marginal_tax_rate,
            effective_rate=round4(effective_rate),
            amount=amount,
            household_net_imposable=round2(household_net_imposable),
            household_taxable_income=round2(household_taxable_income),
            household_tax=household_tax,
            flags=MappingProxyType(flags),
        )
