from .budget import BudgetAllocationCalculator, default_budget_tables
from .calculator import Calculator, check_family_status
from .destinations import CotisationsDestinationCalculator
from .income_tax import IncomeTaxCalculator
from .other_taxes import OtherTaxesCalculator
from .parameters import DEFAULT_YEAR, get_other_tax_parameters, get_parameters
from .results import TaxResult
from .rounding import round2, round4
from .social_contributions import SocialContributionsCalculator, combine_breakdowns
from .vat import EstimatedVATCalculator


class TaxSimulator(Calculator):
    """Runs the whole pipeline: contributions -> income tax -> net take-home -> VAT -> totals -> budget.

    The simulator only holds read-only configuration, results are returned as new immutable records, so a single
    instance can serve any number of computations.
    """

    def __init__(self, statement_year=DEFAULT_YEAR, budget_tables=None, debug=False):
        super().__init__(get_parameters(statement_year), debug)
        self.statement_year = statement_year
        tables = budget_tables if budget_tables is not None else default_budget_tables()
        self.contributions = SocialContributionsCalculator(self.parameters, debug=debug)
        self.income_tax = IncomeTaxCalculator(self.parameters, self.contributions, debug=debug)
        self.vat = EstimatedVATCalculator(self.parameters, debug=debug)
        self.budget = BudgetAllocationCalculator(self.parameters, tables, debug=debug)
        self.destinations = CotisationsDestinationCalculator(self.parameters, tables.equivalences, debug=debug)
        self.other_taxes = OtherTaxesCalculator(get_other_tax_parameters(statement_year), debug=debug)

    def _assemble(self, user_input, gross, social_contributions, income_tax):
        # net take-home = what actually lands in the bank account
        direct_taxes = round2(social_contributions.total + income_tax.amount)
        net_take_home = round2(gross - direct_taxes)
        # VAT is estimated from disposable income (not from the fiscal net income)
        estimated_vat = self.vat.calculate(net_take_home)
        total_taxes = round2(direct_taxes + estimated_vat.amount)
        state_taxes = round2(income_tax.amount + estimated_vat.amount)
        self.maybe_print("Direct taxes: ", direct_taxes, " ; Total taxes: ", total_taxes)
        return TaxResult(
            input=user_input,
            social_contributions=social_contributions,
            income_tax=income_tax,
            estimated_vat=estimated_vat,
            direct_taxes=direct_taxes,
            total_taxes=total_taxes,
            net_take_home=net_take_home,
            direct_tax_rate=round4(direct_taxes / gross) if gross > 0 else 0,
            overall_tax_rate=round4(total_taxes / gross) if gross > 0 else 0,
            budget_allocation=self.budget.calculate(total_taxes),
            cotisations_by_destination=self.destinations.calculate(gross, social_contributions),
            state_budget_allocation=self.budget.calculate_state_budget(state_taxes),
            state_taxes=state_taxes,
            statement_year=self.statement_year,
        )

    def calculate_taxes(self, user_input):
        """Result for one person. The partner salary only matters to get this person's share of the household
        income tax: contributions are computed on this person's salary only."""
        check_family_status(user_input.family_status)
        gross = user_input.gross_annual_salary
        social_contributions = self.contributions.calculate(gross)
        income_tax = self.income_tax.calculate(gross, social_contributions, user_input.family_status,
                                               user_input.number_of_children, user_input.partner_gross_annual_salary)
        return self._assemble(user_input, gross, social_contributions, income_tax)

    def calculate_household_taxes(self, user_input):
        """Result for the whole household (both salaries of a couple). Falls back to calculate_taxes() when there
        is no partner income to add."""
        check_family_status(user_input.family_status)
        partner_gross = user_input.partner_gross_annual_salary
        if user_input.family_status != "couple" or partner_gross <= 0:
            return self.calculate_taxes(user_input)
        gross = user_input.gross_annual_salary
        own_contributions = self.contributions.calculate(gross)
        partner_contributions = self.contributions.calculate(partner_gross)
        social_contributions = combine_breakdowns(own_contributions, partner_contributions)
        individual_tax = self.income_tax.calculate(gross, own_contributions, "couple",
                                                   user_input.number_of_children, partner_gross)
        household_net_imposable = individual_tax.household_net_imposable
        household_tax = individual_tax.household_tax
        income_tax = individual_tax._replace(
            net_imposable=household_net_imposable,
            taxable_income=individual_tax.household_taxable_income,
            amount=household_tax,
            effective_rate=round4(household_tax / household_net_imposable) if household_net_imposable > 0 else 0,
        )
        return self._assemble(user_input, gross + partner_gross, social_contributions, income_tax)

    def calculate_other_taxes(self, tax_result, other_tax_inputs):
        """Excise and lifestyle taxes on top of a result, with the rates of the simulator's statement year."""
        if tax_result.statement_year != self.statement_year:
            raise Exception(f"Tax result is for statement year {tax_result.statement_year}, "
                            f"simulator is for {self.statement_year}")
        return self.other_taxes.calculate(tax_result, other_tax_inputs)


def calculate_taxes(user_input, statement_year=DEFAULT_YEAR):
    return TaxSimulator(statement_year).calculate_taxes(user_input)


def calculate_household_taxes(user_input, statement_year=DEFAULT_YEAR):
    return TaxSimulator(statement_year).calculate_household_taxes(user_input)
