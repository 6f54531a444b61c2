from .budget import BudgetAllocationCalculator, BudgetTables, default_budget_tables, load_budget_tables
from .destinations import CotisationsDestinationCalculator
from .income_tax import IncomeTaxCalculator, compute_fiscal_parts, household_tax_share
from .other_taxes import (OtherTaxesCalculator, calculate_alcool, calculate_cehr, calculate_tabac,
                          calculate_taxe_fonciere, calculate_ticpe, calculate_tsca)
from .parameters import DEFAULT_YEAR, get_other_tax_parameters, get_parameters
from .results import OtherTaxInputs, TaxInfoFlag, UserInput
from .simulator import TaxSimulator, calculate_household_taxes, calculate_taxes
from .social_contributions import SocialContributionsCalculator
from .vat import EstimatedVATCalculator
