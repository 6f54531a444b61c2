from collections import namedtuple
from pprint import pprint

from easytaxbreakdown import TaxSimulator

TaxTest = namedtuple("TaxTest", ["name", "year", "inputs", "results", "flags"])
TaxExceptionTest = namedtuple("TaxExceptionTest", ["name", "year", "inputs", "message"])


def get_field(result, path):
    # "income_tax.amount" -> result.income_tax.amount
    for attribute in path.split("."):
        result = getattr(result, attribute)
    return result


def tax_testing(year, inputs, results, flags, debug=False, household=False):
    tax_sim = TaxSimulator(year, debug=debug)
    tax_result = tax_sim.calculate_household_taxes(inputs) if household else tax_sim.calculate_taxes(inputs)
    tax_flags = tax_result.income_tax.flags
    if debug:
        pprint(tax_result)
        pprint(tax_flags)
    for k, res in results.items():
        assert get_field(tax_result, k) == res
    for k, f in flags.items():
        assert tax_flags[k] == f
    return tax_result
