from collections import namedtuple

FamilyConfig = namedtuple("FamilyConfig", ["label", "status", "children"])

REFERENCE_SALARIES = [
    15000,   # part time
    21600,   # minimum wage (SMIC)
    25000,
    29000,   # median
    35000,
    42000,
    50000,
    60000,
    80000,
    100000,
    150000,
    200000,
]

FAMILY_CONFIGS = [
    FamilyConfig("Célib 0 enf", "single", 0),
    FamilyConfig("Célib 1 enf", "single", 1),
    FamilyConfig("Célib 2 enf", "single", 2),
    FamilyConfig("Célib 3 enf", "single", 3),
    FamilyConfig("Couple 0 enf", "couple", 0),
    FamilyConfig("Couple 1 enf", "couple", 1),
    FamilyConfig("Couple 2 enf", "couple", 2),
    FamilyConfig("Couple 3 enf", "couple", 3),
]


def fmt_euros(amount):
    return f"{round(amount):,}".replace(",", " ") + " €"


def fmt_percent(rate):
    return f"{rate * 100:.1f}%"


def income_tax_matrix(simulator, salaries=REFERENCE_SALARIES, configs=FAMILY_CONFIGS):
    """Income tax for every salary x family configuration: {salary: {config label: amount}}"""
    matrix = {}
    for salary in salaries:
        contributions = simulator.contributions.calculate(salary)
        matrix[salary] = {
            config.label: simulator.income_tax.calculate(salary, contributions, config.status, config.children).amount
            for config in configs
        }
    return matrix


def print_income_tax_matrix(simulator, salaries=REFERENCE_SALARIES, configs=FAMILY_CONFIGS):
    matrix = income_tax_matrix(simulator, salaries, configs)
    print("Gross salary".rjust(14) + " | " + " | ".join(c.label.rjust(14) for c in configs))
    for salary in salaries:
        print(fmt_euros(salary).rjust(14) + " | "
              + " | ".join(fmt_euros(matrix[salary][c.label]).rjust(14) for c in configs))
    return matrix


def print_tax_breakdown(result):
    gross = result.input.gross_annual_salary
    income_tax = result.income_tax
    print(f"Gross salary:           {fmt_euros(gross)}")
    print(f"Social contributions:   {fmt_euros(result.social_contributions.total)}")
    for line in result.social_contributions.details:
        print(f" * {line.label}: {fmt_euros(line.amount)}")
    print(f"Net taxable income:     {fmt_euros(income_tax.net_imposable)}")
    print(f"Taxable income (-10%):  {fmt_euros(income_tax.taxable_income)}")
    print(f"Fiscal shares:          {income_tax.parts}")
    print(f"Marginal tax rate:      {fmt_percent(income_tax.marginal_rate)}")
    print(f"Income tax:             {fmt_euros(income_tax.amount)} ({fmt_percent(income_tax.effective_rate)})")
    for flag, message in income_tax.flags.items():
        print(f" * {flag.value}: {message}")
    print(f"Net take-home:          {fmt_euros(result.net_take_home)}")
    print(f"Estimated VAT:          {fmt_euros(result.estimated_vat.amount)}")
    print(f"Total taxes:            {fmt_euros(result.total_taxes)} ({fmt_percent(result.overall_tax_rate)})")
    print("Where it goes:")
    for sector in result.budget_allocation:
        print(f" * {sector.name}: {fmt_euros(sector.amount)} {sector.equivalence.description}")
