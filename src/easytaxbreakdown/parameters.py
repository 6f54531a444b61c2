from collections import namedtuple

# A progressive slice: rate applies to the part of the income within [min, max). max=None means no upper bound.
Bracket = namedtuple("Bracket", ["min", "max", "rate"])
# Employee contribution line. "base" names how the base is derived from the gross salary:
#   "csg"    -> gross with the 1.75% abatement (capped at 4 PASS)
#   "capped" -> min(gross, PASS)
#   "gross"  -> full gross salary
#   "t1"/"t2" -> complementary retirement bands (up to 1 PASS, then from 1 to 8 PASS)
# "branch" says what the contribution funds: "retirement", "health" or "social_debt".
ContributionRule = namedtuple("ContributionRule", ["id", "label", "rate", "base", "branch"])
ProfessionalDeduction = namedtuple("ProfessionalDeduction", ["rate", "min", "max"])
# Savings rate by net annual income, max_net_annual=None is the catch-all last slice
SavingsBracket = namedtuple("SavingsBracket", ["max_net_annual", "rate"])
# Share of the CSG received by each organism, and the destination bucket it funds
CsgAllocation = namedtuple("CsgAllocation", ["organism", "destination", "percentage"])

# Lots of parameters evolve year after year (inflation, political decisions, etc.)
# This dictionary gathers all variable parameters, keyed by statement year.
TaxParameters = namedtuple("TaxParameters", [
    "pass_",                               # Source: https://www.urssaf.fr/accueil/outils-documentation/taux-baremes/plafonds-securite-sociale.html
    "csg_abatement_base_rate",             # Source: https://www.urssaf.fr/accueil/employeur/cotisations/liste-cotisations/csg-crds.html
    "csg_abatement_pass_ceiling",
    "t2_pass_ceiling",                     # Source: https://www.agirc-arrco.fr/entreprises/gerer-le-personnel/calculer-les-cotisations/
    "contributions",
    "income_tax_brackets",                 # Source: https://www.service-public.fr/particuliers/vosdroits/F1419
    "professional_deduction",              # Source: https://www.impots.gouv.fr/particulier/questions/comment-puis-je-beneficier-de-la-deduction-forfaitaire-de-10
    "family_quotient_benefices_capping",   # Source: https://www.economie.gouv.fr/particuliers/quotient-familial
    "savings_brackets",                    # Source: INSEE, taux d'épargne par quintile de niveau de vie
    "effective_vat_rate",
    "csg_allocation",                      # Source: PLFSS, affectation de la CSG par attributaire
])

SALARY_CONTRIBUTIONS = (
    ContributionRule("csg_deductible", "CSG déductible", 0.068, "csg", "health"),
    ContributionRule("csg_non_deductible", "CSG non-déductible", 0.024, "csg", "health"),
    ContributionRule("crds", "CRDS", 0.005, "csg", "social_debt"),
    ContributionRule("vieillesse_plafonnee", "Assurance vieillesse plafonnée", 0.069, "capped", "retirement"),
    ContributionRule("vieillesse_deplafonnee", "Assurance vieillesse déplafonnée", 0.004, "gross", "retirement"),
    ContributionRule("retraite_t1", "Retraite complémentaire T1", 0.0315, "t1", "retirement"),
    ContributionRule("retraite_t2", "Retraite complémentaire T2", 0.0864, "t2", "retirement"),
    ContributionRule("ceg_t1", "CEG T1", 0.0086, "t1", "retirement"),
    ContributionRule("ceg_t2", "CEG T2", 0.0108, "t2", "retirement"),
)

SAVINGS_BRACKETS = (
    SavingsBracket(15000, 0.05),
    SavingsBracket(25000, 0.10),
    SavingsBracket(35000, 0.14),
    SavingsBracket(50000, 0.18),
    SavingsBracket(75000, 0.22),
    SavingsBracket(None, 0.28),
)

CSG_ALLOCATION = (
    CsgAllocation("CNAM", "sante", 63.0),
    CsgAllocation("CNAF", "famille", 10.9),
    CsgAllocation("CNSA", "famille", 20.0),
    CsgAllocation("CADES", "dette_sociale", 6.1),
)

yearly_defined_parameters = {
    2025: TaxParameters(
        pass_=47100,
        csg_abatement_base_rate=0.9825,
        csg_abatement_pass_ceiling=4,
        t2_pass_ceiling=8,
        contributions=SALARY_CONTRIBUTIONS,
        income_tax_brackets=(
            Bracket(0, 11497, 0.0),
            Bracket(11497, 29315, 0.11),
            Bracket(29315, 83823, 0.30),
            Bracket(83823, 180294, 0.41),
            Bracket(180294, None, 0.45),
        ),
        professional_deduction=ProfessionalDeduction(rate=0.10, min=495, max=14171),
        family_quotient_benefices_capping=1791,
        savings_brackets=SAVINGS_BRACKETS,
        effective_vat_rate=0.12,
        csg_allocation=CSG_ALLOCATION,
    ),
    2026: TaxParameters(
        pass_=48060,
        csg_abatement_base_rate=0.9825,
        csg_abatement_pass_ceiling=4,
        t2_pass_ceiling=8,
        contributions=SALARY_CONTRIBUTIONS,
        income_tax_brackets=(
            Bracket(0, 11600, 0.0),
            Bracket(11600, 29579, 0.11),
            Bracket(29579, 84577, 0.30),
            Bracket(84577, 181917, 0.41),
            Bracket(181917, None, 0.45),
        ),
        professional_deduction=ProfessionalDeduction(rate=0.10, min=504, max=14426),
        family_quotient_benefices_capping=1807,
        savings_brackets=SAVINGS_BRACKETS,
        effective_vat_rate=0.12,
        csg_allocation=CSG_ALLOCATION,
    ),
}

# Display metadata for an excise tax (labels are shown as-is in reports and donut charts)
ExciseInfo = namedtuple("ExciseInfo", ["label", "emoji", "color", "destination_label", "description"])
VehiclePreset = namedtuple("VehiclePreset", ["id", "label", "consumption"])  # consumption in l/100km

OtherTaxParameters = namedtuple("OtherTaxParameters", [
    "ticpe_tax_per_liter",           # Source: https://www.douane.gouv.fr/fiche/accise-sur-les-energies
    "vehicle_presets",
    "tsca_annual_amount",            # national average per household, not personalized
    "tabac_accise_per_pack",         # Source: https://www.douane.gouv.fr/fiche/fiscalite-des-tabacs
    "alcool_accise_per_drink",       # Source: https://www.douane.gouv.fr/fiche/fiscalite-des-alcools
    "default_taxe_fonciere",
    "cehr_brackets",                 # Source: https://www.impots.gouv.fr/particulier/questions/quest-ce-que-la-contribution-exceptionnelle-sur-les-hauts-revenus
    "excise_info",
])

_OTHER_TAXES_2026 = OtherTaxParameters(
    ticpe_tax_per_liter=0.60,
    vehicle_presets=(
        VehiclePreset("none", "Pas de voiture", 0),
        VehiclePreset("electrique", "Électrique", 0),
        VehiclePreset("citadine", "Citadine", 5.5),
        VehiclePreset("berline", "Berline", 6.5),
        VehiclePreset("suv", "SUV", 8.0),
    ),
    tsca_annual_amount=350,
    tabac_accise_per_pack=8.50,
    alcool_accise_per_drink=0.23,
    default_taxe_fonciere=1082,
    cehr_brackets={
        "single": (
            Bracket(250000, 500000, 0.03),
            Bracket(500000, None, 0.04),
        ),
        "couple": (
            Bracket(500000, 1000000, 0.03),
            Bracket(1000000, None, 0.04),
        ),
    },
    excise_info={
        "ticpe": ExciseInfo("TICPE / Accise carburant", "⛽", "#D97706", "État et régions",
                            "Accise sur les produits énergétiques, payée à chaque plein de carburant."),
        "tsca": ExciseInfo("TSCA (assurances)", "🛡️", "#0D9488", "Départements et Sécurité sociale",
                           "Taxe spéciale sur les conventions d'assurance (auto, habitation, mutuelle)."),
        "tabac": ExciseInfo("Accise tabac", "🚬", "#DC2626", "Assurance maladie",
                            "Droits d'accise sur les produits du tabac."),
        "alcool": ExciseInfo("Accise alcool", "🍷", "#9333EA", "Assurance maladie",
                             "Droits d'accise et cotisation sécurité sociale sur les boissons alcoolisées."),
        "taxe_fonciere": ExciseInfo("Taxe foncière", "🏠", "#0891B2", "Communes et intercommunalités",
                                    "Impôt local payé par les propriétaires."),
        "cehr": ExciseInfo("CEHR (hauts revenus)", "💰", "#7C3AED", "État (budget général)",
                           "Contribution exceptionnelle sur les hauts revenus."),
    },
)

yearly_other_tax_parameters = {
    2025: _OTHER_TAXES_2026._replace(tabac_accise_per_pack=8.00),
    2026: _OTHER_TAXES_2026,
}

DEFAULT_YEAR = 2026


def get_parameters(year=DEFAULT_YEAR):
    if year not in yearly_defined_parameters:
        raise Exception(f"Unsupported statement year: {year}")
    return yearly_defined_parameters[year]


def get_other_tax_parameters(year=DEFAULT_YEAR):
    if year not in yearly_other_tax_parameters:
        raise Exception(f"Unsupported statement year: {year}")
    return yearly_other_tax_parameters[year]
