from .calculator import Calculator, check_family_status
from .income_tax import apply_brackets
from .parameters import DEFAULT_YEAR, get_other_tax_parameters
from .results import ABSENT, DonutSegment, OtherTaxEstimate, OtherTaxesResult, present
from .rounding import round2

# Small, independent estimations of taxes that don't show up on a payslip. Parameters default to the current year.


def _params(parameters):
    return parameters if parameters is not None else get_other_tax_parameters(DEFAULT_YEAR)


def calculate_ticpe(vehicle_type, km_per_year, parameters=None):
    """Fuel excise from the yearly mileage and the consumption of the vehicle type (unknown type: no fuel)."""
    p = _params(parameters)
    consumption = next((v.consumption for v in p.vehicle_presets if v.id == vehicle_type), 0)
    if consumption == 0 or km_per_year <= 0:
        return 0
    liters = km_per_year * consumption / 100
    return round2(liters * p.ticpe_tax_per_liter)


def calculate_tsca(parameters=None):
    # national average per household, not personalized
    return _params(parameters).tsca_annual_amount


def calculate_tabac(packs_per_week, parameters=None):
    if packs_per_week <= 0:
        return 0
    return round2(packs_per_week * 52 * _params(parameters).tabac_accise_per_pack)


def calculate_alcool(drinks_per_week, parameters=None):
    if drinks_per_week <= 0:
        return 0
    return round2(drinks_per_week * 52 * _params(parameters).alcool_accise_per_drink)


def calculate_taxe_fonciere(proprietaire, amount):
    return amount if proprietaire else 0


def calculate_cehr(net_imposable, family_status, parameters=None):
    """Contribution exceptionnelle sur les hauts revenus, thresholds doubled for couples."""
    check_family_status(family_status)
    cehr, _ = apply_brackets(net_imposable, _params(parameters).cehr_brackets[family_status])
    return round2(cehr)


def format_threshold(amount):
    if amount >= 1000000:
        return f"{amount / 1000000:g}M€"
    return f"{amount / 1000:g}k€"


class OtherTaxesCalculator(Calculator):
    def __init__(self, parameters=None, debug=False):
        # without explicit parameters, each result is computed with the rates of its own statement year
        super().__init__(_params(parameters), debug)
        self.parameters_by_year = parameters is None

    def parameters_for(self, tax_result):
        if self.parameters_by_year:
            return get_other_tax_parameters(tax_result.statement_year)
        return self.parameters

    def _estimate(self, p, tax_id, amount, description=None):
        info = p.excise_info[tax_id]
        return OtherTaxEstimate(id=tax_id, label=info.label, emoji=info.emoji, amount=amount, color=info.color,
                                destination_label=info.destination_label,
                                description=description or info.description)

    def _optional(self, p, tax_id, amount, description=None):
        return present(self._estimate(p, tax_id, amount, description)) if amount > 0 else ABSENT

    def calculate(self, tax_result, inputs):
        p = self.parameters_for(tax_result)
        family_status = tax_result.input.family_status
        ticpe = self._estimate(p, "ticpe", calculate_ticpe(inputs.vehicle_type, inputs.km_per_year, p))
        tsca = self._estimate(p, "tsca", calculate_tsca(p))
        tabac = self._optional(p, "tabac", calculate_tabac(inputs.packs_per_week, p))
        alcool = self._optional(p, "alcool", calculate_alcool(inputs.drinks_per_week, p))
        taxe_fonciere = self._optional(p, "taxe_fonciere",
                                       calculate_taxe_fonciere(inputs.proprietaire, inputs.taxe_fonciere_amount))
        cehr_brackets = p.cehr_brackets[family_status]
        cehr = self._optional(
            p, "cehr", calculate_cehr(tax_result.income_tax.household_net_imposable, family_status, p),
            description="Contribution exceptionnelle sur les hauts revenus : "
                        + ", ".join(f"{round(b.rate * 100)}% au-delà de {format_threshold(b.min)}"
                                    for b in cehr_brackets)
                        + ".")

        entries = [ticpe, tsca] + [o.estimate for o in (tabac, alcool, taxe_fonciere, cehr) if o.kind == "present"]
        total_other_taxes = round2(sum(e.amount for e in entries))
        grand_total = round2(tax_result.total_taxes + total_other_taxes)
        self.maybe_print("Other taxes: ", [(e.id, e.amount) for e in entries])

        segments = [
            DonutSegment("Cotisations sociales", tax_result.social_contributions.total, "#F59E0B"),
            DonutSegment("Impôt sur le revenu", tax_result.income_tax.amount, "#3B82F6"),
            DonutSegment("TVA estimée", tax_result.estimated_vat.amount, "#8B5CF6"),
        ] + [DonutSegment(e.label, e.amount, e.color) for e in entries]

        return OtherTaxesResult(
            ticpe=ticpe,
            tsca=tsca,
            tabac=tabac,
            alcool=alcool,
            taxe_fonciere=taxe_fonciere,
            cehr=cehr,
            total_other_taxes=total_other_taxes,
            grand_total=grand_total,
            # no zero-width slices
            donut_segments=tuple(s for s in segments if s.value > 0),
        )
