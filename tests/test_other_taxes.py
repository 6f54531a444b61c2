import pytest

from easytaxbreakdown import (OtherTaxInputs, OtherTaxesCalculator, TaxSimulator, UserInput, calculate_alcool,
                              calculate_cehr, calculate_tabac, calculate_taxe_fonciere, calculate_ticpe,
                              calculate_tsca, get_other_tax_parameters)
from easytaxbreakdown.other_taxes import format_threshold


@pytest.mark.parametrize("vehicle_type,km,expected", [
    pytest.param("berline", 12200, 475.80, id="berline"),
    pytest.param("citadine", 12200, 402.60, id="citadine"),
    pytest.param("suv", 20000, 960, id="suv"),
    pytest.param("none", 12200, 0, id="no_car"),
    pytest.param("electrique", 12200, 0, id="electric"),
    pytest.param("tractor", 12200, 0, id="unknown_vehicle"),
    pytest.param("berline", 0, 0, id="no_mileage"),
])
def test_ticpe(vehicle_type, km, expected):
    assert calculate_ticpe(vehicle_type, km) == pytest.approx(expected)


def test_flat_and_lifestyle_taxes():
    assert calculate_tsca() == 350
    assert calculate_tabac(7) == pytest.approx(3094)
    assert calculate_tabac(0) == 0
    assert calculate_tabac(-1) == 0
    assert calculate_alcool(10) == pytest.approx(119.60)
    assert calculate_alcool(0) == 0
    assert calculate_taxe_fonciere(True, 1500) == 1500
    assert calculate_taxe_fonciere(False, 1500) == 0


def test_tabac_2025():
    assert calculate_tabac(7, get_other_tax_parameters(2025)) == pytest.approx(7 * 52 * 8.00)


@pytest.mark.parametrize("net_imposable,family_status,expected", [
    pytest.param(200000, "single", 0, id="under_threshold"),
    pytest.param(300000, "single", 1500, id="single_first_slice"),
    pytest.param(600000, "single", 11500, id="single_second_slice"),
    pytest.param(700000, "couple", 6000, id="couple_first_slice"),
    pytest.param(1200000, "couple", 23000, id="couple_second_slice"),
])
def test_cehr(net_imposable, family_status, expected):
    assert calculate_cehr(net_imposable, family_status) == pytest.approx(expected)


@pytest.fixture(scope="module")
def simulator():
    return TaxSimulator(2026)


def test_default_lifestyle(simulator):
    result = simulator.calculate_taxes(UserInput(35000, "single", 0))
    other = OtherTaxesCalculator().calculate(result, OtherTaxInputs())
    assert other.ticpe.amount == pytest.approx(475.80)
    assert other.tsca.amount == 350
    for optional in (other.tabac, other.alcool, other.taxe_fonciere, other.cehr):
        assert optional.kind == "absent"
        assert optional.estimate is None
    assert other.total_other_taxes == pytest.approx(825.80)
    assert other.grand_total == pytest.approx(result.total_taxes + 825.80)
    assert [t.id for t in other.taxes] == ["ticpe", "tsca"]
    assert [s.name for s in other.donut_segments] == [
        "Cotisations sociales", "Impôt sur le revenu", "TVA estimée", "TICPE / Accise carburant", "TSCA (assurances)"
    ]


def test_full_lifestyle(simulator):
    result = simulator.calculate_taxes(UserInput(35000, "single", 0))
    inputs = OtherTaxInputs(vehicle_type="suv", km_per_year=20000, packs_per_week=7, drinks_per_week=10,
                            proprietaire=True, taxe_fonciere_amount=1082)
    other = OtherTaxesCalculator().calculate(result, inputs)
    assert other.tabac.kind == "present"
    assert other.tabac.estimate.amount == pytest.approx(3094)
    assert other.alcool.estimate.amount == pytest.approx(119.60)
    assert other.taxe_fonciere.estimate.amount == 1082
    assert other.cehr.kind == "absent"
    assert [t.id for t in other.taxes] == ["ticpe", "tsca", "tabac", "alcool", "taxe_fonciere"]
    assert other.total_other_taxes == pytest.approx(960 + 350 + 3094 + 119.60 + 1082)
    assert len(other.donut_segments) == 8


def test_no_car_drops_zero_segment(simulator):
    result = simulator.calculate_taxes(UserInput(35000, "single", 0))
    other = OtherTaxesCalculator().calculate(result, OtherTaxInputs(vehicle_type="none"))
    # fixed shape: the estimate is still there, but no empty donut slice
    assert other.ticpe.amount == 0
    assert "TICPE / Accise carburant" not in [s.name for s in other.donut_segments]
    assert all(s.value > 0 for s in other.donut_segments)


def test_cehr_high_income(simulator):
    result = simulator.calculate_taxes(UserInput(400000, "single", 0))
    other = OtherTaxesCalculator().calculate(result, OtherTaxInputs())
    assert other.cehr.kind == "present"
    expected = calculate_cehr(result.income_tax.household_net_imposable, "single")
    assert other.cehr.estimate.amount == pytest.approx(expected)
    assert "3% au-delà de 250k€" in other.cehr.estimate.description
    # CEHR is income based, not an itemized excise tax
    assert "cehr" not in [t.id for t in other.taxes]
    assert other.total_other_taxes == pytest.approx(sum(t.amount for t in other.taxes) + expected)


@pytest.mark.parametrize("amount,expected", [
    pytest.param(250000, "250k€", id="thousands"),
    pytest.param(500000, "500k€", id="below_million"),
    pytest.param(1000000, "1M€", id="million"),
    pytest.param(1500000, "1.5M€", id="above_million"),
])
def test_format_threshold(amount, expected):
    assert format_threshold(amount) == expected


def test_cehr_couple_description(simulator):
    result = simulator.calculate_taxes(UserInput(1500000, "couple", 0))
    other = simulator.calculate_other_taxes(result, OtherTaxInputs())
    assert other.cehr.kind == "present"
    assert other.cehr.estimate.description == \
        "Contribution exceptionnelle sur les hauts revenus : 3% au-delà de 500k€, 4% au-delà de 1M€."


def test_rates_follow_statement_year():
    result_2025 = TaxSimulator(2025).calculate_taxes(UserInput(35000, "single", 0))
    assert result_2025.statement_year == 2025
    inputs = OtherTaxInputs(packs_per_week=7)
    assert OtherTaxesCalculator().calculate(result_2025, inputs).tabac.estimate.amount == pytest.approx(2912)
    assert TaxSimulator(2025).calculate_other_taxes(result_2025, inputs).tabac.estimate.amount == pytest.approx(2912)
    # explicit parameters win over the result's year
    explicit = OtherTaxesCalculator(get_other_tax_parameters(2026)).calculate(result_2025, inputs)
    assert explicit.tabac.estimate.amount == pytest.approx(3094)


def test_simulator_year_mismatch(simulator):
    result_2025 = TaxSimulator(2025).calculate_taxes(UserInput(35000, "single", 0))
    with pytest.raises(Exception) as e:
        simulator.calculate_other_taxes(result_2025, OtherTaxInputs())
    assert str(e.value) == "Tax result is for statement year 2025, simulator is for 2026"
