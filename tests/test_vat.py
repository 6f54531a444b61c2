import pytest

from easytaxbreakdown import EstimatedVATCalculator, get_parameters


@pytest.fixture
def calculator():
    return EstimatedVATCalculator(get_parameters(2026))


@pytest.mark.parametrize("net,expected_rate", [
    pytest.param(0, 0.05, id="no_income"),
    pytest.param(15000, 0.05, id="first_slice_upper_bound"),
    pytest.param(15001, 0.10, id="second_slice"),
    pytest.param(30000, 0.14, id="third_slice"),
    pytest.param(50000, 0.18, id="fourth_slice"),
    pytest.param(60000, 0.22, id="fifth_slice"),
    pytest.param(1000000, 0.28, id="last_slice"),
])
def test_savings_rate(calculator, net, expected_rate):
    assert calculator.savings_rate(net) == expected_rate


def test_vat(calculator):
    vat = calculator.calculate(30000)
    assert vat.savings_rate == 0.14
    assert vat.estimated_savings == pytest.approx(4200)
    assert vat.estimated_consumption == pytest.approx(25800)
    assert vat.effective_rate == 0.12
    assert vat.amount == pytest.approx(2764.29)


def test_zero_income(calculator):
    vat = calculator.calculate(0)
    assert vat.amount == 0
    assert vat.estimated_consumption == 0


def test_savings_plus_consumption(calculator):
    for net in [12000, 26139.91, 48000, 90000]:
        vat = calculator.calculate(net)
        assert vat.estimated_savings + vat.estimated_consumption == pytest.approx(net)
        assert vat.amount < vat.estimated_consumption
