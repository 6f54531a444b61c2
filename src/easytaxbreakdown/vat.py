from .calculator import Calculator
from .results import EstimatedVATResult
from .rounding import round2


class EstimatedVATCalculator(Calculator):
    """VAT is estimated from what's left after direct taxes, minus what's saved (savings rate grows with income)."""

    def savings_rate(self, net_annual):
        for bracket in self.parameters.savings_brackets:
            if bracket.max_net_annual is None or net_annual <= bracket.max_net_annual:
                return bracket.rate
        # thresholds table without a catch-all slice: keep the last known rate
        return self.parameters.savings_brackets[-1].rate

    def calculate(self, net_take_home):
        vat_rate = self.parameters.effective_vat_rate
        savings_rate = self.savings_rate(net_take_home)
        estimated_savings = round2(net_take_home * savings_rate)
        estimated_consumption = round2(net_take_home - estimated_savings)
        # VAT is included in prices, so: VAT = consumption x rate / (1 + rate)
        vat_amount = estimated_consumption * vat_rate / (1 + vat_rate)
        self.maybe_print("Savings rate: ", savings_rate, " ; Consumption: ", estimated_consumption)
        return EstimatedVATResult(
            net_after_tax=round2(net_take_home),
            savings_rate=savings_rate,
            estimated_savings=estimated_savings,
            estimated_consumption=estimated_consumption,
            effective_rate=vat_rate,
            amount=round2(vat_amount),
        )
