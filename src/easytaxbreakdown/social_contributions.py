from .calculator import Calculator
from .results import SocialContributionLine, SocialContributionsBreakdown
from .rounding import round2


class SocialContributionsCalculator(Calculator):
    """Employee social contributions on a gross annual salary.

    See https://www.urssaf.fr/accueil/employeur/cotisations/liste-cotisations.html
    Only the employee share of a private sector, non-executive salary is modeled: no unemployment insurance
    (employee share removed in 2018), no health insurance (same), no APEC / prévoyance.
    """

    def csg_base(self, gross):
        # The 1.75% abatement for professional fees only applies up to 4 PASS, above that the base is 100%
        p = self.parameters
        cap_for_abatement = p.csg_abatement_pass_ceiling * p.pass_
        if gross <= cap_for_abatement:
            return gross * p.csg_abatement_base_rate
        return cap_for_abatement * p.csg_abatement_base_rate + (gross - cap_for_abatement)

    def contribution_base(self, base_rule, gross):
        pass_ = self.parameters.pass_
        if base_rule == "csg":
            return self.csg_base(gross)
        if base_rule in ("capped", "t1"):
            return min(gross, pass_)
        if base_rule == "t2":
            # "tranche 2" goes from 1 to 8 PASS
            return max(0, min(gross, self.parameters.t2_pass_ceiling * pass_) - pass_)
        if base_rule == "gross":
            return gross
        raise Exception(f"Unknown contribution base: {base_rule}")

    def calculate(self, gross):
        amounts = {}
        details = []
        retirement = 0
        for rule in self.parameters.contributions:
            base = self.contribution_base(rule.base, gross)
            amount = round2(base * rule.rate)
            self.maybe_print(f"{rule.label}: {base} x {rule.rate} = {amount}")
            amounts[rule.id] = amount
            if rule.branch == "retirement":
                retirement += amount
            details.append(SocialContributionLine(id=rule.id, label=rule.label, rate=rule.rate,
                                                  base=round2(base), amount=amount))
        csg_deductible = amounts.get("csg_deductible", 0)
        csg_non_deductible = amounts.get("csg_non_deductible", 0)
        total = sum(amounts.values())
        self.maybe_print("Total social contributions: ", total)
        return SocialContributionsBreakdown(
            total=round2(total),
            retirement=round2(retirement),
            health=round2(csg_deductible + csg_non_deductible),
            csg_deductible=round2(csg_deductible),
            csg_non_deductible=round2(csg_non_deductible),
            crds=round2(amounts.get("crds", 0)),
            details=tuple(details),
        )


def combine_breakdowns(*breakdowns):
    """Sums several breakdowns (e.g. both members of a couple), line by line."""
    lines = {}
    for breakdown in breakdowns:
        for line in breakdown.details:
            if line.id in lines:
                previous = lines[line.id]
                lines[line.id] = previous._replace(base=round2(previous.base + line.base),
                                                   amount=round2(previous.amount + line.amount))
            else:
                lines[line.id] = line
    return SocialContributionsBreakdown(
        total=round2(sum(b.total for b in breakdowns)),
        retirement=round2(sum(b.retirement for b in breakdowns)),
        health=round2(sum(b.health for b in breakdowns)),
        csg_deductible=round2(sum(b.csg_deductible for b in breakdowns)),
        csg_non_deductible=round2(sum(b.csg_non_deductible for b in breakdowns)),
        crds=round2(sum(b.crds for b in breakdowns)),
        details=tuple(lines.values()),
    )
