from collections import namedtuple

from .budget import default_budget_tables, make_equivalence
from .calculator import Calculator
from .results import CotisationDestination
from .rounding import round2

DestinationInfo = namedtuple("DestinationInfo", ["id", "label", "organism", "description", "color", "emoji"])

DESTINATIONS = (
    DestinationInfo("retraite", "Retraites", "CNAV et Agirc-Arrco",
                    "Pensions de base et complémentaires versées aux retraités actuels.", "#F59E0B", "👴"),
    DestinationInfo("sante", "Assurance maladie", "CNAM",
                    "Remboursement des soins, hôpitaux et indemnités journalières.", "#EF4444", "🏥"),
    DestinationInfo("famille", "Famille et autonomie", "CNAF et CNSA",
                    "Allocations familiales, aides à la garde, perte d'autonomie et handicap.", "#10B981", "👨‍👩‍👧"),
    DestinationInfo("dette_sociale", "Dette sociale", "CADES",
                    "Remboursement de la dette accumulée par la Sécurité sociale.", "#64748B", "📉"),
)


class CotisationsDestinationCalculator(Calculator):
    """Where the social contributions end up: the CSG is split between organisms according to its legal allocation,
    pension contributions go to retirement and the CRDS to the social debt."""

    def __init__(self, parameters=None, equivalences=None, debug=False):
        super().__init__(parameters, debug)
        self.equivalences = equivalences if equivalences is not None else default_budget_tables().equivalences

    def calculate(self, gross, breakdown):
        amounts = {destination.id: 0 for destination in DESTINATIONS}
        if gross > 0:
            csg_total = breakdown.csg_deductible + breakdown.csg_non_deductible
            for allocation in self.parameters.csg_allocation:
                amounts[allocation.destination] += csg_total * allocation.percentage / 100
            amounts["retraite"] += breakdown.retirement
            amounts["dette_sociale"] += breakdown.crds
        total = sum(amounts.values())
        self.maybe_print("Contributions by destination: ", amounts)

        destinations = []
        for destination in DESTINATIONS:
            amount = round2(amounts[destination.id])
            destinations.append(CotisationDestination(
                id=destination.id,
                label=destination.label,
                organism=destination.organism,
                description=destination.description,
                amount=amount,
                percentage=round2(amounts[destination.id] / total * 100) if total > 0 else 0,
                color=destination.color,
                emoji=destination.emoji,
                equivalence=make_equivalence(amount, self.equivalences, destination.id),
            ))
        return tuple(destinations)
