import json
import os
from collections import namedtuple
from functools import lru_cache

from .calculator import Calculator
from .results import (ActionAllocation, BudgetSector, Equivalence, ProgrammeAllocation, SousActionAllocation)
from .rounding import round2, round_half_up

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

# Sourced datasets, see data/: sectors list, PLF programme detail (keyed by sector id), equivalence reference prices
BudgetTables = namedtuple("BudgetTables", ["sectors", "detail", "equivalences"])


def _load_json(data_dir, name):
    with open(os.path.join(data_dir, name), encoding="utf-8") as json_file:
        return json.load(json_file)


def load_budget_tables(data_dir=DATA_DIR, budget_file="budget-2026.json",
                       detail_file="budget-detail-plf2025.json", equivalences_file="equivalences.json"):
    budget = _load_json(data_dir, budget_file)
    detail = _load_json(data_dir, detail_file)
    equivalences = _load_json(data_dir, equivalences_file)
    return BudgetTables(
        sectors=budget["sectors"],
        detail={sector["sector_id"]: sector for sector in detail["sectors"]},
        equivalences=equivalences["equivalences"],
    )


@lru_cache(maxsize=None)
def default_budget_tables():
    # loaded once per process, never mutated afterwards
    return load_budget_tables()


def format_quantity(quantity):
    # French formatting: narrow no-break space for thousands, comma as decimal separator
    if quantity >= 1000:
        return f"{int(round_half_up(quantity)):,}".replace(",", "\u202f")
    if quantity >= 100:
        return str(int(round_half_up(quantity)))
    if quantity >= 10:
        return _trim_decimals(f"{round_half_up(quantity, 1):.1f}").replace(".", ",")
    return _trim_decimals(f"{round_half_up(quantity, 2):.2f}").replace(".", ",")


def _trim_decimals(text):
    return text.rstrip("0").rstrip(".") if "." in text else text


def make_equivalence(amount, equivalences, key):
    """How many reference items (schoolbooks, GP visits...) the amount pays for."""
    equiv = equivalences.get(key) or equivalences["generic"]
    unit_price = equiv["unit_price"]
    quantity = amount / unit_price if unit_price > 0 else 0
    return Equivalence(
        description=f"= {format_quantity(quantity)} {equiv['item']}",
        quantity=round2(quantity),
        unit=equiv["item"],
        unit_price=unit_price,
        emoji=equiv["emoji"],
        source=equiv["source"],
    )


def _sous_action(node, amount, percentage, children):
    return SousActionAllocation(code=node["code"], name=node["name"], amount=round2(amount),
                                percentage_of_action=percentage)


def _action(node, amount, percentage, children):
    return ActionAllocation(code=node["code"], name=node["name"], amount=round2(amount),
                            percentage_of_programme=percentage, sous_actions=children)


def _programme(node, amount, percentage, children):
    return ProgrammeAllocation(code=node["code"], name=node["name"], mission=node.get("mission", ""),
                               amount=round2(amount), percentage_of_sector=percentage, actions=children)


# sector -> programme -> action -> sous-action: (children key, percentage of parent key, builder)
CASCADE_LEVELS = (
    ("programmes", "percentage_of_sector", _programme),
    ("actions", "percentage_of_programme", _action),
    ("sous_actions", "percentage_of_action", _sous_action),
)


def cascade(amount, parent, depth=0):
    """Splits amount across the children of parent, recursively down to the sous-actions."""
    if depth >= len(CASCADE_LEVELS):
        return ()
    children_key, percentage_key, build = CASCADE_LEVELS[depth]
    allocations = []
    for node in parent.get(children_key, []):
        percentage = node[percentage_key]
        node_amount = amount * percentage / 100
        allocations.append(build(node, node_amount, percentage, cascade(node_amount, node, depth + 1)))
    return tuple(allocations)


class BudgetAllocationCalculator(Calculator):
    def __init__(self, parameters=None, tables=None, debug=False):
        super().__init__(parameters, debug)
        self.tables = tables if tables is not None else default_budget_tables()

    def _allocate(self, total_amount, percentage_key, state_only):
        sectors = []
        for sector in self.tables.sectors:
            percentage = sector[percentage_key]
            amount = round2(total_amount * percentage / 100)
            detail = self.tables.detail.get(sector["id"])
            programmes = cascade(amount, detail) if detail else ()
            self.maybe_print(f"{sector['id']}: {percentage}% -> {amount}€ in {len(programmes)} programmes")
            sectors.append(BudgetSector(
                id=sector["id"],
                name=sector["name"],
                amount=amount,
                percentage=percentage,
                color=sector["color"],
                icon=sector["icon"],
                description=sector["description"],
                equivalence=make_equivalence(amount, self.tables.equivalences, sector["id"]),
                includes_social_security=False if state_only else sector.get("includes_social_security", False),
                programmes=programmes,
            ))
        return tuple(sectors)

    def calculate(self, total_amount):
        return self._allocate(total_amount, "percentage_of_total_taxes", state_only=False)

    def calculate_state_budget(self, state_taxes):
        # only income tax + VAT, spread over the state budget (social security excluded)
        return self._allocate(state_taxes, "percentage_of_state_budget", state_only=True)
