from .parameters import DEFAULT_YEAR, get_parameters

FAMILY_STATUSES = ("single", "couple")


def check_family_status(family_status):
    if family_status not in FAMILY_STATUSES:
        # better raising exception than reporting something wrong
        raise Exception(f"Unknown family status '{family_status}', expected one of {FAMILY_STATUSES}")


class Calculator:
    """Base for all calculators: holds the (read-only) yearly parameters and the debug switch."""

    def __init__(self, parameters=None, debug=False):
        self.parameters = parameters if parameters is not None else get_parameters(DEFAULT_YEAR)
        self.debug = debug

    def maybe_print(self, *args):
        if self.debug:
            print(*args)
