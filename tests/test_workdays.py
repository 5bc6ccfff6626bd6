from datetime import date

import pytest

from core.exceptions import BusinessRuleError
from core.services.calendar import add_workdays, is_weekday, next_workday, workdays_between

FRI = date(2024, 1, 5)
SAT = date(2024, 1, 6)
MON = date(2024, 1, 8)
FRI_NEXT = date(2024, 1, 12)


def test_add_zero_workdays_returns_start_even_on_weekend():
    assert add_workdays(MON, 0) == MON
    assert add_workdays(SAT, 0) == SAT


def test_add_workdays_never_counts_start_day():
    assert add_workdays(FRI, 1) == MON
    assert add_workdays(MON, 4) == FRI_NEXT
    assert add_workdays(SAT, 1) == MON


def test_add_negative_workdays_walks_backwards():
    assert add_workdays(MON, -1) == FRI
    assert add_workdays(FRI_NEXT, -4) == MON


def test_workdays_between_is_signed_half_open():
    assert workdays_between(MON, FRI_NEXT) == 4
    assert workdays_between(FRI_NEXT, MON) == -4
    assert workdays_between(FRI, MON) == 1
    assert workdays_between(MON, MON) == 0
    # weekend only
    assert workdays_between(FRI, date(2024, 1, 7)) == 0


@pytest.mark.parametrize("n", [1, 3, 5, 9, 23])
def test_workdays_between_inverts_add_workdays(n):
    for start in (MON, date(2024, 1, 10), FRI):
        assert workdays_between(start, add_workdays(start, n)) == n


def test_injected_predicate_skips_holidays():
    holiday = date(2024, 1, 9)

    def is_workday(d: date) -> bool:
        return is_weekday(d) and d != holiday

    assert add_workdays(MON, 1, is_workday) == date(2024, 1, 10)
    assert workdays_between(MON, date(2024, 1, 10), is_workday) == 1


def test_predicate_without_any_workday_raises():
    with pytest.raises(BusinessRuleError) as exc:
        add_workdays(MON, 1, lambda _d: False)
    assert exc.value.code == "CALENDAR_NO_WORKDAYS"


def test_next_workday():
    assert next_workday(SAT) == MON
    assert next_workday(MON) == MON
    assert next_workday(MON, include_today=False) == date(2024, 1, 9)
    assert next_workday(FRI, include_today=False) == MON


@pytest.mark.parametrize("start", [FRI, SAT, date(2024, 1, 7), MON])
def test_add_workdays_never_lands_on_weekend(start):
    for n in range(1, 15):
        assert is_weekday(add_workdays(start, n))
