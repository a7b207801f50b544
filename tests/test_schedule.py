"""Tests for the amortization schedule."""

from datetime import date

import pytest
from pydantic import ValidationError

from rou_lease.config import LeaseContract
from rou_lease.engine.dates import add_months
from rou_lease.engine.present_value import monthly_rate, present_value
from rou_lease.engine.rounding import round_currency
from rou_lease.engine.schedule import generate_schedule, project_schedule


def _pv(c: LeaseContract) -> int:
    return present_value(c.monthly_payment, c.start_date, c.end_date, c.annual_rate_pct)


ODD_CONTRACTS = [
    LeaseContract(start_date=date(2024, 1, 1), end_date=date(2024, 7, 1),
                  annual_rate_pct=3.7, monthly_payment=333_333),
    LeaseContract(start_date=date(2024, 1, 31), end_date=date(2027, 1, 31),
                  annual_rate_pct=4.25, monthly_payment=123_457),
    LeaseContract(start_date=date(2023, 6, 15), end_date=date(2033, 5, 15),
                  annual_rate_pct=11.9, monthly_payment=2_500_001, frequency="quarterly"),
    LeaseContract(start_date=date(2024, 5, 1), end_date=date(2024, 5, 1),
                  annual_rate_pct=7.0, monthly_payment=10_000),
]


class TestStandardSchedule:
    def test_period_count(self, standard_schedule):
        assert len(standard_schedule) == 24
        assert [e.period for e in standard_schedule] == list(range(1, 25))

    def test_payment_dates_monthly(self, standard_contract, standard_schedule):
        for i, e in enumerate(standard_schedule):
            assert e.payment_date == add_months(standard_contract.start_date, i)
        assert standard_schedule[-1].payment_date == standard_contract.end_date

    def test_opens_at_present_value(self, standard_contract, standard_schedule):
        assert standard_schedule[0].opening_balance == _pv(standard_contract)

    def test_interest_on_opening_balance(self, standard_schedule):
        for e in standard_schedule[:-1]:
            assert e.interest == round_currency(e.opening_balance * monthly_rate(6.0))

    def test_principal_is_payment_less_interest(self, standard_schedule):
        for e in standard_schedule:
            assert e.principal == e.payment - e.interest

    def test_balance_carries_forward(self, standard_schedule):
        for prev, nxt in zip(standard_schedule, standard_schedule[1:]):
            assert nxt.opening_balance == prev.closing_balance

    def test_liability_fully_repaid(self, standard_schedule):
        assert standard_schedule[-1].closing_balance == 0

    def test_closing_balance_decreases(self, standard_schedule):
        for prev, nxt in zip(standard_schedule, standard_schedule[1:]):
            assert nxt.closing_balance < prev.closing_balance


class TestDepreciation:
    def test_straight_line_until_last(self, standard_contract, standard_schedule):
        base = round_currency(_pv(standard_contract) / 24)
        assert all(e.depreciation == base for e in standard_schedule[:-1])

    def test_last_period_plug(self, standard_contract, standard_schedule):
        booked = sum(e.depreciation for e in standard_schedule[:-1])
        assert standard_schedule[-1].depreciation == _pv(standard_contract) - booked


class TestInvariants:
    @pytest.mark.parametrize("contract", ODD_CONTRACTS)
    def test_depreciation_sums_to_present_value(self, contract):
        schedule = generate_schedule(contract)
        assert sum(e.depreciation for e in schedule) == _pv(contract)

    @pytest.mark.parametrize("contract", ODD_CONTRACTS)
    def test_balance_law(self, contract):
        for e in generate_schedule(contract):
            assert e.opening_balance - e.principal == e.closing_balance
            assert e.closing_balance >= 0

    @pytest.mark.parametrize("contract", ODD_CONTRACTS)
    def test_liability_decays_to_zero(self, contract):
        assert generate_schedule(contract)[-1].closing_balance == 0

    @pytest.mark.parametrize("contract", ODD_CONTRACTS)
    def test_principal_repays_present_value(self, contract):
        assert sum(e.principal for e in generate_schedule(contract)) == _pv(contract)


class TestFinalPeriodInterest:
    @pytest.mark.parametrize("payment,rate,months", [
        (1_000_000, 0.5, 240),
        (3_000_000, 1.0, 360),
        (250_000, 0.75, 120),
    ])
    def test_long_low_rate_lease(self, payment, rate, months):
        start = date(2024, 1, 1)
        contract = LeaseContract(
            start_date=start,
            end_date=add_months(start, months - 1),
            annual_rate_pct=rate,
            monthly_payment=payment,
        )
        last = generate_schedule(contract)[-1]
        accrued = round_currency(last.opening_balance * monthly_rate(rate))

        assert last.interest > 0
        assert last.principal == last.opening_balance
        # Rounding drift carried into the last period is at most half a unit per period.
        assert abs(last.interest - accrued) <= months


class TestZeroRate:
    def test_flat_schedule(self, zero_rate_contract):
        schedule = generate_schedule(zero_rate_contract)

        assert len(schedule) == 12
        for e in schedule:
            assert e.interest == 0
            assert e.principal == 1_000_000
            assert e.depreciation == 1_000_000
        assert schedule[-1].closing_balance == 0


class TestTermination:
    def test_truncates_after_termination_date(self, terminated_contract):
        schedule = generate_schedule(terminated_contract)

        # the payment due on the termination date itself is still made
        assert len(schedule) == 13
        assert schedule[-1].payment_date == date(2025, 1, 1)

    def test_mid_month_termination(self, standard_contract):
        contract = standard_contract.model_copy(update={"termination_date": date(2024, 12, 15)})
        schedule = generate_schedule(contract)

        assert len(schedule) == 12
        assert schedule[-1].payment_date == date(2024, 12, 1)

    def test_termination_before_first_payment(self, standard_contract):
        contract = standard_contract.model_copy(update={"termination_date": date(2023, 12, 31)})
        assert generate_schedule(contract) == []

    def test_truncated_rows_match_full_term(self, standard_schedule, terminated_contract):
        assert generate_schedule(terminated_contract) == standard_schedule[:13]

    def test_projection_ignores_termination(self, terminated_contract, standard_schedule):
        assert project_schedule(terminated_contract) == standard_schedule


class TestPurity:
    def test_idempotent(self, standard_contract):
        first = generate_schedule(standard_contract)
        second = generate_schedule(standard_contract)
        assert [e.model_dump_json() for e in first] == [e.model_dump_json() for e in second]

    def test_entries_are_frozen(self, standard_schedule):
        with pytest.raises(ValidationError):
            standard_schedule[0].interest = 0

    def test_contract_untouched(self, standard_contract):
        before = standard_contract.model_dump()
        generate_schedule(standard_contract)
        assert standard_contract.model_dump() == before
