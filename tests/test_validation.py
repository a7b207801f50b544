"""Validation tests — contract rules and pydantic type checks."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from rou_lease.config import LeaseContract
from rou_lease.engine import orchestrator
from rou_lease.engine.orchestrator import run_calculation
from rou_lease.engine.validation import validate
from rou_lease.exceptions import InputError


class TestValidate:
    def test_valid_contract(self, standard_contract):
        assert validate(standard_contract) == []

    def test_start_after_end(self, standard_contract):
        contract = standard_contract.model_copy(update={"start_date": date(2026, 1, 1)})
        errors = validate(contract)

        assert errors == ["Start date must not be after the end date."]

    def test_collects_every_violation(self):
        errors = validate(LeaseContract())

        assert errors == [
            "Start date is required.",
            "End date is required.",
            "Annual interest rate must be greater than 0.",
            "Monthly payment must be greater than 0.",
        ]

    def test_negative_rate_and_payment(self, standard_contract):
        contract = standard_contract.model_copy(update={"annual_rate_pct": -1.0, "monthly_payment": -5})
        errors = validate(contract)

        assert "Annual interest rate must be greater than 0." in errors
        assert "Monthly payment must be greater than 0." in errors

    def test_termination_after_end(self, standard_contract):
        contract = standard_contract.model_copy(update={"termination_date": date(2026, 1, 1)})
        assert validate(contract) == ["Termination date must not be after the end date."]

    def test_termination_on_end_date_allowed(self, standard_contract):
        contract = standard_contract.model_copy(update={"termination_date": standard_contract.end_date})
        assert validate(contract) == []

    def test_single_day_lease_allowed(self, standard_contract):
        contract = standard_contract.model_copy(update={"end_date": standard_contract.start_date})
        assert validate(contract) == []


class TestGate:
    def test_invalid_contract_never_reaches_engine(self, standard_contract, monkeypatch):
        def _fail(*args, **kwargs):
            raise AssertionError("engine stage invoked for invalid contract")

        monkeypatch.setattr(orchestrator, "present_value", _fail)
        monkeypatch.setattr(orchestrator, "generate_schedule", _fail)
        monkeypatch.setattr(orchestrator, "generate_journal", _fail)

        contract = standard_contract.model_copy(update={"start_date": date(2026, 1, 1)})
        with pytest.raises(InputError) as exc_info:
            run_calculation(contract)

        assert "Start date must not be after the end date." in exc_info.value.errors
        assert exc_info.value.code == "INVALID_INPUT"


class TestTypeValidation:
    def test_non_numeric_payment_rejected(self):
        with pytest.raises(ValidationError):
            LeaseContract(monthly_payment="a lot")

    def test_fractional_payment_rejected(self):
        with pytest.raises(ValidationError):
            LeaseContract(monthly_payment=1000.5)

    def test_unknown_frequency_rejected(self):
        with pytest.raises(ValidationError):
            LeaseContract(frequency="yearly")

    def test_iso_strings_parsed(self):
        contract = LeaseContract(start_date="2024-01-01", end_date="2025-12-01")
        assert contract.start_date == date(2024, 1, 1)

    def test_contract_is_frozen(self, standard_contract):
        with pytest.raises(ValidationError):
            standard_contract.monthly_payment = 1
