"""Shared pytest fixtures for Formsmith tests."""

from pathlib import Path

import pytest

from formsmith.core import ir


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def signup_form() -> ir.FormDefinition:
    """Return a flat form with one field of each commonly validated kind."""
    return ir.FormDefinition(
        id="signup",
        name="Signup",
        fields=[
            ir.FieldDefinition(id="f_name", name="name", label="Full name", required=True),
            ir.FieldDefinition(id="f_age", name="age", label="Age", type=ir.FieldType.NUMBER, required=True, min=18),
            ir.FieldDefinition(id="f_email", name="email", label="Email", pattern=r"^[^@\s]+@[^@\s]+$"),
            ir.FieldDefinition(id="f_news", name="newsletter", label="Newsletter", type=ir.FieldType.CHECKBOX),
            ir.FieldDefinition(id="f_start", name="start", label="Start", type=ir.FieldType.DATE),
        ],
        sections=[ir.SectionDefinition(id="main", field_ids=["f_name", "f_age", "f_email", "f_news", "f_start"])],
        rules=[
            ir.RuleDefinition(
                id="hide_email",
                target_field_id="f_email",
                conditions=[ir.RuleCondition(field_id="newsletter", operator=ir.Operator.IS_EMPTY)],
            )
        ],
    )


@pytest.fixture
def payment_voucher() -> ir.VoucherTypeDefinition:
    """Return a header + lines voucher with row limits."""
    return ir.VoucherTypeDefinition(
        id="payment",
        name="Payment Voucher",
        code="PV",
        header=ir.FormDefinition(
            id="payment_header",
            name="Payment header",
            fields=[
                ir.FieldDefinition(id="h_date", name="date", label="Date", type=ir.FieldType.DATE, required=True),
                ir.FieldDefinition(id="h_payee", name="payee", label="Payee"),
            ],
        ),
        lines=ir.TableDefinition(
            id="payment_lines",
            name="lines",
            columns=[
                ir.FieldDefinition(id="c_account", name="account", label="Account", required=True),
                ir.FieldDefinition(id="c_amount", name="amount", label="Amount", type=ir.FieldType.NUMBER, min=0),
            ],
            min_rows=1,
            max_rows=3,
        ),
    )


@pytest.fixture
def all_actions() -> list[ir.VoucherAction]:
    """Return every action type, enabled."""
    return [ir.VoucherAction(type=t, label=t.value, enabled=True) for t in ir.VoucherActionType]
