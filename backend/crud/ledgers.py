"""
Party ledger projection and the supplier payment balance guard.

A party's balance is never stored. It is recomputed by folding the
party's vouchers, in (date, creation order), over its opening balance.
``BALANCE_EFFECTS`` is the only place that decides which side of the
ledger a voucher lands on and which way it moves the balance.
"""
import enum
import logging
from decimal import Decimal
from typing import Iterable, List

from sqlalchemy.orm import Session

from exceptions import NotFound
from models.parties import Party, PartyRole
from models.vouchers import Voucher, VoucherType
from schemas.ledgers import BalanceCheck, LedgerEntry, LedgerInconsistency, LedgerProjection, PartyLedger

logger = logging.getLogger("ledgers")


class LedgerSide(str, enum.Enum):
    DEBIT = "debit"
    CREDIT = "credit"


# (party role, voucher type) -> (ledger column, sign applied to the balance)
BALANCE_EFFECTS = {
    (PartyRole.CUSTOMER, VoucherType.SALES): (LedgerSide.DEBIT, 1),
    (PartyRole.CUSTOMER, VoucherType.RECEIPT): (LedgerSide.CREDIT, -1),
    (PartyRole.SUPPLIER, VoucherType.PURCHASE): (LedgerSide.CREDIT, 1),
    (PartyRole.SUPPLIER, VoucherType.PAYMENT): (LedgerSide.DEBIT, -1),
}


def balance_effect(role: PartyRole, voucher_type: VoucherType):
    """The (side, sign) pair for a voucher on this party's ledger, or None if it does not belong there."""
    return BALANCE_EFFECTS.get((role, voucher_type))


def sort_vouchers(vouchers: Iterable) -> list:
    """Chronological replay order: date ascending, then creation order."""
    return sorted(vouchers, key=lambda v: (v.date, v.id))


def project_ledger(role: PartyRole, opening_balance: Decimal, vouchers: Iterable) -> LedgerProjection:
    """
    Fold vouchers (already in replay order) into running-balance ledger entries.

    Vouchers whose type does not match the party role are left out of
    the balance and returned as inconsistencies. The function is pure.
    """
    opening_balance = Decimal(opening_balance or 0)
    balance = opening_balance
    entries: List[LedgerEntry] = []
    inconsistencies: List[LedgerInconsistency] = []

    for voucher in vouchers:
        effect = balance_effect(role, voucher.voucher_type)
        if effect is None:
            inconsistencies.append(LedgerInconsistency(
                voucher_id=voucher.id,
                voucher_number=voucher.voucher_number,
                voucher_type=voucher.voucher_type,
                reason=f"{voucher.voucher_type.value} voucher recorded against a {role.value}",
            ))
            continue

        side, sign = effect
        amount = Decimal(voucher.amount)
        opening = balance
        balance = balance + sign * amount
        entries.append(LedgerEntry(
            date=voucher.date,
            voucher_id=voucher.id,
            voucher_number=voucher.voucher_number,
            voucher_type=voucher.voucher_type,
            narration=voucher.narration,
            opening=opening,
            debit=amount if side is LedgerSide.DEBIT else Decimal(0),
            credit=amount if side is LedgerSide.CREDIT else Decimal(0),
            balance=balance,
        ))

    return LedgerProjection(
        opening_balance=opening_balance,
        entries=entries,
        closing_balance=balance,
        inconsistencies=inconsistencies,
    )


def party_balance(role: PartyRole, opening_balance: Decimal, vouchers: Iterable) -> Decimal:
    """Closing balance only. Addition commutes, so no sort is needed."""
    balance = Decimal(opening_balance or 0)
    for voucher in vouchers:
        effect = balance_effect(role, voucher.voucher_type)
        if effect is not None:
            balance += effect[1] * Decimal(voucher.amount)
    return balance


def _check_settlement(party, voucher_type: VoucherType, proposed_amount: Decimal, vouchers: Iterable) -> BalanceCheck:
    current_balance = party_balance(party.role, party.opening_balance, vouchers)
    projected_balance = current_balance - Decimal(proposed_amount)
    if projected_balance < 0:
        return BalanceCheck(
            allowed=False,
            reason=(
                f"{voucher_type.value.capitalize()} of {proposed_amount} exceeds the balance of "
                f"{current_balance} for {party.role.value} '{party.name}'"
            ),
            current_balance=current_balance,
            projected_balance=projected_balance,
        )
    return BalanceCheck(allowed=True, current_balance=current_balance, projected_balance=projected_balance)


def check_payment(party, proposed_amount: Decimal, vouchers: Iterable, voucher_type: VoucherType = VoucherType.PAYMENT) -> BalanceCheck:
    """
    Balance guard for supplier payments.

    Only a payment voucher against a supplier is checked; it is rejected
    when it would take the supplier's balance below zero. Every other
    combination is allowed without computing anything.
    """
    if party.role != PartyRole.SUPPLIER or voucher_type != VoucherType.PAYMENT:
        return BalanceCheck(allowed=True)
    return _check_settlement(party, voucher_type, proposed_amount, vouchers)


def check_receipt(party, proposed_amount: Decimal, vouchers: Iterable) -> BalanceCheck:
    """Mirror of ``check_payment`` for customer receipts. Only applied when the company enables it."""
    if party.role != PartyRole.CUSTOMER:
        return BalanceCheck(allowed=True)
    return _check_settlement(party, VoucherType.RECEIPT, proposed_amount, vouchers)


def get_party_vouchers(db: Session, company_id: int, party_id: int) -> list:
    return (
        db.query(Voucher)
        .filter(Voucher.company_id == company_id, Voucher.party_id == party_id)
        .order_by(Voucher.date.asc(), Voucher.id.asc())
        .all()
    )


def get_party_ledger(db: Session, company_id: int, party_id: int) -> PartyLedger:
    party = db.query(Party).filter(Party.id == party_id, Party.company_id == company_id).first()
    if party is None:
        raise NotFound(f"Party {party_id} not found")

    vouchers = sort_vouchers(get_party_vouchers(db, company_id, party_id))
    projection = project_ledger(party.role, party.opening_balance, vouchers)
    for inconsistency in projection.inconsistencies:
        logger.warning(
            f"Ledger inconsistency for party {party_id} (company {company_id}): "
            f"voucher {inconsistency.voucher_number} - {inconsistency.reason}"
        )

    return PartyLedger(
        title=f"Ledger for {party.name}",
        party_id=party.id,
        party_name=party.name,
        role=party.role,
        **projection.model_dump(),
    )
