"""Pydantic schemas for API responses"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from fio_gateway.domain.models import StatementInfo, Transaction, TransactionsResponse


class StatementInfoSchema(BaseModel):
    """Statement header; balances serialize as strings to keep their exact scale"""

    account_id: int
    bank_id: str
    currency: str
    iban: str
    bic: str
    opening_balance: Decimal
    closing_balance: Decimal
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None
    year_list: int
    id_list: int
    id_from: int
    id_to: int
    id_last_download: int

    @classmethod
    def from_domain(cls, info: StatementInfo) -> "StatementInfoSchema":
        return cls(
            account_id=info.account_id,
            bank_id=info.bank_id,
            currency=info.currency,
            iban=info.iban,
            bic=info.bic,
            opening_balance=info.opening_balance,
            closing_balance=info.closing_balance,
            date_start=info.date_start,
            date_end=info.date_end,
            year_list=info.year_list,
            id_list=info.id_list,
            id_from=info.id_from,
            id_to=info.id_to,
            id_last_download=info.id_last_download,
        )


class TransactionSchema(BaseModel):
    """Single account movement"""

    id: int
    date: Optional[datetime] = None
    amount: Decimal
    currency: str
    account: str
    account_name: str
    bank_code: str
    bank_name: str
    constant_symbol: str
    variable_symbol: str
    specific_symbol: str
    user_identification: str
    recipient_message: str
    type: str
    specification: str
    comment: str
    bic: str
    order_id: str
    payer_reference: str

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionSchema":
        return cls(
            id=tx.id,
            date=tx.date,
            amount=tx.amount,
            currency=tx.currency,
            account=tx.account,
            account_name=tx.account_name,
            bank_code=tx.bank_code,
            bank_name=tx.bank_name,
            constant_symbol=tx.constant_symbol,
            variable_symbol=tx.variable_symbol,
            specific_symbol=tx.specific_symbol,
            user_identification=tx.user_identification,
            recipient_message=tx.recipient_message,
            type=tx.type,
            specification=tx.specification,
            comment=tx.comment,
            bic=tx.bic,
            order_id=tx.order_id,
            payer_reference=tx.payer_reference,
        )


class StatementResponse(BaseModel):
    """Response for statement and transaction queries"""

    info: StatementInfoSchema
    transactions: List[TransactionSchema]

    @classmethod
    def from_domain(cls, statement: TransactionsResponse) -> "StatementResponse":
        return cls(
            info=StatementInfoSchema.from_domain(statement.info),
            transactions=[TransactionSchema.from_domain(tx) for tx in statement.transactions],
        )
