"""Domain models - pure Python dataclasses representing Fio statement data"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class ExportFormat(str, Enum):
    """Server-rendered export formats, passed through to the caller unparsed"""

    JSON = "json"
    XML = "xml"
    CSV = "csv"
    GPC = "gpc"
    HTML = "html"
    OFX = "ofx"


@dataclass(frozen=True)
class StatementInfo:
    """Header of one statement or period query"""

    account_id: int = 0
    bank_id: str = ""
    currency: str = ""
    iban: str = ""
    bic: str = ""
    opening_balance: Decimal = Decimal("0")
    closing_balance: Decimal = Decimal("0")
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None
    year_list: int = 0
    id_list: int = 0
    id_from: int = 0
    id_to: int = 0
    id_last_download: int = 0


@dataclass(frozen=True)
class Transaction:
    """Single account movement. The API only emits a column when it has a value."""

    id: int = 0
    date: Optional[datetime] = None
    amount: Decimal = Decimal("0")  # positive = credit, negative = debit
    currency: str = ""
    account: str = ""
    account_name: str = ""
    bank_code: str = ""
    bank_name: str = ""
    constant_symbol: str = ""
    variable_symbol: str = ""
    specific_symbol: str = ""
    user_identification: str = ""
    recipient_message: str = ""
    type: str = ""
    specification: str = ""
    comment: str = ""
    bic: str = ""
    order_id: str = ""
    payer_reference: str = ""


@dataclass(frozen=True)
class TransactionsResponse:
    """Parsed statement: header plus transactions in server order"""

    info: StatementInfo
    transactions: List[Transaction] = field(default_factory=list)
