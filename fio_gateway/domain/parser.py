"""Statement parser - decodes Fio XML responses into domain models

The transactions.xml format describes every movement as a list of generic
``column_N`` elements. The element name is not stable; the numeric ``id``
attribute identifies the attribute, ``name`` is a localized display label.
Field codes follow https://www.fio.cz/docs/cz/API_Bankovnictvi.pdf
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import IO, Any, Callable, Dict, Tuple, Union

from fio_gateway.domain.exceptions import ParseError
from fio_gateway.domain.models import StatementInfo, Transaction, TransactionsResponse
from fio_gateway.utils.date_utils import parse_offset_date

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_integer(value: str) -> int:
    """Parse a base-10 signed 64-bit integer"""
    text = value.strip()
    if not _INTEGER_RE.match(text):
        raise ValueError(f"invalid integer: {value!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return number


def parse_amount(value: str) -> Decimal:
    """Parse a locale-invariant decimal amount, keeping the input scale ("45.97" stays 45.97)"""
    text = value.strip()
    if not _DECIMAL_RE.match(text):
        raise ValueError(f"invalid amount: {value!r}")
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"invalid amount: {value!r}") from e


def _text(value: str) -> str:
    return value


Converter = Callable[[str], Any]

# Field code -> (Transaction attribute, converter)
TRANSACTION_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "22": ("id", parse_integer),  # ID pohybu
    "0": ("date", parse_offset_date),  # Datum
    "1": ("amount", parse_amount),  # Objem
    "14": ("currency", _text),  # Měna
    "2": ("account", _text),  # Protiúčet
    "10": ("account_name", _text),  # Název protiúčtu
    "3": ("bank_code", _text),  # Kód banky
    "12": ("bank_name", _text),  # Název banky
    "4": ("constant_symbol", _text),  # KS
    "5": ("variable_symbol", _text),  # VS
    "6": ("specific_symbol", _text),  # SS
    "7": ("user_identification", _text),  # Uživatelská identifikace
    "16": ("recipient_message", _text),  # Zpráva pro příjemce
    "8": ("type", _text),  # Typ pohybu
    "18": ("specification", _text),  # Upřesnění
    "25": ("comment", _text),  # Komentář
    "26": ("bic", _text),  # BIC
    "17": ("order_id", _text),  # ID pokynu
    "27": ("payer_reference", _text),  # Reference plátce
}

# Provedl (author of the order), recognized but not exposed
IGNORED_FIELDS = frozenset({"9"})

# Info element tag -> (StatementInfo attribute, converter)
INFO_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "accountId": ("account_id", parse_integer),
    "bankId": ("bank_id", _text),
    "currency": ("currency", _text),
    "iban": ("iban", _text),
    "bic": ("bic", _text),
    "openingBalance": ("opening_balance", parse_amount),
    "closingBalance": ("closing_balance", parse_amount),
    "dateStart": ("date_start", parse_offset_date),
    "dateEnd": ("date_end", parse_offset_date),
    "yearList": ("year_list", parse_integer),
    "idList": ("id_list", parse_integer),
    "idFrom": ("id_from", parse_integer),
    "idTo": ("id_to", parse_integer),
    "idLastDownload": ("id_last_download", parse_integer),
}


@dataclass(frozen=True)
class ErrorEnvelope:
    """Structured error body returned with 500 + text/xml"""

    error_code: str = ""
    status: str = ""
    message: str = ""
    detail: str = ""


def _read(source: Union[bytes, IO[bytes]]) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    return source.read()


def _load_xml(source: Union[bytes, IO[bytes]]) -> ET.Element:
    # Responses may carry whitespace before the XML declaration
    data = _read(source).lstrip()
    try:
        return ET.fromstring(data)
    except (ET.ParseError, LookupError) as e:
        # LookupError: the declaration names an encoding Python does not know
        raise ParseError(f"malformed XML: {e}") from e


def _text_of(element: ET.Element) -> str:
    return "".join(element.itertext())


def _convert(converter: Converter, value: str, field: str) -> Any:
    try:
        return converter(value)
    except ValueError as e:
        raise ParseError(f'unable to parse "{field}": {e}', field=field) from e


def parse_statement_info(element: ET.Element) -> StatementInfo:
    """Decode the <Info> header block. Absent or empty elements keep their defaults."""
    values: Dict[str, Any] = {}
    for tag, (attr, converter) in INFO_FIELDS.items():
        child = element.find(tag)
        if child is None:
            continue
        text = _text_of(child)
        if not text.strip():
            continue
        values[attr] = _convert(converter, text, tag)
    return StatementInfo(**values)


def parse_transaction(element: ET.Element) -> Transaction:
    """
    Decode one <Transaction> node by dispatching each column on its field code.

    Raises:
        ParseError: On a field code outside the known set or an unconvertible value
    """
    values: Dict[str, Any] = {}
    for column in element:
        code = column.get("id", "")
        name = column.get("name", column.tag)

        if code in IGNORED_FIELDS:
            continue

        target = TRANSACTION_FIELDS.get(code)
        if target is None:
            raise ParseError(f'unable to parse column: "{name}" (id={code!r})', field=name)

        attr, converter = target
        values[attr] = _convert(converter, _text_of(column), name)
    return Transaction(**values)


def parse_transactions_response(source: Union[bytes, IO[bytes]]) -> TransactionsResponse:
    """
    Parse a transactions.xml document into a statement.

    Either the whole document parses or ParseError is raised; there are no
    partial results.
    """
    root = _load_xml(source)
    if root.tag != "AccountStatement":
        raise ParseError(f"unexpected root element <{root.tag}>, want <AccountStatement>")

    info_element = root.find("Info")
    if info_element is None:
        raise ParseError("missing <Info> element", field="Info")

    info = parse_statement_info(info_element)
    transactions = [parse_transaction(node) for node in root.iterfind("TransactionList/Transaction")]
    return TransactionsResponse(info=info, transactions=transactions)


def parse_error_envelope(source: Union[bytes, IO[bytes]]) -> ErrorEnvelope:
    """Decode <response><result>...</result></response> returned on validation errors"""
    root = _load_xml(source)
    if root.tag != "response":
        raise ParseError(f"unexpected root element <{root.tag}>, want <response>")

    result = root.find("result")
    if result is None:
        raise ParseError("missing <result> element", field="result")

    def text(tag: str) -> str:
        return (result.findtext(tag) or "").strip()

    return ErrorEnvelope(
        error_code=text("errorCode"),
        status=text("status"),
        message=text("message"),
        detail=text("detail"),
    )
