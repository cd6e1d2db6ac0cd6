#!/usr/bin/env python3
"""Cleans raw dataset rows into ``TradeRecord`` values.

Exported rows carry byte columns as ``\\x1234...`` instead of ``0x1234...``.
Only the first escape marker of each hex field is rewritten.
"""
import numbers
from typing import Any, Iterable, List, Mapping

from constants import HEX_PREFIX, MALFORMED_HEX_PREFIX
from replay.errors import MalformedInputError
from replay.models import TradeRecord, parse_raw_amount

HEX_FIELDS = ('token_a_address', 'token_b_address', 'tx_hash')
RAW_AMOUNT_FIELDS = ('token_a_amount_raw', 'token_b_amount_raw')


def fix_hex_prefix(value: str) -> str:
    return value.replace(MALFORMED_HEX_PREFIX, HEX_PREFIX, 1)


def _normalize_one(index: int, raw: Any) -> TradeRecord:
    if not isinstance(raw, Mapping) or not isinstance(raw.get('data'), Mapping):
        raise MalformedInputError(f"record {index}: expected an object with a 'data' object")
    data = raw['data']

    missing = [name for name in HEX_FIELDS + RAW_AMOUNT_FIELDS + ('usd_amount',) if name not in data]
    if missing:
        raise MalformedInputError(f"record {index}: missing field(s) {', '.join(missing)}")

    for name in HEX_FIELDS:
        if not isinstance(data[name], str):
            raise MalformedInputError(f"record {index}: {name} must be a string, got {data[name]!r}")

    for name in RAW_AMOUNT_FIELDS:
        try:
            parse_raw_amount(data[name])
        except ValueError as exc:
            raise MalformedInputError(f"record {index}: {name}: {exc}") from exc

    usd_amount = data['usd_amount']
    if isinstance(usd_amount, bool) or not isinstance(usd_amount, numbers.Real):
        raise MalformedInputError(f"record {index}: usd_amount must be a number, got {usd_amount!r}")

    return TradeRecord(
        token_a_address=fix_hex_prefix(data['token_a_address']),
        token_a_amount_raw=data['token_a_amount_raw'],
        token_b_address=fix_hex_prefix(data['token_b_address']),
        token_b_amount_raw=data['token_b_amount_raw'],
        usd_amount=usd_amount,
        tx_hash=fix_hex_prefix(data['tx_hash']),
    )


def normalize(raw_records: Iterable[Any]) -> List[TradeRecord]:
    """Normalizes every raw record, preserving order. Fails on the first malformed one."""
    return [_normalize_one(index, raw) for index, raw in enumerate(raw_records)]
