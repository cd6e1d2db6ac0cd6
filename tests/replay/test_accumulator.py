from replay.accumulator import ResultAccumulator
from replay.models import ComparisonOutcome, TradeRecord


def _outcome(tx_hash, delta):
    trade = TradeRecord('0xa', 1, '0xb', 2, 3.0, tx_hash)
    return ComparisonOutcome(mixed_route_quote='2', old_quote='1', delta=delta, data=trade)


def test_accumulator_keeps_call_order_and_duplicates():
    accumulator = ResultAccumulator()
    first = _outcome('0x02', '5')
    second = _outcome('0x01', '50')

    accumulator.add(first)
    accumulator.add(second)
    accumulator.add(first)

    assert accumulator.all() == [first, second, first]
    assert len(accumulator) == 3


def test_accumulator_all_returns_copy():
    accumulator = ResultAccumulator()
    accumulator.add(_outcome('0x01', '1'))

    snapshot = accumulator.all()
    snapshot.clear()

    assert len(accumulator) == 1
    assert accumulator.to_json_ready()[0]['data']['tx_hash'] == '0x01'
