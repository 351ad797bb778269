from relayhook.adapters.journal import NotificationJournal
from relayhook.core.channel import EventChannel
from relayhook.types.topics import T_RELAY_REQUESTED, T_SWAP_COMPLETED
from relayhook.types.types import MIN_SIGNED, RelayRequested, SwapCompleted


class FixedClock:
    def now(self) -> int:
        return 99


def test_journal_records_delivered_envelopes(tmp_path):
    channel = EventChannel(clock=FixedClock())
    journal = NotificationJournal(tmp_path / "journal.jsonl")
    journal.attach(channel)

    channel.publish(
        T_RELAY_REQUESTED,
        RelayRequested(
            originator="0xuser",
            venue="ETH-USDC",
            amount=-2 * 10**18,
            zero_for_one=True,
            estimated_savings=60_000,
        ),
    )

    (record,) = journal.read()
    assert record["topic"] == T_RELAY_REQUESTED
    assert record["seq"] == 1
    assert record["ts"] == 99
    assert record["kind"] == "RelayRequested"
    assert record["payload"] == {
        "originator": "0xuser",
        "venue": "ETH-USDC",
        "amount": -2 * 10**18,
        "zero_for_one": True,
        "estimated_savings": 60_000,
    }


def test_journal_keeps_extreme_amounts_exact(tmp_path):
    channel = EventChannel(clock=FixedClock())
    journal = NotificationJournal(str(tmp_path / "journal.jsonl"))
    journal.attach(channel, topics=[T_SWAP_COMPLETED])

    channel.publish(
        T_SWAP_COMPLETED,
        SwapCompleted(
            originator="0xuser",
            venue="ETH-USDC",
            amount=MIN_SIGNED,
            amount_out=2**255,
            was_relayed=False,
            cost_remaining=0,
        ),
    )

    (record,) = journal.read()
    assert int(record["payload"]["amount"]) == MIN_SIGNED
    assert int(record["payload"]["amount_out"]) == 2**255


def test_discarded_notifications_are_not_journaled(tmp_path):
    channel = EventChannel(clock=FixedClock())
    journal = NotificationJournal(tmp_path / "journal.jsonl")
    journal.attach(channel)

    try:
        with channel.staged():
            channel.publish(T_RELAY_REQUESTED, {"venue": "v1"})
            raise RuntimeError("abort")
    except RuntimeError:
        pass

    assert journal.read() == []
    assert not journal.path.exists()
